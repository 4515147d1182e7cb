# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Sift Contributors
#
# This file is part of Sift.
#
# Sift is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Sift is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

import ast
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

_IGNORE_LINE = re.compile(r"#\s*ignore:\s*(\w+(?:\s*,\s*\w+)*)")
_IGNORE_FILE = re.compile(r"#\s*ignore_for_file:\s*(\w+(?:\s*,\s*\w+)*)")


def _codes(raw: str) -> set[str]:
    return {c.strip() for c in raw.split(",") if c.strip()}


@dataclass(frozen=True, slots=True)
class Signature:
    """
    Call signature of a module-level function or class constructor.
    """

    name: str
    kind: str  # "function" | "class"
    positional: tuple[str, ...] = ()
    required_positional: tuple[str, ...] = ()
    required_keyword_only: tuple[str, ...] = ()

    @staticmethod
    def from_function(node: ast.FunctionDef | ast.AsyncFunctionDef, *, name: str, kind: str, bound: bool = False) -> "Signature":
        args = node.args
        positional = [a.arg for a in (*args.posonlyargs, *args.args)]
        if bound and positional:
            positional = positional[1:]
        n_required = max(0, len(positional) - len(args.defaults))

        required_kwonly = tuple(a.arg for a, default in zip(args.kwonlyargs, args.kw_defaults) if default is None)

        return Signature(
            name=name,
            kind=kind,
            positional=tuple(positional),
            required_positional=tuple(positional[:n_required]),
            required_keyword_only=required_kwonly,
        )

    def missing_arguments(self, call: ast.Call) -> list[str]:
        """
        Required parameters not supplied by `call`.

        Calls using *args or **kwargs are never reported.
        """
        if any(isinstance(a, ast.Starred) for a in call.args):
            return []
        if any(k.arg is None for k in call.keywords):
            return []

        given = {k.arg for k in call.keywords}
        n_positional = len(call.args)

        missing = [
            p for i, p in enumerate(self.positional) if i >= n_positional and p in self.required_positional and p not in given
        ]
        missing.extend(k for k in self.required_keyword_only if k not in given)
        return missing


@dataclass(frozen=True, slots=True)
class ImportedSymbol:
    module: str
    name: str


@dataclass
class ParsedModule:
    """
    A single source file, parsed once and shared by every check.
    """

    path: Path
    rel: str
    name: str
    source: str
    tree: ast.Module | None = None
    syntax_error: SyntaxError | None = None
    lines: list[str] = field(default_factory=list)

    @staticmethod
    def parse(path: Path, *, rel: str, name: str) -> "ParsedModule":
        source = path.read_text(encoding="utf-8")
        try:
            tree = ast.parse(source, filename=rel)
            error = None
        except SyntaxError as e:
            tree = None
            error = e
        return ParsedModule(
            path=path,
            rel=rel,
            name=name,
            source=source,
            tree=tree,
            syntax_error=error,
            lines=source.splitlines(),
        )

    @property
    def is_package_init(self) -> bool:
        return self.path.name == "__init__.py"

    @cached_property
    def file_suppressions(self) -> set[str]:
        out: set[str] = set()
        for line in self.lines:
            m = _IGNORE_FILE.search(line)
            if m:
                out |= _codes(m.group(1))
        return out

    def is_suppressed(self, code: str, line: int) -> bool:
        """
        `# ignore: code` on the reported line or the line above, or
        `# ignore_for_file: code` anywhere in the file.
        """
        if code in self.file_suppressions:
            return True
        for lineno in (line, line - 1):
            if 1 <= lineno <= len(self.lines):
                m = _IGNORE_LINE.search(self.lines[lineno - 1])
                if m and code in _codes(m.group(1)):
                    return True
        return False

    @cached_property
    def definitions(self) -> dict[str, Signature | None]:
        """
        Module-level callables. None marks a class whose constructor
        signature cannot be known statically (decorated or inherited).
        """
        out: dict[str, Signature | None] = {}
        if self.tree is None:
            return out

        for node in self.tree.body:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                if node.decorator_list:
                    out[node.name] = None
                else:
                    out[node.name] = Signature.from_function(node, name=node.name, kind="function")
            elif isinstance(node, ast.ClassDef):
                out[node.name] = self._class_signature(node)
        return out

    def _class_signature(self, node: ast.ClassDef) -> Signature | None:
        if node.decorator_list:
            return None
        for item in node.body:
            if isinstance(item, ast.FunctionDef) and item.name == "__init__":
                return Signature.from_function(item, name=node.name, kind="class", bound=True)
        if node.bases or node.keywords:
            return None
        return Signature(name=node.name, kind="class")

    @cached_property
    def imported_symbols(self) -> dict[str, ImportedSymbol]:
        """
        Local name -> (module, name) for every `from X import Y [as Z]`.
        """
        out: dict[str, ImportedSymbol] = {}
        if self.tree is None:
            return out

        for node in ast.walk(self.tree):
            if isinstance(node, ast.ImportFrom):
                module = self.resolve_from_module(node.module, int(node.level or 0))
                for alias in node.names:
                    if alias.name == "*":
                        continue
                    out[alias.asname or alias.name] = ImportedSymbol(module=module, name=alias.name)
        return out

    @cached_property
    def dunder_all(self) -> set[str]:
        out: set[str] = set()
        if self.tree is None:
            return out
        for node in self.tree.body:
            if isinstance(node, ast.Assign) and any(isinstance(t, ast.Name) and t.id == "__all__" for t in node.targets):
                if isinstance(node.value, (ast.List, ast.Tuple)):
                    out |= {e.value for e in node.value.elts if isinstance(e, ast.Constant) and isinstance(e.value, str)}
        return out

    @cached_property
    def bare_names(self) -> set[str]:
        """
        Identifiers used as bare names (not attributes), plus __all__ entries.
        """
        out: set[str] = set(self.dunder_all)
        if self.tree is None:
            return out
        out |= {node.id for node in ast.walk(self.tree) if isinstance(node, ast.Name)}
        return out

    @cached_property
    def referenced_names(self) -> set[str]:
        """
        Every identifier read in the module, as a bare name or attribute.
        """
        out: set[str] = set(self.dunder_all)
        if self.tree is None:
            return out
        for node in ast.walk(self.tree):
            if isinstance(node, ast.Name):
                out.add(node.id)
            elif isinstance(node, ast.Attribute):
                out.add(node.attr)
        return out

    def resolve_from_module(self, module: str | None, level: int) -> str:
        """
        Resolve the module named by a from-import.

        Example (module "a.b.c"):
          from ..x import y  (level=2, module="x") => "a.x"
        """
        if level == 0:
            return module or ""

        parts = self.name.split(".") if self.name else []
        package_parts = parts if self.is_package_init else parts[:-1]
        cut = max(0, len(package_parts) - (level - 1))
        base = package_parts[:cut]
        if module:
            base.extend(module.split("."))
        return ".".join(p for p in base if p)


class ProjectIndex:
    """
    Cross-module view used by checks that need to look past one file.
    """

    def __init__(self, modules: Iterable[ParsedModule]) -> None:
        self._modules: tuple[ParsedModule, ...] = tuple(modules)
        self._by_name: dict[str, ParsedModule] = {m.name: m for m in self._modules}

    def __iter__(self) -> Iterator[ParsedModule]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def get(self, name: str) -> ParsedModule | None:
        return self._by_name.get(name)

    def resolve_callable(self, module: ParsedModule, local_name: str) -> Signature | None:
        if local_name in module.definitions:
            return module.definitions[local_name]

        imported = module.imported_symbols.get(local_name)
        if imported is None:
            return None
        target = self.get(imported.module)
        if target is None:
            return None
        return target.definitions.get(imported.name)

    @cached_property
    def _imports_by_module(self) -> dict[str, set[str]]:
        out: dict[str, set[str]] = {}
        for m in self._modules:
            for symbol in m.imported_symbols.values():
                out.setdefault(symbol.module, set()).add(symbol.name)
        return out

    def names_imported_from(self, module_name: str) -> set[str]:
        return self._imports_by_module.get(module_name, set())

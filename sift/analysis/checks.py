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
from collections.abc import Iterator

from sift.analysis.index import ParsedModule, ProjectIndex
from sift.analysis.registry import Check, Finding
from sift.analysis.types import Severity

SYNTAX_ERROR = "syntax_error"
MISSING_REQUIRED_ARGUMENT = "missing_required_argument"
UNUSED_ELEMENT = "unused_element"
UNUSED_IMPORT = "unused_import"
ONLY_RAISE_EXCEPTIONS = "only_raise_exceptions"
UNDEFINED_LINT = "undefined_lint"


def _is_private(name: str) -> bool:
    if name == "_" or not name.startswith("_"):
        return False
    return not (name.startswith("__") and name.endswith("__"))


def _at(node: ast.AST, message: str) -> Finding:
    return Finding(
        line=max(1, int(getattr(node, "lineno", 1))),
        column=max(1, int(getattr(node, "col_offset", 0)) + 1),
        message=message,
    )


# Checks


def check_syntax_error(module: ParsedModule, index: ProjectIndex) -> Iterator[Finding]:
    e = module.syntax_error
    if e is None:
        return
    yield Finding(line=max(1, e.lineno or 1), column=max(1, e.offset or 1), message=f"Syntax error: {e.msg}.")


def check_missing_required_argument(module: ParsedModule, index: ProjectIndex) -> Iterator[Finding]:
    if module.tree is None:
        return

    for node in ast.walk(module.tree):
        if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Name):
            continue
        signature = index.resolve_callable(module, node.func.id)
        if signature is None:
            continue
        for param in signature.missing_arguments(node):
            yield _at(node, f"The parameter '{param}' is required.")


def check_unused_element(module: ParsedModule, index: ProjectIndex) -> Iterator[Finding]:
    """
    Private (single-underscore) module-level functions and classes that are
    neither used in the module nor imported elsewhere, and private methods
    never referenced in the module.
    """
    if module.tree is None:
        return

    referenced = module.referenced_names
    exported = index.names_imported_from(module.name)

    for node in module.tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            if _is_private(node.name) and not node.decorator_list:
                if node.name not in referenced and node.name not in exported:
                    kind = "class" if isinstance(node, ast.ClassDef) else "function"
                    yield _at(node, f"The {kind} '{node.name}' isn't used.")

        if isinstance(node, ast.ClassDef):
            for item in node.body:
                if not isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                    continue
                if _is_private(item.name) and not item.decorator_list and item.name not in referenced:
                    yield _at(item, f"The method '{item.name}' isn't used.")


def check_unused_import(module: ParsedModule, index: ProjectIndex) -> Iterator[Finding]:
    """
    Imports whose bound name is never referenced in the module.

    Only bare name references (and __all__ entries) count as uses: a name
    mentioned only in a string annotation ("Foo") is still reported. Imports
    under `if TYPE_CHECKING:` are treated like any other import.
    """
    # package __init__ modules import to re-export
    if module.tree is None or module.is_package_init:
        return

    used = module.bare_names

    for node in ast.walk(module.tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                bound = alias.asname or alias.name.split(".")[0]
                if bound not in used:
                    yield _at(node, f"Unused import: '{alias.name}'.")
        elif isinstance(node, ast.ImportFrom):
            if node.module == "__future__":
                continue
            prefix = "." * int(node.level or 0) + (node.module or "")
            for alias in node.names:
                if alias.name == "*":
                    continue
                bound = alias.asname or alias.name
                if bound in used:
                    continue
                target = f"{prefix}.{alias.name}" if node.module else f"{prefix}{alias.name}"
                yield _at(node, f"Unused import: '{target}'.")


_NON_EXCEPTION_LITERALS = (
    ast.Constant,
    ast.JoinedStr,
    ast.List,
    ast.Tuple,
    ast.Dict,
    ast.Set,
    ast.ListComp,
    ast.SetComp,
    ast.DictComp,
)


def _is_non_exception_value(expr: ast.expr) -> bool:
    if isinstance(expr, _NON_EXCEPTION_LITERALS):
        return True
    if isinstance(expr, ast.BinOp):
        return _is_non_exception_value(expr.left) or _is_non_exception_value(expr.right)
    return False


def check_only_raise_exceptions(module: ParsedModule, index: ProjectIndex) -> Iterator[Finding]:
    if module.tree is None:
        return

    for node in ast.walk(module.tree):
        if isinstance(node, ast.Raise) and node.exc is not None and _is_non_exception_value(node.exc):
            yield _at(node, "Only raise instances of classes extending BaseException.")


BUILTIN_CHECKS: tuple[Check, ...] = (
    Check(
        code=SYNTAX_ERROR,
        default_severity=Severity.ERROR,
        description="The file cannot be parsed.",
        run=check_syntax_error,
    ),
    Check(
        code=MISSING_REQUIRED_ARGUMENT,
        default_severity=Severity.INFO,
        description="A call omits a parameter that has no default value.",
        run=check_missing_required_argument,
    ),
    Check(
        code=UNUSED_ELEMENT,
        default_severity=Severity.INFO,
        description="A private function, class or method is never used.",
        run=check_unused_element,
    ),
    Check(
        code=UNUSED_IMPORT,
        default_severity=Severity.WARNING,
        description="An imported name is never used.",
        run=check_unused_import,
    ),
    Check(
        code=ONLY_RAISE_EXCEPTIONS,
        default_severity=Severity.INFO,
        description="Only raise instances of classes extending BaseException.",
        run=check_only_raise_exceptions,
        lint=True,
    ),
    Check(
        code=UNDEFINED_LINT,
        default_severity=Severity.WARNING,
        description="The options file enables a lint rule that does not exist.",
    ),
)

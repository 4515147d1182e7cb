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

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from string import Template

from sift.cli.exitcodes import EXIT_TOOL_ERROR
from sift.errors import ToolExit

TEMPLATE_SUFFIX = ".tmpl"
DOT_PREFIX = "dot_"


@dataclass(frozen=True, slots=True)
class GeneratedFile:
    path: str  # relative, posix style
    created: bool


def _target_name(name: str) -> str:
    if name.startswith(DOT_PREFIX):
        name = "." + name[len(DOT_PREFIX) :]
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    return name


class ProjectTemplate:
    """
    A directory tree of files rendered into a new project.

    File names starting with `dot_` become dotfiles and a trailing `.tmpl`
    is dropped. `.tmpl` files are rendered with string.Template, so a
    literal dollar sign is written as `$$`; all other files are copied
    byte for byte.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    def named(cls, templates_dir: Path, name: str) -> "ProjectTemplate":
        root = templates_dir / name
        if not root.is_dir():
            raise ToolExit(
                f"Project template not found: {root}",
                exit_code=EXIT_TOOL_ERROR,
                code="template_not_found",
            )
        return cls(root)

    def sources(self) -> list[Path]:
        return sorted(p for p in self.root.rglob("*") if p.is_file())

    def target_path(self, source: Path) -> Path:
        rel = source.relative_to(self.root)
        return Path(*(_target_name(part) for part in rel.parts))

    def render(
        self,
        destination: Path,
        context: Mapping[str, str],
        *,
        overwrite: bool = False,
    ) -> list[GeneratedFile]:
        generated: list[GeneratedFile] = []
        for source in self.sources():
            rel = self.target_path(source)
            target = destination / rel

            if target.exists() and not overwrite:
                generated.append(GeneratedFile(path=rel.as_posix(), created=False))
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            if source.name.endswith(TEMPLATE_SUFFIX):
                text = Template(source.read_text(encoding="utf-8")).substitute(context)
                target.write_text(text, encoding="utf-8")
            else:
                target.write_bytes(source.read_bytes())
            generated.append(GeneratedFile(path=rel.as_posix(), created=True))
        return generated

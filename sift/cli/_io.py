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

import sys
from pathlib import Path

from sift.cli.exitcodes import EXIT_TOOL_ERROR
from sift.errors import ToolExit


def print_status(message: str = "") -> None:
    print(message)


def print_error(message: str) -> None:
    print(message, file=sys.stderr)


def ensure_directory(path: str | Path, *, base: Path | None = None) -> Path:
    """
    Resolve `path` (relative to `base` if given) and require a directory.
    """
    p = Path(path)
    if not p.is_absolute() and base is not None:
        p = base / p
    p = p.resolve()
    if not p.exists():
        raise ToolExit(f"{p} does not exist", exit_code=EXIT_TOOL_ERROR, code="path_not_found")
    if not p.is_dir():
        raise ToolExit(f"{p} is not a directory", exit_code=EXIT_TOOL_ERROR, code="not_a_directory")
    return p

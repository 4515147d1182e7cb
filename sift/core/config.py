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

import os
from dataclasses import dataclass, field
from pathlib import Path

from sift.analysis.options import AnalysisOptions
from sift.core.platform import HostPlatform, analyzer_separator

TOOL_ROOT_ENV = "SIFT_ROOT"
TEMPLATES_DIRNAME = "templates"


def default_tool_root() -> Path:
    """
    Directory holding shared tool resources (default options, templates).

    $SIFT_ROOT wins; otherwise the resources bundled with the package.
    """
    env = os.environ.get(TOOL_ROOT_ENV)
    if env:
        return Path(env).resolve()
    return (Path(__file__).resolve().parent.parent / "resources").resolve()


@dataclass(frozen=True)
class ToolConfig:
    tool_root: Path
    platform: HostPlatform = field(default_factory=HostPlatform.current)
    verbose: bool = False

    @property
    def separator(self) -> str:
        return analyzer_separator(self.platform)

    @property
    def templates_dir(self) -> Path:
        return self.tool_root / TEMPLATES_DIRNAME


@dataclass(frozen=True)
class AnalysisConfig:
    project_root: Path
    options: AnalysisOptions = field(default_factory=AnalysisOptions)
    max_file_size_bytes: int = 2_000_000

    def normalized_project_root(self) -> Path:
        return self.project_root.resolve()

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

import argparse
from pathlib import Path

from sift.core.config import ToolConfig


class SiftCommand:
    """
    Base class for subcommands.

    A command contributes its own arguments through configure() and does
    its work in run(). Expected failures are raised as ToolExit; run()
    returns an exit code only on success paths.
    """

    name: str = ""
    help: str = ""

    def __init__(self, working_directory: Path | None = None) -> None:
        self.working_directory = working_directory
        self.parser: argparse.ArgumentParser | None = None

    def configure(self, parser: argparse.ArgumentParser) -> None:
        self.parser = parser

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        raise NotImplementedError()

    def cwd(self) -> Path:
        """
        Directory the command treats as "here".
        """
        base = self.working_directory if self.working_directory is not None else Path.cwd()
        return Path(base).resolve()

    def usage(self) -> str | None:
        return self.parser.format_usage().strip() if self.parser is not None else None

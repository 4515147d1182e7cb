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
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import NoReturn

from sift._version import __version__
from sift.cli._io import print_error
from sift.cli.analyze import AnalyzeCommand
from sift.cli.command import SiftCommand
from sift.cli.create import CreateCommand
from sift.cli.exitcodes import EXIT_TOOL_ERROR
from sift.core.config import ToolConfig, default_tool_root
from sift.core.logging import configure_logging, get_logger
from sift.errors import ToolExit, UsageError

logger = get_logger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """argparse that raises instead of exiting the interpreter."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, usage=self.format_usage().strip())


class CommandRunner:
    """
    Parses a command line and dispatches it to one of the registered commands.

    The runner never calls sys.exit(): failures surface as ToolExit (or any
    other exception) so that both the console entry point and the test
    harness can decide what to do with them.
    """

    def __init__(self, commands: Iterable[SiftCommand] = (), prog: str = "sift") -> None:
        self.prog = prog
        self._commands: dict[str, SiftCommand] = {}
        for c in commands:
            self.add_command(c)

    def add_command(self, command: SiftCommand) -> None:
        if not command.name:
            raise ValueError("Commands must have a name")
        if command.name in self._commands:
            raise ValueError(f"Command already registered: {command.name}")
        self._commands[command.name] = command

    @property
    def commands(self) -> tuple[SiftCommand, ...]:
        return tuple(self._commands.values())

    def build_parser(self) -> argparse.ArgumentParser:
        p = _ArgumentParser(prog=self.prog, description="Sift: Python project scaffolding and static analysis")
        p.add_argument(
            "--tool-root",
            dest="tool_root",
            default=None,
            help="Directory with shared tool resources (default: $SIFT_ROOT or the bundled resources).",
        )
        p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
        p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        sub = p.add_subparsers(dest="cmd", required=True, parser_class=_ArgumentParser)
        for command in self._commands.values():
            command.configure(sub.add_parser(command.name, help=command.help))
        return p

    def run(self, argv: Sequence[str]) -> int:
        args = self.build_parser().parse_args(list(argv))

        config = self._tool_config(args)
        if config.verbose:
            configure_logging("DEBUG")

        command = self._commands[args.cmd]
        logger.debug("command_started", command=command.name, tool_root=str(config.tool_root))
        return command.run(args, config)

    def _tool_config(self, args: argparse.Namespace) -> ToolConfig:
        tool_root = Path(args.tool_root).resolve() if args.tool_root else default_tool_root()
        if not tool_root.is_dir():
            raise ToolExit(
                f"Unable to locate the sift tool root: {tool_root}",
                exit_code=EXIT_TOOL_ERROR,
                code="tool_root_not_found",
            )
        return ToolConfig(tool_root=tool_root, verbose=args.verbose)


def create_runner() -> CommandRunner:
    return CommandRunner([CreateCommand(), AnalyzeCommand()])


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    runner = create_runner()
    try:
        return runner.run(argv if argv is not None else sys.argv[1:])
    except ToolExit as e:
        print_error(str(e))
        return e.exit_code
    except Exception as e:
        logger.debug("unexpected_error", error=repr(e))
        print_error(f"sift: error: {e}")
        return EXIT_TOOL_ERROR

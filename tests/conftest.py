import argparse
import sys
import threading
import time
from pathlib import Path

import pytest
from sift.cli.command import SiftCommand
from sift.core.config import ToolConfig
from sift.errors import ToolExit


class EchoCommand(SiftCommand):
    """Prints its words to stdout and, optionally, a line to stderr."""

    name = "echo"

    def configure(self, parser: argparse.ArgumentParser) -> None:
        super().configure(parser)
        parser.add_argument("words", nargs="*")
        parser.add_argument("--err", default=None)
        parser.add_argument("--show-context", action="store_true")

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        print(" ".join(args.words))
        if args.err:
            print(args.err, file=sys.stderr)
        if args.show_context:
            print(f"cwd={Path.cwd().resolve()}")
            print(f"tool_root={config.tool_root}")
        return 0


class ExitCommand(SiftCommand):
    """Raises ToolExit with the given message after printing a line."""

    name = "exit"

    def configure(self, parser: argparse.ArgumentParser) -> None:
        super().configure(parser)
        parser.add_argument("message")
        parser.add_argument("--code", type=int, default=1)

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        print("about to exit")
        raise ToolExit(args.message, exit_code=args.code)


class CrashCommand(SiftCommand):
    name = "crash"

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        raise RuntimeError("boom")


class BlockCommand(SiftCommand):
    """Blocks until `release` is set or `hold` seconds pass."""

    name = "block"

    def __init__(self, hold: float = 0.5) -> None:
        super().__init__()
        self.hold = hold
        self.release = threading.Event()

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        self.release.wait(timeout=self.hold)
        return 0


class SlowCommand(SiftCommand):
    """Sleeps, then reports the working directory and prints its message."""

    name = "slow"

    def configure(self, parser: argparse.ArgumentParser) -> None:
        super().configure(parser)
        parser.add_argument("message")
        parser.add_argument("--delay", type=float, default=0.3)

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        time.sleep(args.delay)
        print(f"cwd={Path.cwd().resolve()}")
        print(args.message)
        return 0


@pytest.fixture
def echo_command() -> EchoCommand:
    return EchoCommand()


@pytest.fixture
def exit_command() -> ExitCommand:
    return ExitCommand()


@pytest.fixture
def crash_command() -> CrashCommand:
    return CrashCommand()


@pytest.fixture
def block_command():
    command = BlockCommand()
    yield command
    command.release.set()


@pytest.fixture
def slow_command() -> SlowCommand:
    return SlowCommand()


@pytest.fixture
def tool_root(tmp_path: Path) -> Path:
    root = tmp_path / "tool-root"
    root.mkdir()
    return root

import argparse
import keyword
import re
from pathlib import Path

from sift.cli._io import print_status
from sift.cli.command import SiftCommand
from sift.cli.exitcodes import EXIT_OK, EXIT_TOOL_ERROR
from sift.core.config import ToolConfig
from sift.core.logging import get_logger
from sift.errors import ToolExit, UsageError
from sift.templates import ProjectTemplate

logger = get_logger(__name__)

DEFAULT_TEMPLATE = "app"
DEFAULT_DESCRIPTION = "A new Python application."

_PACKAGE_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


def is_valid_package_name(name: str) -> bool:
    return bool(_PACKAGE_NAME.match(name)) and not keyword.iskeyword(name)


class CreateCommand(SiftCommand):
    name = "create"
    help = "Create a new Python project."

    def configure(self, parser: argparse.ArgumentParser) -> None:
        super().configure(parser)
        parser.add_argument("project_directory", nargs="?", default=None, help="Directory to create the project in.")
        parser.add_argument(
            "--project-name",
            dest="project_name",
            default=None,
            help="Package name (default: derived from the directory name).",
        )
        parser.add_argument("--description", default=DEFAULT_DESCRIPTION, help="Project description.")
        parser.add_argument("--overwrite", action="store_true", help="Overwrite existing files.")

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        if not args.project_directory:
            raise UsageError("No option specified for the output directory.", usage=self.usage())

        directory = Path(args.project_directory)
        if not directory.is_absolute():
            directory = self.cwd() / directory
        directory = directory.resolve()

        if directory.exists() and not directory.is_dir():
            raise ToolExit(
                f"{directory} exists and is not a directory",
                exit_code=EXIT_TOOL_ERROR,
                code="not_a_directory",
            )

        project_name = args.project_name or directory.name
        if not is_valid_package_name(project_name):
            raise ToolExit(
                f'"{project_name}" is not a valid Python package name.',
                exit_code=EXIT_TOOL_ERROR,
                code="invalid_project_name",
            )

        template = ProjectTemplate.named(config.templates_dir, DEFAULT_TEMPLATE)

        print_status(f"Creating project {directory.name}...")
        directory.mkdir(parents=True, exist_ok=True)
        generated = template.render(
            directory,
            {"project_name": project_name, "description": args.description},
            overwrite=args.overwrite,
        )
        for f in generated:
            print_status(f"  {f.path} ({'created' if f.created else 'skipped'})")

        written = sum(1 for f in generated if f.created)
        logger.debug("project_created", directory=str(directory), files=written)
        print_status(f"Wrote {written} files.")
        print_status()
        print_status("All done!")
        print_status("In order to run your application, type:")
        print_status()
        print_status(f"  $ cd {directory.name}")
        print_status("  $ python lib/main.py")
        print_status()
        print_status(f"Your main program file is lib/main.py in the {directory.name} directory.")
        return EXIT_OK

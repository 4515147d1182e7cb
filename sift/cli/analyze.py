import argparse
from pathlib import Path

from sift.analysis.analyzer import ProjectAnalyzer
from sift.analysis.options import AnalysisOptions, DefaultAnalysisOptionsLoader
from sift.analysis.types import AnalysisResult, Summary
from sift.cli._io import ensure_directory, print_status
from sift.cli.command import SiftCommand
from sift.cli.exitcodes import EXIT_ISSUES_FOUND, EXIT_OK, EXIT_TOOL_ERROR, is_fatal
from sift.core.config import AnalysisConfig, ToolConfig
from sift.core.logging import get_logger
from sift.errors import OptionsError, ToolExit
from sift.reporting.renderers.json import JsonReportRenderer
from sift.reporting.renderers.text import TextReportRenderer

logger = get_logger(__name__)


class AnalyzeCommand(SiftCommand):
    name = "analyze"
    help = "Analyze the project's Python source code."

    def __init__(self, working_directory: Path | None = None, analyzer: ProjectAnalyzer | None = None) -> None:
        super().__init__(working_directory=working_directory)
        self.analyzer = analyzer if analyzer is not None else ProjectAnalyzer()

    def configure(self, parser: argparse.ArgumentParser) -> None:
        super().configure(parser)
        parser.add_argument(
            "directories",
            nargs="*",
            help="Project directories to analyze (default: current directory).",
        )
        parser.add_argument(
            "--options",
            default=None,
            help="Analysis options file (default: analysis_options.yaml in each project).",
        )
        parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")
        parser.add_argument(
            "--fatal-infos",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Treat info-level issues as fatal (default: on).",
        )
        parser.add_argument(
            "--fatal-warnings",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Treat warning-level issues as fatal (default: on).",
        )

    def run(self, args: argparse.Namespace, config: ToolConfig) -> int:
        """
        Analyze every requested directory and report the combined result.

        Every target is validated before anything is printed, so a bad
        argument produces a tool exit with no partial output.
        """
        directories = self._directories(args.directories)
        loader = DefaultAnalysisOptionsLoader(config.tool_root)
        options = {d: self._load_options(loader, d, args.options) for d in directories}

        if args.format == "text":
            print_status(f"Analyzing {', '.join(d.name for d in directories)}...")

        results: list[AnalysisResult] = []
        for d in directories:
            results.append(self.analyzer.analyze(AnalysisConfig(project_root=d, options=options[d])))

        if args.format == "json":
            out = JsonReportRenderer().render(results)
        else:
            out = TextReportRenderer(separator=config.separator).render(results)
        print_status(out.rstrip("\n"))

        summary = Summary.from_diagnostics(tuple(diag for r in results for diag in r.diagnostics))
        if is_fatal(summary.by_severity, fatal_warnings=args.fatal_warnings, fatal_infos=args.fatal_infos):
            raise ToolExit(
                summary.headline(),
                exit_code=EXIT_ISSUES_FOUND,
                code="issues_found",
                details={"by_severity": dict(summary.by_severity)},
            )
        return EXIT_OK

    def _directories(self, raw: list[str]) -> tuple[Path, ...]:
        base = self.cwd()
        if not raw:
            return (ensure_directory(base),)
        return tuple(ensure_directory(d, base=base) for d in raw)

    def _load_options(
        self,
        loader: DefaultAnalysisOptionsLoader,
        project_root: Path,
        options_file: str | None,
    ) -> AnalysisOptions:
        try:
            if options_file is not None:
                path = Path(options_file)
                return loader.load(path if path.is_absolute() else self.cwd() / path)
            return loader.load_for_project(project_root)
        except OptionsError as e:
            logger.debug("invalid_analysis_options", project=str(project_root), code=e.code)
            raise ToolExit(
                f"Invalid analysis options: {e}",
                exit_code=EXIT_TOOL_ERROR,
                code="invalid_options",
            ) from e

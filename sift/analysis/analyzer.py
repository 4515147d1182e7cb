import time
from collections.abc import Iterable, Iterator
from pathlib import Path

from sift.analysis._globs import matches_any
from sift.analysis.checks import UNDEFINED_LINT
from sift.analysis.index import ParsedModule, ProjectIndex
from sift.analysis.options import AnalysisOptions
from sift.analysis.registry import CheckRegistry, default_registry
from sift.analysis.types import AnalysisResult, Diagnostic, Location, Severity
from sift.core.config import AnalysisConfig
from sift.core.logging import get_logger

logger = get_logger(__name__)


class ProjectAnalyzer:
    """
    Runs every active check over the Python files of one project.

    Scope:
    - *.py files under the project root
    - each file parsed exactly once and shared through a ProjectIndex
    - diagnostics de-duplicated and deterministically ordered
    """

    _DEFAULT_EXCLUDE_GLOBS: tuple[str, ...] = (
        "**/.git/**",
        "**/.hg/**",
        "**/.svn/**",
        "**/__pycache__/**",
        "**/.mypy_cache/**",
        "**/.pytest_cache/**",
        "**/.ruff_cache/**",
        "**/.venv/**",
        "**/venv/**",
        "**/env/**",
        "**/dist/**",
        "**/build/**",
        "**/*.egg-info/**",
        "**/site-packages/**",
    )

    def __init__(self, registry: CheckRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()

    def analyze(self, config: AnalysisConfig) -> AnalysisResult:
        started = time.perf_counter()
        root = config.normalized_project_root()
        options = config.options

        exclude_globs = self._DEFAULT_EXCLUDE_GLOBS + tuple(options.exclude)
        files = sorted(
            self._iter_python_files(root, exclude_globs, config.max_file_size_bytes),
            key=lambda p: p.as_posix(),
        )

        index = ProjectIndex(self._parse_all(root, files))

        diagnostics: list[Diagnostic] = list(self._undefined_lints(root, options))
        for active in self.registry.active(options):
            for module in index:
                for finding in active.run(module, index):
                    if module.is_suppressed(active.check.code, finding.line):
                        continue
                    diagnostics.append(
                        Diagnostic(
                            code=active.check.code,
                            severity=active.severity,
                            message=finding.message,
                            location=Location(file=module.rel, line=finding.line, column=finding.column),
                        )
                    )

        result = AnalysisResult(
            project_root=str(root),
            diagnostics=tuple(self._dedupe(diagnostics)),
            files_analyzed=len(index),
            elapsed_seconds=time.perf_counter() - started,
        )
        logger.debug(
            "analysis_finished",
            project=str(root),
            files=result.files_analyzed,
            issues=len(result.diagnostics),
            elapsed=round(result.elapsed_seconds, 3),
        )
        return result

    def _parse_all(self, root: Path, files: Iterable[Path]) -> Iterator[ParsedModule]:
        for f in files:
            rel = f.relative_to(root).as_posix()
            try:
                yield ParsedModule.parse(f, rel=rel, name=self._module_name_from_path(root, f))
            except UnicodeDecodeError:
                logger.warning("skipped_undecodable_file", file=rel)
            except OSError as e:
                logger.warning("skipped_unreadable_file", file=rel, error=str(e))

    def _undefined_lints(self, root: Path, options: AnalysisOptions) -> Iterator[Diagnostic]:
        severity = options.severity_for(UNDEFINED_LINT, Severity.WARNING)
        if severity is None:
            return

        source = options.source
        file = "analysis_options.yaml"
        lines: list[str] = []
        if source is not None:
            try:
                file = source.relative_to(root).as_posix()
            except ValueError:
                file = str(source)
            try:
                lines = source.read_text(encoding="utf-8").splitlines()
            except OSError:
                lines = []

        for name in options.enabled_lints():
            if self.registry.is_known_lint(name):
                continue
            line = next((i for i, text in enumerate(lines, start=1) if name in text), 1)
            yield Diagnostic(
                code=UNDEFINED_LINT,
                severity=severity,
                message=f"'{name}' is not a recognized lint rule.",
                location=Location(file=file, line=line),
            )

    def _iter_python_files(
        self,
        root: Path,
        exclude_globs: tuple[str, ...],
        max_file_size_bytes: int,
    ) -> Iterator[Path]:
        for f in root.rglob("*.py"):
            if not f.is_file() or self._is_excluded(root, f, exclude_globs):
                continue
            try:
                if f.stat().st_size > max_file_size_bytes:
                    continue
            except OSError:
                continue
            yield f

    def _is_excluded(self, root: Path, path: Path, exclude_globs: tuple[str, ...]) -> bool:
        try:
            rel = path.resolve().relative_to(root).as_posix()
        except ValueError:
            return True
        return matches_any(rel, exclude_globs)

    def _module_name_from_path(self, root: Path, f: Path) -> str:
        parts = list(f.resolve().relative_to(root).parts)

        if parts and parts[-1].endswith(".py"):
            parts[-1] = parts[-1][:-3]

        # __init__.py => package module
        if parts and parts[-1] == "__init__":
            parts = parts[:-1]

        if not parts:
            return f.stem

        return ".".join(parts)

    def _dedupe(self, diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
        """
        Dedupe by (code, location, message), keeping the first occurrence,
        then order by severity and location.
        """
        seen: dict[tuple[str, str, int, int, str], Diagnostic] = {}
        for d in diagnostics:
            seen.setdefault(d.dedupe_key(), d)

        return sorted(seen.values(), key=lambda d: d.sort_key())

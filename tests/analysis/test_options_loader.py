from pathlib import Path

import pytest
from sift.analysis.options import AnalysisOptions, DefaultAnalysisOptionsLoader
from sift.analysis.types import Severity
from sift.errors import OptionsError


def _w(p: Path, text: str) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture
def tool_root(tmp_path: Path) -> Path:
    root = tmp_path / "tool"
    _w(root / "analysis_options_user.yaml", "analyzer:\n  errors:\n    missing_required_argument: warning\n")
    return root


@pytest.fixture
def loader(tool_root: Path) -> DefaultAnalysisOptionsLoader:
    return DefaultAnalysisOptionsLoader(tool_root)


class TestLoadForProject:
    def test_falls_back_to_user_defaults(self, loader, tmp_path):
        project = tmp_path / "project"
        project.mkdir()

        options = loader.load_for_project(project)

        assert options.severity_for("missing_required_argument", Severity.INFO) is Severity.WARNING
        assert options.enabled_lints() == ()

    def test_project_file_replaces_user_defaults(self, loader, tmp_path):
        project = tmp_path / "project"
        _w(project / "analysis_options.yaml", "linter:\n  rules:\n    - only_raise_exceptions\n")

        options = loader.load_for_project(project)

        assert options.enabled_lints() == ("only_raise_exceptions",)
        assert options.severity_for("missing_required_argument", Severity.INFO) is Severity.INFO

    def test_no_files_at_all(self, tmp_path):
        loader = DefaultAnalysisOptionsLoader(tmp_path / "empty-root")
        project = tmp_path / "project"
        project.mkdir()

        assert loader.load_for_project(project) == AnalysisOptions()


class TestIncludes:
    def test_package_include_resolves_under_tool_root(self, loader, tmp_path):
        path = _w(
            tmp_path / "project" / "analysis_options.yaml",
            "include: package:sift/analysis_options_user.yaml\n"
            "linter:\n"
            "  rules:\n"
            "    - only_raise_exceptions\n",
        )

        options = loader.load(path)

        assert options.severity_for("missing_required_argument", Severity.INFO) is Severity.WARNING
        assert options.is_lint_enabled("only_raise_exceptions")
        assert options.source == path.resolve()

    def test_including_file_wins(self, loader, tmp_path):
        path = _w(
            tmp_path / "analysis_options.yaml",
            "include: package:sift/analysis_options_user.yaml\n"
            "analyzer:\n"
            "  errors:\n"
            "    missing_required_argument: ignore\n",
        )

        options = loader.load(path)

        assert options.severity_for("missing_required_argument", Severity.INFO) is None

    def test_relative_include(self, loader, tmp_path):
        _w(tmp_path / "base.yaml", "analyzer:\n  exclude:\n    - build/**\n")
        path = _w(tmp_path / "analysis_options.yaml", "include: base.yaml\nanalyzer:\n  exclude:\n    - gen/**\n")

        assert loader.load(path).exclude == ("build/**", "gen/**")

    def test_include_cycle(self, loader, tmp_path):
        _w(tmp_path / "a.yaml", "include: b.yaml\n")
        _w(tmp_path / "b.yaml", "include: a.yaml\n")

        with pytest.raises(OptionsError) as exc:
            loader.load(tmp_path / "a.yaml")
        assert exc.value.code == "include_cycle"

    def test_foreign_package_include(self, loader, tmp_path):
        path = _w(tmp_path / "analysis_options.yaml", "include: package:other/options.yaml\n")

        with pytest.raises(OptionsError) as exc:
            loader.load(path)
        assert exc.value.code == "unresolved_include"


class TestLintRules:
    def test_mapping_form(self, loader, tmp_path):
        path = _w(
            tmp_path / "analysis_options.yaml",
            "linter:\n  rules:\n    only_raise_exceptions: true\n    other_rule: false\n",
        )

        options = loader.load(path)

        assert options.enabled_lints() == ("only_raise_exceptions",)


class TestMalformed:
    @pytest.mark.parametrize(
        "text, code",
        [
            ("analyzer: [\n", "invalid_yaml"),
            ("- a\n- b\n", "invalid_options"),
            ("include: 3\n", "invalid_include"),
            ("analyzer: 3\n", "invalid_section"),
            ("analyzer:\n  errors: [a]\n", "invalid_errors"),
            ("analyzer:\n  errors:\n    unused_import: fatal\n", "invalid_severity"),
            ("linter:\n  rules: only_raise_exceptions\n", "invalid_rules"),
            ("analyzer:\n  exclude: build\n", "invalid_exclude"),
        ],
    )
    def test_error_codes(self, loader, tmp_path, text, code):
        path = _w(tmp_path / "analysis_options.yaml", text)

        with pytest.raises(OptionsError) as exc:
            loader.load(path)

        assert exc.value.code == code
        assert str(path.resolve()) in str(exc.value)

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(OptionsError) as exc:
            loader.load(tmp_path / "nope.yaml")
        assert exc.value.code == "options_not_found"

    def test_empty_file_is_defaults(self, loader, tmp_path):
        path = _w(tmp_path / "analysis_options.yaml", "")

        options = loader.load(path)

        assert options.severities == {}
        assert options.lint_rules == {}

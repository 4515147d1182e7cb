"""
End-to-end tests for `sift create` and `sift analyze`.

The scenarios in TestAnalyzeOnce share one generated project and run in
order: each one builds on the file changes made by the previous ones.
Nothing is mocked; every scenario drives the real command through the
harness and checks only its exit classification and printed text.
"""

from collections.abc import Iterator

import pytest
from sift.cli.analyze import AnalyzeCommand
from sift.cli.create import CreateCommand
from sift.testing import (
    SLOW_ANALYZE_TIMEOUT,
    Fixture,
    ScenarioRunner,
    create_fixture,
    destroy_fixture,
    temporary_fixture,
)

PROJECT_DIRNAME = "sift_project"
LIB_MAIN = "lib/main.py"


@pytest.fixture(scope="class")
def workspace() -> Iterator[Fixture]:
    fixture = create_fixture("analyze_once_test_")
    yield fixture
    destroy_fixture(fixture)


@pytest.fixture(scope="class")
def project(workspace: Fixture) -> Fixture:
    return Fixture(root=workspace.path(PROJECT_DIRNAME))


class TestAnalyzeOnce:
    def test_create(self, scenario_runner: ScenarioRunner, project: Fixture):
        scenario_runner.run_command(
            CreateCommand(),
            ["create", str(project.root)],
            status_contains=[
                "All done!",
                "Your main program file is lib/main.py",
            ],
            error_contains=[],
        )

        assert project.path(LIB_MAIN).is_file()

    def test_working_directory(self, scenario_runner: ScenarioRunner, project: Fixture):
        scenario_runner.run_command(
            AnalyzeCommand(working_directory=project.root),
            ["analyze"],
            status_contains=["No issues found!"],
            error_contains=[],
            timeout=SLOW_ANALYZE_TIMEOUT,
        )

    def test_passing_one_file_throws(self, scenario_runner: ScenarioRunner, project: Fixture):
        result = scenario_runner.run_command(
            AnalyzeCommand(),
            ["analyze", str(project.path(LIB_MAIN))],
            tool_exit=True,
            exit_message_contains="is not a directory",
        )

        assert result.status_text == ""

    def test_working_directory_with_errors(
        self,
        scenario_runner: ScenarioRunner,
        project: Fixture,
        analyzer_separator: str,
    ):
        # Dropping on_pressed is reported at info by default; the bundled
        # user options raise it to warning. The string raise only trips an
        # opt-in lint, so it stays silent until a project options file
        # enables that lint below.
        project.replace_first(
            LIB_MAIN,
            "on_pressed=self._increment_counter,",
            "# on_pressed=self._increment_counter,",
        )
        project.replace_first(
            LIB_MAIN,
            "self._counter += 1",
            'self._counter += 1; raise "an error message"',
        )

        result = scenario_runner.run_command(
            AnalyzeCommand(working_directory=project.root),
            ["analyze"],
            status_contains=[
                "Analyzing",
                f"warning {analyzer_separator} The parameter 'on_pressed' is required",
                f"info {analyzer_separator} The method '_increment_counter' isn't used",
                "2 issues found.",
            ],
            tool_exit=True,
            exit_message_contains="2 issues found.",
            timeout=SLOW_ANALYZE_TIMEOUT,
        )

        assert result.status_text.count(f"info {analyzer_separator}") == 1

    def test_working_directory_with_local_options(
        self,
        scenario_runner: ScenarioRunner,
        project: Fixture,
        analyzer_separator: str,
    ):
        project.write_file(
            "analysis_options.yaml",
            "include: package:sift/analysis_options_user.yaml\n"
            "linter:\n"
            "  rules:\n"
            "    - only_raise_exceptions\n",
        )

        result = scenario_runner.run_command(
            AnalyzeCommand(working_directory=project.root),
            ["analyze"],
            status_contains=[
                "Analyzing",
                f"warning {analyzer_separator} The parameter 'on_pressed' is required",
                f"info {analyzer_separator} The method '_increment_counter' isn't used",
                f"info {analyzer_separator} Only raise instances of classes extending BaseException",
                "3 issues found.",
            ],
            tool_exit=True,
            timeout=SLOW_ANALYZE_TIMEOUT,
        )

        assert result.status_text.count(f"info {analyzer_separator}") == 2

    def test_no_duplicate_issues(self, scenario_runner: ScenarioRunner):
        with temporary_fixture("analyze_once_test_") as fixture:
            fixture.write_file("foo.py", "from bar import bar\n\n\ndef foo():\n    return bar()\n")
            fixture.write_file("bar.py", "import asyncio  # unused\n\n\ndef bar():\n    pass\n")

            result = scenario_runner.run_command(
                AnalyzeCommand(working_directory=fixture.root),
                ["analyze"],
                status_contains=["Analyzing", "1 issue found."],
                tool_exit=True,
                timeout=SLOW_ANALYZE_TIMEOUT,
            )

        assert result.status_text.count("Unused import: 'asyncio'") == 1

    def test_analyze(self, scenario_runner: ScenarioRunner):
        with temporary_fixture() as fixture:
            fixture.write_file("main.py", 'import io\n\nbar = io.StringIO("baz")\n')

            scenario_runner.run_command(
                AnalyzeCommand(working_directory=fixture.root),
                ["analyze"],
                status_contains=["No issues found!"],
                error_contains=[],
                timeout=SLOW_ANALYZE_TIMEOUT,
            )


class TestCaptureIsolation:
    def test_back_to_back_scenarios_do_not_leak(self, scenario_runner: ScenarioRunner, tmp_path):
        clean = tmp_path / "clean"
        dirty = tmp_path / "dirty"
        Fixture(root=clean).write_file("main.py", "x = 1\n")
        Fixture(root=dirty).write_file("main.py", "import os\n")

        first = scenario_runner.run_command(
            AnalyzeCommand(working_directory=dirty),
            ["analyze"],
            status_contains=["1 issue found."],
            tool_exit=True,
        )
        second = scenario_runner.run_command(
            AnalyzeCommand(working_directory=clean),
            ["analyze"],
            status_contains=["No issues found!"],
        )

        assert "Unused import" in first.status_text
        assert "Unused import" not in second.status_text
        assert "1 issue found." not in second.status_text

from sift.testing.assertions import OutcomeMismatch, OutputMismatch, assert_outcome, assert_output
from sift.testing.capture import OutputCapture
from sift.testing.fixtures import Fixture, create_fixture, destroy_fixture, temporary_fixture
from sift.testing.invoker import (
    CommandInvoker,
    Completed,
    InvocationOutcome,
    InvocationRequest,
    InvocationTimeoutError,
    ToolExited,
    create_test_command_runner,
)
from sift.testing.scenario import (
    DEFAULT_TIMEOUT,
    SLOW_ANALYZE_TIMEOUT,
    Expectations,
    ScenarioResult,
    ScenarioRunner,
)

__all__ = [
    # Fixtures
    "Fixture",
    "create_fixture",
    "destroy_fixture",
    "temporary_fixture",
    # Capture
    "OutputCapture",
    # Invocation
    "CommandInvoker",
    "Completed",
    "InvocationOutcome",
    "InvocationRequest",
    "InvocationTimeoutError",
    "ToolExited",
    "create_test_command_runner",
    # Assertions
    "OutcomeMismatch",
    "OutputMismatch",
    "assert_outcome",
    "assert_output",
    # Scenarios
    "DEFAULT_TIMEOUT",
    "SLOW_ANALYZE_TIMEOUT",
    "Expectations",
    "ScenarioResult",
    "ScenarioRunner",
]

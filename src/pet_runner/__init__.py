from pet_runner.assertions import StepAssertionError, check, check_eq
from pet_runner.kernel import (
    ExecutionContext,
    Failure,
    Runner,
    RunSummary,
    Scenario,
    ScenarioParser,
    StepFailure,
    StepRegistry,
    Success,
)

__all__ = [
    "ExecutionContext",
    "Failure",
    "RunSummary",
    "Runner",
    "Scenario",
    "ScenarioParser",
    "StepAssertionError",
    "StepFailure",
    "StepRegistry",
    "Success",
    "check",
    "check_eq",
]

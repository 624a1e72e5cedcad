from .context import ContextFactory, ExecutionContext
from .errors import (
    MalformedLiteralError,
    OrphanStepError,
    ParseError,
    RegistryFrozenError,
    ScenarioSyntaxError,
    StepFailure,
    UnmatchedStepError,
)
from .pattern import CompiledPattern, compile_pattern
from .runner import Failure, Outcome, Runner, RunSummary, Skipped, Success
from .scenario import ResolvedStep, Scenario, SourceLocation, StepHandler
from .scenario_parser import ScenarioParser
from .step_registry import Found, NotFound, StepDefinition, StepRegistry, StepResolution
from .trace import ErrorInfo, StepTraceRecord, TraceRecorder

__all__ = [
    "CompiledPattern",
    "ContextFactory",
    "ErrorInfo",
    "ExecutionContext",
    "Failure",
    "Found",
    "MalformedLiteralError",
    "NotFound",
    "OrphanStepError",
    "Outcome",
    "ParseError",
    "RegistryFrozenError",
    "ResolvedStep",
    "RunSummary",
    "Runner",
    "Scenario",
    "ScenarioParser",
    "ScenarioSyntaxError",
    "Skipped",
    "SourceLocation",
    "StepDefinition",
    "StepFailure",
    "StepHandler",
    "StepRegistry",
    "StepResolution",
    "StepTraceRecord",
    "Success",
    "TraceRecorder",
    "UnmatchedStepError",
    "compile_pattern",
]

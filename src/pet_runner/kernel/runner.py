from __future__ import annotations

import inspect
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pet_runner.kernel.context import ContextFactory, ExecutionContext
from pet_runner.kernel.errors import StepFailure
from pet_runner.kernel.scenario import Scenario
from pet_runner.kernel.trace import StepTraceRecord, TraceRecorder
from pet_runner.observability.logging import LogMessage

if TYPE_CHECKING:
    from pet_runner.ports.log_sink import LogSink
    from pet_runner.ports.reporter import Reporter
    from pet_runner.ports.trace_sink import TraceSink


@dataclass(frozen=True, slots=True)
class Success:
    scenario: Scenario
    context: ExecutionContext


@dataclass(frozen=True, slots=True)
class Failure:
    scenario: Scenario
    failure: StepFailure
    context: ExecutionContext


@dataclass(frozen=True, slots=True)
class Skipped:
    # Scenario never started because an earlier one failed under stop_on_first_failure.
    scenario: Scenario


Outcome = Success | Failure


@dataclass(frozen=True, slots=True)
class RunSummary:
    results: tuple[Success | Failure | Skipped, ...]

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if isinstance(result, Success))

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if isinstance(result, Failure))

    @property
    def skipped(self) -> int:
        return sum(1 for result in self.results if isinstance(result, Skipped))

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.skipped == 0

    def failures(self) -> list[Failure]:
        return [result for result in self.results if isinstance(result, Failure)]


@dataclass(frozen=True, slots=True)
class Runner:
    """Executes scenarios step by step, one fresh context per scenario.

    Each handler is called as ``handler(context, *args)``; when it returns an
    awaitable the runner awaits it before starting the next step. The first
    exception ends the scenario with a :class:`Failure`; later steps never run.
    """

    context_factory: ContextFactory = field(default_factory=ContextFactory)
    reporter: Reporter | None = None
    trace_recorder: TraceRecorder | None = None
    trace_sink: TraceSink | None = None
    log_sink: LogSink | None = None
    stop_on_first_failure: bool = False

    async def run(self, scenario: Scenario) -> Outcome:
        context = self.context_factory.new(scenario.name)
        if self.reporter is not None:
            self.reporter.on_scenario_start(scenario)
        self._log("info", "scenario started", scenario=scenario.name, location=str(scenario.location))

        for step in scenario.steps:
            if self.reporter is not None:
                self.reporter.on_step_start(step)
            span = None
            if self.trace_recorder is not None:
                span = self.trace_recorder.begin(scenario=scenario.name, step=step)
            try:
                result = step.handler(context, *step.args)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:  # noqa: BLE001 - any handler error ends the scenario
                if self.trace_recorder is not None and span is not None:
                    self._emit_trace(self.trace_recorder.finish(span=span, error=exc))
                failure = StepFailure.wrap(step, exc, context_snapshot=context.snapshot())
                if self.reporter is not None:
                    self.reporter.on_scenario_failure(scenario, failure)
                self._log(
                    "error",
                    "scenario failed",
                    scenario=scenario.name,
                    location=str(failure.step.location),
                    reason=failure.message,
                )
                return Failure(scenario=scenario, failure=failure, context=context)
            if self.trace_recorder is not None and span is not None:
                self._emit_trace(self.trace_recorder.finish(span=span, error=None))

        if self.reporter is not None:
            self.reporter.on_scenario_success(scenario)
        self._log("info", "scenario passed", scenario=scenario.name, steps=len(scenario.steps))
        return Success(scenario=scenario, context=context)

    async def run_all(self, scenarios: Iterable[Scenario]) -> RunSummary:
        # Scenarios run one after another in source order.
        results: list[Success | Failure | Skipped] = []
        halted = False
        for scenario in scenarios:
            if halted:
                results.append(Skipped(scenario=scenario))
                continue
            outcome = await self.run(scenario)
            results.append(outcome)
            if isinstance(outcome, Failure) and self.stop_on_first_failure:
                halted = True

        summary = RunSummary(results=tuple(results))
        if self.trace_sink is not None:
            self.trace_sink.flush()
        if self.reporter is not None:
            self.reporter.on_run_complete(summary)
        self._log(
            "info",
            "run finished",
            passed=summary.passed,
            failed=summary.failed,
            skipped=summary.skipped,
        )
        return summary

    def _emit_trace(self, record: StepTraceRecord) -> None:
        if self.trace_sink is not None:
            self.trace_sink.emit(record)

    def _log(self, level: str, message: str, **fields: object) -> None:
        if self.log_sink is not None:
            self.log_sink.emit(LogMessage(level=level, message=message, fields=fields))

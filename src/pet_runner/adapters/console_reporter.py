from __future__ import annotations

import sys
import traceback
from typing import TextIO

from pet_runner.kernel.errors import StepFailure
from pet_runner.kernel.runner import RunSummary
from pet_runner.kernel.scenario import ResolvedStep, Scenario
from pet_runner.ports.reporter import Reporter


class ConsoleReporter(Reporter):
    """Plain-text progress and failure diagnostics.

    Each executed step is echoed as ``<file>:<line>> <raw line>``. A failure
    prints the step, the reason, the step description, the context snapshot
    and (optionally) the original stack trace.
    """

    def __init__(
        self,
        *,
        stream: TextIO | None = None,
        show_steps: bool = True,
        show_stacktrace: bool = True,
    ) -> None:
        self._stream = stream
        self._show_steps = show_steps
        self._show_stacktrace = show_stacktrace

    def on_scenario_start(self, scenario: Scenario) -> None:
        if self._show_steps:
            self._write(f"{scenario.location}> test {scenario.name!r}")

    def on_step_start(self, step: ResolvedStep) -> None:
        if self._show_steps:
            self._write(step.format_line())

    def on_scenario_success(self, scenario: Scenario) -> None:
        # Success is summarised once per run.
        _ = scenario

    def on_scenario_failure(self, scenario: Scenario, failure: StepFailure) -> None:
        step = failure.step
        self._write("\nStep failed:\n")
        self._write(f"Scenario: {scenario.name!r}")
        self._write(step.format_line())
        self._write(f"\nReason: {failure.message}")
        handler_name = getattr(step.handler, "__qualname__", repr(step.handler))
        self._write(f"\nFailing step: '{step.description}': {handler_name}")
        self._write(f"\nContext at point of failure: {failure.context_snapshot!r}")
        if self._show_stacktrace:
            stack = "".join(traceback.format_exception(failure.original)).rstrip()
            self._write(f"\nStacktrace:\n{stack}")

    def on_run_complete(self, summary: RunSummary) -> None:
        if summary.ok:
            self._write("\nAll tests run successfully!")
            return
        self._write(
            f"\n{summary.failed} failed, {summary.passed} passed, {summary.skipped} skipped"
        )

    def _write(self, text: str) -> None:
        print(text, file=self._stream if self._stream is not None else sys.stdout)

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pet_runner.kernel.errors import StepFailure
    from pet_runner.kernel.runner import RunSummary
    from pet_runner.kernel.scenario import ResolvedStep, Scenario


# Reporter receives runner progress; presentation is up to the adapter.
@runtime_checkable
class Reporter(Protocol):
    def on_scenario_start(self, scenario: Scenario) -> None:
        raise NotImplementedError("Reporter is a port; use a concrete adapter.")

    def on_step_start(self, step: ResolvedStep) -> None:
        raise NotImplementedError("Reporter is a port; use a concrete adapter.")

    def on_scenario_success(self, scenario: Scenario) -> None:
        raise NotImplementedError("Reporter is a port; use a concrete adapter.")

    def on_scenario_failure(self, scenario: Scenario, failure: StepFailure) -> None:
        raise NotImplementedError("Reporter is a port; use a concrete adapter.")

    def on_run_complete(self, summary: RunSummary) -> None:
        raise NotImplementedError("Reporter is a port; use a concrete adapter.")

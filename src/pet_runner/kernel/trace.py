from __future__ import annotations

import traceback
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Literal

from pet_runner.domain.literals import LiteralScalar
from pet_runner.kernel.scenario import ResolvedStep


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    # ErrorInfo records a step handler exception.
    type: str
    message: str
    where: str
    stack: str | None = None


@dataclass(frozen=True, slots=True)
class StepTraceRecord:
    # One record per executed step.
    scenario: str
    location: str
    keyword: str
    description: str
    args: tuple[LiteralScalar, ...]
    t_enter: datetime
    t_exit: datetime
    duration_ms: float
    status: Literal["ok", "error"]
    error: ErrorInfo | None


@dataclass(frozen=True, slots=True)
class TraceSpan:
    # Internal handle kept between step enter and exit.
    scenario: str
    step: ResolvedStep
    t_enter: datetime


class TraceRecorder:
    def __init__(self, *, include_stack: bool = False) -> None:
        self._include_stack = include_stack

    def begin(self, *, scenario: str, step: ResolvedStep) -> TraceSpan:
        return TraceSpan(scenario=scenario, step=step, t_enter=datetime.now(tz=UTC))

    def finish(self, *, span: TraceSpan, error: BaseException | None) -> StepTraceRecord:
        t_exit = datetime.now(tz=UTC)
        info = None
        if error is not None:
            info = ErrorInfo(
                type=type(error).__name__,
                message=str(error),
                where=str(span.step.location),
                stack="".join(traceback.format_exception(error)) if self._include_stack else None,
            )
        return StepTraceRecord(
            scenario=span.scenario,
            location=str(span.step.location),
            keyword=span.step.keyword,
            description=span.step.description,
            args=span.step.args,
            t_enter=span.t_enter,
            t_exit=t_exit,
            duration_ms=(t_exit - span.t_enter).total_seconds() * 1000.0,
            status="ok" if error is None else "error",
            error=info,
        )

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pet_runner.domain.literals import LiteralScalar

# Handlers receive the scenario context first, then the coerced placeholder values.
StepHandler = Callable[..., object]


@dataclass(frozen=True, slots=True)
class SourceLocation:
    file_name: str
    line_no: int

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_no}"


@dataclass(frozen=True, slots=True)
class ResolvedStep:
    # One instruction line bound to its handler and arguments.
    location: SourceLocation
    raw_line: str
    keyword: str
    description: str
    handler: StepHandler
    args: tuple[LiteralScalar, ...]

    def format_line(self) -> str:
        return f"{self.location}> {self.raw_line}"


@dataclass(frozen=True, slots=True)
class Scenario:
    # Scenario is an immutable, named, ordered list of resolved steps.
    name: str
    location: SourceLocation
    steps: Sequence[ResolvedStep]

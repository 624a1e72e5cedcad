from __future__ import annotations

import asyncio

from pet_runner.assertions import check_eq
from pet_runner.kernel.context import ExecutionContext
from pet_runner.kernel.step_registry import StepRegistry


class ReasonedFailure(Exception):
    pass


def _print(context: ExecutionContext, message: object) -> None:
    # Printing is recorded in the context instead of the terminal.
    context["lines_printed"] = int(context.get("lines_printed", 0)) + 1
    lines = context.setdefault("lines", [])
    if not isinstance(lines, list):
        raise TypeError(f"context['lines'] must be a list, got {type(lines).__name__}")
    lines.append(message)


def print_text(context: ExecutionContext, text: object) -> None:
    _print(context, text)


def print_two(context: ExecutionContext, text: object, something_else: object) -> None:
    _print(context, text)
    _print(context, something_else)


def see_lines(context: ExecutionContext, lines: object) -> None:
    check_eq(context.get("lines_printed", 0), lines, "amount of lines printed")


async def wait_ms(context: ExecutionContext, ms: float) -> None:
    _ = context
    await asyncio.sleep(ms / 1000.0)


async def fail_because(context: ExecutionContext, reason: object) -> None:
    _ = context
    raise ReasonedFailure(str(reason))


def register_steps(registry: StepRegistry) -> None:
    registry.register("I print $text", print_text)
    registry.register("I print $text and I also print $somethingElse", print_two)
    registry.register("I see $lines lines of output", see_lines)
    registry.register("I wait $ms milliseconds", wait_ms)
    registry.register("I fail because $reason", fail_because)

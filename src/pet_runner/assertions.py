"""Assertion helpers for step handlers.

    check(fact)
    check_eq(actual, expected)
    check_eq(context["apples"], 3, "amount of apples")
    # -> "Expected amount of apples to be 3, but it was 0"
"""

from __future__ import annotations

import json


class StepAssertionError(AssertionError):
    pass


def check(fact: object, message: str = "Assertion failed") -> None:
    if not fact:
        raise StepAssertionError(message)


def check_eq(actual: object, expected: object, what: str | None = None) -> None:
    # Values are compared by their JSON rendering: dict key order matters,
    # while 3 and 3.0 compare equal.
    if _render(actual) == _render(expected):
        return
    subject = what if what else "value"
    raise StepAssertionError(f"Expected {subject} to be {expected!r}, but it was {actual!r}")


def _render(value: object) -> str:
    return json.dumps(_normalize(value), default=repr)


def _normalize(value: object) -> object:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value

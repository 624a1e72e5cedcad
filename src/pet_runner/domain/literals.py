from __future__ import annotations

import math
import re
from dataclasses import dataclass

QUOTES = ("'", '"')

# Signed or unsigned integer or decimal; no exponent, no digit separators.
NUMBER_PATTERN = r"[-+]?[0-9]*\.?[0-9]+"
_NUMBER_RE = re.compile(NUMBER_PATTERN)
_INTEGER_RE = re.compile(r"[-+]?[0-9]+")

# Quoted text becomes str; integer tokens become int, decimal tokens float.
LiteralScalar = str | int | float


@dataclass(frozen=True, slots=True)
class LiteralValue:
    # Successful coercion of one captured token.
    value: LiteralScalar


@dataclass(frozen=True, slots=True)
class MalformedLiteral:
    # Token is neither a properly quoted string nor a finite number.
    token: str
    reason: str


def coerce_literal(token: str) -> LiteralValue | MalformedLiteral:
    """Convert a captured token into its typed value.

    ``"abc"`` and ``'abc'`` become the string ``abc`` (no escape processing),
    ``3`` becomes ``3`` and ``-0.5`` becomes ``-0.5``.
    """
    if token[:1] in QUOTES:
        if len(token) < 2 or token[-1] != token[0]:
            return MalformedLiteral(token=token, reason="unbalanced quotes")
        return LiteralValue(token[1:-1])
    if _INTEGER_RE.fullmatch(token):
        try:
            return LiteralValue(int(token))
        except ValueError:
            # Beyond the interpreter's int digit limit; the float path rejects it as non-finite.
            pass
    if not _NUMBER_RE.fullmatch(token):
        return MalformedLiteral(token=token, reason="not a number")
    number = float(token)
    if not math.isfinite(number):
        return MalformedLiteral(token=token, reason="not a finite number")
    return LiteralValue(number)

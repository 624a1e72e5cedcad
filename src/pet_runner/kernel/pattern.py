from __future__ import annotations

import re
from dataclasses import dataclass

from pet_runner.domain.literals import NUMBER_PATTERN

# Placeholders are `$` followed by word characters or hyphens, e.g. `$amount-of-apples`.
PLACEHOLDER_RE = re.compile(r"\$[\w-]+\b")

# Capture alternatives in order of preference: single-quoted, double-quoted, number.
# Quoted captures keep their quotes; the literal coercer strips them.
_SINGLE_QUOTED = r"'(?:\\.|[^'])*'"
_DOUBLE_QUOTED = r'"(?:\\.|[^"])*"'
LITERAL_GROUP = f"({_SINGLE_QUOTED}|{_DOUBLE_QUOTED}|{NUMBER_PATTERN})"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    # Anchored matcher derived from a step description.
    description: str
    placeholders: tuple[str, ...]
    regex: re.Pattern[str]

    def match(self, line: str) -> tuple[str, ...] | None:
        # Whole-line match only; returns raw captured tokens in placeholder order.
        found = self.regex.fullmatch(line)
        if found is None:
            return None
        return found.groups()


def compile_pattern(description: str) -> CompiledPattern:
    """Compile ``I set $value to $x`` into an anchored, literal-capturing regex.

    Text between placeholders is escaped, so descriptions may contain any
    punctuation. A description without placeholders matches itself exactly.
    """
    parts: list[str] = []
    names: list[str] = []
    cursor = 0
    for placeholder in PLACEHOLDER_RE.finditer(description):
        parts.append(re.escape(description[cursor : placeholder.start()]))
        parts.append(LITERAL_GROUP)
        names.append(placeholder.group(0)[1:])
        cursor = placeholder.end()
    parts.append(re.escape(description[cursor:]))
    regex = re.compile("".join(parts))
    return CompiledPattern(description=description, placeholders=tuple(names), regex=regex)

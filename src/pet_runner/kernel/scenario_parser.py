from __future__ import annotations

import re
from dataclasses import dataclass

from pet_runner.domain.literals import MalformedLiteral
from pet_runner.kernel.errors import (
    MalformedLiteralError,
    OrphanStepError,
    ScenarioSyntaxError,
    UnmatchedStepError,
)
from pet_runner.kernel.scenario import ResolvedStep, Scenario, SourceLocation
from pet_runner.kernel.step_registry import NotFound, StepRegistry

_HEADER_RE = re.compile(r"test (['\"])(.*)\1")
_INSTRUCTION_RE = re.compile(r"(given|when|then|and) (.*)")


@dataclass
class _OpenScenario:
    name: str
    location: SourceLocation
    steps: list[ResolvedStep]

    def close(self) -> Scenario:
        return Scenario(name=self.name, location=self.location, steps=tuple(self.steps))


@dataclass(frozen=True, slots=True)
class ScenarioParser:
    # Parser is stateless between calls; the registry is read-only from its side.
    registry: StepRegistry

    def parse(self, source_text: str, file_name: str) -> list[Scenario]:
        """Parse scenario text into scenarios, resolving each instruction line.

        Raises a :class:`ParseError` subclass on the first bad line; nothing is
        returned for a file that fails to parse.
        """
        opened: list[_OpenScenario] = []
        for line_no, raw_line in enumerate(_split_lines(source_text), start=1):
            stripped = raw_line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            location = SourceLocation(file_name=file_name, line_no=line_no)

            header = _HEADER_RE.fullmatch(stripped)
            if header is not None:
                opened.append(_OpenScenario(name=header.group(2), location=location, steps=[]))
                continue

            instruction = _INSTRUCTION_RE.fullmatch(stripped)
            if instruction is None:
                raise ScenarioSyntaxError("Syntax error", file_name=file_name, line_no=line_no, line=raw_line)
            if not opened:
                raise OrphanStepError(
                    "Encountered a step without a test",
                    file_name=file_name,
                    line_no=line_no,
                    line=raw_line,
                )
            opened[-1].steps.append(self._resolve(instruction, raw_line, location))
        return [scenario.close() for scenario in opened]

    def _resolve(self, instruction: re.Match[str], raw_line: str, location: SourceLocation) -> ResolvedStep:
        keyword, text = instruction.group(1), instruction.group(2)
        resolution = self.registry.resolve(text)
        if isinstance(resolution, NotFound):
            raise UnmatchedStepError(
                "No step matches line",
                file_name=location.file_name,
                line_no=location.line_no,
                line=raw_line,
            )
        if isinstance(resolution, MalformedLiteral):
            raise MalformedLiteralError(
                resolution.token,
                file_name=location.file_name,
                line_no=location.line_no,
                line=raw_line,
            )
        return ResolvedStep(
            location=location,
            raw_line=raw_line,
            keyword=keyword,
            description=resolution.definition.description,
            handler=resolution.definition.handler,
            args=resolution.args,
        )


def _split_lines(source_text: str) -> list[str]:
    # Only "\n" separates lines; a trailing newline adds no empty line.
    lines = source_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

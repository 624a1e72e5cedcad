from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pet_runner.kernel.scenario import ResolvedStep


class ParseError(ValueError):
    # Base for every error raised while turning scenario text into scenarios.
    def __init__(self, reason: str, *, file_name: str, line_no: int, line: str) -> None:
        super().__init__(f"{file_name}:{line_no}: {reason}: {line}")
        self.reason = reason
        self.file_name = file_name
        self.line_no = line_no
        self.line = line


class ScenarioSyntaxError(ParseError):
    pass


class UnmatchedStepError(ParseError):
    pass


class OrphanStepError(ParseError):
    pass


class MalformedLiteralError(ParseError):
    def __init__(self, token: str, *, file_name: str, line_no: int, line: str) -> None:
        super().__init__(f"Malformed literal {token}", file_name=file_name, line_no=line_no, line=line)
        self.token = token


class RegistryFrozenError(RuntimeError):
    pass


class StepFailure(RuntimeError):
    """A step handler failed; carries the step identity and the original error.

    Wrapping happens exactly once: a ``StepFailure`` raised from a nested run
    keeps its original step.
    """

    def __init__(
        self,
        step: ResolvedStep,
        original: BaseException,
        *,
        context_snapshot: dict[str, object] | None = None,
    ) -> None:
        super().__init__(f"{step.location}> {step.raw_line.strip()}: {_message_of(original)}")
        self.step = step
        self.original = original
        self.context_snapshot = {} if context_snapshot is None else context_snapshot

    @property
    def message(self) -> str:
        return _message_of(self.original)

    @classmethod
    def wrap(
        cls,
        step: ResolvedStep,
        error: BaseException,
        *,
        context_snapshot: dict[str, object] | None = None,
    ) -> StepFailure:
        if isinstance(error, StepFailure):
            return error
        return cls(step, error, context_snapshot=context_snapshot)


def _message_of(error: BaseException) -> str:
    # Bare exceptions (e.g. `raise AssertionError`) fall back to their type name.
    text = str(error)
    return text if text else type(error).__name__

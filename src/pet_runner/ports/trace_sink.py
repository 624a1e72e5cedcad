from __future__ import annotations

from typing import Protocol, runtime_checkable

from pet_runner.kernel.trace import StepTraceRecord


@runtime_checkable
class TraceSink(Protocol):
    def emit(self, record: StepTraceRecord) -> None:
        """Consume one StepTraceRecord."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")

    def flush(self) -> None:
        """Flush buffered trace output if supported."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Close the sink and release resources."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")

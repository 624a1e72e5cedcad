from __future__ import annotations

from typing import Protocol, runtime_checkable

from pet_runner.observability.logging import LogMessage


@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        """Consume one structured log message."""
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")

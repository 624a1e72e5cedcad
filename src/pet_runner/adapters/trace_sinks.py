from __future__ import annotations

import json
import sys
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path

from pet_runner.kernel.trace import StepTraceRecord
from pet_runner.ports.trace_sink import TraceSink


class JsonlTraceSink(TraceSink):
    # JsonlTraceSink appends one StepTraceRecord per line.
    def __init__(self, *, path: Path, flush_every_n: int = 1) -> None:
        self._path = path
        self._flush_every_n = max(1, flush_every_n)
        self._emit_count = 0
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self._path.open("a", encoding="utf-8")

    def emit(self, record: StepTraceRecord) -> None:
        self._handle.write(_dumps(record) + "\n")
        self._emit_count += 1
        if self._emit_count % self._flush_every_n == 0:
            self.flush()

    def flush(self) -> None:
        self._handle.flush()

    def close(self) -> None:
        if not self._handle.closed:
            self.flush()
            self._handle.close()


class StdoutTraceSink(TraceSink):
    # Debug adapter: one compact JSON line per record on stdout.
    def emit(self, record: StepTraceRecord) -> None:
        sys.stdout.write(_dumps(record) + "\n")

    def flush(self) -> None:
        sys.stdout.flush()

    def close(self) -> None:
        self.flush()


def _dumps(record: StepTraceRecord) -> str:
    return json.dumps(_trace_to_dict(record), separators=(",", ":"), ensure_ascii=False, default=str)


def _trace_to_dict(record: StepTraceRecord) -> dict[str, object]:
    # Explicit field mapping keeps key order stable across releases.
    return {
        "scenario": record.scenario,
        "location": record.location,
        "keyword": record.keyword,
        "description": record.description,
        "args": list(record.args),
        "t_enter": _format_dt(record.t_enter),
        "t_exit": _format_dt(record.t_exit),
        "duration_ms": record.duration_ms,
        "status": record.status,
        "error": asdict(record.error) if record.error is not None else None,
    }


def _format_dt(value: datetime) -> str:
    # RFC3339 UTC with Z suffix.
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")

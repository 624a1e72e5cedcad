from .log_sink import LogSink
from .reporter import Reporter
from .trace_sink import TraceSink

__all__ = ["LogSink", "Reporter", "TraceSink"]

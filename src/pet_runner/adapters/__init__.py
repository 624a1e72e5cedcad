from .console_reporter import ConsoleReporter
from .log_sinks import JsonlLogSink, StdoutLogSink
from .scenario_source import FileScenarioSource, load_scenarios
from .trace_sinks import JsonlTraceSink, StdoutTraceSink

__all__ = [
    "ConsoleReporter",
    "FileScenarioSource",
    "JsonlLogSink",
    "JsonlTraceSink",
    "StdoutLogSink",
    "StdoutTraceSink",
    "load_scenarios",
]

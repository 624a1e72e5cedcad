from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from pet_runner.adapters.console_reporter import ConsoleReporter
from pet_runner.adapters.log_sinks import JsonlLogSink, StdoutLogSink
from pet_runner.adapters.scenario_source import load_scenarios
from pet_runner.adapters.trace_sinks import JsonlTraceSink, StdoutTraceSink
from pet_runner.app.discovery import StepModuleError, load_step_modules
from pet_runner.config.loader import ConfigError, load_config
from pet_runner.config.models import (
    DEFAULT_SCENARIO_FILE,
    RunnerConfig,
    TraceSinkConfig,
    TraceSinkJsonlConfig,
)
from pet_runner.kernel.errors import ParseError
from pet_runner.kernel.runner import Runner
from pet_runner.kernel.scenario_parser import ScenarioParser
from pet_runner.kernel.step_registry import StepRegistry
from pet_runner.kernel.trace import TraceRecorder
from pet_runner.observability.logging import LogMessage
from pet_runner.ports.log_sink import LogSink
from pet_runner.ports.trace_sink import TraceSink

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pet-runner", description="Run given/when/then scenario files")
    parser.add_argument("scenarios", nargs="*", help=f"Scenario files (default: {DEFAULT_SCENARIO_FILE})")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument(
        "--steps",
        action="append",
        metavar="MODULE",
        help="Step module or package to load (repeatable; replaces configured modules)",
    )
    parser.add_argument("--stop-on-failure", action="store_true", help="Skip remaining scenarios after a failure")
    parser.add_argument("--quiet", action="store_true", help="Only print failures and the summary")
    parser.add_argument("--tracing", choices=["enable", "disable"], help="Override tracing enabled flag")
    parser.add_argument("--trace-path", help="Override trace JSONL file path")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: RunnerConfig, args: argparse.Namespace) -> None:
    # CLI flags take precedence over config values.
    if args.scenarios:
        config.scenarios = list(args.scenarios)
    if args.steps:
        config.steps.modules = list(args.steps)
    if args.stop_on_failure:
        config.run.stop_on_first_failure = True
    if args.quiet:
        config.reporter.kind = "quiet"
    if args.tracing is not None:
        config.tracing.enabled = args.tracing == "enable"
    if args.trace_path is not None:
        if args.tracing is None:
            config.tracing.enabled = True
        config.tracing.sink = TraceSinkConfig(kind="jsonl", jsonl=TraceSinkJsonlConfig(path=args.trace_path))


def build_trace_sink(config: RunnerConfig) -> TraceSink | None:
    tracing = config.tracing
    if not tracing.enabled:
        return None
    if tracing.sink is None or tracing.sink.kind == "stdout":
        return StdoutTraceSink()
    assert tracing.sink.jsonl is not None
    return JsonlTraceSink(path=Path(tracing.sink.jsonl.path), flush_every_n=tracing.sink.jsonl.flush_every_n)


def build_log_sink(config: RunnerConfig) -> LogSink | None:
    logging_config = config.logging
    if not logging_config.enabled:
        return None
    if logging_config.sink.kind == "jsonl":
        assert logging_config.sink.path is not None
        return JsonlLogSink(Path(logging_config.sink.path))
    return StdoutLogSink()


def build_runner(config: RunnerConfig, *, log_sink: LogSink | None, trace_sink: TraceSink | None) -> Runner:
    reporter = ConsoleReporter(
        show_steps=config.reporter.kind == "console",
        show_stacktrace=config.reporter.show_stacktrace,
    )
    recorder = TraceRecorder(include_stack=config.tracing.include_stack) if trace_sink is not None else None
    return Runner(
        reporter=reporter,
        trace_recorder=recorder,
        trace_sink=trace_sink,
        log_sink=log_sink,
        stop_on_first_failure=config.run.stop_on_first_failure,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """Load config and steps, parse every scenario file, then execute.

    Setup and parse errors exit with 2 before any scenario runs; failed
    scenarios exit with 1.
    """
    args = parse_args(argv)
    try:
        config = load_config(Path(args.config) if args.config else None)
        apply_cli_overrides(config, args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    log_sink = build_log_sink(config)
    trace_sink = None
    try:
        registry = StepRegistry()
        try:
            load_step_modules(config.steps.modules, registry)
        except StepModuleError as exc:
            print(str(exc), file=sys.stderr)
            return EXIT_USAGE
        registry.freeze()
        _log(log_sink, "info", "steps registered", count=len(registry), modules=config.steps.modules)

        paths = [Path(item) for item in (config.scenarios or [DEFAULT_SCENARIO_FILE])]
        try:
            scenarios = load_scenarios(paths, ScenarioParser(registry))
        except ParseError as exc:
            print(str(exc), file=sys.stderr)
            return EXIT_USAGE
        except OSError as exc:
            print(f"Cannot read scenario file: {exc}", file=sys.stderr)
            return EXIT_USAGE
        _log(log_sink, "info", "scenarios parsed", count=len(scenarios), files=[str(path) for path in paths])

        trace_sink = build_trace_sink(config)
        runner = build_runner(config, log_sink=log_sink, trace_sink=trace_sink)
        summary = asyncio.run(runner.run_all(scenarios))
        return EXIT_OK if summary.ok else EXIT_FAILED
    finally:
        if trace_sink is not None:
            trace_sink.close()
        if isinstance(log_sink, JsonlLogSink):
            log_sink.close()


def _log(log_sink: LogSink | None, level: str, message: str, **fields: object) -> None:
    if log_sink is not None:
        log_sink.emit(LogMessage(level=level, message=message, fields=fields))

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pet_runner.adapters.trace_sinks import StdoutTraceSink
from pet_runner.app.cli import apply_cli_overrides, build_trace_sink, parse_args, run
from pet_runner.config.models import RunnerConfig
from pet_runner.main import main

PASSING = """\
# sample scenarios
test "printing"
given I print "hello"
and I print 'a' and I also print 'b'
then I see 3 lines of output

test 'waiting'
when I wait 1 milliseconds
then I see 0 lines of output
"""


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_args_reads_flags() -> None:
    args = parse_args(
        [
            "a.pet",
            "b.pet",
            "--config",
            "pet.yml",
            "--steps",
            "one",
            "--steps",
            "two",
            "--stop-on-failure",
            "--quiet",
            "--tracing",
            "enable",
            "--trace-path",
            "trace.jsonl",
        ]
    )
    assert args.scenarios == ["a.pet", "b.pet"]
    assert args.config == "pet.yml"
    assert args.steps == ["one", "two"]
    assert args.stop_on_failure is True
    assert args.quiet is True
    assert args.tracing == "enable"
    assert args.trace_path == "trace.jsonl"


def test_apply_cli_overrides_take_precedence() -> None:
    config = RunnerConfig.model_validate({"scenarios": ["x.pet"], "steps": {"modules": ["cfg_steps"]}})
    apply_cli_overrides(config, parse_args(["y.pet", "--steps", "cli_steps", "--trace-path", "t.jsonl", "--quiet"]))
    assert config.scenarios == ["y.pet"]
    assert config.steps.modules == ["cli_steps"]
    assert config.reporter.kind == "quiet"
    assert config.tracing.enabled is True
    assert config.tracing.sink is not None
    assert config.tracing.sink.jsonl is not None
    assert config.tracing.sink.jsonl.path == "t.jsonl"


def test_apply_cli_overrides_tracing_disable_wins_over_trace_path() -> None:
    config = RunnerConfig()
    apply_cli_overrides(config, parse_args(["--tracing", "disable", "--trace-path", "t.jsonl"]))
    assert config.tracing.enabled is False
    assert build_trace_sink(config) is None


def test_build_trace_sink_defaults_to_stdout() -> None:
    config = RunnerConfig.model_validate({"tracing": {"enabled": True}})
    assert isinstance(build_trace_sink(config), StdoutTraceSink)


def test_run_passing_scenarios(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    scenario = _write(tmp_path / "test.pet", PASSING)
    assert run([str(scenario)]) == 0
    out = capsys.readouterr().out
    assert f"{scenario}:3> given I print \"hello\"" in out
    assert "All tests run successfully!" in out


def test_run_failing_scenario_exits_one_and_continues(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    scenario = _write(
        tmp_path / "test.pet",
        "test 'bad'\ngiven I print 'x'\nthen I fail because 'boom'\nthen I print 'never'\n" + PASSING,
    )
    assert run([str(scenario)]) == 1
    out = capsys.readouterr().out
    assert "Reason: boom" in out
    assert f"{scenario}:3> then I fail because 'boom'" in out
    assert "Context at point of failure: {'lines_printed': 1, 'lines': ['x']}" in out
    assert "1 failed, 2 passed, 0 skipped" in out
    assert "I print 'never'" not in out


def test_run_stop_on_failure_skips_later_scenarios(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    scenario = _write(tmp_path / "test.pet", "test 'bad'\nthen I fail because 'boom'\n" + PASSING)
    assert run([str(scenario), "--stop-on-failure", "--quiet"]) == 1
    out = capsys.readouterr().out
    assert "1 failed, 0 passed, 2 skipped" in out
    assert "I print \"hello\"" not in out


def test_run_parse_error_exits_two_before_running(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    first = _write(tmp_path / "a.pet", PASSING)
    second = _write(tmp_path / "b.pet", "given I print 'orphan'\n")
    assert run([str(first), str(second)]) == 2
    captured = capsys.readouterr()
    assert "Encountered a step without a test" in captured.err
    assert "All tests run successfully!" not in captured.out
    assert "I print" not in captured.out


def test_run_missing_scenario_file_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run([str(tmp_path / "missing.pet")]) == 2
    assert "Cannot read scenario file" in capsys.readouterr().err


def test_run_defaults_to_test_pet_in_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write(tmp_path / "test.pet", PASSING)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert "test.pet:3> given I print \"hello\"" in capsys.readouterr().out


def test_run_with_config_tracing_and_logging(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    scenario = _write(tmp_path / "test.pet", PASSING)
    trace_path = tmp_path / "trace.jsonl"
    log_path = tmp_path / "run.log.jsonl"
    config = _write(
        tmp_path / "pet.yml",
        "\n".join(
            [
                f"scenarios: [{json.dumps(str(scenario))}]",
                "tracing:",
                "  enabled: true",
                "  sink:",
                "    kind: jsonl",
                "    jsonl:",
                f"      path: {json.dumps(str(trace_path))}",
                "logging:",
                "  enabled: true",
                "  sink:",
                "    kind: jsonl",
                f"    path: {json.dumps(str(log_path))}",
            ]
        ),
    )
    assert run(["--config", str(config)]) == 0
    records = [json.loads(line) for line in trace_path.read_text(encoding="utf-8").splitlines()]
    assert [record["location"] for record in records] == [f"{scenario}:{n}" for n in (3, 4, 5, 8, 9)]
    assert {record["status"] for record in records} == {"ok"}
    messages = [json.loads(line)["message"] for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert messages[:2] == ["steps registered", "scenarios parsed"]
    assert messages[-1] == "run finished"
    capsys.readouterr()


def test_run_invalid_config_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _write(tmp_path / "pet.yml", "unknown: true\n")
    assert run(["--config", str(config)]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_run_unknown_step_module_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    scenario = _write(tmp_path / "test.pet", PASSING)
    assert run([str(scenario), "--steps", "cli_missing_steps_module"]) == 2
    assert "Cannot import step module" in capsys.readouterr().err

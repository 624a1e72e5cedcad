from __future__ import annotations

import pytest

from pet_runner.kernel.errors import (
    MalformedLiteralError,
    OrphanStepError,
    ParseError,
    ScenarioSyntaxError,
    UnmatchedStepError,
)
from pet_runner.kernel.scenario import SourceLocation
from pet_runner.kernel.scenario_parser import ScenarioParser
from pet_runner.kernel.step_registry import StepRegistry


def _set(context, key, value):
    context[key] = value


def _expect(context, key, value):
    assert context[key] == value


def _parser() -> ScenarioParser:
    registry = StepRegistry()
    registry.register("I set $key to $value", _set)
    registry.register("I expect $key to equal $value", _expect)
    registry.register("nothing happens", lambda context: None)
    registry.freeze()
    return ScenarioParser(registry)


def test_parse_builds_scenarios_with_resolved_steps() -> None:
    source = "\n".join(
        [
            "# leading comment",
            'test "first"',
            "  given I set 'value' to 3",
            "",
            "  then I expect 'value' to equal 3",
            "test 'second'",
            "    # indented comment",
            "when nothing happens",
            "",
        ]
    )
    scenarios = _parser().parse(source, "demo.pet")

    assert [scenario.name for scenario in scenarios] == ["first", "second"]
    first, second = scenarios
    assert first.location == SourceLocation("demo.pet", 2)
    assert [step.keyword for step in first.steps] == ["given", "then"]
    assert first.steps[0].args == ("value", 3)
    assert first.steps[0].handler is _set
    assert first.steps[0].description == "I set $key to $value"
    assert first.steps[0].location == SourceLocation("demo.pet", 3)
    assert first.steps[0].raw_line == "  given I set 'value' to 3"
    assert first.steps[0].format_line() == "demo.pet:3>   given I set 'value' to 3"
    assert first.steps[1].location.line_no == 5
    assert second.steps[0].args == ()
    assert second.steps[0].location.line_no == 8


def test_parse_scenario_without_steps_is_kept() -> None:
    scenarios = _parser().parse('test "empty"\n', "empty.pet")
    assert len(scenarios) == 1
    assert scenarios[0].steps == ()


def test_parse_empty_source_yields_no_scenarios() -> None:
    assert _parser().parse("", "blank.pet") == []
    assert _parser().parse("\n\n# only comments\n", "blank.pet") == []


def test_parse_orphan_step_fails_before_resolution() -> None:
    # Even an unknown instruction before any header is reported as orphaned.
    with pytest.raises(OrphanStepError) as excinfo:
        _parser().parse("given X\ntest 'late'\n", "orphan.pet")
    assert excinfo.value.file_name == "orphan.pet"
    assert excinfo.value.line_no == 1


def test_parse_unmatched_step_reports_location() -> None:
    source = "test 'demo'\n\nthen something unknown happens\n"
    with pytest.raises(UnmatchedStepError) as excinfo:
        _parser().parse(source, "demo.pet")
    error = excinfo.value
    assert error.line_no == 3
    assert error.line == "then something unknown happens"
    assert str(error) == "demo.pet:3: No step matches line: then something unknown happens"


@pytest.mark.parametrize(
    "line",
    [
        "scenario 'demo'",
        "test demo",
        "test \"demo'",
        "Given I set 'value' to 3",
        "given",
        "but I set 'value' to 3",
    ],
)
def test_parse_syntax_errors(line: str) -> None:
    source = f"test 'demo'\n{line}\n"
    with pytest.raises(ScenarioSyntaxError) as excinfo:
        _parser().parse(source, "bad.pet")
    assert excinfo.value.line_no == 2


def test_parse_errors_share_a_base_class() -> None:
    for error_type in (ScenarioSyntaxError, UnmatchedStepError, OrphanStepError, MalformedLiteralError):
        assert issubclass(error_type, ParseError)
        assert issubclass(error_type, ValueError)


def test_parse_header_name_may_contain_quotes_of_other_kind() -> None:
    scenarios = _parser().parse("test \"it's fine\"\n", "names.pet")
    assert scenarios[0].name == "it's fine"


def test_parse_handles_crlf_line_endings() -> None:
    scenarios = _parser().parse("test 'demo'\r\ngiven I set 'a' to 1\r\n", "crlf.pet")
    assert scenarios[0].steps[0].raw_line == "given I set 'a' to 1"


@pytest.mark.parametrize("token", ["1" * 400 + ".5", "1" * 5000])
def test_parse_overflowing_number_raises_malformed_literal(token: str) -> None:
    line = f"given I set 'value' to {token}"
    with pytest.raises(MalformedLiteralError) as excinfo:
        _parser().parse(f"test 'demo'\n# note\n{line}\n", "big.pet")
    error = excinfo.value
    assert error.line_no == 3
    assert error.line == line
    assert error.token == token


def test_parse_counts_only_newlines_as_line_breaks() -> None:
    # Form feeds and other separators inside a line do not shift line numbers.
    source = "# page\x0cbreak here\ntest 'demo'\ngiven I set 'a' to 1\n"
    scenarios = _parser().parse(source, "ff.pet")
    assert scenarios[0].location.line_no == 2
    assert scenarios[0].steps[0].location.line_no == 3


def test_parse_trailing_newline_adds_no_line() -> None:
    with pytest.raises(ScenarioSyntaxError) as excinfo:
        _parser().parse("test 'demo'\n\nbogus\n", "t.pet")
    assert excinfo.value.line_no == 3

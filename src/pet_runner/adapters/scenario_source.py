from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from pet_runner.kernel.scenario import Scenario
from pet_runner.kernel.scenario_parser import ScenarioParser


@dataclass(frozen=True, slots=True)
class FileScenarioSource:
    # File-based scenario source; other storage would sit behind the same read().
    path: Path

    @property
    def file_name(self) -> str:
        return str(self.path)

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")


def load_scenarios(paths: Iterable[Path], parser: ScenarioParser) -> list[Scenario]:
    # Every file is parsed before anything runs, so one bad file aborts the whole run.
    scenarios: list[Scenario] = []
    for path in paths:
        source = FileScenarioSource(path)
        scenarios.extend(parser.parse(source.read(), source.file_name))
    return scenarios

from __future__ import annotations

import copy
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, field


@dataclass(eq=False)
class ExecutionContext(MutableMapping[str, object]):
    # Mutable per-scenario state handed to every step handler as first argument.
    scenario_name: str
    values: dict[str, object] = field(default_factory=dict)

    def __getitem__(self, key: str) -> object:
        return self.values[key]

    def __setitem__(self, key: str, value: object) -> None:
        self.values[key] = value

    def __delitem__(self, key: str) -> None:
        del self.values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"ExecutionContext({self.scenario_name!r}, {self.values!r})"

    def snapshot(self) -> dict[str, object]:
        # Values are copied so later mutation does not rewrite failure diagnostics.
        snapshot: dict[str, object] = {}
        for key, value in self.values.items():
            try:
                snapshot[key] = copy.deepcopy(value)
            except (TypeError, copy.Error):
                snapshot[key] = value
        return snapshot


@dataclass(frozen=True, slots=True)
class ContextFactory:
    # ContextFactory owns per-scenario context creation; contexts are never shared.
    def new(self, scenario_name: str) -> ExecutionContext:
        return ExecutionContext(scenario_name=scenario_name)

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Config models map YAML sections to typed structures.

DEFAULT_STEP_MODULES = ["pet_runner.steps"]
DEFAULT_SCENARIO_FILE = "test.pet"


class StepsConfig(BaseModel):
    # Modules (or packages) whose register_steps(registry) hooks populate the registry.
    model_config = ConfigDict(extra="forbid")
    modules: list[str] = Field(default_factory=lambda: list(DEFAULT_STEP_MODULES))


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    stop_on_first_failure: bool = False


class ReporterConfig(BaseModel):
    # "quiet" prints only failures and the final summary.
    model_config = ConfigDict(extra="forbid")
    kind: Literal["console", "quiet"] = "console"
    show_stacktrace: bool = True


class TraceSinkJsonlConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str
    flush_every_n: int = 1


class TraceSinkConfig(BaseModel):
    # Trace sink selector: only one sink is active at a time.
    model_config = ConfigDict(extra="forbid")
    kind: Literal["jsonl", "stdout"]
    jsonl: TraceSinkJsonlConfig | None = None

    @model_validator(mode="after")
    def _require_jsonl(self) -> TraceSinkConfig:
        # For jsonl kind, a jsonl section is required to avoid silent defaults.
        if self.kind == "jsonl" and self.jsonl is None:
            raise ValueError("tracing.sink.jsonl is required when kind is 'jsonl'")
        return self


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    include_stack: bool = False
    sink: TraceSinkConfig | None = None


class LogSinkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["stdout", "jsonl"] = "stdout"
    path: str | None = None

    @model_validator(mode="after")
    def _require_path(self) -> LogSinkConfig:
        if self.kind == "jsonl" and not self.path:
            raise ValueError("logging.sink.path is required when kind is 'jsonl'")
        return self


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = False
    sink: LogSinkConfig = Field(default_factory=LogSinkConfig)


class RunnerConfig(BaseModel):
    # RunnerConfig is the top-level typed view of configuration; every section is optional.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    scenarios: list[str] = Field(default_factory=list)
    steps: StepsConfig = Field(default_factory=StepsConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from pet_runner.config.models import RunnerConfig


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_config(path: Path | None) -> RunnerConfig:
    # No file means defaults; a present file must be a valid mapping.
    if path is None:
        return RunnerConfig()
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if raw is None:
        return RunnerConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    try:
        return RunnerConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc

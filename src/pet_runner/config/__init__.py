from .loader import ConfigError, load_config
from .models import RunnerConfig

__all__ = ["ConfigError", "RunnerConfig", "load_config"]

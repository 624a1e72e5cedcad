from .cli import apply_cli_overrides, build_parser, parse_args, run
from .discovery import StepModuleError, load_step_modules

__all__ = ["StepModuleError", "apply_cli_overrides", "build_parser", "load_step_modules", "parse_args", "run"]

"""Core domain types: config, run context, results and exit codes."""

from .config import Config, load_config, load_config_or_default
from .context import OutputMode, Overrides, RunContext, Verbosity, build_run_context
from .errors import ErrorCode
from .result import Err, Ok, Result
from .setup_errors import ConfigError, SetupError

__all__ = [
    # config
    "Config",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    # context
    "OutputMode",
    "Overrides",
    "RunContext",
    "Verbosity",
    "build_run_context",
    # errors
    "ErrorCode",
    "SetupError",
    # result
    "Err",
    "Ok",
    "Result",
]

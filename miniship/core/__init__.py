"""Core domain-neutral types: results, exit codes, configuration."""

from .config import (
    CodePushConfig,
    Config,
    ConfigError,
    GeneratorConfig,
    load_config,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "CodePushConfig",
    "Config",
    "ConfigError",
    "GeneratorConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

"""Core domain types: results, exit codes, configuration."""

from .config import ConfigError, RepoConfig, WatchConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "RepoConfig",
    "WatchConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

"""Platform abstraction layer."""

from .paths import (
    CONFIG_ENV_VAR,
    default_config_path,
    home,
    user_config_dir,
)
from .process import (
    ProcessError,
    run,
)

__all__ = [
    # paths
    "CONFIG_ENV_VAR",
    "default_config_path",
    "home",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
]

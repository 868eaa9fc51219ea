"""Typed configuration loading and access.

The operator lists the working copies to watch in a TOML file:

    fetch = true
    jobs = 4
    repos = [
        "~/src/website",
        { path = "~/src/firmware", fetch = false },
    ]

`[[repos]]` tables are accepted as well. Entries without their own `fetch`
flag follow the global switch at check time.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_float,
    get_int,
    get_list,
    get_str,
)

__all__ = [
    "ConfigError",
    "RepoConfig",
    "WatchConfig",
    "expand_path",
    "load_config",
    "load_config_or_default",
]

DEFAULT_FETCH = True
DEFAULT_JOBS = 1


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RepoConfig:
    """One tracked working copy.

    Attributes:
        path: Working copy directory
        fetch: Per-repo fetch flag, None to follow the global switch
    """

    path: Path
    fetch: bool | None = None

    def should_fetch(self, default: bool) -> bool:
        """Resolve the fetch flag against the global default-fetch switch."""
        return default if self.fetch is None else self.fetch


@dataclass(frozen=True, slots=True)
class WatchConfig:
    """Main configuration container."""

    repos: tuple[RepoConfig, ...] = field(default_factory=tuple)
    fetch: bool = DEFAULT_FETCH
    jobs: int = DEFAULT_JOBS
    timeout: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> WatchConfig:
        """Create WatchConfig from a mapping (parsed TOML).

        Raises:
            ValueError: If a repos entry is neither a path string nor a table
                with a `path` key, or `jobs` is not positive.
        """
        entries = get_list(data, "repos") or []
        repos = tuple(_parse_repo_entry(entry, index) for index, entry in enumerate(entries))

        jobs = get_int(data, "jobs")
        if jobs is not None and jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")

        fetch = get_bool(data, "fetch")
        return cls(
            repos=repos,
            fetch=DEFAULT_FETCH if fetch is None else fetch,
            jobs=jobs or DEFAULT_JOBS,
            timeout=get_float(data, "timeout"),
        )


def expand_path(raw: str) -> Path:
    """Expand ~ and environment variables in a configured path."""
    return Path(os.path.expandvars(raw)).expanduser()


def _parse_repo_entry(entry: object, index: int) -> RepoConfig:
    if isinstance(entry, str):
        if not entry.strip():
            raise ValueError(f"repos[{index}]: empty path")
        return RepoConfig(path=expand_path(entry.strip()))

    table = as_str_dict(entry)
    if table is None:
        raise ValueError(f"repos[{index}]: expected a path or a table")

    path = get_str(table, "path")
    if path is None:
        raise ValueError(f"repos[{index}]: missing 'path'")
    return RepoConfig(path=expand_path(path), fetch=get_bool(table, "fetch"))


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[WatchConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml

    Returns:
        Ok(WatchConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(WatchConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[WatchConfig, ConfigError]:
    """Like load_config, but a missing file yields an empty default config."""
    if not path.exists():
        return Ok(WatchConfig())
    return load_config(path)

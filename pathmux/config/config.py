"""
YAML configuration with environment variable overrides.

Environment Variable Override Format:
    PATHMUX_<SECTION>_<KEY>=value

Examples:
    PATHMUX_SERVER_ADDRESS=:9000
    PATHMUX_ROUTER_LITERAL_SEGMENTS=true
    PATHMUX_LOGGING_LEVEL=debug

Override values are parsed as YAML scalars, so "true", "9000" and "null"
become bool, int and None.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import ConfigError
from ..log import LogConfig, LogError
from .constants import DEFAULT_ADDRESS, DEFAULT_ENV_PREFIX, MAX_CONFIG_SIZE_BYTES


def _check_file_size(path: Path) -> None:
    """Check file size limit to prevent DoS attacks."""
    file_size = path.stat().st_size
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "configuration file too large",
            path=str(path),
            size=file_size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )


def _parse_scalar(value: str) -> Any:
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def _set_path(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    current[keys[-1]] = value


class Config(dict):
    """
    Configuration mapping loaded from a YAML file.

    Nested sections stay plain dicts; use get() with a dotted path to reach
    into them.

    Example:
        config = Config("etc/pathmux.yaml")
        address = config.get("server.address", ":8080")
    """

    def __init__(
        self,
        fname: str | Path | None = None,
        enable_env_overrides: bool = True,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration from a YAML file and/or a mapping.

        Args:
            fname: Path to the YAML configuration file (optional)
            enable_env_overrides: Whether to apply environment variable overrides
            env_prefix: Prefix for environment variables (default: 'PATHMUX_')
            data: Initial values, applied before the file is loaded

        Raises:
            ConfigError: If the file is missing, too large or not valid YAML
        """
        super().__init__()
        self._env_prefix = env_prefix
        self._path: Path | None = None
        if data:
            self.update(data)
        if fname is not None:
            self._load(Path(fname))
        if enable_env_overrides:
            self._apply_env_overrides()

    @property
    def path(self) -> Path | None:
        """Resolved path of the loaded file, if any."""
        return self._path

    def _load(self, fname: Path) -> None:
        path = fname.resolve()
        if not path.is_file():
            raise ConfigError("configuration file not found", path=str(path))
        _check_file_size(path)
        try:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError("invalid YAML", path=str(path), error=e) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                "configuration root must be a mapping",
                path=str(path),
                type=type(loaded).__name__,
            )
        self._path = path
        self.update(loaded)

    def _apply_env_overrides(self) -> None:
        """
        Apply PATHMUX_* environment variables.

        The first underscore after the prefix separates the section from the
        key, so PATHMUX_ROUTER_LITERAL_SEGMENTS sets router.literal_segments.
        """
        for name, raw in os.environ.items():
            if not name.startswith(self._env_prefix):
                continue
            rest = name[len(self._env_prefix) :].lower()
            section, sep, key = rest.partition("_")
            keys = [section, key] if sep and key else [section]
            _set_path(self, keys, _parse_scalar(raw))

    def get(self, key: str, default: Any = None) -> Any:  # type: ignore[override]
        """
        Get a value by dotted path.

        Example:
            config.get("server.address", ":8080")
        """
        current: Any = self
        for part in key.split("."):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            else:
                return default
        return current

    def dict(self) -> dict[str, Any]:
        """Return a plain dict copy."""
        return dict(self)


@dataclass(frozen=True)
class MuxConfig:
    """
    Typed settings for a router and its server.

    Attributes:
        address: Listen address, e.g. ":8080" or "127.0.0.1:8000"
        literal_segments: Require static pattern segments to equal the request
            segment. Off by default, so only segment counts are compared.
        log: Logger configuration
    """

    address: str = DEFAULT_ADDRESS
    literal_segments: bool = False
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_config(cls, config: Config) -> MuxConfig:
        """
        Build settings from a Config.

        Raises:
            ConfigError: If a value has the wrong type
        """
        address = config.get("server.address", DEFAULT_ADDRESS)
        if isinstance(address, int):
            address = f":{address}"
        if not isinstance(address, str):
            raise ConfigError("server.address must be a string", value=address)

        literal = config.get("router.literal_segments", False)
        if not isinstance(literal, bool):
            raise ConfigError(
                "router.literal_segments must be a boolean", value=literal
            )

        try:
            log = LogConfig.from_config(config.dict())
        except LogError as e:
            raise ConfigError("invalid logging section", error=e) from e

        return cls(address=address, literal_segments=literal, log=log)

    @classmethod
    def load(cls, fname: str | Path | None = None) -> MuxConfig:
        """Load a YAML file (optional) plus environment overrides."""
        return cls.from_config(Config(fname))

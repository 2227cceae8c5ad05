"""Configuration loading for sidecarfs (.sidecarfs.yml plus environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .registration import DEFAULT_SCHEME_PREFIX, scheme_for

CONFIG_FILENAME = ".sidecarfs.yml"

ENV_MACHINE_NAME = "CHE_MACHINE_NAME"
ENV_SCHEME_PREFIX = "SIDECARFS_SCHEME_PREFIX"
ENV_REGISTRY_URL = "SIDECARFS_REGISTRY_URL"
ENV_HOST = "SIDECARFS_HOST"
ENV_PORT = "SIDECARFS_PORT"
ENV_LOG_FILE = "SIDECARFS_LOG_FILE"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RegistryConfig:
    """Where scheme registrations are announced."""

    url: Optional[str] = None
    timeout: float = 10.0


@dataclass
class ServerConfig:
    """Bind address for service mode."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class SidecarConfig:
    """Represents the settings defined in .sidecarfs.yml and the environment."""

    machine_name: Optional[str] = None
    scheme_prefix: str = DEFAULT_SCHEME_PREFIX
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_file: Optional[Path] = None

    @property
    def scheme(self) -> Optional[str]:
        return scheme_for(self.machine_name, self.scheme_prefix)


def load_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> SidecarConfig:
    """Load configuration from disk, then apply environment overrides."""
    env = os.environ if environ is None else environ
    config = SidecarConfig()

    if config_path is not None:
        config_file = _resolve_config_path(config_path)
        if config_file.exists():
            _apply_file(config, _read_config(config_file), base_dir=config_file.parent)

    _apply_env(config, env)
    return config


def _apply_file(config: SidecarConfig, data: Dict[str, Any], *, base_dir: Path) -> None:
    config.machine_name = _as_str(data.get("machine_name")) or config.machine_name
    config.scheme_prefix = _as_str(data.get("scheme_prefix")) or config.scheme_prefix

    registry_data = _as_dict(data.get("registry"))
    config.registry.url = _as_str(registry_data.get("url")) or config.registry.url
    timeout = _as_float(registry_data.get("timeout"))
    if timeout is not None:
        config.registry.timeout = timeout

    server_data = _as_dict(data.get("server"))
    config.server.host = _as_str(server_data.get("host")) or config.server.host
    port = _as_int(server_data.get("port"))
    if port is not None:
        config.server.port = port

    log_file = _as_str(_as_dict(data.get("logging")).get("file"))
    if log_file:
        # Relative to the directory holding .sidecarfs.yml.
        config.log_file = base_dir / Path(log_file).expanduser()


def _apply_env(config: SidecarConfig, env: Mapping[str, str]) -> None:
    machine_name = env.get(ENV_MACHINE_NAME)
    if machine_name:
        config.machine_name = machine_name
    prefix = env.get(ENV_SCHEME_PREFIX)
    if prefix:
        config.scheme_prefix = prefix
    registry_url = env.get(ENV_REGISTRY_URL)
    if registry_url:
        config.registry.url = registry_url
    host = env.get(ENV_HOST)
    if host:
        config.server.host = host
    port = env.get(ENV_PORT)
    if port:
        parsed = _as_int(port)
        if parsed is None:
            raise ConfigError(f"{ENV_PORT} must be an integer, got {port!r}")
        config.server.port = parsed
    log_file = env.get(ENV_LOG_FILE)
    if log_file:
        config.log_file = Path(log_file).expanduser()


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "ConfigError",
    "RegistryConfig",
    "ServerConfig",
    "SidecarConfig",
    "load_config",
]

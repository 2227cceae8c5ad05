"""Tests for sidecarfs.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from sidecarfs.config import ConfigError, SidecarConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert isinstance(config, SidecarConfig)
    assert config.machine_name is None
    assert config.scheme is None
    assert config.scheme_prefix == "file-sidecar"
    assert config.registry.url is None
    assert config.registry.timeout == 10.0
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 8000
    assert config.log_file is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".sidecarfs.yml").write_text(
        """
machine_name: tools
registry:
  url: "http://host.internal:3130/registry"
  timeout: 2.5
server:
  host: 0.0.0.0
  port: 9001
logging:
  file: logs/sidecar.log
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, environ={})

    assert config.machine_name == "tools"
    assert config.scheme == "file-sidecar-tools"
    assert config.registry.url == "http://host.internal:3130/registry"
    assert config.registry.timeout == 2.5
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9001
    assert config.log_file == tmp_path.resolve() / "logs" / "sidecar.log"


def test_environment_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / ".sidecarfs.yml"
    config_file.write_text("machine_name: from-file\n", encoding="utf-8")

    config = load_config(
        config_file,
        environ={
            "CHE_MACHINE_NAME": "from-env",
            "SIDECARFS_SCHEME_PREFIX": "remote",
            "SIDECARFS_PORT": "8123",
            "SIDECARFS_LOG_FILE": "/var/log/sidecarfs.log",
        },
    )

    assert config.scheme == "remote-from-env"
    assert config.server.port == 8123
    assert config.log_file == Path("/var/log/sidecarfs.log")


def test_empty_machine_name_in_environment_is_ignored(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"CHE_MACHINE_NAME": ""})

    assert config.scheme is None


def test_invalid_port_in_environment(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={"SIDECARFS_PORT": "eighty"})


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".sidecarfs.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".sidecarfs.yml").write_text("server: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, environ={})

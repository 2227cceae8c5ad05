"""Tests for sidecarfs.registration."""

from __future__ import annotations

import io
import json
from typing import Any, Dict, List
from urllib.error import URLError

import pytest

from sidecarfs import registration
from sidecarfs.registration import (
    HttpCapabilityRegistry,
    NullCapabilityRegistry,
    RegistrationError,
    build_registry,
    scheme_for,
)


class _FakeResponse(io.BytesIO):
    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def test_scheme_for() -> None:
    assert scheme_for("ws") == "file-sidecar-ws"
    assert scheme_for("ws", "remote") == "remote-ws"
    assert scheme_for("") is None
    assert scheme_for(None) is None


def test_http_registry_posts_scheme(monkeypatch: pytest.MonkeyPatch) -> None:
    sent: List[Dict[str, Any]] = []

    def fake_urlopen(request, timeout=None):
        sent.append(
            {
                "url": request.full_url,
                "method": request.get_method(),
                "body": json.loads(request.data.decode("utf-8")),
                "timeout": timeout,
            }
        )
        return _FakeResponse(b"{}")

    monkeypatch.setattr(registration, "urlopen", fake_urlopen)
    registry = HttpCapabilityRegistry(
        "http://host:3130/registry/", "file-system", timeout=3.0
    )

    registry.register_capability("file-sidecar-ws")

    assert sent == [
        {
            "url": "http://host:3130/registry",
            "method": "POST",
            "body": {"capability": "file-system", "scheme": "file-sidecar-ws"},
            "timeout": 3.0,
        }
    ]


def test_http_registry_wraps_transport_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_urlopen(request, timeout=None):
        raise URLError("connection refused")

    monkeypatch.setattr(registration, "urlopen", fake_urlopen)

    with pytest.raises(RegistrationError, match="connection refused"):
        HttpCapabilityRegistry("http://host/registry", "file-system").register_capability(
            "file-sidecar-ws"
        )


def test_build_registry_selects_transport() -> None:
    assert isinstance(build_registry(None, "file-system"), NullCapabilityRegistry)
    http = build_registry("http://host/registry", "content-reader", timeout=1.0)
    assert isinstance(http, HttpCapabilityRegistry)
    assert http.capability == "content-reader"


@pytest.mark.parametrize("timeout", [0, None])
def test_http_registry_passes_timeout_through(
    monkeypatch: pytest.MonkeyPatch, timeout
) -> None:
    seen: List[Any] = []

    def fake_urlopen(request, timeout=None):
        seen.append(timeout)
        return _FakeResponse(b"")

    monkeypatch.setattr(registration, "urlopen", fake_urlopen)

    HttpCapabilityRegistry(
        "http://host/registry", "file-system", timeout=timeout
    ).register_capability("file-sidecar-ws")

    assert seen == [timeout]

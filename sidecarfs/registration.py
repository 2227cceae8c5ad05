"""Scheme registration with the host that routes requests to this sidecar."""

from __future__ import annotations

import json
from typing import Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

DEFAULT_SCHEME_PREFIX = "file-sidecar"

FILE_SYSTEM_CAPABILITY = "file-system"
CONTENT_READER_CAPABILITY = "content-reader"

logger = get_logger("registration")


class RegistrationError(RuntimeError):
    """Raised when the host rejects or cannot receive a registration."""


class CapabilityRegistry(Protocol):
    """Transport that announces a scheme this sidecar can serve."""

    def register_capability(self, scheme: str) -> None:
        ...


def scheme_for(
    machine_name: Optional[str], prefix: str = DEFAULT_SCHEME_PREFIX
) -> Optional[str]:
    """Return ``<prefix>-<machine_name>``, or None when no machine identity is set."""
    if not machine_name:
        return None
    return f"{prefix}-{machine_name}"


class NullCapabilityRegistry:
    """Registry used when no host endpoint is configured."""

    def __init__(self, capability: str) -> None:
        self.capability = capability

    def register_capability(self, scheme: str) -> None:
        logger.info(
            "No registry endpoint configured; %s scheme %s not announced",
            self.capability,
            scheme,
        )


class HttpCapabilityRegistry:
    """Posts registrations as JSON to the host's registry endpoint."""

    def __init__(
        self,
        endpoint: str,
        capability: str,
        *,
        timeout: Optional[float] = 10.0,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.capability = capability
        self.timeout = timeout

    def register_capability(self, scheme: str) -> None:
        payload = {"capability": self.capability, "scheme": scheme}
        data = json.dumps(payload).encode("utf-8")
        http_request = Request(
            self.endpoint,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urlopen(http_request, timeout=self.timeout) as response:  # type: ignore[arg-type]
                response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise RegistrationError(
                f"Registering {scheme} failed with status {exc.code}: {message}"
            ) from exc
        except URLError as exc:
            raise RegistrationError(f"Registering {scheme} failed: {exc.reason}") from exc
        logger.info("Registered %s scheme %s", self.capability, scheme)


def build_registry(
    endpoint: Optional[str], capability: str, *, timeout: Optional[float] = 10.0
) -> CapabilityRegistry:
    if endpoint:
        return HttpCapabilityRegistry(endpoint, capability, timeout=timeout)
    return NullCapabilityRegistry(capability)


__all__ = [
    "CONTENT_READER_CAPABILITY",
    "CapabilityRegistry",
    "DEFAULT_SCHEME_PREFIX",
    "FILE_SYSTEM_CAPABILITY",
    "HttpCapabilityRegistry",
    "NullCapabilityRegistry",
    "RegistrationError",
    "build_registry",
    "scheme_for",
]

"""Shared startup behaviour for services exposed to the remote host."""

from __future__ import annotations

from typing import Optional

from ..logging import get_logger
from ..registration import DEFAULT_SCHEME_PREFIX, CapabilityRegistry, scheme_for

logger = get_logger("service")


class RegisteredService:
    """Announces ``<prefix>-<machine_name>`` to its registry once, on start."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        machine_name: Optional[str] = None,
        scheme_prefix: str = DEFAULT_SCHEME_PREFIX,
    ) -> None:
        self._registry = registry
        self.scheme = scheme_for(machine_name, scheme_prefix)
        self._registered = False

    @property
    def registered(self) -> bool:
        return self._registered

    def on_start(self) -> None:
        """Register the scheme if a machine identity is available."""
        if self._registered:
            return
        if self.scheme is None:
            logger.info(
                "%s: no machine name configured, skipping scheme registration",
                type(self).__name__,
            )
            return
        self._registry.register_capability(self.scheme)
        self._registered = True
        logger.info("%s registered scheme %s", type(self).__name__, self.scheme)


__all__ = ["RegisteredService"]

"""Read-only filesystem provider served to the remote host."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import UnsupportedOperationError, normalize_error
from ..logging import get_logger
from ..models import FileStat
from ..paths import to_local_path
from ..registration import DEFAULT_SCHEME_PREFIX, CapabilityRegistry
from ..stat import LinkAwareStat, to_file_stat
from .base import RegisteredService

logger = get_logger("service.file_system")


class FileAccessService(RegisteredService):
    """Serves ``stat`` and ``read_file``; every mutating operation is unsupported."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        machine_name: Optional[str] = None,
        scheme_prefix: str = DEFAULT_SCHEME_PREFIX,
        link_stat: LinkAwareStat | None = None,
    ) -> None:
        super().__init__(registry, machine_name=machine_name, scheme_prefix=scheme_prefix)
        self._link_stat = link_stat or LinkAwareStat()

    async def stat(self, resource: str) -> FileStat:
        try:
            path = to_local_path(resource)
            resolution = await self._link_stat.aresolve(path)
            return to_file_stat(resolution)
        except Exception as exc:
            error = normalize_error(exc)
            if error is exc:
                raise
            raise error from exc

    async def read_file(self, resource: str) -> bytes:
        logger.debug("read_file for resource %s", resource)
        try:
            path = to_local_path(resource)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, Path(path).read_bytes)
        except Exception as exc:
            raise normalize_error(exc) from exc

    async def delete(
        self, resource: str, *, recursive: bool = False, use_trash: bool = False
    ) -> None:
        raise UnsupportedOperationError("delete")

    async def mkdir(self, resource: str) -> None:
        raise UnsupportedOperationError("mkdir")

    async def readdir(self, resource: str) -> List[Tuple[str, int]]:
        raise UnsupportedOperationError("readdir")

    async def rename(
        self, source: str, target: str, *, overwrite: bool = False
    ) -> None:
        raise UnsupportedOperationError("rename")

    async def write_file(
        self,
        resource: str,
        content: bytes,
        *,
        overwrite: bool = False,
        create: bool = True,
    ) -> None:
        raise UnsupportedOperationError("write_file")


__all__ = ["FileAccessService"]

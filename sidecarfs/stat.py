"""Link-aware stat: classifies paths without confusing a link with its target."""

from __future__ import annotations

import asyncio
import os
import stat as stat_module
from typing import Callable, Optional

from .errors import normalize_error
from .logging import get_logger
from .models import FileKind, FileStat, FileType, LinkResolution

StatFunction = Callable[[str], os.stat_result]

logger = get_logger("stat")


class LinkAwareStat:
    """Two-phase stat: ``lstat`` first, then ``stat`` only for links or failures."""

    def __init__(
        self,
        *,
        lstat: StatFunction = os.lstat,
        stat: StatFunction = os.stat,
    ) -> None:
        self._lstat = lstat
        self._stat = stat

    def resolve(self, path: str) -> LinkResolution:
        link_stat: Optional[os.stat_result] = None
        try:
            link_stat = self._lstat(path)
        except Exception as exc:
            # Any lstat failure means "assume not a link"; stat() below decides.
            logger.debug("lstat failed for %s, falling back to stat: %s", path, exc)
        else:
            if not stat_module.S_ISLNK(link_stat.st_mode):
                return LinkResolution(stat=link_stat)

        is_symlink = link_stat is not None
        try:
            target_stat = self._stat(path)
        except FileNotFoundError as exc:
            if link_stat is not None:
                return LinkResolution(stat=link_stat, is_symlink=True, dangling=True)
            raise normalize_error(exc) from exc
        except Exception as exc:
            error = normalize_error(exc)
            if error is exc:
                raise
            raise error from exc
        return LinkResolution(stat=target_stat, is_symlink=is_symlink)

    async def aresolve(self, path: str) -> LinkResolution:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.resolve, path)


def classify(resolution: LinkResolution) -> FileKind:
    """Return the kind reported for a resolved path."""
    mode = resolution.stat.st_mode
    if resolution.dangling:
        base = FileType.UNKNOWN
    elif stat_module.S_ISREG(mode):
        base = FileType.FILE
    elif stat_module.S_ISDIR(mode):
        base = FileType.DIRECTORY
    else:
        base = FileType.UNKNOWN
    return FileKind(base=base, is_symlink=resolution.is_symlink)


def to_file_stat(resolution: LinkResolution) -> FileStat:
    record = resolution.stat
    return FileStat(
        kind=classify(resolution),
        created_at_ms=_created_at_ms(record),
        modified_at_ms=record.st_mtime_ns // 1_000_000,
        size_bytes=record.st_size,
    )


def stat_path(path: str, resolver: LinkAwareStat | None = None) -> FileStat:
    """Resolve ``path`` and build its FileStat."""
    resolver = resolver or LinkAwareStat()
    return to_file_stat(resolver.resolve(path))


def _created_at_ms(record: os.stat_result) -> int:
    # Creation time, not inode change time, where the platform reports one.
    birthtime = getattr(record, "st_birthtime", None)
    if birthtime is not None:
        return int(birthtime * 1000)
    return record.st_ctime_ns // 1_000_000


__all__ = ["LinkAwareStat", "classify", "stat_path", "to_file_stat"]

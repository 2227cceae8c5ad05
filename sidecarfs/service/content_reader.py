"""Text content reader: a missing file is an absent result, not an error."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Optional

from ..errors import normalize_error
from ..paths import to_local_path
from .base import RegisteredService

DEFAULT_ENCODING = "utf-8"


class ContentReader(RegisteredService):
    """Reads whole files as text for the remote host's content provider."""

    async def read(self, uri: str, encoding: Optional[str] = None) -> Optional[str]:
        try:
            path = to_local_path(uri)
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(
                None, _read_text, path, encoding or DEFAULT_ENCODING
            )
        except Exception as exc:
            raise normalize_error(exc) from exc


def _read_text(path: str, encoding: str) -> Optional[str]:
    if not os.path.exists(path):
        return None
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError:
        # Removed between the existence check and the read.
        return None


__all__ = ["ContentReader", "DEFAULT_ENCODING"]

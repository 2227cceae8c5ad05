"""Read-only filesystem access for a sidecar container, served to a remote host."""

from .errors import AccessError, AccessErrorCode, UnsupportedOperationError, normalize_error
from .models import FileKind, FileStat, FileType, LinkResolution
from .stat import LinkAwareStat, classify, stat_path, to_file_stat

__version__ = "0.1.0"

__all__ = [
    "AccessError",
    "AccessErrorCode",
    "FileKind",
    "FileStat",
    "FileType",
    "LinkAwareStat",
    "LinkResolution",
    "UnsupportedOperationError",
    "classify",
    "normalize_error",
    "stat_path",
    "to_file_stat",
]

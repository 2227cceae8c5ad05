"""Error taxonomy shared by every operation exposed over the service boundary."""

from __future__ import annotations

import errno
from enum import Enum
from typing import Dict, Optional


class AccessErrorCode(str, Enum):
    """Closed set of filesystem error codes understood by remote callers."""

    NOT_FOUND = "EntryNotFound"
    ALREADY_EXISTS = "EntryExists"
    NOT_A_DIRECTORY = "EntryNotADirectory"
    IS_A_DIRECTORY = "EntryIsADirectory"
    # Reserved: no local code path produces the next three yet.
    EXCEEDS_MEMORY_LIMIT = "EntryExceedsMemoryLimit"
    TOO_LARGE = "EntryTooLarge"
    NO_PERMISSION = "NoPermissions"
    UNAVAILABLE = "Unavailable"
    UNKNOWN = "Unknown"


_ERRNO_CODES: Dict[int, AccessErrorCode] = {
    errno.ENOENT: AccessErrorCode.NOT_FOUND,
    errno.EISDIR: AccessErrorCode.IS_A_DIRECTORY,
    errno.ENOTDIR: AccessErrorCode.NOT_A_DIRECTORY,
    errno.EEXIST: AccessErrorCode.ALREADY_EXISTS,
    errno.EPERM: AccessErrorCode.NO_PERMISSION,
    errno.EACCES: AccessErrorCode.NO_PERMISSION,
}


class AccessError(Exception):
    """Normalized filesystem failure with its taxonomy code and original cause."""

    def __init__(
        self,
        message: str,
        code: AccessErrorCode,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause

    @property
    def name(self) -> str:
        return f"{self.code.value} (FileSystemError)"

    def to_payload(self) -> Dict[str, str]:
        return {
            "error": "FileSystemError",
            "code": self.code.value,
            "name": self.name,
            "message": self.message,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessError):
            return NotImplemented
        return (
            self.code is other.code
            and self.message == other.message
            and self.cause is other.cause
        )

    def __hash__(self) -> int:
        return hash((self.code, self.message, id(self.cause)))

    def __repr__(self) -> str:
        return f"AccessError(code={self.code.name}, message={self.message!r})"


class UnsupportedOperationError(NotImplementedError):
    """Raised by operations the sidecar deliberately does not provide."""

    def __init__(self, operation: str) -> None:
        super().__init__("Not implemented.")
        self.operation = operation

    def to_payload(self) -> Dict[str, str]:
        return {
            "error": "NotImplemented",
            "operation": self.operation,
            "message": "Not implemented.",
        }


def error_code_for(error: BaseException) -> AccessErrorCode:
    """Return the taxonomy code for an OS-level failure."""
    if isinstance(error, AccessError):
        return error.code
    error_number = getattr(error, "errno", None)
    if isinstance(error_number, int):
        return _ERRNO_CODES.get(error_number, AccessErrorCode.UNKNOWN)
    return AccessErrorCode.UNKNOWN


def normalize_error(error: BaseException) -> AccessError:
    """Convert ``error`` into an AccessError; AccessError input is returned unchanged."""
    if isinstance(error, AccessError):
        return error
    return AccessError(str(error), error_code_for(error), cause=error)


__all__ = [
    "AccessError",
    "AccessErrorCode",
    "UnsupportedOperationError",
    "error_code_for",
    "normalize_error",
]

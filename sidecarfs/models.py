"""Core data models shared across sidecarfs components."""

import os
from dataclasses import dataclass
from enum import IntEnum
from typing import List

# Wire flag layered on top of the base file type.
SYMBOLIC_LINK_FLAG = 64


class FileType(IntEnum):
    """Base kind of a filesystem entry, bit-compatible with the editor's FileType."""

    UNKNOWN = 0
    FILE = 1
    DIRECTORY = 2


@dataclass(frozen=True)
class FileKind:
    """Base file type plus an independent symbolic link flag."""

    base: FileType
    is_symlink: bool = False

    def to_bits(self) -> int:
        """Serialize to the bitset used on the wire."""
        bits = int(self.base)
        if self.is_symlink:
            bits |= SYMBOLIC_LINK_FLAG
        return bits

    @classmethod
    def from_bits(cls, bits: int) -> "FileKind":
        base_bits = bits & ~SYMBOLIC_LINK_FLAG
        try:
            base = FileType(base_bits)
        except ValueError as exc:
            raise ValueError(f"Invalid file type bitset: {bits}") from exc
        return cls(base=base, is_symlink=bool(bits & SYMBOLIC_LINK_FLAG))

    def names(self) -> List[str]:
        """Human readable flag names, base kind first."""
        labels = [self.base.name.lower()]
        if self.is_symlink:
            labels.append("symlink")
        return labels


@dataclass(frozen=True)
class FileStat:
    """Stat result returned across the service boundary."""

    kind: FileKind
    created_at_ms: int
    modified_at_ms: int
    size_bytes: int


@dataclass(frozen=True)
class LinkResolution:
    """Raw stat record plus what the link-aware lookup learned about the path.

    For a healthy symbolic link ``stat`` describes the target. For a dangling
    link it describes the link itself and ``dangling`` is set. ``dangling`` is
    always false when ``is_symlink`` is false.
    """

    stat: os.stat_result
    is_symlink: bool = False
    dangling: bool = False

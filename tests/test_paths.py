"""Tests for sidecarfs.paths."""

from __future__ import annotations

import pytest

from sidecarfs.paths import to_local_path


@pytest.mark.parametrize(
    ("uri", "expected"),
    [
        ("file:///projects/app/main.py", "/projects/app/main.py"),
        ("file-sidecar-ws:///projects/app/main.py", "/projects/app/main.py"),
        ("file://localhost/etc/hosts", "/etc/hosts"),
        ("file:///tmp/with%20space.txt", "/tmp/with space.txt"),
        ("file://server/share/readme", "//server/share/readme"),
        ("/already/a/path", "/already/a/path"),
    ],
)
def test_to_local_path(uri: str, expected: str) -> None:
    assert to_local_path(uri) == expected


@pytest.mark.parametrize("uri", ["", "relative/path.txt"])
def test_to_local_path_rejects_non_absolute(uri: str) -> None:
    with pytest.raises(ValueError):
        to_local_path(uri)

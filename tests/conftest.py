from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from tests._fixtures.tree_builder import TreeBuilder


class RecordingRegistry:
    """Capability registry that remembers every scheme it was asked to register."""

    def __init__(self) -> None:
        self.schemes: List[str] = []

    def register_capability(self, scheme: str) -> None:
        self.schemes.append(scheme)


@pytest.fixture
def tree(tmp_path: Path) -> TreeBuilder:
    """Provide a directory tree builder rooted at the pytest tmp_path."""
    return TreeBuilder(tmp_path)


@pytest.fixture
def sample_tree(tree: TreeBuilder) -> TreeBuilder:
    """`d/` holding the 10 byte file `d/f`, plus `link -> d/f` and `dangling -> missing`."""
    tree.write({"d/f": b"0123456789"})
    tree.symlink("link", tree.path("d/f"))
    tree.symlink("dangling", tree.path("missing"))
    return tree


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from shasper.backend import ShasperBackend
from shasper.ghost import ArchiveGhost


@dataclass
class _Block:
    ident: str
    parent: Optional[str]

    def parent_id(self) -> Optional[str]:
        return self.parent


class _MemoryBackend:
    def __init__(self) -> None:
        self.blocks: dict[str, _Block] = {}
        self.depths: dict[str, int] = {}
        self.children: dict[str, list[str]] = {}
        self.states: dict[str, dict] = {}
        self.canon: dict[int, str] = {}
        self.aux: dict[str, str] = {}
        self.committed: list[object] = []
        self.current_head = "g"
        self.add("g", None, canon=True)

    def add(self, ident: str, parent: Optional[str], canon: bool = False) -> None:
        self.blocks[ident] = _Block(ident, parent)
        self.children[ident] = []
        self.states[ident] = {"block": ident}
        depth = 0 if parent is None else self.depths[parent] + 1
        self.depths[ident] = depth
        if parent is not None:
            self.children[parent].append(ident)
        if canon:
            self.canon[depth] = ident

    def genesis(self) -> str:
        return "g"

    def head(self) -> str:
        return self.current_head

    def contains(self, block_id: str) -> bool:
        return block_id in self.blocks

    def is_canon(self, block_id: str) -> bool:
        return self.canon.get(self.depths[block_id]) == block_id

    def lookup_canon_depth(self, depth: int) -> Optional[str]:
        return self.canon.get(depth)

    def auxiliary(self, key: str) -> Optional[str]:
        return self.aux.get(key)

    def depth_at(self, block_id: str) -> int:
        return self.depths[block_id]

    def children_at(self, block_id: str) -> list[str]:
        return list(self.children[block_id])

    def state_at(self, block_id: str) -> dict:
        return dict(self.states[block_id])

    def block_at(self, block_id: str) -> _Block:
        return self.blocks[block_id]

    def commit(self, operation: object) -> None:
        if operation is None:
            raise ValueError("empty operation")
        self.committed.append(operation)


@pytest.fixture
def inner() -> _MemoryBackend:
    backend = _MemoryBackend()
    backend.add("a", "g", canon=True)
    backend.add("b", "a", canon=True)
    backend.add("x", "a")
    backend.aux["k"] = "v"
    backend.current_head = "b"
    return backend


def test_queries_delegate_to_inner_backend(inner):
    backend = ShasperBackend(inner)
    assert backend.inner is inner
    assert backend.genesis() == inner.genesis()
    assert backend.head() == inner.head()
    assert backend.contains("x") is True
    assert backend.contains("missing") is False
    assert backend.is_canon("b") is True
    assert backend.is_canon("x") is False
    assert backend.lookup_canon_depth(inner.depths["b"]) == "b"
    assert backend.lookup_canon_depth(len(inner.blocks) + 5) is None
    assert backend.auxiliary("k") == inner.aux["k"]
    assert backend.auxiliary("none") is None


def test_block_data_delegates_to_inner_backend(inner):
    backend = ShasperBackend(inner)
    assert backend.depth_at("x") == inner.depths["x"]
    assert backend.children_at("a") == ["b", "x"]
    assert backend.state_at("x") == {"block": "x"}
    assert backend.block_at("b") == _Block("b", "a")


def test_errors_from_inner_backend_propagate(inner):
    backend = ShasperBackend(inner)
    with pytest.raises(KeyError):
        backend.depth_at("missing")
    with pytest.raises(ValueError):
        backend.commit(None)


def test_ancestor_at_walks_parents(inner):
    backend = ShasperBackend(inner)
    assert backend.ancestor_at("b", inner.depths["a"]) == "a"
    assert backend.ancestor_at("x", 0) == "g"
    assert backend.ancestor_at("a", inner.depths["b"]) == "a"


def test_commit_forwards_operation(inner):
    backend = ShasperBackend(inner)
    operation = {"set_head": "x"}
    backend.commit(operation)
    assert inner.committed == [operation]


def test_backend_drives_fork_choice(inner):
    ghost = ArchiveGhost(ShasperBackend(inner))
    ghost.update_overlay(1, "x")
    assert ghost.head("g") == "x"
    ghost.reset_overlay()
    assert ghost.head("g") == "b"
"""A chain backend wrapper that adds ancestor queries."""

from __future__ import annotations

from typing import Any, Optional

from shasper.ghost import NoCacheAncestorQuery


class ShasperBackend:
    """Delegates chain queries and commits to an inner backend."""

    def __init__(self, backend: Any) -> None:
        self._backend = backend

    @property
    def inner(self) -> Any:
        """The wrapped backend."""
        return self._backend

    def genesis(self) -> Any:
        """Identifier of the genesis block."""
        return self._backend.genesis()

    def head(self) -> Any:
        """Identifier of the current head."""
        return self._backend.head()

    def contains(self, block_id: Any) -> bool:
        """Whether the block is known."""
        return self._backend.contains(block_id)

    def is_canon(self, block_id: Any) -> bool:
        """Whether the block is on the canonical chain."""
        return self._backend.is_canon(block_id)

    def lookup_canon_depth(self, depth: int) -> Optional[Any]:
        """Canonical block at ``depth``, or None."""
        return self._backend.lookup_canon_depth(depth)

    def auxiliary(self, key: Any) -> Optional[Any]:
        """Auxiliary value stored under ``key``, or None."""
        return self._backend.auxiliary(key)

    def depth_at(self, block_id: Any) -> int:
        """Depth of the block."""
        return self._backend.depth_at(block_id)

    def children_at(self, block_id: Any) -> list[Any]:
        """Children of the block."""
        return self._backend.children_at(block_id)

    def state_at(self, block_id: Any) -> Any:
        """State after the block."""
        return self._backend.state_at(block_id)

    def block_at(self, block_id: Any) -> Any:
        """The block itself."""
        return self._backend.block_at(block_id)

    def ancestor_at(self, block_id: Any, depth: int) -> Any:
        """Ancestor of ``block_id`` at ``depth``, found by walking parent links."""
        return NoCacheAncestorQuery(self._backend).ancestor_at(block_id, depth)

    def commit(self, operation: Any) -> None:
        """Commit an operation to the inner backend."""
        self._backend.commit(operation)
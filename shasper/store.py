"""A persistent block-tree store kept in an SQLite database file."""

from __future__ import annotations

import os
import pickle
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Optional, Union

_PROTOCOL = 4
_KEY_HEAD = "head"
_KEY_GENESIS = "genesis"

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS blocks (id BLOB PRIMARY KEY, data BLOB NOT NULL)",
    "CREATE TABLE IF NOT EXISTS canon_depth_mappings "
    "(depth INTEGER PRIMARY KEY, id BLOB NOT NULL)",
    "CREATE TABLE IF NOT EXISTS auxiliaries (key BLOB PRIMARY KEY, value BLOB NOT NULL)",
    "CREATE TABLE IF NOT EXISTS info (key TEXT PRIMARY KEY, value BLOB NOT NULL)",
)


class StoreError(Exception):
    """Base class of store errors."""


class InvalidOperationError(StoreError):
    """The requested operation is not valid for the store."""


class IsGenesisError(StoreError):
    """The block being imported is a genesis block."""


class NotExistError(StoreError):
    """The queried entry does not exist."""


@dataclass
class _BlockData:
    block: Any
    state: Any
    depth: int
    children: list[Any] = field(default_factory=list)
    is_canon: bool = False


def _encode(value: Any) -> bytes:
    return pickle.dumps(value, protocol=_PROTOCOL)


def _decode(data: bytes) -> Any:
    return pickle.loads(data)


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"depth must not be negative, got {depth}")


class ChainStore:
    """Blocks, states, canonical depth mappings and auxiliaries on disk.

    Blocks stored here expose ``id()`` and ``parent_id()``; the genesis block's
    ``parent_id()`` is None.
    """

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self._db = sqlite3.connect(os.fspath(path))
        with self._db:
            for statement in _SCHEMA:
                self._db.execute(statement)

    @classmethod
    def new_with_genesis(
        cls, path: Union[str, os.PathLike], block: Any, state: Any
    ) -> ChainStore:
        """Create a store at ``path`` holding ``block`` as genesis and head."""
        if block.parent_id() is not None:
            raise ValueError("new_with_genesis must be provided with a genesis block")
        store = cls(path)
        genesis_id = block.id()
        store.insert_block(genesis_id, block, state, 0, [], True)
        store.insert_canon_depth_mapping(0, genesis_id)
        store._put_info(_KEY_GENESIS, genesis_id)
        store.set_head(genesis_id)
        return store

    @classmethod
    def from_existing(cls, path: Union[str, os.PathLike]) -> ChainStore:
        """Open a store that was created earlier."""
        return cls(path)

    def close(self) -> None:
        """Close the underlying database."""
        self._db.close()

    def __enter__(self) -> ChainStore:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # -- internal helpers -------------------------------------------------

    def _put_info(self, key: str, value: Any) -> None:
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO info (key, value) VALUES (?, ?)",
                (key, _encode(value)),
            )

    def _get_info(self, key: str) -> Any:
        row = self._db.execute("SELECT value FROM info WHERE key = ?", (key,)).fetchone()
        if row is None:
            raise NotExistError(f"no {key} recorded")
        return _decode(row[0])

    def _load(self, block_id: Any) -> Optional[_BlockData]:
        row = self._db.execute(
            "SELECT data FROM blocks WHERE id = ?", (_encode(block_id),)
        ).fetchone()
        return None if row is None else _decode(row[0])

    def _require(self, block_id: Any) -> _BlockData:
        data = self._load(block_id)
        if data is None:
            raise NotExistError(f"block {block_id!r} does not exist")
        return data

    def _store(self, block_id: Any, data: _BlockData) -> None:
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO blocks (id, data) VALUES (?, ?)",
                (_encode(block_id), _encode(data)),
            )

    # -- queries ----------------------------------------------------------

    def head(self) -> Any:
        """Identifier of the current head."""
        return self._get_info(_KEY_HEAD)

    def genesis(self) -> Any:
        """Identifier of the genesis block."""
        return self._get_info(_KEY_GENESIS)

    def contains(self, block_id: Any) -> bool:
        """Whether the block is stored."""
        return self._load(block_id) is not None

    def is_canon(self, block_id: Any) -> bool:
        """Whether the block is on the canonical chain."""
        return self._require(block_id).is_canon

    def lookup_canon_depth(self, depth: int) -> Optional[Any]:
        """Canonical block at ``depth``, or None."""
        _check_depth(depth)
        row = self._db.execute(
            "SELECT id FROM canon_depth_mappings WHERE depth = ?", (depth,)
        ).fetchone()
        return None if row is None else _decode(row[0])

    def auxiliary(self, key: Any) -> Optional[Any]:
        """Auxiliary value stored under ``key``, or None."""
        row = self._db.execute(
            "SELECT value FROM auxiliaries WHERE key = ?", (_encode(key),)
        ).fetchone()
        return None if row is None else _decode(row[0])

    def children_at(self, block_id: Any) -> list[Any]:
        """Children of the block."""
        return self._require(block_id).children

    def depth_at(self, block_id: Any) -> int:
        """Depth of the block."""
        return self._require(block_id).depth

    def block_at(self, block_id: Any) -> Any:
        """The stored block."""
        return self._require(block_id).block

    def state_at(self, block_id: Any) -> Any:
        """The state stored with the block."""
        return self._require(block_id).state

    # -- settlement -------------------------------------------------------

    def insert_block(
        self,
        block_id: Any,
        block: Any,
        state: Any,
        depth: int,
        children: list[Any],
        is_canon: bool,
    ) -> None:
        """Store a block with its state, depth, children and canonical flag."""
        _check_depth(depth)
        self._store(block_id, _BlockData(block, state, depth, list(children), is_canon))

    def push_child(self, block_id: Any, child: Any) -> None:
        """Append ``child`` to the children of a stored block."""
        data = self._require(block_id)
        data.children.append(child)
        self._store(block_id, data)

    def set_canon(self, block_id: Any, is_canon: bool) -> None:
        """Mark a stored block as canonical or not."""
        data = self._require(block_id)
        data.is_canon = is_canon
        self._store(block_id, data)

    def insert_canon_depth_mapping(self, depth: int, block_id: Any) -> None:
        """Record ``block_id`` as the canonical block at ``depth``."""
        _check_depth(depth)
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO canon_depth_mappings (depth, id) VALUES (?, ?)",
                (depth, _encode(block_id)),
            )

    def remove_canon_depth_mapping(self, depth: int) -> None:
        """Forget the canonical block at ``depth``."""
        _check_depth(depth)
        with self._db:
            self._db.execute("DELETE FROM canon_depth_mappings WHERE depth = ?", (depth,))

    def insert_auxiliary(self, key: Any, value: Any) -> None:
        """Store an auxiliary value."""
        with self._db:
            self._db.execute(
                "INSERT OR REPLACE INTO auxiliaries (key, value) VALUES (?, ?)",
                (_encode(key), _encode(value)),
            )

    def remove_auxiliary(self, key: Any) -> None:
        """Remove an auxiliary value."""
        with self._db:
            self._db.execute("DELETE FROM auxiliaries WHERE key = ?", (_encode(key),))

    def set_head(self, head: Any) -> None:
        """Record the current head."""
        self._put_info(_KEY_HEAD, head)
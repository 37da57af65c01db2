"""Merkle tree of deposits, its root and per-deposit proofs."""

from __future__ import annotations

import hashlib
from typing import Callable, Sequence

HashPair = Callable[[bytes, bytes], bytes]

_ZERO_HASH = bytes(32)


def sha256_pair(left: bytes, right: bytes) -> bytes:
    """SHA-256 of the concatenation of two hashes."""
    return hashlib.sha256(bytes(left) + bytes(right)).digest()


def zero_hashes(hash_pair: HashPair, count: int) -> list[bytes]:
    """Roots of all-zero subtrees: level 0 is the zero hash, each next level hashes a pair."""
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    hashes: list[bytes] = []
    current = _ZERO_HASH
    for _ in range(count):
        hashes.append(current)
        current = hash_pair(current, current)
    return hashes


def deposit_tree(
    leaves: Sequence[bytes], depth: int, hash_pair: HashPair = sha256_pair
) -> list[list[bytes]]:
    """Build every level of the deposit tree from the leaf hashes up to the root."""
    if depth < 0:
        raise ValueError(f"depth must not be negative, got {depth}")
    zeros = zero_hashes(hash_pair, depth)
    values = list(leaves)
    tree = [list(values)]
    for level in range(depth):
        if len(values) % 2 == 1:
            values.append(zeros[level])
        values = [hash_pair(left, right) for left, right in zip(values[::2], values[1::2])]
        tree.append(list(values))
    return tree


def deposit_root(tree: Sequence[Sequence[bytes]]) -> bytes:
    """Root of a deposit tree: the single value of its top level."""
    if not tree or not tree[-1]:
        raise ValueError("Merkle tree cannot be empty")
    return tree[-1][0]


def deposit_proof(
    tree: Sequence[Sequence[bytes]],
    item_index: int,
    depth: int,
    hash_pair: HashPair = sha256_pair,
) -> list[bytes]:
    """Sibling hashes from the leaf at ``item_index`` up to the root."""
    if item_index < 0:
        raise ValueError(f"item index must not be negative, got {item_index}")
    if len(tree) < depth:
        raise ValueError(f"tree has {len(tree)} levels, fewer than depth {depth}")
    zeros = zero_hashes(hash_pair, depth)
    proof = []
    for level, zero in enumerate(zeros):
        subindex = (item_index >> level) ^ 1
        layer = tree[level]
        proof.append(layer[subindex] if subindex < len(layer) else zero)
    return proof
# shasper

Building blocks for a beacon chain node, in pure Python with only the
standard library.

## What it provides

- `shasper.utils`: `fixed_vec`, `to_bytes` (a 64-bit integer little-endian
  into a 32-byte hash), `to_uint` (eight little-endian bytes back to an
  integer), `integer_squareroot`, `compare_hash` (returns -1, 0 or 1) and
  `raw_domain`. Out-of-range input raises `ValueError`.
- `shasper.misc`: `BitField` (fixed length, supports `get_bit`, `set_bit`,
  `|` and `len`), and the records `Fork`, `Crosslink`, `Eth1Data`,
  `AttestationData` (with `is_slashable`), `AttestationDataAndCustodyBit`,
  `IndexedAttestation`, `DepositData`, `BeaconBlockHeader`, `Validator`
  (with `is_active` and `is_slashable`), `PendingAttestation` and
  `HistoricalBatch` (with `HistoricalBatch.with_length`).
- `shasper.block`: `BeaconBlockBody`, `BeaconBlock` and
  `UnsealedBeaconBlock`, whose `fake_seal()` returns a `BeaconBlock` with an
  empty signature.
- `shasper.operation`: `ProposerSlashing`, `AttesterSlashing`,
  `Attestation`, `Deposit` (with `Deposit.with_depth`), `VoluntaryExit` and
  `Transfer`.
- `shasper.state`: `BeaconState`, with `BeaconState.with_lengths` to build
  an empty state with sized vectors, `validator_pubkey(index)` and
  `validator_index(pubkey)`; both return `None` when nothing matches.
- `shasper.pool`: `AttestationPool`. It keys attestations by a hash of their
  data and merges those with the same key. You supply the hash function and
  the signature aggregation function. `push` raises `ValueError` if an
  aggregation bit is already set in the pooled attestation, or if the
  incoming custody bitfield is not empty. Iterating the pool yields
  `(key, attestation)` pairs. `pop(key)` removes an entry.
- `shasper.ghost`: the LMD-GHOST fork choice.
  - `ArchiveGhost` stages votes with `update_overlay`. It makes them
    permanent with `commit_overlay` or drops them with `reset_overlay`.
  - `update_active` prunes the votes of inactive validators.
  - `vote_count` and `head` evaluate the fork choice. On a tie, `head` picks
    the earliest child.
  - `NoCacheAncestorQuery` finds an ancestor by walking parent links.
  - `ChainQuery` and `JustifiableExecutor` are protocols that describe what
    a backend and an executor must offer.
- `shasper.backend`: `ShasperBackend` wraps any chain query backend. It
  delegates every query and `commit` to that backend and adds `ancestor_at`.
- `shasper.store`: `ChainStore`, a block-tree store kept in an SQLite file.
  It holds blocks, states, depths, children, canonical flags, canonical depth
  mappings, auxiliary values, the head and the genesis.
  - Values are stored with `pickle`, so open only files you trust.
  - Looking up an unknown block raises `NotExistError`, and a negative depth
    raises `ValueError`.
  - `InvalidOperationError` and `IsGenesisError` share the base class
    `StoreError`, for callers that need them.
  - `ChainStore` can be used as a context manager.
- `shasper.deposit`: `sha256_pair`, `zero_hashes`, `deposit_tree`,
  `deposit_root` and `deposit_proof` for the deposit Merkle tree.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Deposit tree

```python
from shasper.utils import integer_squareroot
from shasper.deposit import sha256_pair, deposit_tree, deposit_root, deposit_proof

print(integer_squareroot(17))  # 4

leaves = [bytes([i]) * 32 for i in range(4)]
tree = deposit_tree(leaves, 32, sha256_pair)
root = deposit_root(tree)
proof = deposit_proof(tree, 2, 32, sha256_pair)
assert len(proof) == 32
```

## Fork choice over a stored chain

Blocks kept in a `ChainStore` must offer `id()` and `parent_id()`. The
genesis block's `parent_id()` returns `None`.

```python
import os
import tempfile
from dataclasses import dataclass
from typing import Optional

from shasper.backend import ShasperBackend
from shasper.ghost import ArchiveGhost
from shasper.store import ChainStore


@dataclass
class Node:
    name: str
    parent: Optional[str] = None

    def id(self):
        return self.name

    def parent_id(self):
        return self.parent


path = os.path.join(tempfile.mkdtemp(), "chain.sqlite")
with ChainStore.new_with_genesis(path, Node("g"), None) as store:
    for name in ("a", "b"):
        store.insert_block(name, Node(name, "g"), None, 1, [], False)
        store.push_child("g", name)

    ghost = ArchiveGhost(ShasperBackend(store))
    ghost.update_overlay(1, "b")   # validator 1 votes for block "b"
    assert ghost.head("g") == "b"
    ghost.commit_overlay()
```

## What the package does not do

- It does not execute blocks or run state transitions. `JustifiableExecutor`
  only describes the interface an executor must provide.
- It does not sign or verify anything and does not compute block or
  attestation hashes of its own. `AttestationPool` takes the hash function
  and the signature aggregation function from the caller.
- It has no networking or chain synchronisation.
- It has no command-line program and does not author blocks.

## Running the tests

```
pytest
```
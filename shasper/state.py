"""The beacon chain state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from shasper.misc import (
    EMPTY_VERSION,
    ZERO_HASH,
    BeaconBlockHeader,
    Crosslink,
    Eth1Data,
    Fork,
    PendingAttestation,
    Validator,
)
from shasper.utils import fixed_vec


@dataclass
class BeaconState:
    """Full beacon chain state."""

    slot: int = 0
    genesis_time: int = 0
    fork: Fork = field(default_factory=Fork)

    validator_registry: list[Validator] = field(default_factory=list)
    balances: list[int] = field(default_factory=list)

    latest_randao_mixes: list[bytes] = field(default_factory=list)
    latest_start_shard: int = 0

    previous_epoch_attestations: list[PendingAttestation] = field(default_factory=list)
    current_epoch_attestations: list[PendingAttestation] = field(default_factory=list)
    previous_justified_epoch: int = 0
    current_justified_epoch: int = 0
    previous_justified_root: bytes = ZERO_HASH
    current_justified_root: bytes = ZERO_HASH
    justification_bitfield: int = 0
    finalized_epoch: int = 0
    finalized_root: bytes = ZERO_HASH

    current_crosslinks: list[Crosslink] = field(default_factory=list)
    previous_crosslinks: list[Crosslink] = field(default_factory=list)
    latest_block_roots: list[bytes] = field(default_factory=list)
    latest_state_roots: list[bytes] = field(default_factory=list)
    latest_active_index_roots: list[bytes] = field(default_factory=list)
    latest_slashed_balances: list[int] = field(default_factory=list)
    latest_block_header: BeaconBlockHeader = field(default_factory=BeaconBlockHeader)
    historical_roots: list[bytes] = field(default_factory=list)

    latest_eth1_data: Eth1Data = field(default_factory=Eth1Data)
    eth1_data_votes: list[Eth1Data] = field(default_factory=list)
    deposit_index: int = 0

    @classmethod
    def with_lengths(
        cls,
        latest_randao_mixes_length: int,
        shard_count: int,
        slots_per_historical_root: int,
        latest_active_index_roots_length: int,
        latest_slashed_exit_length: int,
    ) -> BeaconState:
        """Build an empty state whose fixed-length vectors have the given sizes."""
        return cls(
            fork=Fork(previous_version=EMPTY_VERSION, current_version=EMPTY_VERSION),
            latest_randao_mixes=fixed_vec(latest_randao_mixes_length, lambda: ZERO_HASH),
            current_crosslinks=fixed_vec(shard_count, Crosslink),
            previous_crosslinks=fixed_vec(shard_count, Crosslink),
            latest_block_roots=fixed_vec(slots_per_historical_root, lambda: ZERO_HASH),
            latest_state_roots=fixed_vec(slots_per_historical_root, lambda: ZERO_HASH),
            latest_active_index_roots=fixed_vec(
                latest_active_index_roots_length, lambda: ZERO_HASH
            ),
            latest_slashed_balances=fixed_vec(latest_slashed_exit_length, int),
        )

    def validator_pubkey(self, index: int) -> Optional[bytes]:
        """Return the public key of the validator at ``index``, or None."""
        if not 0 <= index < len(self.validator_registry):
            return None
        return self.validator_registry[index].pubkey

    def validator_index(self, pubkey: bytes) -> Optional[int]:
        """Return the index of the first validator with ``pubkey``, or None."""
        return next(
            (
                index
                for index, validator in enumerate(self.validator_registry)
                if validator.pubkey == pubkey
            ),
            None,
        )
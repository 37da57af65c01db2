"""Beacon chain operations carried in block bodies."""

from __future__ import annotations

from dataclasses import dataclass, field

from shasper.misc import (
    EMPTY_SIGNATURE,
    ZERO_HASH,
    AttestationData,
    BeaconBlockHeader,
    BitField,
    DepositData,
    IndexedAttestation,
)
from shasper.utils import fixed_vec


@dataclass
class ProposerSlashing:
    """Evidence of a proposer signing two conflicting headers."""

    proposer_index: int = 0
    header_1: BeaconBlockHeader = field(default_factory=BeaconBlockHeader)
    header_2: BeaconBlockHeader = field(default_factory=BeaconBlockHeader)


@dataclass
class AttesterSlashing:
    """Evidence of two slashable attestations."""

    attestation_1: IndexedAttestation = field(default_factory=IndexedAttestation)
    attestation_2: IndexedAttestation = field(default_factory=IndexedAttestation)


@dataclass
class Attestation:
    """An aggregated attestation."""

    aggregation_bitfield: BitField = field(default_factory=lambda: BitField(0))
    data: AttestationData = field(default_factory=AttestationData)
    custody_bitfield: BitField = field(default_factory=lambda: BitField(0))
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class Deposit:
    """A deposit with its Merkle branch in the deposit tree."""

    proof: list[bytes]
    index: int = 0
    data: DepositData = field(default_factory=DepositData)

    @classmethod
    def with_depth(cls, deposit_contract_tree_depth: int) -> Deposit:
        """Build an empty deposit whose proof has one zero hash per tree level."""
        return cls(proof=fixed_vec(deposit_contract_tree_depth, lambda: ZERO_HASH))


@dataclass
class VoluntaryExit:
    """A validator's request to exit."""

    epoch: int = 0
    validator_index: int = 0
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class Transfer:
    """A balance transfer between validators."""

    sender: int
    recipient: int
    amount: int
    fee: int
    slot: int
    pubkey: bytes
    signature: bytes
"""Miscellaneous beacon chain records: forks, crosslinks, validators and votes."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import zip_longest

from shasper.utils import fixed_vec

ZERO_HASH = bytes(32)
EMPTY_SIGNATURE = bytes(96)
EMPTY_VALIDATOR_ID = bytes(48)
EMPTY_VERSION = bytes(4)


class BitField:
    """A fixed-length sequence of bits packed least-significant bit first."""

    __slots__ = ("_length", "_data")

    def __init__(self, length: int) -> None:
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")
        self._length = length
        self._data = bytearray((length + 7) // 8)

    @property
    def data(self) -> bytes:
        """The packed bytes of the bit field."""
        return bytes(self._data)

    def _check(self, index: int) -> None:
        if not 0 <= index < self._length:
            raise IndexError(f"bit index {index} out of range for length {self._length}")

    def get_bit(self, index: int) -> bool:
        """Return whether the bit at ``index`` is set."""
        self._check(index)
        return bool((self._data[index // 8] >> (index % 8)) & 1)

    def set_bit(self, index: int, value: bool) -> None:
        """Set or clear the bit at ``index``."""
        self._check(index)
        mask = 1 << (index % 8)
        if value:
            self._data[index // 8] |= mask
        else:
            self._data[index // 8] &= ~mask & 0xFF

    def __or__(self, other: object) -> BitField:
        if not isinstance(other, BitField):
            return NotImplemented
        result = BitField(max(self._length, other._length))
        result._data[:] = bytes(
            a | b for a, b in zip_longest(self._data, other._data, fillvalue=0)
        )
        return result

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitField):
            return NotImplemented
        return self._length == other._length and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BitField(length={self._length}, data={bytes(self._data).hex()})"


@dataclass
class Fork:
    """Fork information."""

    previous_version: bytes = EMPTY_VERSION
    current_version: bytes = EMPTY_VERSION
    epoch: int = 0


@dataclass
class Crosslink:
    """Crosslink to shard data."""

    epoch: int = 0
    previous_crosslink_root: bytes = ZERO_HASH
    crosslink_data_root: bytes = ZERO_HASH


@dataclass
class Eth1Data:
    """Data observed on the deposit chain."""

    deposit_root: bytes = ZERO_HASH
    deposit_count: int = 0
    block_hash: bytes = ZERO_HASH


@dataclass
class AttestationData:
    """LMD-GHOST, FFG and crosslink vote of an attestation."""

    beacon_block_root: bytes = ZERO_HASH
    source_epoch: int = 0
    source_root: bytes = ZERO_HASH
    target_epoch: int = 0
    target_root: bytes = ZERO_HASH
    shard: int = 0
    previous_crosslink_root: bytes = ZERO_HASH
    crosslink_data_root: bytes = ZERO_HASH

    def is_slashable(self, other: AttestationData) -> bool:
        """Whether this and ``other`` form a double vote or a surround vote."""
        double_vote = self != other and self.target_epoch == other.target_epoch
        surround_vote = (
            self.source_epoch < other.source_epoch
            and other.target_epoch < self.target_epoch
        )
        return double_vote or surround_vote


@dataclass
class AttestationDataAndCustodyBit:
    """Attestation data paired with a custody bit."""

    data: AttestationData = field(default_factory=AttestationData)
    custody_bit: bool = False


@dataclass
class IndexedAttestation:
    """Attestation with explicit validator indices."""

    custody_bit_0_indices: list[int] = field(default_factory=list)
    custody_bit_1_indices: list[int] = field(default_factory=list)
    data: AttestationData = field(default_factory=AttestationData)
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class DepositData:
    """Data of a validator deposit."""

    pubkey: bytes = EMPTY_VALIDATOR_ID
    withdrawal_credentials: bytes = ZERO_HASH
    amount: int = 0
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class BeaconBlockHeader:
    """Header of a beacon block."""

    slot: int = 0
    previous_block_root: bytes = ZERO_HASH
    state_root: bytes = ZERO_HASH
    block_body_root: bytes = ZERO_HASH
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class Validator:
    """Validator record."""

    pubkey: bytes = EMPTY_VALIDATOR_ID
    withdrawal_credentials: bytes = ZERO_HASH
    activation_eligibility_epoch: int = 0
    activation_epoch: int = 0
    exit_epoch: int = 0
    withdrawable_epoch: int = 0
    slashed: bool = False
    effective_balance: int = 0

    def is_active(self, epoch: int) -> bool:
        """Whether the validator is active at ``epoch``."""
        return self.activation_epoch <= epoch < self.exit_epoch

    def is_slashable(self, epoch: int) -> bool:
        """Whether the validator can be slashed at ``epoch``."""
        return (
            not self.slashed
            and self.activation_epoch <= epoch < self.withdrawable_epoch
        )


@dataclass
class PendingAttestation:
    """Attestation waiting for epoch processing."""

    aggregation_bitfield: BitField = field(default_factory=lambda: BitField(0))
    data: AttestationData = field(default_factory=AttestationData)
    inclusion_delay: int = 0
    proposer_index: int = 0


@dataclass
class HistoricalBatch:
    """Batch of historical block and state roots."""

    block_roots: list[bytes]
    state_roots: list[bytes]

    @classmethod
    def with_length(cls, slots_per_historical_root: int) -> HistoricalBatch:
        """Build a batch of zero roots sized for the configured history length."""
        return cls(
            block_roots=fixed_vec(slots_per_historical_root, lambda: ZERO_HASH),
            state_roots=fixed_vec(slots_per_historical_root, lambda: ZERO_HASH),
        )
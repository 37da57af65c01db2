"""A pool that aggregates attestations voting for the same data."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterator, Sequence

from shasper.misc import AttestationDataAndCustodyBit
from shasper.operation import Attestation


class AttestationPool:
    """Attestations keyed by the hash of their data, merged as they arrive."""

    def __init__(
        self,
        hasher: Callable[[AttestationDataAndCustodyBit], bytes],
        aggregate_signatures: Callable[[Sequence[bytes]], bytes],
    ) -> None:
        self._hasher = hasher
        self._aggregate_signatures = aggregate_signatures
        self._pool: dict[bytes, Attestation] = {}

    def _key(self, attestation: Attestation) -> bytes:
        return self._hasher(
            AttestationDataAndCustodyBit(data=attestation.data, custody_bit=False)
        )

    def push(self, attestation: Attestation) -> None:
        """Add an attestation, merging it with one for the same data if present.

        Raises ValueError if an aggregation bit is already set in the pooled
        attestation, or if the incoming custody bitfield is not empty.
        """
        key = self._key(attestation)
        existing = self._pool.get(key)
        if existing is None:
            self._pool[key] = replace(attestation)
            return

        incoming_bits = attestation.aggregation_bitfield
        existing_bits = existing.aggregation_bitfield
        overlap = [
            index
            for index in range(min(len(incoming_bits), len(existing_bits)))
            if incoming_bits.get_bit(index) and existing_bits.get_bit(index)
        ]
        if overlap:
            raise ValueError(f"aggregation bits already set in pool: {overlap}")
        if any(attestation.custody_bitfield.data):
            raise ValueError("custody bitfield must be empty")

        existing.aggregation_bitfield = existing_bits | incoming_bits
        existing.custody_bitfield = existing.custody_bitfield | attestation.custody_bitfield
        existing.signature = self._aggregate_signatures(
            [existing.signature, attestation.signature]
        )

    def pop(self, key: bytes) -> None:
        """Remove the attestation stored under ``key``, if any."""
        self._pool.pop(key, None)

    def __iter__(self) -> Iterator[tuple[bytes, Attestation]]:
        return iter(list(self._pool.items()))

    def __len__(self) -> int:
        return len(self._pool)
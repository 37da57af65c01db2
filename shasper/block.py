"""Beacon blocks, sealed and unsealed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional

from shasper.misc import EMPTY_SIGNATURE, ZERO_HASH, Eth1Data

if TYPE_CHECKING:
    from shasper.operation import (
        Attestation,
        AttesterSlashing,
        Deposit,
        ProposerSlashing,
        Transfer,
        VoluntaryExit,
    )


@dataclass
class BeaconBlockBody:
    """Body of a beacon block."""

    randao_reveal: bytes = EMPTY_SIGNATURE
    eth1_data: Eth1Data = field(default_factory=Eth1Data)
    graffiti: bytes = ZERO_HASH
    proposer_slashings: list[ProposerSlashing] = field(default_factory=list)
    attester_slashings: list[AttesterSlashing] = field(default_factory=list)
    attestations: list[Attestation] = field(default_factory=list)
    deposits: list[Deposit] = field(default_factory=list)
    voluntary_exits: list[VoluntaryExit] = field(default_factory=list)
    transfers: list[Transfer] = field(default_factory=list)


@dataclass
class BeaconBlock:
    """A sealed beacon block carrying the proposer's signature."""

    slot: int = 0
    previous_block_root: bytes = ZERO_HASH
    state_root: bytes = ZERO_HASH
    body: BeaconBlockBody = field(default_factory=BeaconBlockBody)
    signature: bytes = EMPTY_SIGNATURE


@dataclass
class UnsealedBeaconBlock:
    """A beacon block that has not been signed yet."""

    # Unsealed blocks carry no signature.
    signature: ClassVar[Optional[bytes]] = None

    slot: int = 0
    previous_block_root: bytes = ZERO_HASH
    state_root: bytes = ZERO_HASH
    body: BeaconBlockBody = field(default_factory=BeaconBlockBody)

    def fake_seal(self) -> BeaconBlock:
        """Seal the block with an empty signature."""
        return BeaconBlock(
            slot=self.slot,
            previous_block_root=self.previous_block_root,
            state_root=self.state_root,
            body=self.body,
            signature=EMPTY_SIGNATURE,
        )
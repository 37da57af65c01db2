import pytest

from shasper.misc import (
    EMPTY_SIGNATURE,
    ZERO_HASH,
    BeaconBlockHeader,
    BitField,
    DepositData,
    IndexedAttestation,
)
from shasper.operation import (
    Attestation,
    AttesterSlashing,
    Deposit,
    ProposerSlashing,
    Transfer,
    VoluntaryExit,
)


def test_deposit_with_depth_has_zero_proof():
    deposit = Deposit.with_depth(32)
    assert len(deposit.proof) == 32
    assert all(node == ZERO_HASH for node in deposit.proof)
    assert deposit.index == 0
    assert deposit.data == DepositData()


def test_deposit_with_zero_depth():
    assert Deposit.with_depth(0).proof == []


def test_deposit_with_negative_depth_rejected():
    with pytest.raises(ValueError):
        Deposit.with_depth(-1)


def test_deposit_proofs_are_independent():
    first = Deposit.with_depth(4)
    second = Deposit.with_depth(4)
    first.proof[0] = b"\x01" * 32
    assert second.proof[0] == ZERO_HASH


def test_attestation_defaults():
    attestation = Attestation()
    assert attestation.signature == EMPTY_SIGNATURE
    assert attestation.aggregation_bitfield == BitField(0)
    assert attestation.custody_bitfield == BitField(0)


def test_attestations_do_not_share_bitfields():
    first = Attestation(aggregation_bitfield=BitField(8))
    second = Attestation(aggregation_bitfield=BitField(8))
    first.aggregation_bitfield.set_bit(3, True)
    assert second.aggregation_bitfield.get_bit(3) is False


def test_proposer_slashing_defaults():
    slashing = ProposerSlashing()
    assert slashing.header_1 == BeaconBlockHeader()
    assert slashing.header_2 == BeaconBlockHeader()
    assert slashing.header_1 is not slashing.header_2


def test_attester_slashing_defaults():
    slashing = AttesterSlashing()
    assert slashing.attestation_1 == IndexedAttestation()
    assert slashing.attestation_2 == slashing.attestation_1


def test_voluntary_exit_equality():
    assert VoluntaryExit(epoch=3, validator_index=1) == VoluntaryExit(3, 1)
    assert VoluntaryExit(epoch=3) != VoluntaryExit(epoch=4)


def test_transfer_requires_all_fields():
    with pytest.raises(TypeError):
        Transfer(sender=1, recipient=2)


def test_transfer_keeps_fields():
    transfer = Transfer(
        sender=1,
        recipient=2,
        amount=10,
        fee=1,
        slot=5,
        pubkey=bytes(48),
        signature=EMPTY_SIGNATURE,
    )
    assert (transfer.sender, transfer.recipient, transfer.amount) == (1, 2, 10)
    assert transfer.pubkey == bytes(48)
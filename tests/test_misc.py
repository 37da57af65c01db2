import pytest
from hypothesis import given
from hypothesis import strategies as st

from shasper.misc import (
    AttestationData,
    AttestationDataAndCustodyBit,
    BitField,
    Crosslink,
    DepositData,
    HistoricalBatch,
    IndexedAttestation,
    PendingAttestation,
    Validator,
)


def test_bitfield_starts_clear():
    bits = BitField(10)
    assert len(bits) == 10
    assert not any(bits.get_bit(i) for i in range(10))


def test_bitfield_packs_into_bytes():
    bits = BitField(9)
    assert len(bits.data) == 2


def test_bitfield_lsb_first():
    bits = BitField(8)
    bits.set_bit(0, True)
    assert bits.data == b"\x01"


@given(st.integers(min_value=1, max_value=200), st.data())
def test_bitfield_set_and_clear(length, data):
    index = data.draw(st.integers(min_value=0, max_value=length - 1))
    bits = BitField(length)
    bits.set_bit(index, True)
    assert bits.get_bit(index)
    assert sum(bits.get_bit(i) for i in range(length)) == 1
    bits.set_bit(index, False)
    assert bits == BitField(length)


@pytest.mark.parametrize("index", [-1, 5])
def test_bitfield_out_of_range(index):
    bits = BitField(5)
    with pytest.raises(IndexError):
        bits.get_bit(index)
    with pytest.raises(IndexError):
        bits.set_bit(index, True)


def test_bitfield_negative_length():
    with pytest.raises(ValueError):
        BitField(-1)


def test_bitfield_or_unions_bits():
    a = BitField(12)
    b = BitField(12)
    a.set_bit(1, True)
    b.set_bit(10, True)
    merged = a | b
    assert len(merged) == 12
    assert [i for i in range(12) if merged.get_bit(i)] == [1, 10]
    assert not a.get_bit(10)


def test_bitfield_or_extends_to_longer():
    short = BitField(3)
    short.set_bit(2, True)
    long = BitField(20)
    long.set_bit(19, True)
    merged = short | long
    assert len(merged) == 20
    assert merged.get_bit(2) and merged.get_bit(19)


def test_attestation_double_vote_is_slashable():
    a = AttestationData(target_epoch=3, beacon_block_root=b"\x01" * 32)
    b = AttestationData(target_epoch=3, beacon_block_root=b"\x02" * 32)
    assert a.is_slashable(b)
    assert b.is_slashable(a)


def test_attestation_identical_is_not_slashable():
    a = AttestationData(target_epoch=3)
    assert not a.is_slashable(AttestationData(target_epoch=3))


def test_attestation_surround_vote():
    outer = AttestationData(source_epoch=1, target_epoch=5)
    inner = AttestationData(source_epoch=2, target_epoch=4)
    assert outer.is_slashable(inner)
    assert not inner.is_slashable(outer)


def test_validator_is_active_bounds():
    validator = Validator(activation_epoch=2, exit_epoch=5)
    assert not validator.is_active(1)
    assert validator.is_active(2)
    assert validator.is_active(4)
    assert not validator.is_active(5)


def test_validator_is_slashable():
    validator = Validator(activation_epoch=2, withdrawable_epoch=6)
    assert validator.is_slashable(2)
    assert not validator.is_slashable(6)
    validator.slashed = True
    assert not validator.is_slashable(3)


def test_historical_batch_with_length():
    batch = HistoricalBatch.with_length(8)
    assert len(batch.block_roots) == 8
    assert len(batch.state_roots) == 8
    assert all(root == bytes(32) for root in batch.block_roots + batch.state_roots)


def test_default_sizes_follow_primitive_widths():
    deposit = DepositData()
    assert len(deposit.pubkey) == 48
    assert deposit.signature == bytes(96)
    assert Crosslink().crosslink_data_root == bytes(32)


def test_mutable_defaults_are_not_shared():
    first = IndexedAttestation()
    second = IndexedAttestation()
    first.custody_bit_0_indices.append(7)
    assert second.custody_bit_0_indices == []
    p1 = PendingAttestation()
    p2 = PendingAttestation()
    assert p1.aggregation_bitfield is not p2.aggregation_bitfield
    assert len(p1.aggregation_bitfield) == 0


def test_custody_bit_wrapper_equality():
    data = AttestationData(shard=4)
    assert AttestationDataAndCustodyBit(data=data) == AttestationDataAndCustodyBit(
        data=AttestationData(shard=4), custody_bit=False
    )
    assert AttestationDataAndCustodyBit(data=data, custody_bit=True) != (
        AttestationDataAndCustodyBit(data=data)
    )
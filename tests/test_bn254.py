"""Tests for BN254 field elements and state value types."""

import pytest
from solders.pubkey import Pubkey

from light_client.constants import FIELD_SIZE
from light_client.errors import FieldSizeError, InvalidLengthError
from light_client.state import (
    BN254,
    BN254_ZERO,
    CompressedAccount,
    CompressedAccountData,
    CompressedProof,
    ValidityProofWithContext,
)


def test_from_int_round_trip():
    value = BN254.from_int(123456789)
    assert value.to_int() == 123456789
    assert value.to_bytes()[-4:] == (123456789).to_bytes(4, "big")


def test_rejects_modulus_and_negative():
    with pytest.raises(FieldSizeError):
        BN254.from_int(FIELD_SIZE)
    with pytest.raises(FieldSizeError):
        BN254.from_int(-1)
    with pytest.raises(FieldSizeError):
        BN254.from_bytes(b"\xff" * 32)


def test_largest_element_accepted():
    assert BN254.from_int(FIELD_SIZE - 1).to_int() == FIELD_SIZE - 1


def test_rejects_wrong_length():
    with pytest.raises(InvalidLengthError):
        BN254.from_bytes(bytes(31))


def test_base58_round_trip():
    key = Pubkey(bytes([0]) + bytes(range(1, 32)))
    value = BN254.from_base58(str(key))
    assert value.to_base58() == str(key)
    assert value == BN254.from_pubkey(key)


def test_equality_and_hash_are_bytewise():
    assert BN254.from_int(7) == BN254.from_bytes((7).to_bytes(32, "big"))
    assert len({BN254.from_int(7), BN254.from_int(7), BN254.from_int(8)}) == 2
    assert BN254_ZERO.is_zero
    assert not BN254.from_int(1).is_zero


def test_account_data_lengths_checked():
    with pytest.raises(InvalidLengthError) as exc:
        CompressedAccountData(discriminator=bytes(7), data=b"", data_hash=bytes(32))
    assert exc.value.field == "discriminator"
    with pytest.raises(InvalidLengthError):
        CompressedAccountData(discriminator=bytes(8), data=b"", data_hash=bytes(31))


def test_account_address_length_checked():
    with pytest.raises(InvalidLengthError):
        CompressedAccount(owner=Pubkey.new_unique(), lamports=0, address=bytes(16))


def test_proof_lengths_checked():
    with pytest.raises(InvalidLengthError) as exc:
        CompressedProof(a=bytes(32), b=bytes(32), c=bytes(32))
    assert exc.value.field == "proof.b"


def test_validity_proof_context_defaults(proof):
    context = ValidityProofWithContext(compressed_proof=proof, root_indices=[1, 2])
    assert context.root_indices == [1, 2]
    assert context.tree_infos == []
    assert ValidityProofWithContext(compressed_proof=None).compressed_proof is None

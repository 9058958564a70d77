"""Keccak-256 derivations constrained to the BN254 scalar field.

Two strategies coexist and both are kept byte-for-byte compatible with
existing on-chain state:

* the search variant tries bump seeds 255..0 and returns the first hash that
  is below the field modulus once its top byte is cleared;
* the direct variant clears the top byte and returns without checking the
  modulus.
"""
from __future__ import annotations
import typing
from Crypto.Hash import keccak
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG
from ..constants import FIELD_SIZE
from ..errors import AddressDerivationError, InvalidLengthError

ADDRESS_SEED_SIZE = 32


def keccak256(*chunks: bytes) -> bytes:
    hasher = keccak.new(digest_bits=256)
    for chunk in chunks:
        hasher.update(bytes(chunk))
    return hasher.digest()


def is_smaller_than_bn254_field_size_be(value: bytes) -> bool:
    return int.from_bytes(value, "big") < FIELD_SIZE


def hash_to_bn254_field_size_be(data: bytes) -> typing.Optional[tuple[bytes, int]]:
    """Search variant. Returns ``(hash, bump_seed)`` or ``None`` if exhausted."""
    for bump_seed in range(255, -1, -1):
        digest = bytearray(keccak256(data, bytes([bump_seed])))
        digest[0] = 0
        if is_smaller_than_bn254_field_size_be(digest):
            return bytes(digest), bump_seed
    return None


def hashv_to_bn254_field_size_be(chunks: typing.Sequence[bytes]) -> bytes:
    """Direct variant over the concatenation of ``chunks``."""
    digest = bytearray(keccak256(*chunks))
    digest[0] = 0
    return bytes(digest)


def hashv_to_bn254_field_size_be_u8_array(chunks: typing.Sequence[bytes]) -> bytes:
    """Direct variant with a trailing bump byte of 255."""
    digest = bytearray(keccak256(*chunks, bytes([255])))
    digest[0] = 0
    return bytes(digest)


def derive_address_seed(seeds: typing.Sequence[bytes], program_id: Pubkey) -> bytes:
    return hashv_to_bn254_field_size_be([bytes(program_id), *seeds])


def derive_address_seed_v2(seeds: typing.Sequence[bytes]) -> bytes:
    return hashv_to_bn254_field_size_be_u8_array(seeds)


def derive_address(
    seed: bytes,
    address_merkle_tree_pubkey: typing.Optional[Pubkey] = None,
) -> Pubkey:
    """Derive a V1 address from a 32-byte seed and an address tree."""
    if len(seed) != ADDRESS_SEED_SIZE:
        raise InvalidLengthError("seed", ADDRESS_SEED_SIZE, len(seed))
    tree = (
        address_merkle_tree_pubkey
        if address_merkle_tree_pubkey is not None
        else DEFAULT_CONFIG.address_tree
    )
    result = hash_to_bn254_field_size_be(bytes(tree) + bytes(seed))
    if result is None:
        raise AddressDerivationError()
    return Pubkey(result[0])


def derive_address_v2(
    address_seed: bytes,
    address_merkle_tree_pubkey: Pubkey,
    program_id: Pubkey,
) -> Pubkey:
    # Component order is seed, tree, program id.
    if len(address_seed) != ADDRESS_SEED_SIZE:
        raise InvalidLengthError("address_seed", ADDRESS_SEED_SIZE, len(address_seed))
    digest = hashv_to_bn254_field_size_be_u8_array(
        [bytes(address_seed), bytes(address_merkle_tree_pubkey), bytes(program_id)]
    )
    return Pubkey(digest)

from __future__ import annotations
import typing
from dataclasses import dataclass
from solders.pubkey import Pubkey
from ..errors import InvalidLengthError
from .bn254 import BN254
from .tree_info import TreeInfo

DISCRIMINATOR_SIZE = 8
DATA_HASH_SIZE = 32
ADDRESS_SIZE = 32


def _check_length(field: str, value: bytes, expected: int) -> None:
    if len(value) != expected:
        raise InvalidLengthError(field, expected, len(value))


@dataclass(frozen=True)
class CompressedAccountData:
    discriminator: bytes
    data: bytes
    data_hash: bytes

    def __post_init__(self) -> None:
        _check_length("discriminator", self.discriminator, DISCRIMINATOR_SIZE)
        _check_length("data_hash", self.data_hash, DATA_HASH_SIZE)


@dataclass(frozen=True)
class CompressedAccount:
    """Account state as it appears in an instruction's output list."""

    owner: Pubkey
    lamports: int
    address: typing.Optional[bytes] = None
    data: typing.Optional[CompressedAccountData] = None

    def __post_init__(self) -> None:
        if self.address is not None:
            _check_length("address", self.address, ADDRESS_SIZE)


@dataclass(frozen=True)
class MerkleContext:
    tree_info: TreeInfo
    hash: BN254
    leaf_index: int
    prove_by_index: bool = False


@dataclass(frozen=True)
class CompressedAccountWithMerkleContext:
    """Existing compressed account together with its position in a state tree."""

    owner: Pubkey
    lamports: int
    tree_info: TreeInfo
    hash: BN254
    leaf_index: int
    address: typing.Optional[bytes] = None
    data: typing.Optional[CompressedAccountData] = None
    prove_by_index: bool = False
    read_only: bool = False

    def __post_init__(self) -> None:
        if self.address is not None:
            _check_length("address", self.address, ADDRESS_SIZE)

    @property
    def compressed_account(self) -> CompressedAccount:
        return CompressedAccount(
            owner=self.owner,
            lamports=self.lamports,
            address=self.address,
            data=self.data,
        )

    @property
    def merkle_context(self) -> MerkleContext:
        return MerkleContext(
            tree_info=self.tree_info,
            hash=self.hash,
            leaf_index=self.leaf_index,
            prove_by_index=self.prove_by_index,
        )

from __future__ import annotations
import typing
from dataclasses import dataclass
from enum import Enum
from solders.pubkey import Pubkey
from .compressed_account import CompressedAccountWithMerkleContext


class TokenAccountState(Enum):
    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


@dataclass(frozen=True)
class TokenData:
    mint: Pubkey
    owner: Pubkey
    amount: int
    delegate: typing.Optional[Pubkey] = None
    state: TokenAccountState = TokenAccountState.INITIALIZED
    tlv: typing.Optional[bytes] = None


@dataclass(frozen=True)
class ParsedTokenAccount:
    compressed_account: CompressedAccountWithMerkleContext
    parsed: TokenData


@dataclass(frozen=True)
class TokenPoolInfo:
    token_pool_pda: Pubkey
    mint: Pubkey
    token_program: typing.Optional[Pubkey] = None
    pool_index: int = 0


@dataclass(frozen=True)
class TokenTransferOutputData:
    owner: Pubkey
    amount: int
    lamports: typing.Optional[int] = None
    delegate: typing.Optional[Pubkey] = None
    tlv: typing.Optional[bytes] = None

from __future__ import annotations
import typing
from dataclasses import dataclass, field
from solders.pubkey import Pubkey
from ..errors import RecipientCountMismatchError
from ..state import CompressedProof
from ..utils.borsh import BorshWriter
from .common import CompressedCpiContext, PackedMerkleContext, write_proof


@dataclass(frozen=True)
class InputTokenDataWithContext:
    amount: int
    delegate_index: typing.Optional[int]
    merkle_context: PackedMerkleContext
    root_index: int
    lamports: typing.Optional[int] = None
    tlv: typing.Optional[bytes] = None

    def write(self, writer: BorshWriter) -> None:
        writer.write_u64(self.amount)
        writer.write_option(self.delegate_index, writer.write_u8)
        self.merkle_context.write(writer)
        writer.write_u16(self.root_index)
        writer.write_option(self.lamports, writer.write_u64)
        writer.write_option(self.tlv, writer.write_vec)


@dataclass(frozen=True)
class PackedTokenTransferOutputData:
    owner: Pubkey
    amount: int
    lamports: typing.Optional[int]
    merkle_tree_index: int
    tlv: typing.Optional[bytes] = None

    def write(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.owner)
        writer.write_u64(self.amount)
        writer.write_option(self.lamports, writer.write_u64)
        writer.write_u8(self.merkle_tree_index)
        writer.write_option(self.tlv, writer.write_vec)


@dataclass(frozen=True)
class DelegatedTransfer:
    """Marks a transfer signed by the delegate rather than the owner."""

    owner: Pubkey
    delegate_change_account_index: typing.Optional[int] = None

    def write(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.owner)
        writer.write_option(self.delegate_change_account_index, writer.write_u8)


@dataclass
class InstructionDataTransfer:
    """Shared payload of the token ``transfer`` handler.

    Compress and decompress use the same struct: ``is_compress`` selects the
    direction and ``compress_or_decompress_amount`` is set for either.
    """

    mint: Pubkey
    proof: typing.Optional[CompressedProof] = None
    delegated_transfer: typing.Optional[DelegatedTransfer] = None
    input_token_data_with_context: list[InputTokenDataWithContext] = field(
        default_factory=list
    )
    output_compressed_accounts: list[PackedTokenTransferOutputData] = field(
        default_factory=list
    )
    is_compress: bool = False
    compress_or_decompress_amount: typing.Optional[int] = None
    cpi_context: typing.Optional[CompressedCpiContext] = None
    lamports_change_account_merkle_tree_index: typing.Optional[int] = None

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_option(self.proof, lambda p: write_proof(writer, p))
        writer.write_pubkey(self.mint)
        writer.write_option(self.delegated_transfer, lambda d: d.write(writer))
        writer.write_vec_of(
            self.input_token_data_with_context, lambda i: i.write(writer)
        )
        writer.write_vec_of(self.output_compressed_accounts, lambda o: o.write(writer))
        writer.write_bool(self.is_compress)
        writer.write_option(self.compress_or_decompress_amount, writer.write_u64)
        writer.write_option(self.cpi_context, lambda ctx: ctx.write(writer))
        writer.write_option(
            self.lamports_change_account_merkle_tree_index, writer.write_u8
        )
        return writer.to_bytes()


@dataclass
class InstructionDataMintTo:
    recipients: list[Pubkey]
    amounts: list[int]
    lamports: typing.Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.recipients) != len(self.amounts):
            raise RecipientCountMismatchError(len(self.recipients), len(self.amounts))

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_vec_of(self.recipients, writer.write_pubkey)
        writer.write_vec_of(self.amounts, writer.write_u64)
        writer.write_option(self.lamports, writer.write_u64)
        return writer.to_bytes()


@dataclass
class InstructionDataApprove:
    proof: CompressedProof
    mint: Pubkey
    input_token_data_with_context: list[InputTokenDataWithContext]
    delegate: Pubkey
    delegated_amount: int
    delegate_merkle_tree_index: int
    change_account_merkle_tree_index: int
    cpi_context: typing.Optional[CompressedCpiContext] = None
    delegate_lamports: typing.Optional[int] = None

    def encode(self) -> bytes:
        writer = BorshWriter()
        write_proof(writer, self.proof)
        writer.write_pubkey(self.mint)
        writer.write_vec_of(
            self.input_token_data_with_context, lambda i: i.write(writer)
        )
        writer.write_option(self.cpi_context, lambda ctx: ctx.write(writer))
        writer.write_pubkey(self.delegate)
        writer.write_u64(self.delegated_amount)
        writer.write_u8(self.delegate_merkle_tree_index)
        writer.write_u8(self.change_account_merkle_tree_index)
        writer.write_option(self.delegate_lamports, writer.write_u64)
        return writer.to_bytes()


@dataclass
class InstructionDataRevoke:
    proof: CompressedProof
    mint: Pubkey
    input_token_data_with_context: list[InputTokenDataWithContext]
    output_account_merkle_tree_index: int
    cpi_context: typing.Optional[CompressedCpiContext] = None

    def encode(self) -> bytes:
        writer = BorshWriter()
        write_proof(writer, self.proof)
        writer.write_pubkey(self.mint)
        writer.write_vec_of(
            self.input_token_data_with_context, lambda i: i.write(writer)
        )
        writer.write_option(self.cpi_context, lambda ctx: ctx.write(writer))
        writer.write_u8(self.output_account_merkle_tree_index)
        return writer.to_bytes()


@dataclass
class InstructionDataBatchCompress:
    """Compress from one SPL account into a compressed account per pubkey.

    Either ``amounts`` (one per pubkey) or a single ``amount`` paid to every
    pubkey is set. ``index`` and ``bump`` identify the token pool.
    """

    pubkeys: list[Pubkey]
    index: int
    bump: int
    amounts: typing.Optional[list[int]] = None
    lamports: typing.Optional[int] = None
    amount: typing.Optional[int] = None

    def __post_init__(self) -> None:
        if self.amounts is not None and len(self.amounts) != len(self.pubkeys):
            raise RecipientCountMismatchError(len(self.pubkeys), len(self.amounts))

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_vec_of(self.pubkeys, writer.write_pubkey)
        writer.write_option(
            self.amounts, lambda amounts: writer.write_vec_of(amounts, writer.write_u64)
        )
        writer.write_option(self.lamports, writer.write_u64)
        writer.write_option(self.amount, writer.write_u64)
        writer.write_u8(self.index)
        writer.write_u8(self.bump)
        return writer.to_bytes()


@dataclass
class InstructionDataCompressSplTokenAccount:
    owner: Pubkey
    remaining_amount: typing.Optional[int] = None
    cpi_context: typing.Optional[CompressedCpiContext] = None

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_pubkey(self.owner)
        writer.write_option(self.remaining_amount, writer.write_u64)
        writer.write_option(self.cpi_context, lambda ctx: ctx.write(writer))
        return writer.to_bytes()

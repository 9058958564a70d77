from __future__ import annotations
import typing
from dataclasses import dataclass, field
from solders.pubkey import Pubkey
from ..state import CompressedAccount, CompressedProof
from ..utils.borsh import BorshWriter
from .common import CompressedCpiContext, PackedMerkleContext, write_proof


def write_compressed_account(writer: BorshWriter, account: CompressedAccount) -> None:
    writer.write_pubkey(account.owner)
    writer.write_u64(account.lamports)
    writer.write_option(
        account.address, lambda addr: writer.write_fixed_array(addr, 32, "address")
    )

    def _data(data) -> None:
        writer.write_fixed_array(data.discriminator, 8, "discriminator")
        writer.write_vec(data.data)
        writer.write_fixed_array(data.data_hash, 32, "data_hash")

    writer.write_option(account.data, _data)


@dataclass(frozen=True)
class PackedCompressedAccountWithMerkleContext:
    compressed_account: CompressedAccount
    merkle_context: PackedMerkleContext
    root_index: int
    read_only: bool = False

    def write(self, writer: BorshWriter) -> None:
        write_compressed_account(writer, self.compressed_account)
        self.merkle_context.write(writer)
        writer.write_u16(self.root_index)
        writer.write_bool(self.read_only)


@dataclass(frozen=True)
class OutputCompressedAccountWithPackedContext:
    compressed_account: CompressedAccount
    merkle_tree_index: int

    def write(self, writer: BorshWriter) -> None:
        write_compressed_account(writer, self.compressed_account)
        writer.write_u8(self.merkle_tree_index)


@dataclass(frozen=True)
class NewAddressParams:
    seed: bytes
    address_queue_pubkey: Pubkey
    address_merkle_tree_pubkey: Pubkey
    address_merkle_tree_root_index: int


@dataclass(frozen=True)
class NewAddressParamsPacked:
    seed: bytes
    address_queue_account_index: int
    address_merkle_tree_account_index: int
    address_merkle_tree_root_index: int

    def write(self, writer: BorshWriter) -> None:
        writer.write_fixed_array(self.seed, 32, "seed")
        writer.write_u8(self.address_queue_account_index)
        writer.write_u8(self.address_merkle_tree_account_index)
        writer.write_u16(self.address_merkle_tree_root_index)


@dataclass
class InstructionDataInvoke:
    """Payload of the Light System Program ``invoke`` handler."""

    proof: typing.Optional[CompressedProof] = None
    input_compressed_accounts_with_merkle_context: list[
        PackedCompressedAccountWithMerkleContext
    ] = field(default_factory=list)
    output_compressed_accounts: list[OutputCompressedAccountWithPackedContext] = field(
        default_factory=list
    )
    relay_fee: typing.Optional[int] = None
    new_address_params: list[NewAddressParamsPacked] = field(default_factory=list)
    compress_or_decompress_lamports: typing.Optional[int] = None
    is_compress: bool = False

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_option(self.proof, lambda p: write_proof(writer, p))
        writer.write_vec_of(
            self.input_compressed_accounts_with_merkle_context,
            lambda acc: acc.write(writer),
        )
        writer.write_vec_of(
            self.output_compressed_accounts, lambda acc: acc.write(writer)
        )
        writer.write_option(self.relay_fee, writer.write_u64)
        writer.write_vec_of(self.new_address_params, lambda p: p.write(writer))
        writer.write_option(self.compress_or_decompress_lamports, writer.write_u64)
        writer.write_bool(self.is_compress)
        return writer.to_bytes()


@dataclass
class InstructionDataInvokeCpi:
    """Payload of ``invoke_cpi``.

    Same content as :class:`InstructionDataInvoke` but new address params come
    before the account lists, followed by an optional CPI context.
    """

    proof: typing.Optional[CompressedProof] = None
    new_address_params: list[NewAddressParamsPacked] = field(default_factory=list)
    input_compressed_accounts_with_merkle_context: list[
        PackedCompressedAccountWithMerkleContext
    ] = field(default_factory=list)
    output_compressed_accounts: list[OutputCompressedAccountWithPackedContext] = field(
        default_factory=list
    )
    relay_fee: typing.Optional[int] = None
    compress_or_decompress_lamports: typing.Optional[int] = None
    is_compress: bool = False
    cpi_context: typing.Optional[CompressedCpiContext] = None

    def encode(self) -> bytes:
        writer = BorshWriter()
        writer.write_option(self.proof, lambda p: write_proof(writer, p))
        writer.write_vec_of(self.new_address_params, lambda p: p.write(writer))
        writer.write_vec_of(
            self.input_compressed_accounts_with_merkle_context,
            lambda acc: acc.write(writer),
        )
        writer.write_vec_of(
            self.output_compressed_accounts, lambda acc: acc.write(writer)
        )
        writer.write_option(self.relay_fee, writer.write_u64)
        writer.write_option(self.compress_or_decompress_lamports, writer.write_u64)
        writer.write_bool(self.is_compress)
        writer.write_option(self.cpi_context, lambda ctx: ctx.write(writer))
        return writer.to_bytes()

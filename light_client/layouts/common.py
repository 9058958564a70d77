from __future__ import annotations
from dataclasses import dataclass
from ..state import CompressedProof
from ..utils.borsh import BorshWriter


def write_proof(writer: BorshWriter, proof: CompressedProof) -> None:
    writer.write_fixed_array(proof.a, 32, "proof.a")
    writer.write_fixed_array(proof.b, 64, "proof.b")
    writer.write_fixed_array(proof.c, 32, "proof.c")


def encode_instruction_data(discriminator: bytes, payload: bytes) -> bytes:
    """Frame ``payload`` as ``discriminator || u32 length || payload``."""
    writer = BorshWriter()
    writer.write_fixed_array(discriminator)
    writer.write_u32(len(payload))
    writer.write_fixed_array(payload)
    return writer.to_bytes()


@dataclass(frozen=True)
class PackedMerkleContext:
    merkle_tree_pubkey_index: int
    queue_pubkey_index: int
    leaf_index: int
    prove_by_index: bool

    def write(self, writer: BorshWriter) -> None:
        writer.write_u8(self.merkle_tree_pubkey_index)
        writer.write_u8(self.queue_pubkey_index)
        writer.write_u32(self.leaf_index)
        writer.write_bool(self.prove_by_index)


@dataclass(frozen=True)
class CompressedCpiContext:
    """Lets several programs in one transaction share a single validity proof.

    ``first_set_context`` wipes whatever an earlier, unrelated transaction left
    in the context account; ``set_context`` marks a later participating call.
    """

    set_context: bool
    first_set_context: bool
    cpi_context_account_index: int

    @classmethod
    def first(cls, cpi_context_account_index: int = 0) -> "CompressedCpiContext":
        return cls(
            set_context=False,
            first_set_context=True,
            cpi_context_account_index=cpi_context_account_index,
        )

    @classmethod
    def set(cls, cpi_context_account_index: int = 0) -> "CompressedCpiContext":
        return cls(
            set_context=True,
            first_set_context=False,
            cpi_context_account_index=cpi_context_account_index,
        )

    def write(self, writer: BorshWriter) -> None:
        writer.write_bool(self.set_context)
        writer.write_bool(self.first_set_context)
        writer.write_u8(self.cpi_context_account_index)

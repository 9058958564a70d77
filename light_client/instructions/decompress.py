from __future__ import annotations
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..layouts import InstructionDataInvoke
from ..output_state import create_decompress_output_state
from ..pack import pack_compressed_accounts
from ..state import CompressedAccountWithMerkleContext, CompressedProof
from .invoke import invoke


class DecompressArgs(typing.TypedDict):
    lamports: int
    input_compressed_accounts: list[CompressedAccountWithMerkleContext]
    recent_input_state_root_indices: list[int]
    recent_validity_proof: typing.Optional[CompressedProof]


class DecompressAccounts(typing.TypedDict):
    payer: Pubkey
    to_address: Pubkey


def decompress(
    args: DecompressArgs,
    accounts: DecompressAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    outputs = create_decompress_output_state(
        args["input_compressed_accounts"], args["lamports"]
    )
    packed = pack_compressed_accounts(
        args["input_compressed_accounts"],
        args["recent_input_state_root_indices"],
        outputs,
    )
    data = InstructionDataInvoke(
        proof=args["recent_validity_proof"],
        input_compressed_accounts_with_merkle_context=packed.packed_input_compressed_accounts,
        output_compressed_accounts=packed.packed_output_compressed_accounts,
        compress_or_decompress_lamports=args["lamports"],
        is_compress=False,
    )
    return invoke(
        {"data": data, "remaining_accounts": packed.remaining_accounts},
        {
            "fee_payer": accounts["payer"],
            "authority": accounts["payer"],
            "sol_pool_pda": config.sol_pool_pda,
            "decompression_recipient": accounts["to_address"],
        },
        config,
    )

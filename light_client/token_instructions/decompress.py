from __future__ import annotations
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import TRANSFER_DISCRIMINATOR
from ..layouts import InstructionDataTransfer, encode_instruction_data
from ..output_state import create_token_decompress_output_state
from ..pack import pack_compressed_token_accounts
from ..state import CompressedProof, ParsedTokenAccount, TokenPoolInfo
from .accounts import lamports_change_tree_index, require_inputs, transfer_account_metas


class DecompressArgs(typing.TypedDict):
    amount: int
    input_compressed_token_accounts: list[ParsedTokenAccount]
    recent_input_state_root_indices: list[int]
    recent_validity_proof: typing.Optional[CompressedProof]
    token_pool_info: TokenPoolInfo


class DecompressAccounts(typing.TypedDict):
    payer: Pubkey
    to_address: Pubkey


def decompress(
    args: DecompressArgs,
    accounts: DecompressAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Release ``amount`` compressed tokens into the SPL account ``to_address``."""
    inputs = args["input_compressed_token_accounts"]
    require_inputs("decompress", inputs)
    outputs = create_token_decompress_output_state(inputs, args["amount"])
    packed = pack_compressed_token_accounts(
        inputs, args["recent_input_state_root_indices"], outputs
    )
    lamports_change_index = lamports_change_tree_index(
        inputs, outputs, packed.remaining_accounts
    )
    token_pool_info = args["token_pool_info"]
    transfer_data = InstructionDataTransfer(
        mint=inputs[0].parsed.mint,
        proof=args["recent_validity_proof"],
        input_token_data_with_context=packed.input_token_data_with_context,
        output_compressed_accounts=packed.packed_output_token_data,
        is_compress=False,
        compress_or_decompress_amount=args["amount"],
        lamports_change_account_merkle_tree_index=lamports_change_index,
    )
    keys = transfer_account_metas(
        accounts["payer"],
        inputs[0].parsed.owner,
        token_pool_pda=token_pool_info.token_pool_pda,
        compress_or_decompress_token_account=accounts["to_address"],
        token_program=token_pool_info.token_program or config.spl_token_program,
        config=config,
    )
    keys += packed.remaining_accounts.to_account_metas()
    data = encode_instruction_data(TRANSFER_DISCRIMINATOR, transfer_data.encode())
    return Instruction(config.compressed_token_program, data, keys)

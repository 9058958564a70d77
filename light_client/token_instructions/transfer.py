from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import TRANSFER_DISCRIMINATOR
from ..layouts import InstructionDataTransfer, encode_instruction_data
from ..output_state import create_token_transfer_output_state
from ..pack import pack_compressed_token_accounts
from ..state import CompressedProof, ParsedTokenAccount
from .accounts import lamports_change_tree_index, require_inputs, transfer_account_metas

logger = logging.getLogger(__name__)


class TransferArgs(typing.TypedDict):
    amount: int
    input_compressed_token_accounts: list[ParsedTokenAccount]
    recent_input_state_root_indices: list[int]
    recent_validity_proof: typing.Optional[CompressedProof]


class TransferAccounts(typing.TypedDict):
    payer: Pubkey
    to_address: Pubkey


def transfer(
    args: TransferArgs,
    accounts: TransferAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    inputs = args["input_compressed_token_accounts"]
    require_inputs("transfer", inputs)
    outputs = create_token_transfer_output_state(
        inputs, accounts["to_address"], args["amount"]
    )
    packed = pack_compressed_token_accounts(
        inputs, args["recent_input_state_root_indices"], outputs
    )
    lamports_change_index = lamports_change_tree_index(
        inputs, outputs, packed.remaining_accounts
    )
    transfer_data = InstructionDataTransfer(
        mint=inputs[0].parsed.mint,
        proof=args["recent_validity_proof"],
        input_token_data_with_context=packed.input_token_data_with_context,
        output_compressed_accounts=packed.packed_output_token_data,
        lamports_change_account_merkle_tree_index=lamports_change_index,
    )
    keys = transfer_account_metas(accounts["payer"], inputs[0].parsed.owner, config=config)
    keys += packed.remaining_accounts.to_account_metas()
    payload = transfer_data.encode()
    logger.debug(
        "token transfer of %d: %d inputs, %d outputs, payload %d bytes",
        args["amount"],
        len(inputs),
        len(outputs),
        len(payload),
    )
    data = encode_instruction_data(TRANSFER_DISCRIMINATOR, payload)
    return Instruction(config.compressed_token_program, data, keys)

from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import APPROVE_DISCRIMINATOR
from ..layouts import InstructionDataApprove, encode_instruction_data
from ..output_state import create_approve_output_state
from ..pack import pack_compressed_token_accounts, select_output_tree
from ..state import CompressedProof, ParsedTokenAccount
from .accounts import delegation_account_metas, require_inputs, require_proof

logger = logging.getLogger(__name__)


class ApproveArgs(typing.TypedDict):
    amount: int
    input_compressed_token_accounts: list[ParsedTokenAccount]
    recent_input_state_root_indices: list[int]
    recent_validity_proof: typing.Optional[CompressedProof]


class ApproveAccounts(typing.TypedDict):
    payer: Pubkey
    delegate: Pubkey


def approve(
    args: ApproveArgs,
    accounts: ApproveAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Delegate ``amount`` of the inputs' balance to ``delegate``.

    The program builds the delegated and change outputs itself, both in the
    tree that receives the inputs' new state.
    """
    inputs = args["input_compressed_token_accounts"]
    require_inputs("approve", inputs)
    proof = require_proof("approve", args["recent_validity_proof"])
    outputs = create_approve_output_state(inputs, accounts["delegate"], args["amount"])
    delegated = outputs[-1]
    packed = pack_compressed_token_accounts(
        inputs, args["recent_input_state_root_indices"], []
    )
    output_tree_index = packed.remaining_accounts.index_of_or_add(
        select_output_tree(inputs[0].compressed_account.tree_info)
    )
    approve_data = InstructionDataApprove(
        proof=proof,
        mint=inputs[0].parsed.mint,
        input_token_data_with_context=packed.input_token_data_with_context,
        delegate=delegated.delegate,
        delegated_amount=delegated.amount,
        delegate_merkle_tree_index=output_tree_index,
        change_account_merkle_tree_index=output_tree_index,
    )
    keys = delegation_account_metas(accounts["payer"], inputs[0].parsed.owner, config)
    keys += packed.remaining_accounts.to_account_metas()
    payload = approve_data.encode()
    logger.debug("approve: %d outputs expected, payload %d bytes", len(outputs), len(payload))
    data = encode_instruction_data(APPROVE_DISCRIMINATOR, payload)
    return Instruction(config.compressed_token_program, data, keys)

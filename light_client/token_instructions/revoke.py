from __future__ import annotations
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import REVOKE_DISCRIMINATOR
from ..layouts import InstructionDataRevoke, encode_instruction_data
from ..output_state import validate_same_owner
from ..pack import pack_compressed_token_accounts, select_output_tree
from ..state import CompressedProof, ParsedTokenAccount
from .accounts import delegation_account_metas, require_inputs, require_proof


class RevokeArgs(typing.TypedDict):
    input_compressed_token_accounts: list[ParsedTokenAccount]
    recent_input_state_root_indices: list[int]
    recent_validity_proof: typing.Optional[CompressedProof]


class RevokeAccounts(typing.TypedDict):
    payer: Pubkey


def revoke(
    args: RevokeArgs,
    accounts: RevokeAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    inputs = args["input_compressed_token_accounts"]
    require_inputs("revoke", inputs)
    proof = require_proof("revoke", args["recent_validity_proof"])
    validate_same_owner([account.parsed.owner for account in inputs])
    packed = pack_compressed_token_accounts(
        inputs, args["recent_input_state_root_indices"], []
    )
    output_tree_index = packed.remaining_accounts.index_of_or_add(
        select_output_tree(inputs[0].compressed_account.tree_info)
    )
    revoke_data = InstructionDataRevoke(
        proof=proof,
        mint=inputs[0].parsed.mint,
        input_token_data_with_context=packed.input_token_data_with_context,
        output_account_merkle_tree_index=output_tree_index,
    )
    keys = delegation_account_metas(accounts["payer"], inputs[0].parsed.owner, config)
    keys += packed.remaining_accounts.to_account_metas()
    data = encode_instruction_data(REVOKE_DISCRIMINATOR, revoke_data.encode())
    return Instruction(config.compressed_token_program, data, keys)

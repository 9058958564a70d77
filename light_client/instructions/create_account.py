from __future__ import annotations
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..layouts import InstructionDataInvoke, NewAddressParams
from ..output_state import create_new_address_output_state
from ..pack import pack_compressed_accounts, pack_new_address_params
from ..state import CompressedAccountWithMerkleContext, CompressedProof, TreeInfo
from .invoke import invoke


class _CreateAccountArgsRequired(typing.TypedDict):
    new_address_params: NewAddressParams
    new_address: bytes
    recent_validity_proof: typing.Optional[CompressedProof]


class CreateAccountArgs(_CreateAccountArgsRequired, total=False):
    output_state_tree_info: TreeInfo
    input_compressed_accounts: list[CompressedAccountWithMerkleContext]
    input_state_root_indices: list[int]
    lamports: int


class CreateAccountAccounts(typing.TypedDict):
    payer: Pubkey


def create_account(
    args: CreateAccountArgs,
    accounts: CreateAccountAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Create a compressed account at ``new_address``, owned by ``payer``.

    When inputs are given they fund ``lamports`` and decide the output tree;
    otherwise ``output_state_tree_info`` is required.
    """
    inputs = args.get("input_compressed_accounts") or []
    outputs = create_new_address_output_state(
        args["new_address"],
        accounts["payer"],
        args.get("lamports"),
        inputs,
    )
    packed = pack_compressed_accounts(
        inputs,
        args.get("input_state_root_indices") or [],
        outputs,
        output_state_tree_info=None if inputs else args.get("output_state_tree_info"),
    )
    new_address_params = pack_new_address_params(
        [args["new_address_params"]], packed.remaining_accounts
    )
    data = InstructionDataInvoke(
        proof=args["recent_validity_proof"],
        input_compressed_accounts_with_merkle_context=packed.packed_input_compressed_accounts,
        output_compressed_accounts=packed.packed_output_compressed_accounts,
        new_address_params=new_address_params,
    )
    return invoke(
        {"data": data, "remaining_accounts": packed.remaining_accounts},
        {
            "fee_payer": accounts["payer"],
            "authority": accounts["payer"],
            "sol_pool_pda": None,
            "decompression_recipient": None,
        },
        config,
    )

from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..layouts import InstructionDataInvoke
from ..output_state import create_transfer_output_state
from ..pack import pack_compressed_accounts
from ..state import CompressedAccountWithMerkleContext, CompressedProof
from .invoke import invoke

logger = logging.getLogger(__name__)


class TransferArgs(typing.TypedDict):
    lamports: int
    input_compressed_accounts: list[CompressedAccountWithMerkleContext]
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
    """Send compressed lamports; any remainder returns to the inputs' owner."""
    outputs = create_transfer_output_state(
        args["input_compressed_accounts"], accounts["to_address"], args["lamports"]
    )
    packed = pack_compressed_accounts(
        args["input_compressed_accounts"],
        args["recent_input_state_root_indices"],
        outputs,
    )
    logger.debug(
        "transfer: %d inputs -> %d outputs",
        len(args["input_compressed_accounts"]),
        len(outputs),
    )
    data = InstructionDataInvoke(
        proof=args["recent_validity_proof"],
        input_compressed_accounts_with_merkle_context=packed.packed_input_compressed_accounts,
        output_compressed_accounts=packed.packed_output_compressed_accounts,
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

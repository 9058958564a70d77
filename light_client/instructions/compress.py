from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..layouts import InstructionDataInvoke
from ..pack import pack_compressed_accounts
from ..state import CompressedAccount, TreeInfo
from .invoke import invoke

logger = logging.getLogger(__name__)


class CompressArgs(typing.TypedDict):
    lamports: int
    output_state_tree_info: TreeInfo


class CompressAccounts(typing.TypedDict):
    payer: Pubkey
    to_address: Pubkey


def compress(
    args: CompressArgs,
    accounts: CompressAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Move ``lamports`` from ``payer`` into a new compressed account."""
    output = CompressedAccount(owner=accounts["to_address"], lamports=args["lamports"])
    packed = pack_compressed_accounts(
        [],
        [],
        [output],
        output_state_tree_info=args["output_state_tree_info"],
    )
    data = InstructionDataInvoke(
        proof=None,
        input_compressed_accounts_with_merkle_context=packed.packed_input_compressed_accounts,
        output_compressed_accounts=packed.packed_output_compressed_accounts,
        compress_or_decompress_lamports=args["lamports"],
        is_compress=True,
    )
    logger.debug(
        "compress " + str(args["lamports"]) + " lamports to " + str(accounts["to_address"])
    )
    return invoke(
        {"data": data, "remaining_accounts": packed.remaining_accounts},
        {
            "fee_payer": accounts["payer"],
            "authority": accounts["payer"],
            "sol_pool_pda": config.sol_pool_pda,
            "decompression_recipient": None,
        },
        config,
    )

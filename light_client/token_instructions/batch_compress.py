from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import BATCH_COMPRESS_DISCRIMINATOR
from ..layouts import InstructionDataBatchCompress, encode_instruction_data
from ..pack import RemainingAccounts, select_output_tree
from ..state import TokenPoolInfo, TreeInfo
from .accounts import token_pool_bump, transfer_account_metas

logger = logging.getLogger(__name__)


class BatchCompressArgs(typing.TypedDict):
    to_addresses: list[Pubkey]
    amount: typing.Union[int, list[int]]
    output_state_tree_info: TreeInfo
    token_pool_info: TokenPoolInfo


class BatchCompressAccounts(typing.TypedDict):
    payer: Pubkey
    owner: Pubkey
    source: Pubkey


def batch_compress(
    args: BatchCompressArgs,
    accounts: BatchCompressAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Compress SPL tokens from ``source`` into one account per ``to_addresses``.

    A single int ``amount`` is paid to every recipient; a list pays each its own.
    """
    token_pool_info = args["token_pool_info"]
    amount = args["amount"]
    per_recipient = isinstance(amount, (list, tuple))
    batch_data = InstructionDataBatchCompress(
        pubkeys=list(args["to_addresses"]),
        amounts=list(amount) if per_recipient else None,
        amount=None if per_recipient else amount,
        index=token_pool_info.pool_index,
        bump=token_pool_bump(token_pool_info, config),
    )
    remaining_accounts = RemainingAccounts(
        [select_output_tree(args["output_state_tree_info"])]
    )
    keys = transfer_account_metas(
        accounts["payer"],
        accounts["owner"],
        token_pool_pda=token_pool_info.token_pool_pda,
        compress_or_decompress_token_account=accounts["source"],
        token_program=token_pool_info.token_program or config.spl_token_program,
        config=config,
    )
    keys += remaining_accounts.to_account_metas()
    payload = batch_data.encode()
    logger.debug(
        "batch_compress to %d recipients, payload %d bytes",
        len(batch_data.pubkeys),
        len(payload),
    )
    data = encode_instruction_data(BATCH_COMPRESS_DISCRIMINATOR, payload)
    return Instruction(config.compressed_token_program, data, keys)

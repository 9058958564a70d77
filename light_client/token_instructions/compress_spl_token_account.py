from __future__ import annotations
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import COMPRESS_SPL_TOKEN_ACCOUNT_DISCRIMINATOR
from ..layouts import InstructionDataCompressSplTokenAccount
from ..pack import RemainingAccounts, select_output_tree
from ..state import TokenPoolInfo, TreeInfo
from .accounts import transfer_account_metas


class _CompressSplTokenAccountArgsRequired(typing.TypedDict):
    output_state_tree_info: TreeInfo
    token_pool_info: TokenPoolInfo


class CompressSplTokenAccountArgs(_CompressSplTokenAccountArgsRequired, total=False):
    remaining_amount: int


class CompressSplTokenAccountAccounts(typing.TypedDict):
    payer: Pubkey
    owner: Pubkey
    token_account: Pubkey


def compress_spl_token_account(
    args: CompressSplTokenAccountArgs,
    accounts: CompressSplTokenAccountAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Compress the balance of ``token_account``, leaving ``remaining_amount`` behind."""
    compress_data = InstructionDataCompressSplTokenAccount(
        owner=accounts["owner"], remaining_amount=args.get("remaining_amount")
    )
    token_pool_info = args["token_pool_info"]
    remaining_accounts = RemainingAccounts(
        [select_output_tree(args["output_state_tree_info"])]
    )
    keys = transfer_account_metas(
        accounts["payer"],
        accounts["owner"],
        token_pool_pda=token_pool_info.token_pool_pda,
        compress_or_decompress_token_account=accounts["token_account"],
        token_program=token_pool_info.token_program or config.spl_token_program,
        config=config,
    )
    keys += remaining_accounts.to_account_metas()
    data = COMPRESS_SPL_TOKEN_ACCOUNT_DISCRIMINATOR + compress_data.encode()
    return Instruction(config.compressed_token_program, data, keys)

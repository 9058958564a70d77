from __future__ import annotations
import logging
import typing
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import MINT_TO_DISCRIMINATOR
from ..layouts import InstructionDataMintTo
from ..pack import select_output_tree
from ..state import TokenPoolInfo, TreeInfo

logger = logging.getLogger(__name__)


class MintToArgs(typing.TypedDict):
    to_pubkeys: list[Pubkey]
    amounts: list[int]
    output_state_tree_info: TreeInfo
    token_pool_info: TokenPoolInfo


class MintToAccounts(typing.TypedDict):
    fee_payer: Pubkey
    authority: Pubkey
    mint: Pubkey


def mint_to(
    args: MintToArgs,
    accounts: MintToAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Mint compressed tokens to each of ``to_pubkeys``.

    The mint authority signs; the minted supply is held by the token pool.
    """
    mint_data = InstructionDataMintTo(
        recipients=list(args["to_pubkeys"]), amounts=list(args["amounts"])
    )
    token_pool_info = args["token_pool_info"]
    token_program = token_pool_info.token_program or config.spl_token_program
    keys: list[AccountMeta] = [
        AccountMeta(pubkey=accounts["fee_payer"], is_signer=True, is_writable=True),
        AccountMeta(pubkey=accounts["authority"], is_signer=True, is_writable=False),
        AccountMeta(pubkey=config.cpi_authority_pda, is_signer=False, is_writable=False),
        AccountMeta(pubkey=accounts["mint"], is_signer=False, is_writable=True),
        AccountMeta(pubkey=token_pool_info.token_pool_pda, is_signer=False, is_writable=True),
        AccountMeta(pubkey=token_program, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.light_system_program, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.registered_program_pda, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.noop_program, is_signer=False, is_writable=False),
        AccountMeta(
            pubkey=config.account_compression_authority, is_signer=False, is_writable=False
        ),
        AccountMeta(
            pubkey=config.account_compression_program, is_signer=False, is_writable=False
        ),
        AccountMeta(
            pubkey=select_output_tree(args["output_state_tree_info"]),
            is_signer=False,
            is_writable=True,
        ),
        AccountMeta(pubkey=config.compressed_token_program, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.system_program, is_signer=False, is_writable=False),
        # No lamports are attached, so the sol pool slot holds the placeholder.
        AccountMeta(pubkey=config.compressed_token_program, is_signer=False, is_writable=False),
    ]
    encoded_args = mint_data.encode()
    logger.debug(
        "mint_to %d recipients, payload %d bytes",
        len(mint_data.recipients),
        len(encoded_args),
    )
    data = MINT_TO_DISCRIMINATOR + encoded_args
    return Instruction(config.compressed_token_program, data, keys)

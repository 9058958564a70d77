from __future__ import annotations
import logging
import typing
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import CREATE_TOKEN_POOL_DISCRIMINATOR
from .accounts import derive_token_pool_pda

logger = logging.getLogger(__name__)


class _CreateTokenPoolAccountsRequired(typing.TypedDict):
    fee_payer: Pubkey
    mint: Pubkey


class CreateTokenPoolAccounts(_CreateTokenPoolAccountsRequired, total=False):
    token_program: Pubkey


def create_token_pool(
    accounts: CreateTokenPoolAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    token_program = accounts.get("token_program") or config.spl_token_program
    token_pool_pda = derive_token_pool_pda(accounts["mint"], 0, config)
    logger.debug("token pool for " + str(accounts["mint"]) + ": " + str(token_pool_pda))
    keys: list[AccountMeta] = [
        AccountMeta(pubkey=accounts["fee_payer"], is_signer=True, is_writable=True),
        AccountMeta(pubkey=token_pool_pda, is_signer=False, is_writable=True),
        AccountMeta(pubkey=config.system_program, is_signer=False, is_writable=False),
        AccountMeta(pubkey=accounts["mint"], is_signer=False, is_writable=True),
        AccountMeta(pubkey=token_program, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.cpi_authority_pda, is_signer=False, is_writable=False),
    ]
    return Instruction(
        config.compressed_token_program, CREATE_TOKEN_POOL_DISCRIMINATOR, keys
    )

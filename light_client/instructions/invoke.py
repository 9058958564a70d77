from __future__ import annotations
import logging
import typing
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import INVOKE_CPI_DISCRIMINATOR, INVOKE_DISCRIMINATOR
from ..layouts import (
    InstructionDataInvoke,
    InstructionDataInvokeCpi,
    encode_instruction_data,
)
from ..pack import RemainingAccounts

logger = logging.getLogger(__name__)


class InvokeArgs(typing.TypedDict):
    data: InstructionDataInvoke
    remaining_accounts: RemainingAccounts


class InvokeAccounts(typing.TypedDict):
    fee_payer: Pubkey
    authority: Pubkey
    sol_pool_pda: typing.Optional[Pubkey]
    decompression_recipient: typing.Optional[Pubkey]


class InvokeCpiArgs(typing.TypedDict):
    data: InstructionDataInvokeCpi
    remaining_accounts: RemainingAccounts


class InvokeCpiAccounts(typing.TypedDict):
    fee_payer: Pubkey
    authority: Pubkey
    invoking_program: Pubkey
    sol_pool_pda: typing.Optional[Pubkey]
    decompression_recipient: typing.Optional[Pubkey]
    cpi_context_account: typing.Optional[Pubkey]


def _optional_meta(key: typing.Optional[Pubkey], placeholder: Pubkey) -> AccountMeta:
    # Absent slots keep their position, filled with the program's own id.
    if key is None:
        return AccountMeta(pubkey=placeholder, is_signer=False, is_writable=False)
    return AccountMeta(pubkey=key, is_signer=False, is_writable=True)


def invoke_account_metas(
    fee_payer: Pubkey,
    authority: Pubkey,
    sol_pool_pda: typing.Optional[Pubkey] = None,
    decompression_recipient: typing.Optional[Pubkey] = None,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> list[AccountMeta]:
    program_id = config.light_system_program
    return [
        AccountMeta(pubkey=fee_payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
        AccountMeta(pubkey=config.registered_program_pda, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.noop_program, is_signer=False, is_writable=False),
        AccountMeta(
            pubkey=config.account_compression_authority, is_signer=False, is_writable=False
        ),
        AccountMeta(
            pubkey=config.account_compression_program, is_signer=False, is_writable=False
        ),
        _optional_meta(sol_pool_pda, program_id),
        _optional_meta(decompression_recipient, program_id),
        AccountMeta(pubkey=config.system_program, is_signer=False, is_writable=False),
    ]


def invoke(
    args: InvokeArgs,
    accounts: InvokeAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    keys = invoke_account_metas(
        accounts["fee_payer"],
        accounts["authority"],
        accounts["sol_pool_pda"],
        accounts["decompression_recipient"],
        config,
    )
    keys += args["remaining_accounts"].to_account_metas()
    payload = args["data"].encode()
    logger.debug("invoke payload: %d bytes, %d accounts", len(payload), len(keys))
    data = encode_instruction_data(INVOKE_DISCRIMINATOR, payload)
    return Instruction(config.light_system_program, data, keys)


def invoke_cpi(
    args: InvokeCpiArgs,
    accounts: InvokeCpiAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Build ``invoke_cpi`` as issued by ``invoking_program`` on a caller's behalf."""
    program_id = config.light_system_program
    keys: list[AccountMeta] = [
        AccountMeta(pubkey=accounts["fee_payer"], is_signer=True, is_writable=True),
        AccountMeta(pubkey=accounts["authority"], is_signer=True, is_writable=False),
        AccountMeta(pubkey=config.registered_program_pda, is_signer=False, is_writable=False),
        AccountMeta(pubkey=config.noop_program, is_signer=False, is_writable=False),
        AccountMeta(
            pubkey=config.account_compression_authority, is_signer=False, is_writable=False
        ),
        AccountMeta(
            pubkey=config.account_compression_program, is_signer=False, is_writable=False
        ),
        AccountMeta(pubkey=accounts["invoking_program"], is_signer=False, is_writable=False),
        _optional_meta(accounts["sol_pool_pda"], program_id),
        _optional_meta(accounts["decompression_recipient"], program_id),
        AccountMeta(pubkey=config.system_program, is_signer=False, is_writable=False),
        _optional_meta(accounts["cpi_context_account"], program_id),
    ]
    keys += args["remaining_accounts"].to_account_metas()
    payload = args["data"].encode()
    logger.debug("invoke_cpi payload: %d bytes, %d accounts", len(payload), len(keys))
    data = encode_instruction_data(INVOKE_CPI_DISCRIMINATOR, payload)
    return Instruction(program_id, data, keys)

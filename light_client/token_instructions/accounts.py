"""Fixed account-meta prefixes of the compressed token program handlers."""
from __future__ import annotations
import typing
from solders.instruction import AccountMeta
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import POOL_SEED
from ..errors import NoInputAccountsError, ValidityProofRequiredError
from ..output_state import sum_up_lamports
from ..pack import RemainingAccounts, select_output_tree
from ..state import CompressedProof, ParsedTokenAccount, TokenPoolInfo, TokenTransferOutputData


def derive_token_pool_pda(
    mint: Pubkey, pool_index: int = 0, config: LightProtocolConfig = DEFAULT_CONFIG
) -> Pubkey:
    """Token pool PDA holding the SPL side of ``mint``.

    Pool 0 is seeded by the mint alone; later pools append their index byte.
    """
    pda, _ = _find_token_pool(mint, pool_index, config)
    return pda


def token_pool_bump(
    token_pool_info: TokenPoolInfo, config: LightProtocolConfig = DEFAULT_CONFIG
) -> int:
    _, bump = _find_token_pool(token_pool_info.mint, token_pool_info.pool_index, config)
    return bump


def _find_token_pool(
    mint: Pubkey, pool_index: int, config: LightProtocolConfig
) -> tuple[Pubkey, int]:
    seeds = [POOL_SEED, bytes(mint)]
    if pool_index > 0:
        seeds.append(bytes([pool_index]))
    return Pubkey.find_program_address(seeds, config.compressed_token_program)


def require_inputs(instruction: str, inputs: typing.Sequence[ParsedTokenAccount]) -> None:
    if not inputs:
        raise NoInputAccountsError(instruction)


def require_proof(
    instruction: str, proof: typing.Optional[CompressedProof]
) -> CompressedProof:
    if proof is None:
        raise ValidityProofRequiredError(instruction)
    return proof


def _readonly(key: Pubkey) -> AccountMeta:
    return AccountMeta(pubkey=key, is_signer=False, is_writable=False)


def _optional_meta(key: typing.Optional[Pubkey], placeholder: Pubkey) -> AccountMeta:
    if key is None:
        return _readonly(placeholder)
    return AccountMeta(pubkey=key, is_signer=False, is_writable=True)


def _light_system_metas(
    fee_payer: Pubkey, authority: Pubkey, config: LightProtocolConfig
) -> list[AccountMeta]:
    return [
        AccountMeta(pubkey=fee_payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
        _readonly(config.cpi_authority_pda),
        _readonly(config.light_system_program),
        _readonly(config.registered_program_pda),
        _readonly(config.noop_program),
        _readonly(config.account_compression_authority),
        _readonly(config.account_compression_program),
        _readonly(config.compressed_token_program),
    ]


def transfer_account_metas(
    fee_payer: Pubkey,
    authority: Pubkey,
    token_pool_pda: typing.Optional[Pubkey] = None,
    compress_or_decompress_token_account: typing.Optional[Pubkey] = None,
    token_program: typing.Optional[Pubkey] = None,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> list[AccountMeta]:
    """Accounts of ``transfer``; the SPL slots are only set to (de)compress."""
    placeholder = config.compressed_token_program
    keys = _light_system_metas(fee_payer, authority, config)
    keys += [
        _optional_meta(token_pool_pda, placeholder),
        _optional_meta(compress_or_decompress_token_account, placeholder),
        _readonly(token_program if token_program is not None else placeholder),
        _readonly(config.system_program),
    ]
    return keys


def delegation_account_metas(
    fee_payer: Pubkey,
    authority: Pubkey,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> list[AccountMeta]:
    """Accounts shared by ``approve`` and ``revoke``."""
    keys = _light_system_metas(fee_payer, authority, config)
    keys.append(_readonly(config.system_program))
    return keys


def lamports_change_tree_index(
    inputs: typing.Sequence[ParsedTokenAccount],
    outputs: typing.Sequence[TokenTransferOutputData],
    remaining_accounts: RemainingAccounts,
) -> typing.Optional[int]:
    """Slot of the tree that returns leftover input lamports to the owner.

    ``None`` when the outputs already carry every input lamport.
    """
    input_lamports = sum_up_lamports(account.compressed_account for account in inputs)
    output_lamports = sum(output.lamports or 0 for output in outputs)
    if input_lamports <= output_lamports:
        return None
    return remaining_accounts.index_of_or_add(
        select_output_tree(inputs[0].compressed_account.tree_info)
    )

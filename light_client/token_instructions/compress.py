from __future__ import annotations
import logging
import typing
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from ..config import DEFAULT_CONFIG, LightProtocolConfig
from ..constants import TRANSFER_DISCRIMINATOR
from ..errors import RecipientCountMismatchError
from ..layouts import InstructionDataTransfer, encode_instruction_data
from ..pack import pack_compressed_token_accounts
from ..state import TokenPoolInfo, TokenTransferOutputData, TreeInfo
from .accounts import transfer_account_metas

logger = logging.getLogger(__name__)


class _CompressArgsRequired(typing.TypedDict):
    amount: typing.Union[int, list[int]]
    output_state_tree_info: TreeInfo
    token_pool_info: TokenPoolInfo


class CompressArgs(_CompressArgsRequired, total=False):
    to_address: typing.Union[Pubkey, list[Pubkey]]


class CompressAccounts(typing.TypedDict):
    payer: Pubkey
    owner: Pubkey
    source: Pubkey
    mint: Pubkey


def _as_list(value: typing.Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def compress(
    args: CompressArgs,
    accounts: CompressAccounts,
    config: LightProtocolConfig = DEFAULT_CONFIG,
) -> Instruction:
    """Move SPL tokens from ``source`` into compressed accounts.

    ``amount`` and ``to_address`` may be lists of equal length to fan out to
    several recipients; ``to_address`` defaults to ``owner``.
    """
    amounts = _as_list(args["amount"])
    to_address = args.get("to_address")
    recipients = _as_list(accounts["owner"] if to_address is None else to_address)
    if len(amounts) != len(recipients):
        raise RecipientCountMismatchError(len(recipients), len(amounts))
    outputs = [
        TokenTransferOutputData(owner=recipient, amount=amount)
        for recipient, amount in zip(recipients, amounts)
    ]
    packed = pack_compressed_token_accounts(
        [], [], outputs, output_state_tree_info=args["output_state_tree_info"]
    )
    token_pool_info = args["token_pool_info"]
    transfer_data = InstructionDataTransfer(
        mint=accounts["mint"],
        output_compressed_accounts=packed.packed_output_token_data,
        is_compress=True,
        compress_or_decompress_amount=sum(amounts),
    )
    keys = transfer_account_metas(
        accounts["payer"],
        accounts["owner"],
        token_pool_pda=token_pool_info.token_pool_pda,
        compress_or_decompress_token_account=accounts["source"],
        token_program=token_pool_info.token_program or config.spl_token_program,
        config=config,
    )
    keys += packed.remaining_accounts.to_account_metas()
    payload = transfer_data.encode()
    logger.debug("compress to %d recipients, payload %d bytes", len(outputs), len(payload))
    data = encode_instruction_data(TRANSFER_DISCRIMINATOR, payload)
    return Instruction(config.compressed_token_program, data, keys)

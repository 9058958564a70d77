"""Balance arithmetic that turns spent inputs into the outputs to create.

Every function here is pure. Outputs always add up to the summed inputs; a
request larger than the inputs raises :class:`InsufficientBalanceError`.
"""
from __future__ import annotations
import typing
from solders.pubkey import Pubkey
from .errors import InsufficientBalanceError, NoInputAccountsError, OwnerMismatchError
from .state import (
    CompressedAccount,
    CompressedAccountWithMerkleContext,
    ParsedTokenAccount,
    TokenTransferOutputData,
)


def sum_up_lamports(accounts: typing.Iterable[CompressedAccountWithMerkleContext]) -> int:
    return sum(account.lamports for account in accounts)


def sum_up_token_amount(accounts: typing.Iterable[ParsedTokenAccount]) -> int:
    return sum(account.parsed.amount for account in accounts)


def _change(available: int, required: int) -> int:
    change = available - required
    if change < 0:
        raise InsufficientBalanceError(required, available)
    return change


def validate_same_owner(owners: typing.Sequence[Pubkey]) -> None:
    if not owners:
        return
    expected = owners[0]
    for owner in owners[1:]:
        if owner != expected:
            raise OwnerMismatchError(expected, owner)


def create_transfer_output_state(
    input_compressed_accounts: typing.Sequence[CompressedAccountWithMerkleContext],
    to_address: Pubkey,
    lamports: int,
) -> list[CompressedAccount]:
    change = _change(sum_up_lamports(input_compressed_accounts), lamports)
    if change == 0:
        return [CompressedAccount(owner=to_address, lamports=lamports)]
    validate_same_owner([account.owner for account in input_compressed_accounts])
    return [
        CompressedAccount(owner=input_compressed_accounts[0].owner, lamports=change),
        CompressedAccount(owner=to_address, lamports=lamports),
    ]


def create_decompress_output_state(
    input_compressed_accounts: typing.Sequence[CompressedAccountWithMerkleContext],
    lamports: int,
) -> list[CompressedAccount]:
    change = _change(sum_up_lamports(input_compressed_accounts), lamports)
    if change == 0:
        return []
    validate_same_owner([account.owner for account in input_compressed_accounts])
    return [CompressedAccount(owner=input_compressed_accounts[0].owner, lamports=change)]


def create_new_address_output_state(
    address: bytes,
    owner: Pubkey,
    lamports: typing.Optional[int] = None,
    input_compressed_accounts: typing.Optional[
        typing.Sequence[CompressedAccountWithMerkleContext]
    ] = None,
) -> list[CompressedAccount]:
    """Output for a newly addressed account, preceded by change if any."""
    amount = lamports or 0
    inputs = input_compressed_accounts or []
    change = _change(sum_up_lamports(inputs), amount)
    new_account = CompressedAccount(owner=owner, lamports=amount, address=bytes(address))
    if change == 0 or not inputs:
        return [new_account]
    validate_same_owner([account.owner for account in inputs])
    return [CompressedAccount(owner=inputs[0].owner, lamports=change), new_account]


def create_token_transfer_output_state(
    input_compressed_token_accounts: typing.Sequence[ParsedTokenAccount],
    to_address: Pubkey,
    amount: int,
) -> list[TokenTransferOutputData]:
    change = _change(sum_up_token_amount(input_compressed_token_accounts), amount)
    if change == 0:
        # Input lamports stay with the sender through the lamports change slot.
        return [TokenTransferOutputData(owner=to_address, amount=amount)]
    input_lamports = sum_up_lamports(
        account.compressed_account for account in input_compressed_token_accounts
    )
    validate_same_owner(
        [account.parsed.owner for account in input_compressed_token_accounts]
    )
    return [
        TokenTransferOutputData(
            owner=input_compressed_token_accounts[0].parsed.owner,
            amount=change,
            lamports=input_lamports or None,
        ),
        TokenTransferOutputData(owner=to_address, amount=amount),
    ]


def create_token_decompress_output_state(
    input_compressed_token_accounts: typing.Sequence[ParsedTokenAccount],
    amount: int,
) -> list[TokenTransferOutputData]:
    change = _change(sum_up_token_amount(input_compressed_token_accounts), amount)
    if change == 0:
        return []
    validate_same_owner(
        [account.parsed.owner for account in input_compressed_token_accounts]
    )
    input_lamports = sum_up_lamports(
        account.compressed_account for account in input_compressed_token_accounts
    )
    return [
        TokenTransferOutputData(
            owner=input_compressed_token_accounts[0].parsed.owner,
            amount=change,
            lamports=input_lamports or None,
        )
    ]


def create_approve_output_state(
    input_compressed_token_accounts: typing.Sequence[ParsedTokenAccount],
    delegate: Pubkey,
    amount: int,
) -> list[TokenTransferOutputData]:
    if not input_compressed_token_accounts:
        raise NoInputAccountsError("approve")
    change = _change(sum_up_token_amount(input_compressed_token_accounts), amount)
    validate_same_owner(
        [account.parsed.owner for account in input_compressed_token_accounts]
    )
    owner = input_compressed_token_accounts[0].parsed.owner
    outputs = []
    if change > 0:
        outputs.append(TokenTransferOutputData(owner=owner, amount=change))
    outputs.append(TokenTransferOutputData(owner=owner, amount=amount, delegate=delegate))
    return outputs


def create_revoke_output_state(
    input_compressed_token_accounts: typing.Sequence[ParsedTokenAccount],
) -> list[TokenTransferOutputData]:
    # Revoking merges every input into one undelegated account.
    if not input_compressed_token_accounts:
        raise NoInputAccountsError("revoke")
    validate_same_owner(
        [account.parsed.owner for account in input_compressed_token_accounts]
    )
    return [
        TokenTransferOutputData(
            owner=input_compressed_token_accounts[0].parsed.owner,
            amount=sum_up_token_amount(input_compressed_token_accounts),
        )
    ]

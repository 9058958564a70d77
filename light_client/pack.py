"""Replace public keys in compressed-account inputs and outputs with indices.

The on-chain programs receive every tree, queue and delegate key once, as a
trailing "remaining account", and refer to it by its ``u8`` position. A single
:class:`RemainingAccounts` table is shared by every packing call that feeds the
same instruction so the positions stay consistent.
"""
from __future__ import annotations
import logging
import typing
from dataclasses import dataclass
from solders.instruction import AccountMeta
from solders.pubkey import Pubkey
from .errors import (
    AmbiguousOutputTreeError,
    RootIndexCountMismatchError,
    UnderspecifiedOutputTreeError,
)
from .layouts.common import PackedMerkleContext
from .layouts.system import (
    NewAddressParams,
    NewAddressParamsPacked,
    OutputCompressedAccountWithPackedContext,
    PackedCompressedAccountWithMerkleContext,
)
from .layouts.token import InputTokenDataWithContext, PackedTokenTransferOutputData
from .state import (
    CompressedAccount,
    CompressedAccountWithMerkleContext,
    ParsedTokenAccount,
    TokenTransferOutputData,
    TreeInfo,
)

logger = logging.getLogger(__name__)


def get_index_or_add(accounts: list[Pubkey], key: Pubkey) -> int:
    try:
        return accounts.index(key)
    except ValueError:
        accounts.append(key)
        return len(accounts) - 1


def pad_output_state_merkle_trees(merkle_tree: Pubkey, number_of_outputs: int) -> list[Pubkey]:
    if number_of_outputs <= 0:
        return []
    return [merkle_tree] * number_of_outputs


def to_account_metas(accounts: typing.Iterable[Pubkey]) -> list[AccountMeta]:
    return [
        AccountMeta(pubkey=account, is_signer=False, is_writable=True)
        for account in accounts
    ]


class RemainingAccounts:
    """Append-only ordered key table; the first index seen for a key is kept."""

    def __init__(self, keys: typing.Optional[typing.Iterable[Pubkey]] = None) -> None:
        self._keys: list[Pubkey] = []
        for key in keys or ():
            get_index_or_add(self._keys, key)

    def index_of_or_add(self, key: Pubkey) -> int:
        return get_index_or_add(self._keys, key)

    def to_account_metas(self) -> list[AccountMeta]:
        return to_account_metas(self._keys)

    def copy(self) -> "RemainingAccounts":
        return RemainingAccounts(self._keys)

    @property
    def keys(self) -> list[Pubkey]:
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> typing.Iterator[Pubkey]:
        return iter(self._keys)

    def __getitem__(self, index: int) -> Pubkey:
        return self._keys[index]

    def __repr__(self) -> str:
        return f"RemainingAccounts({[str(k) for k in self._keys]})"


def select_output_tree(tree_info: TreeInfo) -> Pubkey:
    """Account that receives new output state for ``tree_info``.

    A tree being rolled over hands new state to its successor. Batched (V2)
    state trees append through their output queue, V1 trees take the tree
    account itself.
    """
    active = tree_info.next_tree_info or tree_info
    if active.is_v2 and not active.is_address_tree:
        return active.queue
    return active.tree


def _resolve_output_tree_info(
    input_tree_infos: typing.Sequence[TreeInfo],
    output_state_tree_info: typing.Optional[TreeInfo],
) -> TreeInfo:
    if input_tree_infos and output_state_tree_info is not None:
        raise AmbiguousOutputTreeError()
    if input_tree_infos:
        return input_tree_infos[0]
    if output_state_tree_info is None:
        raise UnderspecifiedOutputTreeError()
    return output_state_tree_info


@dataclass
class PackedAccounts:
    packed_input_compressed_accounts: list[PackedCompressedAccountWithMerkleContext]
    packed_output_compressed_accounts: list[OutputCompressedAccountWithPackedContext]
    remaining_accounts: RemainingAccounts


def pack_compressed_accounts(
    input_compressed_accounts: typing.Sequence[CompressedAccountWithMerkleContext],
    input_state_root_indices: typing.Sequence[int],
    output_compressed_accounts: typing.Sequence[CompressedAccount],
    output_state_tree_info: typing.Optional[TreeInfo] = None,
    remaining_accounts: typing.Optional[RemainingAccounts] = None,
) -> PackedAccounts:
    """Pack system-program inputs and outputs against ``remaining_accounts``.

    The table is mutated in place when one is passed, so a following
    :func:`pack_new_address_params` call can keep appending to it.
    """
    if len(input_state_root_indices) != len(input_compressed_accounts):
        raise RootIndexCountMismatchError(
            len(input_compressed_accounts), len(input_state_root_indices)
        )
    tree_info = _resolve_output_tree_info(
        [account.tree_info for account in input_compressed_accounts],
        output_state_tree_info,
    )
    table = remaining_accounts if remaining_accounts is not None else RemainingAccounts()

    packed_inputs = []
    for account, root_index in zip(input_compressed_accounts, input_state_root_indices):
        merkle_tree_index = table.index_of_or_add(account.tree_info.tree)
        queue_index = table.index_of_or_add(account.tree_info.queue)
        packed_inputs.append(
            PackedCompressedAccountWithMerkleContext(
                compressed_account=account.compressed_account,
                merkle_context=PackedMerkleContext(
                    merkle_tree_pubkey_index=merkle_tree_index,
                    queue_pubkey_index=queue_index,
                    leaf_index=account.leaf_index,
                    prove_by_index=account.prove_by_index,
                ),
                root_index=root_index,
                read_only=account.read_only,
            )
        )

    output_trees = pad_output_state_merkle_trees(
        select_output_tree(tree_info), len(output_compressed_accounts)
    )
    packed_outputs = [
        OutputCompressedAccountWithPackedContext(
            compressed_account=account,
            merkle_tree_index=table.index_of_or_add(tree),
        )
        for account, tree in zip(output_compressed_accounts, output_trees)
    ]
    logger.debug(
        "packed %d inputs, %d outputs into %d remaining accounts",
        len(packed_inputs),
        len(packed_outputs),
        len(table),
    )
    return PackedAccounts(
        packed_input_compressed_accounts=packed_inputs,
        packed_output_compressed_accounts=packed_outputs,
        remaining_accounts=table,
    )


def pack_new_address_params(
    new_address_params: typing.Sequence[NewAddressParams],
    remaining_accounts: RemainingAccounts,
) -> list[NewAddressParamsPacked]:
    packed = []
    for params in new_address_params:
        queue_index = remaining_accounts.index_of_or_add(params.address_queue_pubkey)
        tree_index = remaining_accounts.index_of_or_add(params.address_merkle_tree_pubkey)
        packed.append(
            NewAddressParamsPacked(
                seed=params.seed,
                address_queue_account_index=queue_index,
                address_merkle_tree_account_index=tree_index,
                address_merkle_tree_root_index=params.address_merkle_tree_root_index,
            )
        )
    return packed


@dataclass
class PackedTokenAccounts:
    input_token_data_with_context: list[InputTokenDataWithContext]
    packed_output_token_data: list[PackedTokenTransferOutputData]
    remaining_accounts: RemainingAccounts


def pack_compressed_token_accounts(
    input_compressed_token_accounts: typing.Sequence[ParsedTokenAccount],
    root_indices: typing.Sequence[int],
    token_transfer_outputs: typing.Sequence[TokenTransferOutputData],
    output_state_tree_info: typing.Optional[TreeInfo] = None,
    remaining_accounts: typing.Optional[RemainingAccounts] = None,
) -> PackedTokenAccounts:
    if len(root_indices) != len(input_compressed_token_accounts):
        raise RootIndexCountMismatchError(
            len(input_compressed_token_accounts), len(root_indices)
        )
    tree_info = _resolve_output_tree_info(
        [account.compressed_account.tree_info for account in input_compressed_token_accounts],
        output_state_tree_info,
    )
    table = remaining_accounts if remaining_accounts is not None else RemainingAccounts()

    packed_inputs = []
    for account, root_index in zip(input_compressed_token_accounts, root_indices):
        compressed = account.compressed_account
        merkle_tree_index = table.index_of_or_add(compressed.tree_info.tree)
        queue_index = table.index_of_or_add(compressed.tree_info.queue)
        delegate_index = None
        if account.parsed.delegate is not None:
            delegate_index = table.index_of_or_add(account.parsed.delegate)
        packed_inputs.append(
            InputTokenDataWithContext(
                amount=account.parsed.amount,
                delegate_index=delegate_index,
                merkle_context=PackedMerkleContext(
                    merkle_tree_pubkey_index=merkle_tree_index,
                    queue_pubkey_index=queue_index,
                    leaf_index=compressed.leaf_index,
                    prove_by_index=compressed.prove_by_index,
                ),
                root_index=root_index,
                lamports=compressed.lamports or None,
                tlv=account.parsed.tlv,
            )
        )

    output_tree = select_output_tree(tree_info)
    packed_outputs = [
        PackedTokenTransferOutputData(
            owner=output.owner,
            amount=output.amount,
            lamports=output.lamports,
            merkle_tree_index=table.index_of_or_add(output_tree),
            tlv=output.tlv,
        )
        for output in token_transfer_outputs
    ]
    logger.debug(
        "packed %d token inputs, %d token outputs into %d remaining accounts",
        len(packed_inputs),
        len(packed_outputs),
        len(table),
    )
    return PackedTokenAccounts(
        input_token_data_with_context=packed_inputs,
        packed_output_token_data=packed_outputs,
        remaining_accounts=table,
    )

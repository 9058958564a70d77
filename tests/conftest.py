"""Shared fixtures and account factories."""

import pytest
from solders.pubkey import Pubkey

from light_client.state import (
    BN254_ZERO,
    CompressedAccountWithMerkleContext,
    CompressedProof,
    ParsedTokenAccount,
    TokenData,
    TreeInfo,
    TreeType,
)

STATE_TREE = Pubkey.from_string("smt1NamzXdq4AMqS2fS2F1i5KTYPZRhoHgWx38d8WsT")
NULLIFIER_QUEUE = Pubkey.from_string("nfq1NvQDJ2GEgnS8zt9prAe8rjjpAW1zFkrvZoBR148")
BATCH_TREE = Pubkey.from_string("bmt1LryLZUMmF7ZtqESaw7wifBXLfXHQYoE4GAmrahU")
OUTPUT_QUEUE = Pubkey.from_string("oq1na8gojfdUhsfCpyjNt6h4JaDWtHf1yQj4koBWfto")


@pytest.fixture
def v1_tree():
    return TreeInfo(tree=STATE_TREE, queue=NULLIFIER_QUEUE, tree_type=TreeType.STATE_V1)


@pytest.fixture
def v2_tree():
    return TreeInfo(tree=BATCH_TREE, queue=OUTPUT_QUEUE, tree_type=TreeType.STATE_V2)


@pytest.fixture
def proof():
    return CompressedProof(a=bytes(range(32)), b=bytes(range(64)), c=bytes(range(32)))


@pytest.fixture
def owner():
    return Pubkey.new_unique()


def make_account(owner, lamports, tree_info, leaf_index=0, **kwargs):
    return CompressedAccountWithMerkleContext(
        owner=owner,
        lamports=lamports,
        tree_info=tree_info,
        hash=BN254_ZERO,
        leaf_index=leaf_index,
        **kwargs,
    )


def make_token_account(owner, amount, tree_info, mint=None, leaf_index=0, lamports=0, **kwargs):
    return ParsedTokenAccount(
        compressed_account=make_account(owner, lamports, tree_info, leaf_index),
        parsed=TokenData(
            mint=mint if mint is not None else Pubkey.new_unique(),
            owner=owner,
            amount=amount,
            **kwargs,
        ),
    )

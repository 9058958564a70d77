"""Tests for compressed token program instruction builders."""

import pytest
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID

from conftest import BATCH_TREE, NULLIFIER_QUEUE, OUTPUT_QUEUE, STATE_TREE, make_token_account
from light_client.config import DEFAULT_CONFIG
from light_client.constants import (
    APPROVE_DISCRIMINATOR,
    BATCH_COMPRESS_DISCRIMINATOR,
    COMPRESS_SPL_TOKEN_ACCOUNT_DISCRIMINATOR,
    CREATE_TOKEN_POOL_DISCRIMINATOR,
    MINT_TO_DISCRIMINATOR,
    REVOKE_DISCRIMINATOR,
    TRANSFER_DISCRIMINATOR,
)
from light_client.errors import (
    InsufficientBalanceError,
    NoInputAccountsError,
    OwnerMismatchError,
    RecipientCountMismatchError,
    ValidityProofRequiredError,
)
from light_client.program_id import COMPRESSED_TOKEN_PROGRAM_ID
from light_client.state import TokenPoolInfo
from light_client.token_instructions import (
    approve,
    batch_compress,
    compress,
    compress_spl_token_account,
    create_token_pool,
    decompress,
    delegation_account_metas,
    derive_token_pool_pda,
    mint_to,
    revoke,
    token_pool_bump,
    transfer,
    transfer_account_metas,
)

TRANSFER_ACCOUNTS = 13
DELEGATION_ACCOUNTS = 10
TOKEN_INPUT_SIZE = 8 + 1 + 7 + 2 + 1 + 1


@pytest.fixture
def mint():
    return Pubkey.new_unique()


@pytest.fixture
def pool(mint):
    return TokenPoolInfo(token_pool_pda=derive_token_pool_pda(mint), mint=mint)


def _framed_payload(ix, discriminator) -> bytes:
    data = bytes(ix.data)
    assert data[:8] == discriminator
    assert int.from_bytes(data[8:12], "little") == len(data) - 12
    return data[12:]


def test_token_pool_pda(mint):
    expected, _ = Pubkey.find_program_address([b"pool", bytes(mint)], COMPRESSED_TOKEN_PROGRAM_ID)
    assert derive_token_pool_pda(mint) == expected
    assert derive_token_pool_pda(mint, 1) != expected


def test_create_token_pool(mint):
    payer = Pubkey.new_unique()
    ix = create_token_pool({"fee_payer": payer, "mint": mint})
    assert ix.program_id == COMPRESSED_TOKEN_PROGRAM_ID
    assert bytes(ix.data) == CREATE_TOKEN_POOL_DISCRIMINATOR
    assert [m.pubkey for m in ix.accounts] == [
        payer,
        derive_token_pool_pda(mint),
        SYS_PROGRAM_ID,
        mint,
        TOKEN_PROGRAM_ID,
        DEFAULT_CONFIG.cpi_authority_pda,
    ]


def test_transfer_account_layout():
    payer, authority = Pubkey.new_unique(), Pubkey.new_unique()
    metas = transfer_account_metas(payer, authority)
    assert len(metas) == TRANSFER_ACCOUNTS
    assert metas[0].is_signer and metas[0].is_writable
    assert metas[1].is_signer and not metas[1].is_writable
    assert metas[8].pubkey == COMPRESSED_TOKEN_PROGRAM_ID
    assert all(m.pubkey == COMPRESSED_TOKEN_PROGRAM_ID for m in metas[9:12])
    assert not any(m.is_writable for m in metas[9:12])
    assert metas[12].pubkey == SYS_PROGRAM_ID


def test_delegation_account_layout():
    payer = Pubkey.new_unique()
    metas = delegation_account_metas(payer, payer)
    assert len(metas) == DELEGATION_ACCOUNTS
    assert metas[2].pubkey == DEFAULT_CONFIG.cpi_authority_pda
    assert metas[3].pubkey == DEFAULT_CONFIG.light_system_program
    assert metas[-1].pubkey == SYS_PROGRAM_ID


def test_mint_to(mint, pool, v2_tree):
    payer = Pubkey.new_unique()
    recipients = [Pubkey.new_unique(), Pubkey.new_unique()]
    ix = mint_to(
        {
            "to_pubkeys": recipients,
            "amounts": [100, 200],
            "output_state_tree_info": v2_tree,
            "token_pool_info": pool,
        },
        {"fee_payer": payer, "authority": payer, "mint": mint},
    )
    assert len(ix.accounts) == 15
    assert ix.accounts[3].pubkey == mint
    assert ix.accounts[4].pubkey == pool.token_pool_pda
    assert ix.accounts[5].pubkey == TOKEN_PROGRAM_ID
    assert ix.accounts[11].pubkey == OUTPUT_QUEUE
    assert ix.accounts[11].is_writable
    data = bytes(ix.data)
    assert data[:8] == MINT_TO_DISCRIMINATOR
    assert len(data) == 8 + 4 + 64 + 4 + 16 + 1


def test_mint_to_count_mismatch(mint, pool, v1_tree):
    payer = Pubkey.new_unique()
    with pytest.raises(RecipientCountMismatchError):
        mint_to(
            {
                "to_pubkeys": [Pubkey.new_unique()],
                "amounts": [1, 2],
                "output_state_tree_info": v1_tree,
                "token_pool_info": pool,
            },
            {"fee_payer": payer, "authority": payer, "mint": mint},
        )


def test_compress_to_many(mint, pool, v1_tree):
    owner, source = Pubkey.new_unique(), Pubkey.new_unique()
    recipients = [Pubkey.new_unique(), Pubkey.new_unique()]
    ix = compress(
        {
            "amount": [30, 70],
            "to_address": recipients,
            "output_state_tree_info": v1_tree,
            "token_pool_info": pool,
        },
        {"payer": owner, "owner": owner, "source": source, "mint": mint},
    )
    assert ix.accounts[9].pubkey == pool.token_pool_pda
    assert ix.accounts[10].pubkey == source
    assert ix.accounts[10].is_writable
    assert ix.accounts[11].pubkey == TOKEN_PROGRAM_ID
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [STATE_TREE]
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    assert payload[-12:] == b"\x01\x01" + (100).to_bytes(8, "little") + b"\x00\x00"


def test_compress_defaults_to_owner(mint, pool, v1_tree):
    owner = Pubkey.new_unique()
    ix = compress(
        {"amount": 5, "output_state_tree_info": v1_tree, "token_pool_info": pool},
        {"payer": owner, "owner": owner, "source": Pubkey.new_unique(), "mint": mint},
    )
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    outputs_offset = 1 + 32 + 1 + 4
    assert int.from_bytes(payload[outputs_offset:outputs_offset + 4], "little") == 1
    assert payload[outputs_offset + 4:outputs_offset + 36] == bytes(owner)


def test_compress_count_mismatch(mint, pool, v1_tree):
    owner = Pubkey.new_unique()
    with pytest.raises(RecipientCountMismatchError):
        compress(
            {
                "amount": [1, 2],
                "to_address": [Pubkey.new_unique()],
                "output_state_tree_info": v1_tree,
                "token_pool_info": pool,
            },
            {"payer": owner, "owner": owner, "source": Pubkey.new_unique(), "mint": mint},
        )


def test_transfer(owner, mint, v1_tree, proof):
    recipient = Pubkey.new_unique()
    ix = transfer(
        {
            "amount": 60,
            "input_compressed_token_accounts": [make_token_account(owner, 100, v1_tree, mint=mint)],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
        },
        {"payer": owner, "to_address": recipient},
    )
    assert ix.program_id == COMPRESSED_TOKEN_PROGRAM_ID
    assert ix.accounts[1].pubkey == owner
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [STATE_TREE, NULLIFIER_QUEUE]
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    assert payload[1 + 128:1 + 128 + 32] == bytes(mint)
    outputs_offset = 1 + 128 + 32 + 1 + 4 + TOKEN_INPUT_SIZE
    assert int.from_bytes(payload[outputs_offset:outputs_offset + 4], "little") == 2


def test_transfer_requires_inputs(owner):
    with pytest.raises(NoInputAccountsError):
        transfer(
            {
                "amount": 1,
                "input_compressed_token_accounts": [],
                "recent_input_state_root_indices": [],
                "recent_validity_proof": None,
            },
            {"payer": owner, "to_address": Pubkey.new_unique()},
        )


def test_transfer_insufficient(owner, v1_tree):
    with pytest.raises(InsufficientBalanceError):
        transfer(
            {
                "amount": 101,
                "input_compressed_token_accounts": [make_token_account(owner, 100, v1_tree)],
                "recent_input_state_root_indices": [0],
                "recent_validity_proof": None,
            },
            {"payer": owner, "to_address": Pubkey.new_unique()},
        )


def test_decompress(owner, mint, pool, v1_tree, proof):
    destination = Pubkey.new_unique()
    ix = decompress(
        {
            "amount": 40,
            "input_compressed_token_accounts": [make_token_account(owner, 100, v1_tree, mint=mint)],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
            "token_pool_info": pool,
        },
        {"payer": owner, "to_address": destination},
    )
    assert ix.accounts[10].pubkey == destination
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    assert payload[-12:] == b"\x00\x01" + (40).to_bytes(8, "little") + b"\x00\x00"


def test_approve(owner, mint, v2_tree, proof):
    delegate = Pubkey.new_unique()
    ix = approve(
        {
            "amount": 25,
            "input_compressed_token_accounts": [make_token_account(owner, 100, v2_tree, mint=mint)],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
        },
        {"payer": owner, "delegate": delegate},
    )
    assert len(ix.accounts) == DELEGATION_ACCOUNTS + 2
    payload = _framed_payload(ix, APPROVE_DISCRIMINATOR)
    assert len(payload) == 128 + 32 + 4 + TOKEN_INPUT_SIZE + 1 + 32 + 8 + 1 + 1 + 1
    assert payload[-43:-3] == bytes(delegate) + (25).to_bytes(8, "little")
    # the output queue already holds slot 1
    assert payload[-3:] == bytes([1, 1, 0])


def test_approve_requires_proof(owner, v1_tree):
    with pytest.raises(ValidityProofRequiredError):
        approve(
            {
                "amount": 1,
                "input_compressed_token_accounts": [make_token_account(owner, 10, v1_tree)],
                "recent_input_state_root_indices": [0],
                "recent_validity_proof": None,
            },
            {"payer": owner, "delegate": Pubkey.new_unique()},
        )


def test_approve_insufficient(owner, v1_tree, proof):
    with pytest.raises(InsufficientBalanceError):
        approve(
            {
                "amount": 11,
                "input_compressed_token_accounts": [make_token_account(owner, 10, v1_tree)],
                "recent_input_state_root_indices": [0],
                "recent_validity_proof": proof,
            },
            {"payer": owner, "delegate": Pubkey.new_unique()},
        )


def test_revoke(owner, v1_tree, proof):
    delegate = Pubkey.new_unique()
    inputs = [
        make_token_account(owner, 10, v1_tree, delegate=delegate),
        make_token_account(owner, 15, v1_tree, delegate=delegate, leaf_index=1),
    ]
    ix = revoke(
        {
            "input_compressed_token_accounts": inputs,
            "recent_input_state_root_indices": [0, 0],
            "recent_validity_proof": proof,
        },
        {"payer": owner},
    )
    assert [m.pubkey for m in ix.accounts[DELEGATION_ACCOUNTS:]] == [STATE_TREE, NULLIFIER_QUEUE, delegate]
    payload = _framed_payload(ix, REVOKE_DISCRIMINATOR)
    input_size = TOKEN_INPUT_SIZE + 1  # delegate index present
    assert len(payload) == 128 + 32 + 4 + 2 * input_size + 1 + 1
    assert payload[-1] == 0


def test_revoke_requires_inputs(owner, proof):
    with pytest.raises(NoInputAccountsError):
        revoke(
            {
                "input_compressed_token_accounts": [],
                "recent_input_state_root_indices": [],
                "recent_validity_proof": proof,
            },
            {"payer": owner},
        )


def test_decompress_full_amount_returns_lamports(owner, mint, pool, v1_tree, proof):
    ix = decompress(
        {
            "amount": 100,
            "input_compressed_token_accounts": [
                make_token_account(owner, 100, v1_tree, mint=mint, lamports=2_039_280)
            ],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
            "token_pool_info": pool,
        },
        {"payer": owner, "to_address": Pubkey.new_unique()},
    )
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [STATE_TREE, NULLIFIER_QUEUE]
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    outputs_offset = 1 + 128 + 32 + 1 + 4 + TOKEN_INPUT_SIZE + 8
    assert int.from_bytes(payload[outputs_offset:outputs_offset + 4], "little") == 0
    # lamports change goes to slot 0, the state tree
    assert payload[-13:] == b"\x00\x01" + (100).to_bytes(8, "little") + b"\x00\x01\x00"


def test_transfer_full_amount_returns_lamports_to_sender(owner, mint, v2_tree, proof):
    recipient = Pubkey.new_unique()
    ix = transfer(
        {
            "amount": 100,
            "input_compressed_token_accounts": [
                make_token_account(owner, 100, v2_tree, mint=mint, lamports=2_039_280)
            ],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
        },
        {"payer": owner, "to_address": recipient},
    )
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [BATCH_TREE, OUTPUT_QUEUE]
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    outputs_offset = 1 + 128 + 32 + 1 + 4 + TOKEN_INPUT_SIZE + 8
    assert int.from_bytes(payload[outputs_offset:outputs_offset + 4], "little") == 1
    output = payload[outputs_offset + 4:outputs_offset + 4 + 32 + 8 + 1 + 1 + 1]
    assert output == bytes(recipient) + (100).to_bytes(8, "little") + b"\x00\x01\x00"
    assert payload[-5:] == b"\x00\x00\x00\x01\x01"


def test_transfer_change_carries_lamports(owner, mint, v1_tree, proof):
    ix = transfer(
        {
            "amount": 40,
            "input_compressed_token_accounts": [
                make_token_account(owner, 100, v1_tree, mint=mint, lamports=500)
            ],
            "recent_input_state_root_indices": [0],
            "recent_validity_proof": proof,
        },
        {"payer": owner, "to_address": Pubkey.new_unique()},
    )
    payload = _framed_payload(ix, TRANSFER_DISCRIMINATOR)
    assert payload[-1] == 0


def test_batch_compress(mint, pool, v1_tree):
    owner, source = Pubkey.new_unique(), Pubkey.new_unique()
    recipients = [Pubkey.new_unique(), Pubkey.new_unique()]
    ix = batch_compress(
        {
            "to_addresses": recipients,
            "amount": 50,
            "output_state_tree_info": v1_tree,
            "token_pool_info": pool,
        },
        {"payer": owner, "owner": owner, "source": source},
    )
    assert ix.program_id == COMPRESSED_TOKEN_PROGRAM_ID
    assert ix.accounts[9].pubkey == pool.token_pool_pda
    assert ix.accounts[10].pubkey == source
    assert ix.accounts[11].pubkey == TOKEN_PROGRAM_ID
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [STATE_TREE]
    _, bump = Pubkey.find_program_address([b"pool", bytes(mint)], COMPRESSED_TOKEN_PROGRAM_ID)
    assert token_pool_bump(pool) == bump
    payload = _framed_payload(ix, BATCH_COMPRESS_DISCRIMINATOR)
    assert payload[4 + 64:] == b"\x00\x00\x01" + (50).to_bytes(8, "little") + bytes([0, bump])


def test_batch_compress_amount_per_recipient(mint, pool, v2_tree):
    owner = Pubkey.new_unique()
    ix = batch_compress(
        {
            "to_addresses": [Pubkey.new_unique(), Pubkey.new_unique()],
            "amount": [3, 4],
            "output_state_tree_info": v2_tree,
            "token_pool_info": pool,
        },
        {"payer": owner, "owner": owner, "source": Pubkey.new_unique()},
    )
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [OUTPUT_QUEUE]
    payload = _framed_payload(ix, BATCH_COMPRESS_DISCRIMINATOR)
    assert payload[4 + 64:4 + 64 + 1 + 4 + 16] == (
        b"\x01" + (2).to_bytes(4, "little") + (3).to_bytes(8, "little") + (4).to_bytes(8, "little")
    )


def test_compress_spl_token_account(mint, pool, v2_tree):
    owner, token_account = Pubkey.new_unique(), Pubkey.new_unique()
    ix = compress_spl_token_account(
        {"remaining_amount": 7, "output_state_tree_info": v2_tree, "token_pool_info": pool},
        {"payer": owner, "owner": owner, "token_account": token_account},
    )
    assert ix.accounts[1].pubkey == owner
    assert ix.accounts[1].is_signer
    assert ix.accounts[10].pubkey == token_account
    assert [m.pubkey for m in ix.accounts[TRANSFER_ACCOUNTS:]] == [OUTPUT_QUEUE]
    assert bytes(ix.data) == (
        COMPRESS_SPL_TOKEN_ACCOUNT_DISCRIMINATOR
        + bytes(owner)
        + b"\x01"
        + (7).to_bytes(8, "little")
        + b"\x00"
    )


def test_revoke_requires_single_owner(owner, v1_tree, proof):
    inputs = [
        make_token_account(owner, 10, v1_tree),
        make_token_account(Pubkey.new_unique(), 15, v1_tree, leaf_index=1),
    ]
    with pytest.raises(OwnerMismatchError):
        revoke(
            {
                "input_compressed_token_accounts": inputs,
                "recent_input_state_root_indices": [0, 0],
                "recent_validity_proof": proof,
            },
            {"payer": owner},
        )

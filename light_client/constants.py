from solders.pubkey import Pubkey

# BN254 scalar field modulus.
FIELD_SIZE = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)

INVOKE_DISCRIMINATOR = bytes([26, 16, 169, 7, 21, 202, 242, 25])
INVOKE_CPI_DISCRIMINATOR = bytes([49, 212, 191, 129, 39, 194, 43, 196])

CREATE_TOKEN_POOL_DISCRIMINATOR = bytes([23, 169, 27, 122, 147, 169, 209, 152])
MINT_TO_DISCRIMINATOR = bytes([241, 34, 48, 186, 37, 179, 123, 192])
TRANSFER_DISCRIMINATOR = bytes([163, 52, 200, 231, 140, 3, 69, 186])
BATCH_COMPRESS_DISCRIMINATOR = bytes([65, 206, 101, 37, 147, 42, 221, 144])
COMPRESS_SPL_TOKEN_ACCOUNT_DISCRIMINATOR = bytes([112, 230, 105, 101, 145, 202, 157, 97])
APPROVE_DISCRIMINATOR = bytes([69, 74, 217, 36, 115, 117, 97, 76])
REVOKE_DISCRIMINATOR = bytes([170, 23, 31, 34, 133, 173, 93, 242])
# Single-byte discriminator used by the idempotent decompress handler.
DECOMPRESS_ACCOUNTS_IDEMPOTENT_DISCRIMINATOR = bytes([107])

SOL_POOL_PDA_SEED = b"sol_pool_pda"
CPI_AUTHORITY_PDA_SEED = b"cpi_authority"
POOL_SEED = b"pool"

# Localnet / devnet tree accounts.
ADDRESS_TREE_V1 = Pubkey.from_string("amt1Ayt45jfbdw5YSo7iz6WZxUmnZsQTYXy82hVwyC2")
ADDRESS_QUEUE_V1 = Pubkey.from_string("aq1S9z4reTSQAdgWHGD2zDaS39sjGrAxbR31vxJ2F4F")
ADDRESS_TREE_V2 = Pubkey.from_string("amt2kaJA14v3urZbZvnc5v2np8jqvc4Z8zDep5wbtzx")
STATE_TREE_V1 = Pubkey.from_string("smt1NamzXdq4AMqS2fS2F1i5KTYPZRhoHgWx38d8WsT")
NULLIFIER_QUEUE_V1 = Pubkey.from_string("nfq1NvQDJ2GEgnS8zt9prAe8rjjpAW1zFkrvZoBR148")
CPI_CONTEXT_V1 = Pubkey.from_string("cpi1uHzrEhBG733DoEJNgHCyRS3XmmyVNZx5fonubE4")
BATCH_STATE_TREE_V2 = Pubkey.from_string("bmt1LryLZUMmF7ZtqESaw7wifBXLfXHQYoE4GAmrahU")
BATCH_OUTPUT_QUEUE_V2 = Pubkey.from_string("oq1na8gojfdUhsfCpyjNt6h4JaDWtHf1yQj4koBWfto")
BATCH_CPI_CONTEXT_V2 = Pubkey.from_string("cpi15BoVPKgEPw5o8wc2T816GE7b378nMXnhH3Xbq4y")

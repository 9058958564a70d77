from solders.pubkey import Pubkey

LIGHT_SYSTEM_PROGRAM_ID = Pubkey.from_string("SySTEM1eSU2p4BGQfQpimFEWWSC1XDFeun3Nqzz3rT7")
COMPRESSED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "cTokenmWW8bLPjZEBAUgYy3zKxQZW6VKi7bqNFEVv3m"
)
ACCOUNT_COMPRESSION_PROGRAM_ID = Pubkey.from_string(
    "compr6CUsB5m2jS4Y3831ztGSTnDpnKJTKS95d64XVq"
)
NOOP_PROGRAM_ID = Pubkey.from_string("noopb9bkMVfRPU8AsbpTUg8AQkHtKwMYZiFUjNRtMmV")
REGISTERED_PROGRAM_PDA = Pubkey.from_string(
    "35hkDgaAKwMCaxRz2ocSZ6NaUrtKkyNqU6c4RV3tYJRh"
)

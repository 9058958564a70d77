from .accounts import (
    derive_token_pool_pda,
    token_pool_bump,
    transfer_account_metas,
    delegation_account_metas,
)
from .create_token_pool import create_token_pool, CreateTokenPoolAccounts
from .mint_to import mint_to, MintToArgs, MintToAccounts
from .compress import compress, CompressArgs, CompressAccounts
from .decompress import decompress, DecompressArgs, DecompressAccounts
from .transfer import transfer, TransferArgs, TransferAccounts
from .approve import approve, ApproveArgs, ApproveAccounts
from .revoke import revoke, RevokeArgs, RevokeAccounts
from .batch_compress import batch_compress, BatchCompressArgs, BatchCompressAccounts
from .compress_spl_token_account import (
    compress_spl_token_account,
    CompressSplTokenAccountArgs,
    CompressSplTokenAccountAccounts,
)

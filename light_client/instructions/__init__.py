from .invoke import (
    invoke,
    invoke_cpi,
    invoke_account_metas,
    InvokeArgs,
    InvokeAccounts,
    InvokeCpiArgs,
    InvokeCpiAccounts,
)
from .compress import compress, CompressArgs, CompressAccounts
from .decompress import decompress, DecompressArgs, DecompressAccounts
from .transfer import transfer, TransferArgs, TransferAccounts
from .create_account import create_account, CreateAccountArgs, CreateAccountAccounts

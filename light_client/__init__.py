"""Client-side instruction codec and account packing for Light compressed accounts."""
from .config import DEFAULT_CONFIG, LightProtocolConfig
from .errors import LightClientError
from .pack import (
    PackedAccounts,
    PackedTokenAccounts,
    RemainingAccounts,
    pack_compressed_accounts,
    pack_compressed_token_accounts,
    pack_new_address_params,
    select_output_tree,
)
from .utils import BorshWriter, derive_address, derive_address_seed

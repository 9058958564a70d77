from __future__ import annotations
import os
import typing
from dataclasses import dataclass
from functools import cached_property
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID
from .constants import (
    ADDRESS_QUEUE_V1,
    ADDRESS_TREE_V1,
    ADDRESS_TREE_V2,
    BATCH_CPI_CONTEXT_V2,
    BATCH_OUTPUT_QUEUE_V2,
    BATCH_STATE_TREE_V2,
    CPI_AUTHORITY_PDA_SEED,
    CPI_CONTEXT_V1,
    NULLIFIER_QUEUE_V1,
    SOL_POOL_PDA_SEED,
    STATE_TREE_V1,
)
from .program_id import (
    ACCOUNT_COMPRESSION_PROGRAM_ID,
    COMPRESSED_TOKEN_PROGRAM_ID,
    LIGHT_SYSTEM_PROGRAM_ID,
    NOOP_PROGRAM_ID,
    REGISTERED_PROGRAM_PDA,
)
from .state import AddressTreeInfo, TreeInfo, TreeType


@dataclass(frozen=True)
class LightProtocolConfig:
    """Protocol addresses used when building instructions.

    Every builder accepts one; pass another instance to target devnet or a
    local validator.
    """

    light_system_program: Pubkey = LIGHT_SYSTEM_PROGRAM_ID
    compressed_token_program: Pubkey = COMPRESSED_TOKEN_PROGRAM_ID
    account_compression_program: Pubkey = ACCOUNT_COMPRESSION_PROGRAM_ID
    noop_program: Pubkey = NOOP_PROGRAM_ID
    registered_program_pda: Pubkey = REGISTERED_PROGRAM_PDA
    address_tree: Pubkey = ADDRESS_TREE_V1
    address_queue: Pubkey = ADDRESS_QUEUE_V1
    spl_token_program: Pubkey = TOKEN_PROGRAM_ID
    system_program: Pubkey = SYS_PROGRAM_ID

    @classmethod
    def from_env(
        cls, environ: typing.Optional[typing.Mapping[str, str]] = None
    ) -> "LightProtocolConfig":
        env = os.environ if environ is None else environ
        defaults = cls()

        def _key(name: str, default: Pubkey) -> Pubkey:
            value = env.get(name)
            if not value:
                return default
            return Pubkey.from_string(value)

        return cls(
            light_system_program=_key(
                "LIGHT_SYSTEM_PROGRAM_ID", defaults.light_system_program
            ),
            compressed_token_program=_key(
                "COMPRESSED_TOKEN_PROGRAM_ID", defaults.compressed_token_program
            ),
            account_compression_program=_key(
                "ACCOUNT_COMPRESSION_PROGRAM_ID", defaults.account_compression_program
            ),
            noop_program=_key("NOOP_PROGRAM_ID", defaults.noop_program),
            registered_program_pda=_key(
                "REGISTERED_PROGRAM_PDA", defaults.registered_program_pda
            ),
            address_tree=_key("ADDRESS_TREE", defaults.address_tree),
            address_queue=_key("ADDRESS_QUEUE", defaults.address_queue),
        )

    @cached_property
    def sol_pool_pda(self) -> Pubkey:
        pda, _ = Pubkey.find_program_address(
            [SOL_POOL_PDA_SEED], self.light_system_program
        )
        return pda

    @cached_property
    def account_compression_authority(self) -> Pubkey:
        pda, _ = Pubkey.find_program_address(
            [CPI_AUTHORITY_PDA_SEED], self.light_system_program
        )
        return pda

    @cached_property
    def cpi_authority_pda(self) -> Pubkey:
        """CPI authority of the compressed token program."""
        pda, _ = Pubkey.find_program_address(
            [CPI_AUTHORITY_PDA_SEED], self.compressed_token_program
        )
        return pda

    def state_tree_info(self, batched: bool = False) -> TreeInfo:
        """Localnet state tree that receives new compressed accounts."""
        if batched:
            return TreeInfo(
                tree=BATCH_STATE_TREE_V2,
                queue=BATCH_OUTPUT_QUEUE_V2,
                tree_type=TreeType.STATE_V2,
                cpi_context=BATCH_CPI_CONTEXT_V2,
            )
        return TreeInfo(
            tree=STATE_TREE_V1,
            queue=NULLIFIER_QUEUE_V1,
            tree_type=TreeType.STATE_V1,
            cpi_context=CPI_CONTEXT_V1,
        )

    def address_tree_info(self, batched: bool = False) -> AddressTreeInfo:
        if batched:
            # Batched address trees keep their queue inside the tree account.
            return AddressTreeInfo(
                tree=ADDRESS_TREE_V2, queue=ADDRESS_TREE_V2, tree_type=TreeType.ADDRESS_V2
            )
        return AddressTreeInfo(
            tree=self.address_tree, queue=self.address_queue, tree_type=TreeType.ADDRESS_V1
        )


DEFAULT_CONFIG = LightProtocolConfig()

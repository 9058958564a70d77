from .bn254 import BN254, BN254_ZERO
from .tree_info import TreeType, TreeInfo, AddressTreeInfo
from .compressed_account import (
    CompressedAccountData,
    CompressedAccount,
    MerkleContext,
    CompressedAccountWithMerkleContext,
)
from .validity_proof import CompressedProof, ValidityProofWithContext
from .token_data import (
    TokenAccountState,
    TokenData,
    ParsedTokenAccount,
    TokenPoolInfo,
    TokenTransferOutputData,
)

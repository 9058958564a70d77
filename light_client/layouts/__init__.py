from .common import (
    CompressedCpiContext,
    PackedMerkleContext,
    encode_instruction_data,
    write_proof,
)
from .system import (
    InstructionDataInvoke,
    InstructionDataInvokeCpi,
    NewAddressParams,
    NewAddressParamsPacked,
    OutputCompressedAccountWithPackedContext,
    PackedCompressedAccountWithMerkleContext,
    write_compressed_account,
)
from .token import (
    DelegatedTransfer,
    InputTokenDataWithContext,
    InstructionDataApprove,
    InstructionDataBatchCompress,
    InstructionDataCompressSplTokenAccount,
    InstructionDataMintTo,
    InstructionDataRevoke,
    InstructionDataTransfer,
    PackedTokenTransferOutputData,
)

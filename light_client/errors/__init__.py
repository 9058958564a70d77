from .custom import (
    LightClientError,
    InsufficientBalanceError,
    OwnerMismatchError,
    InvalidLengthError,
    WidthOverflowError,
    AmbiguousOutputTreeError,
    UnderspecifiedOutputTreeError,
    RecipientCountMismatchError,
    RootIndexCountMismatchError,
    FieldSizeError,
    AddressDerivationError,
    ValidityProofRequiredError,
    NoInputAccountsError,
    ClientError,
    CLIENT_ERROR_MAP,
    from_code,
)

import typing
from anchorpy.error import ProgramError


class LightClientError(ProgramError):
    code: int
    name: str
    msg: typing.Optional[str]

    def __init__(self, detail: str) -> None:
        super().__init__(self.code, detail)
        self.detail = detail


class InsufficientBalanceError(LightClientError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Insufficient balance: required {required}, available {available}"
        )
        self.required = required
        self.available = available

    code = 1000
    name = "InsufficientBalanceError"
    msg = "Requested amount exceeds the summed input value"


class OwnerMismatchError(LightClientError):
    def __init__(self, expected: typing.Any, found: typing.Any) -> None:
        super().__init__(
            f"All input accounts must have the same owner: expected {expected}, found {found}"
        )
        self.expected = expected
        self.found = found

    code = 1001
    name = "OwnerMismatchError"
    msg = "Input accounts have differing owners"


class InvalidLengthError(LightClientError):
    def __init__(self, field: str, expected: int, actual: int) -> None:
        super().__init__(f"{field} must be {expected} bytes, got {actual}")
        self.field = field
        self.expected = expected
        self.actual = actual

    code = 1002
    name = "InvalidLengthError"
    msg = "Fixed-size field received the wrong byte count"


class WidthOverflowError(LightClientError):
    def __init__(self, width: str, value: typing.Any, low: int, high: int) -> None:
        super().__init__(f"Value {value!r} out of range for {width} [{low}, {high}]")
        self.width = width
        self.value = value
        self.low = low
        self.high = high

    code = 1003
    name = "WidthOverflowError"
    msg = "Integer does not fit its target width"


class AmbiguousOutputTreeError(LightClientError):
    def __init__(self) -> None:
        super().__init__(
            "Cannot specify both input accounts and output_state_tree_info"
        )

    code = 1004
    name = "AmbiguousOutputTreeError"
    msg = "Both input accounts and an output state tree were supplied"


class UnderspecifiedOutputTreeError(LightClientError):
    def __init__(self) -> None:
        super().__init__(
            "Neither input accounts nor output_state_tree_info are available"
        )

    code = 1005
    name = "UnderspecifiedOutputTreeError"
    msg = "No input accounts and no output state tree were supplied"


class RecipientCountMismatchError(LightClientError):
    def __init__(self, recipients: int, amounts: int) -> None:
        super().__init__(
            f"recipients and amounts must have the same length: {recipients} != {amounts}"
        )
        self.recipients = recipients
        self.amounts = amounts

    code = 1006
    name = "RecipientCountMismatchError"
    msg = "Recipient and amount arrays differ in length"


class RootIndexCountMismatchError(LightClientError):
    def __init__(self, inputs: int, root_indices: int) -> None:
        super().__init__(
            f"Expected one root index per input account: {inputs} inputs, {root_indices} root indices"
        )
        self.inputs = inputs
        self.root_indices = root_indices

    code = 1007
    name = "RootIndexCountMismatchError"
    msg = "Root index count differs from input account count"


class FieldSizeError(LightClientError):
    def __init__(self, value: int) -> None:
        super().__init__(f"Value {value} is outside the BN254 scalar field")
        self.value = value

    code = 1008
    name = "FieldSizeError"
    msg = "Value is negative or not below the BN254 field modulus"


class AddressDerivationError(LightClientError):
    def __init__(self) -> None:
        super().__init__("No bump seed produced a hash below the field modulus")

    code = 1009
    name = "AddressDerivationError"
    msg = "Failed to derive address"


class ValidityProofRequiredError(LightClientError):
    def __init__(self, instruction: str) -> None:
        super().__init__(f"{instruction} requires a validity proof")
        self.instruction = instruction

    code = 1010
    name = "ValidityProofRequiredError"
    msg = "Instruction requires a validity proof"


class NoInputAccountsError(LightClientError):
    def __init__(self, instruction: str) -> None:
        super().__init__(f"{instruction} requires at least one input account")
        self.instruction = instruction

    code = 1011
    name = "NoInputAccountsError"
    msg = "At least one input account is required"


ClientError = typing.Union[
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
]
CLIENT_ERROR_MAP: dict[int, type] = {
    1000: InsufficientBalanceError,
    1001: OwnerMismatchError,
    1002: InvalidLengthError,
    1003: WidthOverflowError,
    1004: AmbiguousOutputTreeError,
    1005: UnderspecifiedOutputTreeError,
    1006: RecipientCountMismatchError,
    1007: RootIndexCountMismatchError,
    1008: FieldSizeError,
    1009: AddressDerivationError,
    1010: ValidityProofRequiredError,
    1011: NoInputAccountsError,
}


def from_code(code: int) -> typing.Optional[type]:
    maybe_err = CLIENT_ERROR_MAP.get(code)
    if maybe_err is None:
        return None
    return maybe_err

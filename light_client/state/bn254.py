from __future__ import annotations
from solders.pubkey import Pubkey
from ..constants import FIELD_SIZE
from ..errors import FieldSizeError, InvalidLengthError

BN254_SIZE = 32


class BN254:
    """Element of the BN254 scalar field, stored as 32 big-endian bytes."""

    __slots__ = ("_bytes",)

    def __init__(self, value: bytes) -> None:
        if len(value) != BN254_SIZE:
            raise InvalidLengthError("BN254", BN254_SIZE, len(value))
        if int.from_bytes(value, "big") >= FIELD_SIZE:
            raise FieldSizeError(int.from_bytes(value, "big"))
        self._bytes = bytes(value)

    @classmethod
    def from_bytes(cls, value: bytes) -> "BN254":
        return cls(value)

    @classmethod
    def from_int(cls, value: int) -> "BN254":
        if value < 0 or value >= FIELD_SIZE:
            raise FieldSizeError(value)
        return cls(value.to_bytes(BN254_SIZE, "big"))

    @classmethod
    def from_base58(cls, value: str) -> "BN254":
        return cls(bytes(Pubkey.from_string(value)))

    @classmethod
    def from_pubkey(cls, value: Pubkey) -> "BN254":
        return cls(bytes(value))

    def to_bytes(self) -> bytes:
        return self._bytes

    def to_int(self) -> int:
        return int.from_bytes(self._bytes, "big")

    def to_base58(self) -> str:
        return str(Pubkey(self._bytes))

    @property
    def is_zero(self) -> bool:
        return not any(self._bytes)

    def __bytes__(self) -> bytes:
        return self._bytes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BN254):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f"BN254({self.to_base58()})"


BN254_ZERO = BN254(bytes(BN254_SIZE))

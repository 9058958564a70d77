"""Write-only Borsh encoder.

Mirrors the deserializer used by the on-chain programs: little-endian
integers, single-byte booleans, verbatim fixed arrays, ``u32``-prefixed
vectors and a leading ``0``/``1`` byte for options.
"""
from __future__ import annotations
import typing
import borsh_construct as borsh
from anchorpy.borsh_extension import BorshPubkey
from construct import Construct
from solders.pubkey import Pubkey
from ..errors import InvalidLengthError, WidthOverflowError

T = typing.TypeVar("T")

_INTEGERS: dict[str, tuple[Construct, int, int]] = {
    "u8": (borsh.U8, 0, 0xFF),
    "u16": (borsh.U16, 0, 0xFFFF),
    "u32": (borsh.U32, 0, 0xFFFFFFFF),
    "u64": (borsh.U64, 0, (1 << 64) - 1),
    "u128": (borsh.U128, 0, (1 << 128) - 1),
    "i8": (borsh.I8, -(1 << 7), (1 << 7) - 1),
    "i16": (borsh.I16, -(1 << 15), (1 << 15) - 1),
    "i32": (borsh.I32, -(1 << 31), (1 << 31) - 1),
    "i64": (borsh.I64, -(1 << 63), (1 << 63) - 1),
}


def encode_int(width: str, value: int) -> bytes:
    """Encode ``value`` as the integer type ``width`` (``"u8"`` ... ``"i64"``)."""
    layout, low, high = _INTEGERS[width]
    if isinstance(value, bool) or not isinstance(value, int):
        raise WidthOverflowError(width, value, low, high)
    if value < low or value > high:
        raise WidthOverflowError(width, value, low, high)
    return layout.build(value)


class BorshWriter:
    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def write_u8(self, value: int) -> None:
        self._buffer += encode_int("u8", value)

    def write_u16(self, value: int) -> None:
        self._buffer += encode_int("u16", value)

    def write_u32(self, value: int) -> None:
        self._buffer += encode_int("u32", value)

    def write_u64(self, value: int) -> None:
        self._buffer += encode_int("u64", value)

    def write_u128(self, value: int) -> None:
        self._buffer += encode_int("u128", value)

    def write_i8(self, value: int) -> None:
        self._buffer += encode_int("i8", value)

    def write_i16(self, value: int) -> None:
        self._buffer += encode_int("i16", value)

    def write_i32(self, value: int) -> None:
        self._buffer += encode_int("i32", value)

    def write_i64(self, value: int) -> None:
        self._buffer += encode_int("i64", value)

    def write_bool(self, value: bool) -> None:
        self._buffer += borsh.Bool.build(bool(value))

    def write_fixed_array(
        self,
        value: bytes,
        length: typing.Optional[int] = None,
        field: str = "array",
    ) -> None:
        """Append ``value`` verbatim, optionally checking its length first."""
        if length is not None and len(value) != length:
            raise InvalidLengthError(field, length, len(value))
        self._buffer += bytes(value)

    def write_pubkey(self, value: Pubkey) -> None:
        self._buffer += BorshPubkey.build(value)

    def write_vec(self, value: bytes) -> None:
        """Append a ``Vec<u8>``: ``u32`` length followed by the bytes."""
        encode_int("u32", len(value))
        self._buffer += borsh.Bytes.build(bytes(value))

    def write_vec_of(
        self, items: typing.Sequence[T], encode: typing.Callable[[T], None]
    ) -> None:
        self.write_u32(len(items))
        for item in items:
            encode(item)

    def write_option(
        self, value: typing.Optional[T], encode: typing.Callable[[T], None]
    ) -> None:
        if value is None:
            self.write_u8(0)
            return
        self.write_u8(1)
        encode(value)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

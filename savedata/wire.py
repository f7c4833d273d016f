"""Protocol buffer wire format: varints, tags and length-delimited fields."""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Iterator, Tuple, Union

_MAX_FIELD = (1 << 29) - 1
_U64_LIMIT = 1 << 64
_I64_MIN = -(1 << 63)
_MAX_VARINT_BYTES = 10


class WireType(IntEnum):
    """Encoding of a field's value as given by the low three bits of its tag."""

    VARINT = 0
    I64 = 1
    LEN = 2
    SGROUP = 3
    EGROUP = 4
    I32 = 5


class DecodeError(ValueError):
    """Raised when bytes are not a well-formed protocol buffer message."""


def encode_varint(value: int) -> bytes:
    """Encode an integer as a base-128 varint.

    Negative values are written as their 64-bit two's complement, as
    protocol buffers do for ``int32`` and ``int64`` fields.
    """
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, int):
        raise TypeError(f"varint value must be an integer, not {type(value).__name__}")
    if not _I64_MIN <= value < _U64_LIMIT:
        raise ValueError(f"varint value {value} does not fit in 64 bits")
    if value < 0:
        value += _U64_LIMIT
    out = bytearray()
    while True:
        low = value & 0x7F
        value >>= 7
        if value:
            out.append(low | 0x80)
        else:
            out.append(low)
            return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """Read a varint at ``offset``; return its value and the offset after it."""
    result = 0
    shift = 0
    position = offset
    view = memoryview(data)
    while True:
        if position >= len(view):
            raise DecodeError(f"truncated varint at offset {offset}")
        if position - offset >= _MAX_VARINT_BYTES:
            raise DecodeError(f"varint at offset {offset} is too long")
        byte = view[position]
        position += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            break
        shift += 7
    if result >= _U64_LIMIT:
        raise DecodeError(f"varint at offset {offset} overflows 64 bits")
    return result, position


def to_signed(value: int, bits: int) -> int:
    """Read the low ``bits`` bits of ``value`` as a two's complement integer."""
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


FieldValue = Union[int, bytes]


def iter_fields(data: bytes) -> Iterator[Tuple[int, WireType, FieldValue]]:
    """Yield ``(field_number, wire_type, value)`` for each field in a message.

    Varint values come as integers; fixed-width and length-delimited values
    come as their raw bytes.
    """
    data = bytes(data)
    offset = 0
    end = len(data)
    while offset < end:
        tag, offset = decode_varint(data, offset)
        number = tag >> 3
        if number == 0 or number > _MAX_FIELD:
            raise DecodeError(f"invalid field number {number}")
        try:
            wire_type = WireType(tag & 0x07)
        except ValueError:
            raise DecodeError(f"invalid wire type {tag & 0x07}") from None
        if wire_type is WireType.VARINT:
            value, offset = decode_varint(data, offset)
            yield number, wire_type, value
        elif wire_type is WireType.I64 or wire_type is WireType.I32:
            size = 8 if wire_type is WireType.I64 else 4
            if offset + size > end:
                raise DecodeError(f"truncated fixed-width field {number}")
            yield number, wire_type, data[offset : offset + size]
            offset += size
        elif wire_type is WireType.LEN:
            length, offset = decode_varint(data, offset)
            if offset + length > end:
                raise DecodeError(f"truncated length-delimited field {number}")
            yield number, wire_type, data[offset : offset + length]
            offset += length
        else:
            raise DecodeError(f"group wire type in field {number} is not supported")


def _tag(field: int, wire_type: WireType) -> bytes:
    if isinstance(field, bool) or not isinstance(field, int):
        raise TypeError(f"field number must be an integer, not {type(field).__name__}")
    if not 1 <= field <= _MAX_FIELD:
        raise ValueError(f"field number {field} is out of range")
    return encode_varint((field << 3) | wire_type)


class MessageWriter:
    """Builds one message field by field; each method returns the writer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def varint(self, field: int, value: int) -> "MessageWriter":
        """Write an integer or boolean field."""
        encoded = encode_varint(value)
        self._buffer += _tag(field, WireType.VARINT)
        self._buffer += encoded
        return self

    def float32(self, field: int, value: float) -> "MessageWriter":
        """Write a 32-bit float field."""
        encoded = struct.pack("<f", value)
        self._buffer += _tag(field, WireType.I32)
        self._buffer += encoded
        return self

    def float64(self, field: int, value: float) -> "MessageWriter":
        """Write a 64-bit float field."""
        encoded = struct.pack("<d", value)
        self._buffer += _tag(field, WireType.I64)
        self._buffer += encoded
        return self

    def bytes_field(self, field: int, value: Union[bytes, str]) -> "MessageWriter":
        """Write a length-delimited field; strings are written as UTF-8."""
        if isinstance(value, str):
            value = value.encode("utf-8")
        value = bytes(value)
        self._buffer += _tag(field, WireType.LEN)
        self._buffer += encode_varint(len(value))
        self._buffer += value
        return self

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
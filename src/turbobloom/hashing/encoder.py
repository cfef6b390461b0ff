"""
Deterministic byte encodings for filter elements.

Python's built-in ``hash()`` is salted per process for str and bytes, so
elements are hashed from an explicit byte encoding instead. Every encoding
starts with a one-byte type tag, which keeps ``1``, ``"1"`` and ``b"1"``
apart.
"""

import struct
from functools import singledispatch
from typing import Any, Callable, Protocol, runtime_checkable

from turbobloom.errors import UnhashableElement

TAG_NONE = b"\x00"
TAG_BOOL = b"\x01"
TAG_INT = b"\x02"
TAG_FLOAT = b"\x03"
TAG_STR = b"\x04"
TAG_BYTES = b"\x05"
TAG_TUPLE = b"\x06"
TAG_FROZENSET = b"\x07"
TAG_CUSTOM = b"\x7f"

_LENGTH = struct.Struct(">I")


@runtime_checkable
class BloomHashable(Protocol):
    def __bloom_bytes__(self) -> bytes: ...


def _framed(parts) -> bytes:
    return b"".join(_LENGTH.pack(len(part)) + part for part in parts)


@singledispatch
def _encode(value: Any) -> bytes:
    raise UnhashableElement(
        f"cannot encode {type(value).__name__!r} element; define "
        "__bloom_bytes__ or register an encoder"
    )


@_encode.register(type(None))
def _(value) -> bytes:
    return TAG_NONE


@_encode.register(bool)
def _(value) -> bytes:
    return TAG_BOOL + (b"\x01" if value else b"\x00")


@_encode.register(int)
def _(value) -> bytes:
    length = (value.bit_length() + 8) // 8
    return TAG_INT + value.to_bytes(length, "big", signed=True)


@_encode.register(float)
def _(value) -> bytes:
    # -0.0 == 0.0, so both encode as 0.0
    return TAG_FLOAT + struct.pack(">d", value + 0.0)


@_encode.register(str)
def _(value) -> bytes:
    return TAG_STR + value.encode("utf-8")


@_encode.register(bytes)
@_encode.register(bytearray)
@_encode.register(memoryview)
def _(value) -> bytes:
    return TAG_BYTES + bytes(value)


@_encode.register(tuple)
def _(value) -> bytes:
    return TAG_TUPLE + _LENGTH.pack(len(value)) + _framed(map(to_bytes, value))


@_encode.register(frozenset)
def _(value) -> bytes:
    parts = sorted(to_bytes(item) for item in value)
    return TAG_FROZENSET + _LENGTH.pack(len(parts)) + _framed(parts)


def register(cls: type, encoder: Callable[[Any], bytes]) -> None:
    """Register ``encoder`` as the byte encoding for instances of ``cls``."""

    @_encode.register(cls)
    def _custom(value) -> bytes:
        return TAG_CUSTOM + bytes(encoder(value))


def to_bytes(element: Any) -> bytes:
    bloom_bytes = getattr(type(element), "__bloom_bytes__", None)
    if bloom_bytes is not None:
        data = bloom_bytes(element)
        if not isinstance(data, (bytes, bytearray)):
            raise UnhashableElement(
                f"{type(element).__name__}.__bloom_bytes__ returned "
                f"{type(data).__name__}, expected bytes"
            )
        return TAG_CUSTOM + bytes(data)
    return _encode(element)

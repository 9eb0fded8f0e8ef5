from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def uint8(data: BytesLike) -> int:
    if len(data) != 1:
        raise ValueError("uint8 requires exactly 1 byte")
    return data[0]


def uint16_le(data: BytesLike) -> int:
    if len(data) != 2:
        raise ValueError("uint16_le requires exactly 2 bytes")
    return data[0] | (data[1] << 8)


def pack_uint16_le(value: int) -> bytes:
    if value < 0 or value > 0xFFFF:
        raise ValueError("value must be between 0 and 65535")
    return value.to_bytes(2, byteorder="little")


def hex_preview(data: BytesLike, limit: int = 64) -> str:
    raw = bytes(data)
    if limit >= 0 and len(raw) > limit:
        return f"{raw[:limit].hex()}... ({len(raw)} bytes)"
    return raw.hex()

"""
Failures raised while decoding a binary record buffer.

Every error carries the byte ``offset`` at which decoding stopped, and the
offending ``tag`` byte where one was read, so a caller can correlate the
failure with the raw buffer it logged.
"""
from __future__ import annotations

from typing import Optional


class NbfxDecodeError(ValueError):
    """Base class for all decoder failures."""

    def __init__(self, message: str, offset: int, tag: Optional[int] = None):
        super().__init__(message)
        self.offset = offset
        self.tag = tag


class UnexpectedEndOfData(NbfxDecodeError):
    def __init__(self, offset: int, requested: int, available: int):
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"needed {requested} byte(s), {available} available",
            offset,
        )
        self.requested = requested
        self.available = available


class UnknownRecordType(NbfxDecodeError):
    def __init__(self, offset: int, tag: int):
        super().__init__(f"Unknown record type 0x{tag:02x} at offset {offset}", offset, tag)


class UnexpectedRecordAtTopLevel(NbfxDecodeError):
    def __init__(self, offset: int, tag: int):
        super().__init__(
            f"Record 0x{tag:02x} at offset {offset} is not allowed outside an element",
            offset,
            tag,
        )


class UnexpectedRecordInElement(NbfxDecodeError):
    def __init__(self, offset: int, tag: int):
        super().__init__(
            f"Record 0x{tag:02x} at offset {offset} is not allowed inside an open element",
            offset,
            tag,
        )


class InvalidUtf8(NbfxDecodeError):
    def __init__(self, offset: int, tag: int, reason: str):
        super().__init__(f"Invalid UTF-8 in string payload at offset {offset}: {reason}", offset, tag)
        self.reason = reason

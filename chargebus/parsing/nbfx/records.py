"""
Record layer of the binary message encoding.

Each record starts with a tag byte. ``EndElement`` stands alone; every other
record is followed by a length-prefixed UTF-8 string. ``Chars16Text`` uses a
2-byte little-endian length, all other string records a 1-byte length.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional

from chargebus.core.binary import uint8, uint16_le
from chargebus.parsing.nbfx.cursor import Cursor
from chargebus.parsing.nbfx.errors import InvalidUtf8, UnknownRecordType


class RecordType(IntEnum):
    END_ELEMENT = 0x01
    SHORT_XMLNS_ATTRIBUTE = 0x08
    SHORT_ELEMENT = 0x40
    CHARS8_TEXT = 0x98
    CHARS16_TEXT = 0x9A


TEXT_RECORDS: frozenset[RecordType] = frozenset({RecordType.CHARS8_TEXT, RecordType.CHARS16_TEXT})

# Maximum payload length each string record can describe.
MAX_PAYLOAD_LENGTH: dict[RecordType, int] = {
    RecordType.SHORT_XMLNS_ATTRIBUTE: 0xFF,
    RecordType.SHORT_ELEMENT: 0xFF,
    RecordType.CHARS8_TEXT: 0xFF,
    RecordType.CHARS16_TEXT: 0xFFFF,
}

_TAGS_BY_VALUE: dict[int, RecordType] = {tag.value: tag for tag in RecordType}


@dataclass(frozen=True)
class Record:
    """
    One tagged unit of the stream.

    Attributes:
        tag: The record type.
        payload: The decoded string; ``None`` exactly when ``tag`` is ``END_ELEMENT``.
        offset: Buffer offset of the tag byte.
    """
    tag: RecordType
    payload: Optional[str] = None
    offset: int = 0

    def __post_init__(self) -> None:
        if (self.payload is None) != (self.tag is RecordType.END_ELEMENT):
            raise ValueError(f"{self.tag.name} record payload presence is inconsistent")


class RecordReader:
    """Pulls ``Record`` values off a ``Cursor`` one at a time."""

    def __init__(self, cursor: Cursor) -> None:
        self._cursor = cursor

    def next_record(self) -> Optional[Record]:
        """
        Read the next record.

        Returns:
            The record, or ``None`` when the cursor is exhausted at a record
            boundary.

        Raises:
            UnexpectedEndOfData: The buffer ends inside a record.
            UnknownRecordType: The tag byte is not a known record type.
            InvalidUtf8: A string payload is not valid UTF-8.
        """
        if self._cursor.remaining() == 0:
            return None

        offset = self._cursor.offset
        value = uint8(self._cursor.take(1))
        tag = _TAGS_BY_VALUE.get(value)
        if tag is None:
            raise UnknownRecordType(offset, value)
        if tag is RecordType.END_ELEMENT:
            return Record(tag=tag, offset=offset)
        return Record(tag=tag, payload=self._read_string(tag), offset=offset)

    def _read_string(self, tag: RecordType) -> str:
        if tag is RecordType.CHARS16_TEXT:
            length = uint16_le(self._cursor.take(2))
        else:
            length = uint8(self._cursor.take(1))
        start = self._cursor.offset
        raw = self._cursor.take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(start + exc.start, tag.value, exc.reason) from exc

    def __iter__(self) -> Iterator[Record]:
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record

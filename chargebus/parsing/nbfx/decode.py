"""
Element assembly for the binary message encoding.

The supported grammar is flat: a message is a sequence of elements, and each
element is ``ShortElement`` followed by any number of ``ShortXmlnsAttribute``
and text records, closed by ``EndElement``. Elements do not nest.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

from chargebus.core.binary import BytesLike
from chargebus.parsing.nbfx.cursor import Cursor
from chargebus.parsing.nbfx.errors import (
    UnexpectedEndOfData,
    UnexpectedRecordAtTopLevel,
    UnexpectedRecordInElement,
)
from chargebus.parsing.nbfx.records import TEXT_RECORDS, Record, RecordReader, RecordType


@dataclass(frozen=True)
class Element:
    """
    A closed element.

    Attributes:
        name: The element name.
        xmlns: The namespace attribute, if one was present.
        text: The text body, if one was present.
    """
    name: str
    xmlns: Optional[str] = None
    text: Optional[str] = None

    def as_dict(self) -> dict:
        return {"name": self.name, "xmlns": self.xmlns, "text": self.text}


@dataclass
class _OpenElement:
    name: str
    xmlns: Optional[str] = None
    text: Optional[str] = None

    def close(self) -> Element:
        return Element(name=self.name, xmlns=self.xmlns, text=self.text)


class ElementBuilder:
    """
    Assembles records into closed elements.

    The builder is either at top level (``current`` is ``None``) or inside
    exactly one open element. Attribute and text records overwrite earlier
    values on the same element.
    """

    def __init__(self) -> None:
        self.elements: list[Element] = []
        self._current: Optional[_OpenElement] = None

    @property
    def inside_element(self) -> bool:
        return self._current is not None

    def feed(self, record: Record) -> None:
        if self._current is None:
            if record.tag is not RecordType.SHORT_ELEMENT:
                raise UnexpectedRecordAtTopLevel(record.offset, record.tag.value)
            self._current = _OpenElement(name=record.payload)
            return

        if record.tag is RecordType.SHORT_XMLNS_ATTRIBUTE:
            self._current.xmlns = record.payload
        elif record.tag in TEXT_RECORDS:
            self._current.text = record.payload
        elif record.tag is RecordType.END_ELEMENT:
            self.elements.append(self._current.close())
            self._current = None
        else:
            raise UnexpectedRecordInElement(record.offset, record.tag.value)

    def finish(self, offset: int) -> list[Element]:
        if self._current is not None:
            raise UnexpectedEndOfData(offset, requested=1, available=0)
        return list(self.elements)


def decode_message(data: BytesLike) -> list[Element]:
    """
    Decode a message body into its ordered list of elements.

    An empty buffer decodes to an empty list. Any malformed input aborts the
    whole call; no partial result is returned.

    Args:
        data: The raw message body.

    Returns:
        The closed elements in the order they appear in the buffer.

    Raises:
        NbfxDecodeError: The buffer is not a valid message (see
            ``chargebus.parsing.nbfx.errors`` for the specific failures).
    """
    cursor = Cursor(data)
    builder = ElementBuilder()
    for record in RecordReader(cursor):
        builder.feed(record)
    return builder.finish(cursor.offset)


def decode_message_b64(raw_b64: str) -> list[Element]:
    try:
        raw = base64.b64decode("".join(raw_b64.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Failed to decode message base64: {exc}") from exc
    return decode_message(raw)

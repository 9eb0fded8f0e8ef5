"""
Encoder for the binary message encoding, the inverse of ``decode_message``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from chargebus.core.binary import pack_uint16_le
from chargebus.parsing.nbfx.decode import Element
from chargebus.parsing.nbfx.records import MAX_PAYLOAD_LENGTH, RecordType


def encode_record(tag: RecordType, payload: Optional[str] = None) -> bytes:
    """
    Encode a single record.

    Args:
        tag: The record type.
        payload: The string payload; must be ``None`` for ``END_ELEMENT`` and
            present for every other tag.

    Returns:
        The encoded record bytes.

    Raises:
        ValueError: If the payload presence does not match the tag, or the
            UTF-8 payload does not fit the tag's length field.
    """
    tag = RecordType(tag)
    if tag is RecordType.END_ELEMENT:
        if payload is not None:
            raise ValueError("END_ELEMENT records carry no payload")
        return bytes([tag])
    if payload is None:
        raise ValueError(f"{tag.name} records require a payload")

    raw = payload.encode("utf-8")
    limit = MAX_PAYLOAD_LENGTH[tag]
    if len(raw) > limit:
        raise ValueError(f"{tag.name} payload is {len(raw)} bytes, limit is {limit}")
    if tag is RecordType.CHARS16_TEXT:
        return bytes([tag]) + pack_uint16_le(len(raw)) + raw
    return bytes([tag, len(raw)]) + raw


def _text_record(text: str) -> bytes:
    if len(text.encode("utf-8")) <= MAX_PAYLOAD_LENGTH[RecordType.CHARS8_TEXT]:
        return encode_record(RecordType.CHARS8_TEXT, text)
    return encode_record(RecordType.CHARS16_TEXT, text)


def encode_elements(elements: Iterable[Element]) -> bytes:
    """
    Encode elements into a message body.

    Text of up to 255 UTF-8 bytes is written as ``CHARS8_TEXT``, longer text
    as ``CHARS16_TEXT``.
    """
    buf = bytearray()
    for element in elements:
        buf += encode_record(RecordType.SHORT_ELEMENT, element.name)
        if element.xmlns is not None:
            buf += encode_record(RecordType.SHORT_XMLNS_ATTRIBUTE, element.xmlns)
        if element.text is not None:
            buf += _text_record(element.text)
        buf += encode_record(RecordType.END_ELEMENT)
    return bytes(buf)

"""
Codec for the compact binary element encoding carried in queue message bodies.

A message body is a flat sequence of elements, each with a name, an optional
namespace attribute and an optional text body. This sub-package decodes such
a body into ``Element`` values and encodes elements back into bytes.
"""
from chargebus.parsing.nbfx.cursor import Cursor
from chargebus.parsing.nbfx.decode import Element, ElementBuilder, decode_message, decode_message_b64
from chargebus.parsing.nbfx.encode import encode_elements, encode_record
from chargebus.parsing.nbfx.errors import (
    InvalidUtf8,
    NbfxDecodeError,
    UnexpectedEndOfData,
    UnexpectedRecordAtTopLevel,
    UnexpectedRecordInElement,
    UnknownRecordType,
)
from chargebus.parsing.nbfx.records import Record, RecordReader, RecordType

__all__ = [
    "Cursor",
    "Element",
    "ElementBuilder",
    "InvalidUtf8",
    "NbfxDecodeError",
    "Record",
    "RecordReader",
    "RecordType",
    "UnexpectedEndOfData",
    "UnexpectedRecordAtTopLevel",
    "UnexpectedRecordInElement",
    "UnknownRecordType",
    "decode_message",
    "decode_message_b64",
    "encode_elements",
    "encode_record",
]

"""Tests for message handling: acknowledge decisions and logged events."""
import json
import uuid

import pytest

from chargebus.messages import MessageHandler, MessageSettings, StateUpdate
from chargebus.messages.logging import create_logger, get_ring_buffer
from chargebus.parsing.nbfx import Element, encode_elements

XMLNS = "http://schemas.microsoft.com/2003/10/Serialization/"


def _body(text: str | None) -> bytes:
    return encode_elements([Element(name="string", xmlns=XMLNS, text=text)])


@pytest.fixture
def handler():
    settings = MessageSettings(max_message_bytes=4096, log_preview_bytes=8)
    logger = create_logger(f"chargebus.test.{uuid.uuid4().hex}", ring_size=20)
    return MessageHandler(settings=settings, logger=logger)


def _events(handler: MessageHandler) -> list[dict]:
    return get_ring_buffer(handler.logger).get_events()


def test_state_update_acknowledged(handler):
    body = _body(json.dumps({"StateId": 710, "ValueAsString": "3", "ChargerId": "c-1"}))
    result = handler.handle(body, message_id="m-1")

    assert result.acknowledge is True
    assert result.error is None
    assert result.update == StateUpdate(state_id="710", value_as_string="3", charger_id="c-1")
    assert result.elements[0].xmlns == XMLNS

    event = _events(handler)[-1]
    assert event["event"] == "message_completed"
    assert event["level"] == "INFO"
    assert event["details"] == {"message_id": "m-1", "state_id": "710", "value": "3"}


def test_decode_failure_not_acknowledged(handler):
    body = _body('{"StateId": 1}')[:-1]
    result = handler.handle(body)

    assert result.acknowledge is False
    assert result.update is None
    assert "Unexpected end of data" in result.error

    event = _events(handler)[-1]
    assert event["event"] == "message_decode_failed"
    assert event["level"] == "ERROR"
    assert event["details"]["error_type"] == "UnexpectedEndOfData"
    assert event["details"]["offset"] == len(body)
    assert event["details"]["body"].startswith(body[:8].hex())


def test_unknown_tag_reports_tag(handler):
    result = handler.handle(b"\xff\x00")
    assert result.acknowledge is False
    details = _events(handler)[-1]["details"]
    assert details["tag"] == 0xFF
    assert details["offset"] == 0
    assert details["body"] == "ff00"


def test_empty_message_acknowledged_with_warning(handler):
    result = handler.handle(b"")
    assert result.acknowledge is True
    assert result.elements == []
    assert _events(handler)[-1]["event"] == "message_without_text"
    assert _events(handler)[-1]["level"] == "WARNING"


def test_element_without_text_acknowledged(handler):
    result = handler.handle(_body(None))
    assert result.acknowledge is True
    assert result.update is None


def test_invalid_json_not_acknowledged(handler):
    result = handler.handle(_body("{not json"))
    assert result.acknowledge is False
    assert len(result.elements) == 1
    assert _events(handler)[-1]["event"] == "message_payload_invalid"


def test_missing_state_id_not_acknowledged(handler):
    result = handler.handle(_body(json.dumps({"ValueAsString": "1"})))
    assert result.acknowledge is False
    assert result.update is None


def test_oversized_message_rejected(handler):
    result = handler.handle(b"\x40" * 5000)
    assert result.acknowledge is False
    assert "limit is 4096" in result.error
    assert _events(handler)[-1]["event"] == "message_rejected"


def test_long_payload_via_chars16(handler):
    value = "x" * 400
    result = handler.handle(_body(json.dumps({"StateId": "553", "ValueAsString": value})))
    assert result.acknowledge is True
    assert result.update.value_as_string == value


def test_only_first_element_is_parsed(handler):
    body = encode_elements(
        [
            Element(name="string", text=json.dumps({"StateId": 513, "ValueAsString": "7400"})),
            Element(name="extra", text="ignored"),
        ]
    )
    result = handler.handle(body)
    assert result.update.state_id == "513"
    assert len(result.elements) == 2


@pytest.fixture
def roomy_handler():
    settings = MessageSettings(max_message_bytes=65536, log_preview_bytes=8)
    logger = create_logger(f"chargebus.test.{uuid.uuid4().hex}", ring_size=20)
    return MessageHandler(settings=settings, logger=logger)


def test_deeply_nested_json_not_acknowledged(roomy_handler):
    result = roomy_handler.handle(_body("[" * 60000))
    assert result.acknowledge is False
    assert result.update is None
    event = _events(roomy_handler)[-1]
    assert event["event"] == "message_payload_invalid"
    assert event["details"]["text"] == "[" * 8


def test_oversized_integer_not_acknowledged(roomy_handler):
    result = roomy_handler.handle(_body('{"StateId": ' + "1" * 5000 + "}"))
    assert result.acknowledge is False
    assert result.error
    assert _events(roomy_handler)[-1]["event"] == "message_payload_invalid"


def test_float_state_id_acknowledged(handler):
    result = handler.handle(_body(json.dumps({"StateId": 710.0, "ValueAsString": 3})))
    assert result.acknowledge is True
    assert result.update.state_id == "710"
    assert result.update.value_as_string == "3"

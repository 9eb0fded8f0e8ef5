"""
Turns raw queue message bodies into state updates and an acknowledge decision.

A message is acknowledged once it has been decoded and its payload parsed, or
when it decodes cleanly but carries no payload. Decode, JSON and validation
failures leave the message unacknowledged so the queue can redeliver it.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from chargebus.core.binary import BytesLike, hex_preview
from chargebus.messages.config import MessageSettings, get_settings
from chargebus.messages.logging import create_logger, redact
from chargebus.messages.models import StateUpdate
from chargebus.parsing.nbfx import Element, NbfxDecodeError, decode_message


@dataclass
class HandleResult:
    acknowledge: bool
    elements: list[Element] = field(default_factory=list)
    update: Optional[StateUpdate] = None
    error: Optional[str] = None


class MessageHandler:
    def __init__(self, settings: Optional[MessageSettings] = None, logger: Optional[logging.Logger] = None):
        self.settings = settings or get_settings()
        self.logger = logger or create_logger(
            self.settings.logger_name, self.settings.log_ring_size, propagate=self.settings.log_propagate
        )

    def handle(self, body: BytesLike, message_id: Optional[str] = None) -> HandleResult:
        body = bytes(body)
        if len(body) > self.settings.max_message_bytes:
            error = f"message is {len(body)} bytes, limit is {self.settings.max_message_bytes}"
            self._log(logging.ERROR, "message_rejected", message_id, {"error": error})
            return HandleResult(acknowledge=False, error=error)

        try:
            elements = decode_message(body)
        except NbfxDecodeError as exc:
            self._log(
                logging.ERROR,
                "message_decode_failed",
                message_id,
                {
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                    "offset": exc.offset,
                    "tag": exc.tag,
                    "body": hex_preview(body, self.settings.log_preview_bytes),
                },
            )
            return HandleResult(acknowledge=False, error=str(exc))

        if not elements or not elements[0].text:
            self._log(logging.WARNING, "message_without_text", message_id, {"elements": len(elements)})
            return HandleResult(acknowledge=True, elements=elements)

        try:
            update = StateUpdate.model_validate(json.loads(elements[0].text))
        except (ValueError, RecursionError) as exc:
            self._log(
                logging.ERROR,
                "message_payload_invalid",
                message_id,
                {"error": str(exc), "text": elements[0].text[: self.settings.log_preview_bytes]},
            )
            return HandleResult(acknowledge=False, elements=elements, error=str(exc))

        self._log(
            logging.INFO,
            "message_completed",
            message_id,
            {"state_id": update.state_id, "value": update.value_as_string},
        )
        return HandleResult(acknowledge=True, elements=elements, update=update)

    def _log(self, level: int, event: str, message_id: Optional[str], details: dict) -> None:
        if message_id is not None:
            details = {"message_id": message_id, **details}
        self.logger.log(level, event, extra={"details": redact(details)})

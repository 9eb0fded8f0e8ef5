from chargebus.messages.config import MessageSettings, get_settings
from chargebus.messages.handler import HandleResult, MessageHandler
from chargebus.messages.models import StateUpdate

__all__ = ["HandleResult", "MessageHandler", "MessageSettings", "StateUpdate", "get_settings"]

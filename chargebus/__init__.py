from chargebus.parsing.nbfx import Element, NbfxDecodeError, decode_message, encode_elements
from chargebus.messages import MessageHandler, MessageSettings, StateUpdate
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "Element",
    "NbfxDecodeError",
    "decode_message",
    "encode_elements",
    "MessageHandler",
    "MessageSettings",
    "StateUpdate",
]

try:
    __version__ = version("chargebus")
except PackageNotFoundError:
    __version__ = "0.0.0"

from __future__ import annotations

from chargebus.core.binary import BytesLike
from chargebus.parsing.nbfx.errors import UnexpectedEndOfData


class Cursor:
    """
    Forward-only read view over an immutable byte buffer.

    The only way to move the cursor is ``take(n)``, which either returns
    exactly ``n`` bytes or raises ``UnexpectedEndOfData`` without moving.
    """

    def __init__(self, data: BytesLike) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def take(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        available = self.remaining()
        if n > available:
            raise UnexpectedEndOfData(self._offset, requested=n, available=available)
        start = self._offset
        self._offset += n
        return self._data[start:self._offset]

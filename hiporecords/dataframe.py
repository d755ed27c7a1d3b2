"""A compact in-memory frame of HIPO events behind a minimal record header."""

from __future__ import annotations

import struct

from hiporecords.utils import write_int

HEADER_BYTES = 56
HEADER_WORDS = 14
MAGIC = 0xC0DA0100
FRAME_VERSION = 5

DEFAULT_MAX_EVENTS = 50
DEFAULT_MAX_SIZE = 512 * 1024

_INT = struct.Struct("<I")

_RECORD_LENGTH = 0
_RECORD_NUMBER = 4
_HEADER_LENGTH = 8
_EVENT_COUNT = 12
_INDEX_LENGTH = 16
_VERSION = 20
_USER_HEADER_LENGTH = 24
_MAGIC = 28
_DATA_LENGTH = 32
_COMPRESSED_LENGTH = 36
_EVENT_SIZE_OFFSET = 4


class DataFrame:
    """Events stored back to back after a 56-byte header.

    Unlike a regular record, the length word at offset 0 holds the frame
    size in bytes, and events are located through the size word each event
    carries at its own offset 4.
    """

    def __init__(
        self,
        max_events: int = DEFAULT_MAX_EVENTS,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        if max_events <= 0 or max_size <= 0:
            raise ValueError("frame capacity must be positive")
        self.max_events = max_events
        self.max_size = max_size
        self._buffer = bytearray(HEADER_BYTES)
        self.reset()

    def _word(self, offset: int) -> int:
        (value,) = _INT.unpack_from(self._buffer, offset)
        return value

    def reset(self) -> None:
        """Drop all events and restore an empty header."""
        self._buffer = bytearray(HEADER_BYTES)
        write_int(self._buffer, _RECORD_LENGTH, HEADER_BYTES)
        write_int(self._buffer, _RECORD_NUMBER, 1)
        write_int(self._buffer, _HEADER_LENGTH, HEADER_WORDS)
        write_int(self._buffer, _EVENT_COUNT, 0)
        write_int(self._buffer, _INDEX_LENGTH, 0)
        write_int(self._buffer, _VERSION, FRAME_VERSION)
        write_int(self._buffer, _USER_HEADER_LENGTH, 0)
        write_int(self._buffer, _MAGIC, MAGIC)
        write_int(self._buffer, _DATA_LENGTH, 0)
        write_int(self._buffer, _COMPRESSED_LENGTH, 0)

    def add_event(self, data: bytes | bytearray | memoryview) -> bool:
        """Append an event; return False when the frame is full."""
        frame_size = self.size()
        length = len(data)
        if length + frame_size + HEADER_BYTES > self.max_size:
            return False
        count = self.count()
        if count >= self.max_events:
            return False
        del self._buffer[frame_size:]
        self._buffer += data
        data_length = self._word(_DATA_LENGTH) + length
        write_int(self._buffer, _EVENT_COUNT, count + 1)
        write_int(self._buffer, _DATA_LENGTH, data_length)
        write_int(self._buffer, _COMPRESSED_LENGTH, data_length)
        write_int(self._buffer, _RECORD_LENGTH, frame_size + length)
        return True

    def event_at(self, position: int) -> tuple[bytes, int]:
        """Return the event starting at byte *position* and the position after it."""
        frame_size = self.size()
        if not HEADER_BYTES <= position <= frame_size - 8:
            raise IndexError(f"no event starts at position {position}")
        event_size = self._word(position + _EVENT_SIZE_OFFSET)
        end = position + event_size
        if event_size < 8 or end > frame_size:
            raise ValueError(f"invalid event size {event_size} at position {position}")
        return bytes(self._buffer[position:end]), end

    def load(self, data: bytes | bytearray | memoryview) -> None:
        """Replace the frame content with a frame serialised in *data*."""
        if len(data) < HEADER_BYTES:
            raise ValueError(f"a frame needs at least {HEADER_BYTES} bytes, got {len(data)}")
        (size,) = _INT.unpack_from(data, 0)
        if size < HEADER_BYTES:
            raise ValueError(f"invalid frame size {size}")
        if size > len(data):
            raise ValueError(f"frame declares {size} bytes but only {len(data)} are given")
        self._buffer = bytearray(data[:size])

    def count(self) -> int:
        """Number of events in the frame."""
        return self._word(_EVENT_COUNT)

    def size(self) -> int:
        """Frame size in bytes, header included."""
        return self._word(_RECORD_LENGTH)

    def buffer(self) -> bytes:
        """The serialised frame."""
        return bytes(self._buffer[:self.size()])

    def __str__(self) -> str:
        return "\n".join(
            [
                "## data frame summary:",
                f"frame size       : {self.size()}",
                f"magic word       : {self._word(_MAGIC):X}",
                f"number of events : {self.count()}",
                f"data length      : {self._word(_DATA_LENGTH)}",
            ]
        )

    def summary(self) -> None:
        """Print the frame size, magic word, event count and data length."""
        print(self)
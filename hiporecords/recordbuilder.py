"""Assembling events into LZ4-compressed HIPO records."""

from __future__ import annotations

import struct

import lz4.block

from hiporecords.utils import write_int, write_long

DEFAULT_MAX_EVENTS = 100_000
DEFAULT_MAX_LENGTH = 8 * 1024 * 1024

HEADER_WORDS = 14
HEADER_BYTES = 4 * HEADER_WORDS
RECORD_VERSION = 6
MAGIC = 0xC0DA0100
LZ4_COMPRESSION = 1


def _padding(size: int) -> int:
    """Bytes needed to round *size* up to a multiple of four."""
    return -size % 4


class RecordBuilder:
    """Collects events and packs them into a single compressed record.

    Events are added with :meth:`add_event`; :meth:`build` then produces the
    record (header, index and LZ4-compressed events), available from
    :meth:`buffer`.  The ``user_word_one`` and ``user_word_two`` attributes
    are written into the record header on build.
    """

    def __init__(
        self,
        max_events: int = DEFAULT_MAX_EVENTS,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        if max_events <= 0 or max_length <= 0:
            raise ValueError("record capacity must be positive")
        self.max_events = max_events
        self.max_length = max_length
        self.user_word_one = 0
        self.user_word_two = 0
        self._sizes: list[int] = []
        self._events = bytearray()
        self._record = bytearray()

    def add_event(self, data: bytes | bytearray | memoryview) -> bool:
        """Append one event; return False when the record has no room for it."""
        length = len(data)
        if len(self._events) + length >= self.max_length:
            return False
        if (len(self._sizes) + 1) * 4 >= 4 * self.max_events:
            return False
        self._sizes.append(length)
        self._events += data
        return True

    def reset(self) -> None:
        """Drop all pending events."""
        self._sizes.clear()
        self._events.clear()

    def build(self) -> None:
        """Compress the pending events into a complete record."""
        count = len(self._sizes)
        index = struct.pack(f"<{count}I", *self._sizes)
        compressed = lz4.block.compress(
            index + bytes(self._events),
            mode="fast",
            acceleration=1,
            store_size=False,
        )
        rounding = _padding(len(compressed))
        padded_size = len(compressed) + rounding
        padded_words = padded_size // 4

        record = bytearray(HEADER_BYTES + padded_size)
        write_int(record, 0, padded_words + HEADER_WORDS)
        write_int(record, 4, 0)
        write_int(record, 8, HEADER_WORDS)
        write_int(record, 12, count)
        write_int(record, 16, 4 * count)
        write_int(record, 20, (rounding << 24) | RECORD_VERSION)
        write_int(record, 24, 0)
        write_int(record, 28, MAGIC)
        write_int(record, 32, len(self._events))
        write_int(record, 36, (LZ4_COMPRESSION << 28) | (padded_words & 0x0FFFFFFF))
        write_long(record, 40, self.user_word_one)
        write_long(record, 48, self.user_word_two)
        record[HEADER_BYTES:HEADER_BYTES + len(compressed)] = compressed
        self._record = record

    def entries(self) -> int:
        """Number of events in the last built record."""
        if len(self._record) < HEADER_BYTES:
            return 0
        (count,) = struct.unpack_from("<I", self._record, 12)
        return count

    def record_size(self) -> int:
        """Size in bytes of the last built record, header included."""
        if len(self._record) < HEADER_BYTES:
            return 0
        (words,) = struct.unpack_from("<I", self._record, 0)
        return 4 * words

    def buffer(self) -> bytes:
        """Bytes of the last built record."""
        return bytes(self._record[:self.record_size()])
"""Reading HIPO data records: header decoding, decompression and event access."""

from __future__ import annotations

import itertools
import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

import lz4.block

from hiporecords.utils import Benchmark

MAGIC = 0xC0DA0100
MAGIC_SWAPPED = 0x0001DAC0

_HEADER_FIELDS = 10
_HEADER_MIN_BYTES = 4 * _HEADER_FIELDS
_HEADER_READ_BYTES = 80


class RecordError(Exception):
    """Raised when a record cannot be read or decoded."""


@dataclass(frozen=True)
class RecordHeader:
    """The decoded header of one record."""

    signature: int
    record_length: int
    record_data_length: int
    record_data_length_compressed: int
    number_of_events: int
    header_length: int
    index_data_length: int
    user_header_length: int
    user_header_length_padding: int
    bit_info: int
    compression_type: int
    compressed_length_padding: int
    data_endianness: int

    @classmethod
    def parse(cls, data: bytes) -> RecordHeader:
        """Decode a record header from the first bytes of *data*.

        A record written on a big-endian machine is recognised by its
        swapped magic word and decoded with the byte order reversed.
        """
        if len(data) < _HEADER_MIN_BYTES:
            raise RecordError(
                f"record header needs {_HEADER_MIN_BYTES} bytes, got {len(data)}"
            )
        (signature,) = struct.unpack_from("<I", data, 28)
        big_endian = signature == MAGIC_SWAPPED
        order = ">" if big_endian else "<"
        (
            record_length,
            _record_number,
            header_length,
            number_of_events,
            _index_length,
            bit_info,
            user_header_length,
            _magic,
            record_data_length,
            compressed_word,
        ) = struct.unpack_from(f"{order}{_HEADER_FIELDS}I", data, 0)
        return cls(
            signature=signature,
            record_length=record_length,
            record_data_length=record_data_length,
            record_data_length_compressed=compressed_word & 0x0FFFFFFF,
            number_of_events=number_of_events,
            header_length=header_length,
            index_data_length=4 * number_of_events,
            user_header_length=user_header_length,
            user_header_length_padding=(bit_info >> 20) & 0x3,
            bit_info=bit_info,
            compression_type=(compressed_word >> 28) & 0xF,
            compressed_length_padding=(bit_info >> 24) & 0x3,
            data_endianness=1 if big_endian else 0,
        )

    @property
    def header_length_bytes(self) -> int:
        return 4 * self.header_length

    @property
    def data_length_bytes(self) -> int:
        """Bytes stored after the header, compressed or not."""
        return 4 * self.record_length - self.header_length_bytes

    @property
    def event_offset(self) -> int:
        """Offset of the first event inside the uncompressed buffer."""
        return self.index_data_length + self.user_header_length + self.user_header_length_padding

    @property
    def uncompressed_length(self) -> int:
        return self.event_offset + self.record_data_length


def decompress(data: bytes, uncompressed_length: int) -> bytes:
    """Decompress an LZ4 block that expands to *uncompressed_length* bytes."""
    if uncompressed_length < 0:
        raise RecordError(f"invalid uncompressed length {uncompressed_length}")
    try:
        return lz4.block.decompress(bytes(data), uncompressed_size=uncompressed_length)
    except lz4.block.LZ4BlockError as exc:
        raise RecordError(f"LZ4 decompression failed: {exc}") from exc


class Record:
    """One record of a HIPO file, holding its events in an uncompressed buffer."""

    def __init__(self) -> None:
        self.header: RecordHeader | None = None
        self._buffer = b""
        self._positions: list[int] = []
        self.read_benchmark = Benchmark("read")
        self.unzip_benchmark = Benchmark("unzip")
        self.index_benchmark = Benchmark("index")

    def read(self, stream: BinaryIO, position: int, input_size: int | None = None) -> None:
        """Read the record starting at byte *position* of *stream*.

        When *input_size* is given, a record that does not fit in the input
        raises :class:`RecordError`.
        """
        if input_size is not None and position + _HEADER_READ_BYTES >= input_size:
            raise RecordError(f"no record fits at position {position}")
        with self.read_benchmark:
            stream.seek(position)
            header = RecordHeader.parse(stream.read(_HEADER_READ_BYTES))
            if header.data_length_bytes < 0:
                raise RecordError(f"record at position {position} has a negative length")
            end = position + header.header_length_bytes + header.data_length_bytes
            if input_size is not None and end > input_size:
                raise RecordError(f"record at position {position} is incomplete")
            stream.seek(position + header.header_length_bytes)
            payload = stream.read(header.data_length_bytes)
        self._decode(header, payload)

    def load(self, data: bytes) -> None:
        """Decode a record held entirely in *data*, header included."""
        header = RecordHeader.parse(data)
        start = header.header_length_bytes
        if header.data_length_bytes < 0:
            raise RecordError("record has a negative length")
        payload = bytes(data[start:start + header.data_length_bytes])
        self._decode(header, payload)

    def _decode(self, header: RecordHeader, payload: bytes) -> None:
        if len(payload) < header.data_length_bytes:
            raise RecordError(
                f"record data is truncated: {len(payload)} of {header.data_length_bytes} bytes"
            )
        wanted = header.uncompressed_length
        with self.unzip_benchmark:
            if header.compression_type == 0:
                if len(payload) < wanted:
                    raise RecordError(
                        f"uncompressed record needs {wanted} bytes, has {len(payload)}"
                    )
                body = payload[:wanted]
            else:
                stored = header.data_length_bytes - header.compressed_length_padding
                body = decompress(payload[:stored], wanted)
        with self.index_benchmark:
            count = header.number_of_events
            if len(body) < header.index_data_length:
                raise RecordError("record index is truncated")
            order = ">" if header.data_endianness else "<"
            sizes = struct.unpack_from(f"{order}{count}I", body, 0)
            positions = list(itertools.accumulate(sizes))
        if positions and header.event_offset + positions[-1] > len(body):
            raise RecordError("record index points past the end of the data")
        self.header = header
        self._buffer = body
        self._positions = positions

    def event_count(self) -> int:
        """Number of events in the record."""
        return self.header.number_of_events if self.header else 0

    def compressed_size(self) -> int:
        """Record length in 32-bit words, header included."""
        return self.header.record_length if self.header else 0

    def _bounds(self, index: int) -> tuple[int, int]:
        if not 0 <= index < len(self._positions):
            raise IndexError(f"event {index} out of range for {len(self._positions)} events")
        first = self._positions[index - 1] if index > 0 else 0
        return first, self._positions[index]

    def get_data(self, index: int) -> bytes:
        """Return the bytes of event number *index*."""
        first, last = self._bounds(index)
        offset = self.header.event_offset
        return self._buffer[offset + first:offset + last]

    def events_map(self) -> list[tuple[int, int]]:
        """Start and end offsets of every event in the uncompressed buffer."""
        if self.header is None:
            return []
        offset = self.header.event_offset
        starts = itertools.chain([0], self._positions)
        return [(offset + first, offset + last) for first, last in zip(starts, self._positions)]

    def __len__(self) -> int:
        return self.event_count()

    def __iter__(self) -> Iterator[bytes]:
        for index in range(len(self._positions)):
            yield self.get_data(index)
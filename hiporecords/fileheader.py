"""The fixed header at the start of every HIPO file."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

MAGIC = 0xC0DA0100
MAGIC_SWAPPED = 0x0001DAC0
HIPO_UNIQUE_ID = 0x4F504948
HEADER_WORDS = 14
HEADER_BYTES = 4 * HEADER_WORDS
FILE_VERSION = 6

_READ_BYTES = 80
_LAYOUT = "8I2q2I"


class FileHeaderError(Exception):
    """Raised when a file header cannot be decoded or encoded."""


@dataclass
class FileHeader:
    """The decoded file header.

    ``bit_info_version`` is the raw sixth word: the version in its low byte
    and the bit-info flags above it.  ``big_endian`` records whether the
    header was written with the byte order reversed; the fields themselves
    always hold the decoded values.
    """

    unique_id: int = HIPO_UNIQUE_ID
    file_number: int = 1
    header_length: int = HEADER_WORDS
    record_count: int = 0
    index_array_length: int = 0
    bit_info_version: int = FILE_VERSION
    user_header_length: int = 0
    magic_number: int = MAGIC
    user_register: int = 0
    trailer_position: int = 0
    user_integer_one: int = 0
    user_integer_two: int = 0
    big_endian: bool = False

    @classmethod
    def parse(cls, data: bytes) -> FileHeader:
        """Decode a file header from the first bytes of *data*.

        A header whose magic word appears byte-swapped was written in
        big-endian order and is decoded accordingly.
        """
        if len(data) < HEADER_BYTES:
            raise FileHeaderError(
                f"file header needs {HEADER_BYTES} bytes, got {len(data)}"
            )
        (magic,) = struct.unpack_from("<I", data, 28)
        big_endian = magic == MAGIC_SWAPPED
        order = ">" if big_endian else "<"
        fields = struct.unpack_from(order + _LAYOUT, data, 0)
        return cls(*fields, big_endian=big_endian)

    def to_bytes(self) -> bytes:
        """Encode the header as the 56 little-endian bytes written to a file."""
        try:
            return struct.pack(
                "<" + _LAYOUT,
                self.unique_id,
                self.file_number,
                self.header_length,
                self.record_count,
                self.index_array_length,
                self.bit_info_version,
                self.user_header_length,
                self.magic_number,
                self.user_register,
                self.trailer_position,
                self.user_integer_one,
                self.user_integer_two,
            )
        except struct.error as exc:
            raise FileHeaderError(f"header field out of range: {exc}") from exc

    def first_record_position(self) -> int:
        """Byte offset of the first record: header plus user header."""
        return 4 * self.header_length + self.user_header_length

    def version(self) -> int:
        """Format version, the low byte of the sixth word."""
        return self.bit_info_version & 0xFF

    def bit_info(self) -> int:
        """The 24 bit-info flags above the version byte."""
        return (self.bit_info_version >> 8) & 0x00FFFFFF


@dataclass
class RecordInfo:
    """Where a record was written and what it holds."""

    record_length: int = 0
    record_entries: int = 0
    record_position: int = 0
    user_word_one: int = 0
    user_word_two: int = 0


def read_file_header(stream: BinaryIO) -> FileHeader:
    """Read and decode the header at the start of *stream*."""
    stream.seek(0)
    return FileHeader.parse(stream.read(_READ_BYTES))
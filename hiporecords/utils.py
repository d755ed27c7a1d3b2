"""String helpers, little-endian buffer writers and a cumulative timer."""

from __future__ import annotations

import itertools
import struct
import time

WHITESPACE = "\t\n\v\f\r "

_INT = struct.Struct("<I")
_LONG = struct.Struct("<Q")
_BYTE = struct.Struct("<B")


def tokenize(text: str, delimiters: str = " ") -> list[str]:
    """Split *text* on any character in *delimiters*, dropping empty tokens."""
    if not delimiters:
        return [text] if text else []
    groups = itertools.groupby(text, key=lambda char: char in delimiters)
    return ["".join(chars) for is_delimiter, chars in groups if not is_delimiter]


def find_position(text: str, delimiters: str, order: int) -> int:
    """Return the index of the (order+1)-th delimiter character, or -1."""
    if order < 0:
        return -1
    hits = (index for index, char in enumerate(text) if char in delimiters)
    return next(itertools.islice(hits, order, None), -1)


def substring(text: str, start_delimiters: str, end_delimiters: str, order: int) -> str:
    """Return the text enclosed between the *order*-th start delimiter and the next end delimiter.

    An empty string is returned when either delimiter is missing.
    """
    start = find_position(text, start_delimiters, order)
    if start < 0:
        return ""
    tail = text[start + 1:]
    end = next((index for index, char in enumerate(tail) if char in end_delimiters), -1)
    if end < 0:
        return ""
    return tail[:end]


def ltrim(text: str, chars: str = WHITESPACE) -> str:
    """Strip *chars* from the start of *text*."""
    return text.lstrip(chars)


def rtrim(text: str, chars: str = WHITESPACE) -> str:
    """Strip *chars* from the end of *text*."""
    return text.rstrip(chars)


def trim(text: str, chars: str = WHITESPACE) -> str:
    """Strip *chars* from both ends of *text*."""
    return ltrim(rtrim(text, chars), chars)


def write_int(buffer: bytearray, position: int, value: int) -> None:
    """Store a 32-bit little-endian integer (signed or unsigned) at *position*."""
    _INT.pack_into(buffer, position, value & 0xFFFFFFFF)


def write_long(buffer: bytearray, position: int, value: int) -> None:
    """Store a 64-bit little-endian integer (signed or unsigned) at *position*."""
    _LONG.pack_into(buffer, position, value & 0xFFFFFFFFFFFFFFFF)


def write_byte(buffer: bytearray, position: int, value: int) -> None:
    """Store a single byte at *position*."""
    _BYTE.pack_into(buffer, position, value & 0xFF)


class Benchmark:
    """Accumulates wall-clock time over repeated resume/pause intervals."""

    def __init__(self, name: str = "", frequency: int = -1) -> None:
        self.name = name
        self.frequency = frequency
        self.counter = 0
        self._running_ns = 0
        self._started: int | None = None

    def resume(self) -> None:
        """Start a new timing interval."""
        self._started = time.perf_counter_ns()
        self.counter += 1

    def pause(self) -> None:
        """Close the current interval and add its length to the total."""
        if self._started is None:
            raise RuntimeError("pause() called before resume()")
        self._running_ns += time.perf_counter_ns() - self._started

    def reset(self) -> None:
        """Clear the accumulated time, the counter and the frequency."""
        self._running_ns = 0
        self.counter = 0
        self.frequency = -1

    def elapsed(self) -> int:
        """Total accumulated time in nanoseconds."""
        return self._running_ns

    def elapsed_seconds(self) -> float:
        """Total accumulated time in seconds."""
        return self._running_ns * 1e-9

    def __str__(self) -> str:
        return f"[benchmark] {self.name:>24} : time = {self.elapsed_seconds():12.4f} "

    def show(self) -> None:
        """Print the name and the accumulated time."""
        print(self)

    def __enter__(self) -> Benchmark:
        self.resume()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.pause()
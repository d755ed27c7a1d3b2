import io
import struct

import lz4.block
import pytest

from hiporecords.record import (
    MAGIC,
    MAGIC_SWAPPED,
    Record,
    RecordError,
    RecordHeader,
    decompress,
)

EVENTS = [b"first-event!", b"ab", b"third event payload"]


def make_record(events, *, compress=False, big_endian=False):
    order = ">" if big_endian else "<"
    index = b"".join(struct.pack(order + "I", len(e)) for e in events)
    payload = index + b"".join(events)
    if compress:
        body = lz4.block.compress(payload, store_size=False)
        ctype = 1
    else:
        body = payload
        ctype = 0
    rounding = (-len(body)) % 4
    body += b"\0" * rounding
    words = len(body) // 4
    header = struct.pack(
        order + "14I",
        words + 14,
        0,
        14,
        len(events),
        4 * len(events),
        (rounding << 24) | 6,
        0,
        MAGIC,
        sum(len(e) for e in events),
        (ctype << 28) | words,
        0, 0, 0, 0,
    )
    return header + body


def test_header_parse_fields():
    data = make_record(EVENTS)
    header = RecordHeader.parse(data)
    assert header.signature == MAGIC
    assert header.header_length == 14
    assert header.number_of_events == len(EVENTS)
    assert header.index_data_length == 4 * len(EVENTS)
    assert header.compression_type == 0
    assert header.data_endianness == 0
    assert header.record_length * 4 == len(data)


def test_header_big_endian():
    header = RecordHeader.parse(make_record(EVENTS, big_endian=True))
    assert header.signature == MAGIC_SWAPPED
    assert header.data_endianness == 1
    assert header.number_of_events == len(EVENTS)
    assert header.header_length == 14


def test_header_too_short():
    with pytest.raises(RecordError):
        RecordHeader.parse(b"\0" * 20)


def test_load_uncompressed_events():
    record = Record()
    record.load(make_record(EVENTS))
    assert len(record) == len(EVENTS)
    assert record.event_count() == len(EVENTS)
    assert [record.get_data(i) for i in range(len(EVENTS))] == EVENTS
    assert list(record) == EVENTS


def test_load_compressed_events():
    data = make_record(EVENTS, compress=True)
    record = Record()
    record.load(data)
    assert record.header.compression_type == 1
    assert list(record) == EVENTS
    assert record.compressed_size() * 4 == len(data)


def test_load_big_endian_events():
    record = Record()
    record.load(make_record(EVENTS, big_endian=True))
    assert list(record) == EVENTS


def test_events_map_offsets():
    record = Record()
    record.load(make_record(EVENTS))
    emap = record.events_map()
    offset = record.header.event_offset
    assert emap[0][0] == offset
    assert [end - start for start, end in emap] == [len(e) for e in EVENTS]
    for (_, end), (start, _) in zip(emap, emap[1:]):
        assert end == start


def test_get_data_out_of_range():
    record = Record()
    record.load(make_record(EVENTS))
    with pytest.raises(IndexError):
        record.get_data(len(EVENTS))


def test_empty_record():
    record = Record()
    record.load(make_record([]))
    assert len(record) == 0
    assert record.events_map() == []
    assert list(record) == []


def test_read_from_stream_at_position():
    prefix = b"x" * 24
    data = make_record(EVENTS, compress=True)
    stream = io.BytesIO(prefix + data + b"\0" * 100)
    record = Record()
    record.read(stream, len(prefix), len(stream.getvalue()))
    assert list(record) == EVENTS
    assert record.read_benchmark.counter == 1


def test_read_without_input_size():
    data = make_record(EVENTS)
    record = Record()
    record.read(io.BytesIO(data + b"\0" * 80), 0)
    assert list(record) == EVENTS


def test_read_past_end_raises():
    data = make_record(EVENTS)
    with pytest.raises(RecordError):
        Record().read(io.BytesIO(data), len(data), len(data))


def test_read_incomplete_record_raises():
    data = make_record([b"z" * 200])
    truncated = data[:150]
    with pytest.raises(RecordError):
        Record().read(io.BytesIO(truncated), 0, len(truncated))


def test_load_truncated_raises():
    data = make_record(EVENTS)
    with pytest.raises(RecordError):
        Record().load(data[:-8])


def test_decompress_round_trip():
    payload = b"hipo record data " * 20
    packed = lz4.block.compress(payload, store_size=False)
    assert decompress(packed, len(payload)) == payload


def test_decompress_garbage_raises():
    with pytest.raises(RecordError):
        decompress(b"\xff\xff\xff\xff", 64)


def test_decompress_negative_length_raises():
    with pytest.raises(RecordError):
        decompress(b"", -1)
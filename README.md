# hiporecords

Building blocks for the record layer of HIPO data files: the file header,
LZ4-compressed records and the builder that makes them, an uncompressed
in-memory data frame, the index used to step through the events of a file,
and a small one-dimensional histogram.

## Installation

```
pip install hiporecords
```

With the test dependencies:

```
pip install "hiporecords[test]"
```

## Modules

### `hiporecords.fileheader`

- `FileHeader` is a dataclass for the 56-byte file header.
  `FileHeader.parse(data)` decodes it; a header whose magic word appears
  byte-swapped is decoded as big-endian and has `big_endian` set.
  `to_bytes()` encodes it as 56 little-endian bytes.
  `first_record_position()`, `version()` and `bit_info()` derive values from
  the header fields.
- `read_file_header(stream)` seeks to the start of a binary stream and parses
  the header found there.
- `RecordInfo` is a dataclass describing a written record: length, entries,
  position and the two user words.
- `FileHeaderError` is raised for data too short to hold a header or fields
  that do not fit their width.

### `hiporecords.record`

- `Record.read(stream, position, input_size=None)` reads a record at a byte
  offset of a binary stream; `Record.load(data)` decodes a record held in
  bytes. Uncompressed and LZ4-compressed records, little- and big-endian,
  are accepted.
- Events are available through `get_data(index)`, `len(record)` and
  iteration; `events_map()` gives the start and end offset of every event in
  the uncompressed buffer. `event_count()` and `compressed_size()` (record
  length in 32-bit words) report on the loaded record.
- `read_benchmark`, `unzip_benchmark` and `index_benchmark` time the stages
  of reading.
- `RecordHeader.parse(data)` decodes a record header on its own.
- `decompress(data, uncompressed_length)` unpacks one LZ4 block.
- `RecordError` is raised for truncated, inconsistent or undecodable records.

### `hiporecords.recordbuilder`

`RecordBuilder(max_events=100000, max_length=8 MiB)` collects events with
`add_event(data)`, which returns `False` when the record is full. `build()`
writes the header, the event index and the LZ4-compressed events;
`buffer()`, `record_size()` and `entries()` describe the last built record.
`user_word_one` and `user_word_two` go into the record header. `reset()`
drops pending events.

### `hiporecords.dataframe`

`DataFrame(max_events=50, max_size=512 KiB)` keeps events back to back after
a 56-byte header, uncompressed. `add_event(data)` returns `False` when the
frame is full; `event_at(position)` returns an event and the position of the
next one, locating the event end through the size word each event carries at
its own offset 4. `load(data)` replaces the content with a serialised frame,
and `buffer()`, `size()`, `count()` and `summary()` describe it.

### `hiporecords.readerindex`

`ReaderIndex` maps a running event number onto a record and an event inside
it. Records are registered with `add_size(n)` and `add_position(offset)`.
The pointer moves with `advance()`, `backup()`, `goto_event(n)`,
`goto_record(n)` (also `load_record(n)`), `rewind()` and `reset()`;
`can_advance()`, `can_advance_in_record()`, `max_events()` and
`record_count()` report on it. The current place is in `event_number`,
`record_number` and `record_event_number`.

### `hiporecords.histogram`

`Axis` is a uniformly binned axis. `H1D(nbins, low, high, hid=0)` counts
entries with `fill(value)`, keeping `underflow` and `overflow` apart from the
regular bins; `content(i)`, `series()` and `show()` read it back.
`H1D.accumulate(histograms)` sums histograms bin by bin and
`H1D.declare(count, nbins, low, high)` creates a list of histograms with ids
from 100.

### `hiporecords.utils`

String helpers (`tokenize`, `find_position`, `substring`, `ltrim`, `rtrim`,
`trim`), little-endian writers (`write_int`, `write_long`, `write_byte`) and
`Benchmark`, a cumulative timer usable with `resume()`/`pause()` or as a
context manager.

## Example

```python
from hiporecords.recordbuilder import RecordBuilder
from hiporecords.record import Record

builder = RecordBuilder()
builder.add_event(b"first event")
builder.add_event(b"second event")
builder.build()

record = Record()
record.load(builder.buffer())
for event in record:
    print(event)
```

Walking an index:

```python
from hiporecords.readerindex import ReaderIndex

index = ReaderIndex()
index.add_size(3)
index.add_size(2)
index.rewind()
while index.can_advance():
    index.advance()
    print(index.record_number, index.record_event_number)
```

## What it does not do

The package works at the level of headers, records and raw event bytes. It
has no object that opens a whole HIPO file and reads its events in one step,
no writer that produces a complete file with its dictionary and index, and no
decoding of the contents of an event (banks, schemas, dictionaries). Those
are left to the caller, who combines `read_file_header`, `Record`,
`RecordBuilder` and `ReaderIndex`. There is no command-line program.
import struct
from unittest import mock

import pytest

from hiporecords.utils import (
    Benchmark,
    find_position,
    ltrim,
    rtrim,
    substring,
    tokenize,
    trim,
    write_byte,
    write_int,
    write_long,
)


def test_tokenize_skips_repeated_delimiters():
    assert tokenize("  alpha beta   gamma ") == ["alpha", "beta", "gamma"]


def test_tokenize_multiple_delimiter_characters():
    assert tokenize("x:y,z", ":,") == ["x", "y", "z"]


def test_tokenize_only_delimiters_gives_nothing():
    assert tokenize("::::", ":") == []


def test_tokenize_empty_delimiters_returns_whole_text():
    assert tokenize("abc", "") == ["abc"]
    assert tokenize("", "") == []


def test_tokenize_join_round_trip():
    words = ["one", "two", "three"]
    assert tokenize(" ".join(words)) == words


def test_find_position_points_at_delimiter():
    text = "a:b:c"
    for order in range(2):
        pos = find_position(text, ":", order)
        assert text[pos] == ":"
    assert find_position(text, ":", 0) < find_position(text, ":", 1)


def test_find_position_missing_returns_minus_one():
    assert find_position("a:b:c", ":", 2) == -1
    assert find_position("abc", ":", 0) == -1
    assert find_position("a:b", ":", -1) == -1


def test_substring_by_order():
    text = "{first}{second}"
    assert substring(text, "{", "}", 0) == "first"
    assert substring(text, "{", "}", 1) == "second"


def test_substring_missing_delimiters():
    assert substring("{open", "{", "}", 0) == ""
    assert substring("nothing", "{", "}", 0) == ""


def test_trim_functions():
    assert ltrim("\t  hello ") == "hello "
    assert rtrim("  hello \n") == "  hello"
    assert trim(" \r\nhello\v\f ") == "hello"
    assert trim("xxhixx", "x") == "hi"
    assert rtrim("    ") == ""


def test_write_int_magic_number_bytes():
    buffer = bytearray(4)
    write_int(buffer, 0, 0xC0DA0100)
    assert bytes(buffer) == b"\x00\x01\xda\xc0"


def test_write_int_round_trip_negative():
    buffer = bytearray(8)
    write_int(buffer, 4, -5)
    assert struct.unpack_from("<i", buffer, 4)[0] == -5
    assert buffer[:4] == bytearray(4)


def test_write_long_round_trip():
    buffer = bytearray(16)
    write_long(buffer, 8, -(2**40) - 3)
    assert struct.unpack_from("<q", buffer, 8)[0] == -(2**40) - 3


def test_write_byte_truncates():
    buffer = bytearray(2)
    write_byte(buffer, 1, 0x1FF)
    assert buffer[1] == 0xFF
    assert buffer[0] == 0


def test_write_int_out_of_range():
    with pytest.raises(struct.error):
        write_int(bytearray(3), 0, 1)


def test_benchmark_accumulates():
    bench = Benchmark("io")
    with mock.patch("hiporecords.utils.time.perf_counter_ns", side_effect=[100, 350, 1000, 1100]):
        bench.resume()
        bench.pause()
        bench.resume()
        bench.pause()
    assert bench.counter == 2
    assert bench.elapsed() == (350 - 100) + (1100 - 1000)
    assert bench.elapsed_seconds() == pytest.approx(bench.elapsed() * 1e-9)


def test_benchmark_reset():
    bench = Benchmark("x", 10)
    with bench:
        pass
    bench.reset()
    assert bench.counter == 0
    assert bench.elapsed() == 0
    assert bench.frequency == -1


def test_benchmark_pause_without_resume():
    with pytest.raises(RuntimeError):
        Benchmark().pause()


def test_benchmark_show(capsys):
    bench = Benchmark("decoder")
    bench.show()
    out = capsys.readouterr().out
    assert out.startswith("[benchmark]")
    assert "decoder" in out
    assert "0.0000" in out
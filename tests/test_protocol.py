from __future__ import annotations

import pytest

from sweepradar.errors import MalformedFrame, OutOfRange, ParseError
from sweepradar.protocol import LineAssembler, Sample, decode, encode, iter_samples


def test_encode_format() -> None:
    assert encode(Sample(90, 123)) == "A:90 D:123\n"


def test_round_trip_over_domain() -> None:
    for angle in range(0, 181):
        for distance in range(0, 401):
            s = Sample(angle, distance)
            assert decode(encode(s)) == s


@pytest.mark.parametrize("line, expected", [
    ("A:0 D:0", Sample(0, 0)),
    ("A:180 D:400", Sample(180, 400)),
    ("A:45 D:12\r\n", Sample(45, 12)),
    ("A:10 D:999", Sample(10, 999)),     # distance not range-checked
    ("A:10 D:-3", Sample(10, -3)),
])
def test_decode_accepts(line: str, expected: Sample) -> None:
    assert decode(line) == expected


@pytest.mark.parametrize("line", [
    "A:90D:50",
    "X:90 D:50",
    "",
    "A:90",
    "A:90 D:50 E:1",
    "A:90  D:50",
    "A:ninety D:50",
    "A:90 D:5.5",
    "A:90 D:",
    "A:90 D:50:1",
    "A:\u0669\u0660 D:5",              # Arabic-Indic digits
    "A:90 D:\uff15",                   # full-width 5
])
def test_decode_malformed(line: str) -> None:
    with pytest.raises(MalformedFrame):
        decode(line)


@pytest.mark.parametrize("line", ["A:200 D:50", "A:-1 D:50", "A:181 D:0"])
def test_decode_angle_out_of_range(line: str) -> None:
    with pytest.raises(OutOfRange):
        decode(line)


def test_parse_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        decode("garbage")
    assert issubclass(OutOfRange, ParseError)


def test_iter_samples_skips_bad_lines_in_order() -> None:
    lines = ["A:1 D:10", "junk", "A:2 D:20", "A:300 D:1", "A:3 D:30"]
    assert [s.angle for s in iter_samples(lines)] == [1, 2, 3]


def test_assembler_joins_split_chunks() -> None:
    asm = LineAssembler()
    assert asm.feed(b"A:1 D:") == []
    assert asm.pending == 6
    assert asm.feed(b"10\nA:2 D:20\nA:3") == ["A:1 D:10", "A:2 D:20"]
    assert asm.feed(b" D:30\n") == ["A:3 D:30"]
    assert asm.pending == 0


def test_assembler_keeps_empty_and_binary_lines_for_decoder() -> None:
    asm = LineAssembler()
    lines = asm.feed(b"\n\xff\xfe\nA:5 D:5\n")
    assert len(lines) == 3
    with pytest.raises(MalformedFrame):
        decode(lines[1])
    assert decode(lines[2]) == Sample(5, 5)


def test_assembler_discards_oversized_line_and_resyncs() -> None:
    asm = LineAssembler(max_line=16)
    assert asm.feed(b"x" * 40) == []
    assert asm.pending == 0
    # rest of the runaway line is skipped, the next one comes through
    assert asm.feed(b"yyy\nA:7 D:70\n") == ["A:7 D:70"]

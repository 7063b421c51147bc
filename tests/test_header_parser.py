import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from pnm.exceptions import ParserError
from pnm.formats.registry import Encoding, LogicalType
from pnm.parsing.header import parse


def test_parse_ascii_pbm():
    header = parse(b"P1 6 2\n0 1 0 0 1 1\n0 0 0 1 1 1")

    assert header.magic == "P1"
    assert (header.width, header.height) == (6, 2)
    assert header.max_value is None
    assert header.comments == []
    assert header.payload == b"0 1 0 0 1 1\n0 0 0 1 1 1"
    assert header.image_type is LogicalType.BILEVEL
    assert header.encoding is Encoding.ASCII


def test_parse_ascii_pgm():
    header = parse(b"P2 4 2 100\n10 20 30 40\n50 60 70 80")

    assert header.magic == "P2"
    assert (header.width, header.height, header.max_value) == (4, 2, 100)
    assert header.payload == b"10 20 30 40\n50 60 70 80"


def test_parse_binary_payload_offset():
    content = b"P4 8 2 " + bytes.fromhex("05AF")
    header = parse(content)

    assert header.payload == bytes.fromhex("05AF")
    assert header.payload_offset == 7
    assert header.encoding is Encoding.BINARY


def test_parse_does_not_change_input():
    content = bytearray(b"P1 3 2 0 1 0 0 1 1")
    original = bytes(content)
    parse(content)

    assert bytes(content) == original


def test_parse_accepts_whitespace_runs():
    header = parse(b"P1  \n\t 3 \r \n2 0 1 0 0 1 1")

    assert (header.width, header.height) == (3, 2)
    assert header.payload == b"0 1 0 0 1 1"


@pytest.mark.parametrize(
    "content, payload",
    [
        (b"P4 16 4 A\nB\rC D\t", b"A\nB\rC D\t"),
        (b"P4 8 2 \nA", b"\nA"),
        (b"P4 8 2 #A", b"#A"),
        (b"P4 8 2 AB\n", b"AB\n"),
    ],
)
def test_binary_payload_is_never_parsed_as_header(content, payload):
    """
    Exactly one separator byte is consumed after the last header token.
    """
    assert parse(content).payload == payload


def test_parse_comments_between_tokens():
    content = (
        b"# Comment 1\n"
        b"P1  # Comment 2\n"
        b"6# Comment 3\n"
        b"#Comment 4\n"
        b"#\n"
        b"\r \t# Comment 6\n"
        b"2\n"
        b"0 1 0 0 1 1\n"
        b"0 0 0 1 1 1"
    )
    header = parse(content)

    assert header.magic == "P1"
    assert (header.width, header.height) == (6, 2)
    assert header.comments == ["Comment 1", "Comment 2", "Comment 3", "Comment 4", "", "Comment 6"]
    assert header.payload == b"0 1 0 0 1 1\n0 0 0 1 1 1"


def test_parse_comment_strips_only_one_space():
    header = parse(b"P2\n#   indented\n1 1\n255\n0")

    assert header.comments == ["  indented"]


def test_parse_comment_with_crlf():
    header = parse(b"P2\r\n# dos\r\n1 1\r\n255\r\n0")

    assert header.comments == ["dos"]
    assert header.payload == b"\n0"


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"   \n",
        b"# only a comment",
        b"P1",
        b"P1 1",
        b"P1 1 ",
        b"P1 1 1",
        b"P1 1  # Test\n 1",
        b"P2 1 1 255",
    ],
)
def test_not_enough_tokens(content):
    with pytest.raises(ParserError):
        parse(content)


@pytest.mark.parametrize(
    "content",
    [
        b"P0 1 1 0",
        b"P7 1 1 0",
        b"XY 1 1 0",
        b"\xff\xfe 1 1 0",
    ],
)
def test_unknown_magic_number(content):
    with pytest.raises(ParserError, match="unknown magic number"):
        parse(content)


@pytest.mark.parametrize(
    "content",
    [
        b"P1 ? 1 0",
        b"P1 1 X 0",
        b"P2 1 1 foo 0",
        b"P2 -1 1 255 0",
        b"P2 1.5 1 255 0",
    ],
)
def test_non_numeric_tokens(content):
    with pytest.raises(ParserError):
        parse(content)


@pytest.mark.parametrize(
    "content",
    [
        b"P2 0 1 255 0",
        b"P2 1 0 255 0",
        b"P2 1 1 256 0",
        b"P2 1 1 0 0",
    ],
)
def test_out_of_range_header_values(content):
    with pytest.raises(ParserError):
        parse(content)


def test_max_value_limits_accepted():
    assert parse(b"P2 1 1 1 0").max_value == 1
    assert parse(b"P5 1 1 255 \x00").max_value == 255

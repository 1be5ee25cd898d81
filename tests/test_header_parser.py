import pytest

from netpbm.errors import (
    InvalidDimensions,
    InvalidMagicNumber,
    MalformedDimensions,
    MalformedMaxValue,
)
from netpbm.services.header_parser import HeaderParser


def parse(data):
    return HeaderParser().parse(data)


def test_graymap_header():
    header = parse(b"P2\n3 1\n255\n0 128 255\n")
    assert header.magic_number == "P2"
    assert (header.width, header.height, header.max_value) == (3, 1, 255)
    assert header.payload_offset == len(b"P2\n3 1\n255\n")
    assert header.kind == "graymap"
    assert not header.is_binary


def test_bitmap_header_has_no_max_value():
    header = parse(b"P4\n10 2\n\x00\x00\x00\x00")
    assert header.max_value is None
    assert header.payload_offset == len(b"P4\n10 2\n")
    assert header.is_binary


def test_comments_and_blank_lines_between_fields():
    data = b"# leading\nP5\n# c1\n\n2 2\n   \n# c2\n200\nABCD"
    header = parse(data)
    assert (header.magic_number, header.width, header.height, header.max_value) == ("P5", 2, 2, 200)
    assert data[header.payload_offset:] == b"ABCD"


def test_trailing_comment_on_field_line():
    header = parse(b"P1\n2 1 # size\n1 0\n")
    assert (header.width, header.height) == (2, 1)


def test_crlf_line_endings():
    data = b"P2\r\n1 1\r\n255\r\n7\r\n"
    header = parse(data)
    assert header.max_value == 255
    assert data[header.payload_offset:] == b"7\r\n"


def test_payload_offset_is_exact_for_binary_payload():
    # payload bytes that look like a comment or whitespace must not be consumed
    data = b"P5\n3 1\n255\n#\n "
    header = parse(data)
    assert data[header.payload_offset:] == b"#\n "


@pytest.mark.parametrize("data", [b"", b"P7\n1 1\n", b"p1\n1 1\n", b"P3 1 1 255\n"])
def test_invalid_magic_number(data):
    with pytest.raises(InvalidMagicNumber) as info:
        parse(data)
    assert info.value.field == "magic_number"


@pytest.mark.parametrize("data", [b"P1\n3\n", b"P1\n3 x\n", b"P1\n--1 2\n", b"P1\n1 2 3\n", b"P1\n"])
def test_malformed_dimensions(data):
    with pytest.raises(MalformedDimensions):
        parse(data)


@pytest.mark.parametrize("data", [b"P1\n0 2\n", b"P2\n3 0\n255\n", b"P1\n-1 2\n", b"P2\n2 -3\n255\n"])
def test_non_positive_dimensions(data):
    with pytest.raises(InvalidDimensions) as info:
        parse(data)
    assert info.value.field == "dimensions"


@pytest.mark.parametrize("data", [b"P2\n1 1\nabc\n", b"P2\n1 1\n", b"P3\n1 1\n255 1\n"])
def test_malformed_max_value(data):
    with pytest.raises(MalformedMaxValue):
        parse(data)


@pytest.mark.parametrize("value", [b"0", b"256", b"65535", b"-5"])
def test_max_value_out_of_range(value):
    with pytest.raises(InvalidDimensions) as info:
        parse(b"P2\n1 1\n" + value + b"\n0\n")
    assert info.value.field == "max_value"

import numpy as np
import pytest

from netpbm.errors import InvalidSampleValue, TruncatedPayload
from netpbm.models.image_model import Pixel, Pixmap
from netpbm.services.header_parser import HeaderParser
from netpbm.services.pixmap_codec import PixmapCodec


def decode(data):
    return PixmapCodec().decode(HeaderParser().parse(data), data)


def test_ascii_decode():
    grid = decode(b"P3\n1 1\n255\n10 20 30\n")
    assert grid.at(0, 0) == Pixel(10, 20, 30)


def test_ascii_triplets_need_not_follow_lines():
    grid = decode(b"P3\n2 2\n255\n1 2 3 4\n5 6\n# comment\n7 8 9 10 11 12\n")
    assert grid.data.tolist() == [
        [[1, 2, 3], [4, 5, 6]],
        [[7, 8, 9], [10, 11, 12]],
    ]


def test_binary_decode():
    grid = decode(b"P6\n2 1\n255\n\x01\x02\x03\xfa\xfb\xfc")
    assert grid.at(0, 1) == Pixel(250, 251, 252)


def test_ascii_and_binary_decode_to_same_samples():
    ascii_grid = decode(b"P3\n1 2\n255\n1 2 3\n4 5 6\n")
    binary_grid = decode(b"P6\n1 2\n255\n\x01\x02\x03\x04\x05\x06")
    assert np.array_equal(ascii_grid.data, binary_grid.data)


@pytest.mark.parametrize(
    "data, error",
    [
        (b"P3\n1 1\n255\n10 20\n", TruncatedPayload),
        (b"P3\n1 1\n100\n10 20 101\n", InvalidSampleValue),
        (b"P3\n1 1\n255\n10 x 30\n", InvalidSampleValue),
        (b"P6\n2 1\n255\n\x01\x02\x03\x04\x05", TruncatedPayload),
        (b"P6\n1 1\n16\n\x01\x02\x11", InvalidSampleValue),
    ],
)
def test_decode_errors(data, error):
    with pytest.raises(error):
        decode(data)


def test_encode_ascii():
    grid = Pixmap(np.array([[[1, 2, 3], [4, 5, 6]]], dtype=np.uint8))
    assert PixmapCodec().encode(grid) == b"P3\n2 1\n255\n1 2 3 4 5 6 \n"


def test_encode_binary():
    grid = Pixmap(np.array([[[1, 2, 3]], [[4, 5, 6]]], dtype=np.uint8), magic_number="P6")
    assert PixmapCodec().encode(grid) == b"P6\n1 2\n255\n\x01\x02\x03\x04\x05\x06"


@pytest.mark.parametrize("magic", ["P3", "P6"])
def test_round_trip(magic):
    samples = np.random.default_rng(11).integers(0, 256, size=(3, 4, 3), dtype=np.uint8)
    grid = Pixmap(samples, magic_number=magic)
    assert decode(PixmapCodec().encode(grid)) == grid

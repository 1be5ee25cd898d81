"""Кодек PBM: ASCII "P1" и упакованный бинарный "P4".

В P4 восемь пикселей занимают один байт, старший бит — левый пиксель,
каждая строка дополняется нулевыми битами до целого байта.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from netpbm.errors import InvalidMagicNumber, InvalidSampleValue
from netpbm.models.header import Header, magic_for, MAGIC_NUMBERS
from netpbm.models.image_model import Bitmap
from netpbm.services.payload import format_rows, read_raw, read_rows, write_header

_BITS = {b"0": False, b"1": True}


def row_bytes(width: int) -> int:
    return (width + 7) // 8


class BitmapCodec:
    kind = "bitmap"

    def decode(self, header: Header, data: bytes) -> Bitmap:
        """Декодирует payload, начиная строго с `header.payload_offset`."""
        if header.kind != self.kind:
            raise InvalidMagicNumber(f"{header.magic_number} is not a PBM format", field="magic_number")
        if header.is_binary:
            samples = self._unpack(header, data)
        else:
            samples = self._parse_ascii(header, data)
        return Bitmap(samples, magic_number=header.magic_number)

    def encode(self, grid: Bitmap, magic_number: Optional[str] = None, comment: Optional[str] = None) -> bytes:
        magic_number = magic_number or grid.magic_number
        if MAGIC_NUMBERS.get(magic_number, ("", False))[0] != self.kind:
            raise InvalidMagicNumber(f"{magic_number!r} is not a PBM format", field="magic_number")
        header = write_header(magic_number, grid.width, grid.height, None, comment)
        if magic_number == magic_for(self.kind, binary=True):
            # packbits pads the last byte of each row with zero bits
            return header + np.packbits(grid.data, axis=1, bitorder="big").tobytes()
        return header + format_rows(grid.data, lambda bit: "1" if bit else "0")

    def _unpack(self, header: Header, data: bytes) -> np.ndarray:
        stride = row_bytes(header.width)
        packed = read_raw(data, header.payload_offset, stride * header.height)
        bits = np.unpackbits(packed.reshape(header.height, stride), axis=1, bitorder="big")
        return bits[:, : header.width].astype(bool)

    def _parse_ascii(self, header: Header, data: bytes) -> np.ndarray:
        rows = read_rows(data, header.payload_offset, header.height, header.width)
        samples = np.zeros((header.height, header.width), dtype=bool)
        for y, tokens in enumerate(rows):
            for x, token in enumerate(tokens):
                bit = _BITS.get(token)
                if bit is None:
                    raise InvalidSampleValue(
                        f"bitmap sample {token!r} at ({y}, {x}) is not 0/1", field=f"row {y}"
                    )
                samples[y, x] = bit
        return samples

"""Кодек PGM: ASCII "P2" и бинарный "P5" (один байт на отсчёт, без выравнивания)."""
from __future__ import annotations

from typing import Optional

import numpy as np

from netpbm.errors import InvalidMagicNumber
from netpbm.models.header import Header, magic_for, MAGIC_NUMBERS
from netpbm.models.image_model import Graymap
from netpbm.services.payload import (
    check_raw_range,
    format_rows,
    parse_samples,
    read_raw,
    read_rows,
    write_header,
)


class GraymapCodec:
    kind = "graymap"

    def decode(self, header: Header, data: bytes) -> Graymap:
        if header.kind != self.kind:
            raise InvalidMagicNumber(f"{header.magic_number} is not a PGM format", field="magic_number")
        shape = (header.height, header.width)
        if header.is_binary:
            samples = read_raw(data, header.payload_offset, header.width * header.height)
            check_raw_range(samples, header.max_value)
            samples = samples.reshape(shape)
        else:
            rows = read_rows(data, header.payload_offset, header.height, header.width)
            flat = parse_samples([token for row in rows for token in row], header.max_value)
            samples = np.array(flat, dtype=np.uint8).reshape(shape)
        return Graymap(samples, magic_number=header.magic_number, max_value=header.max_value)

    def encode(self, grid: Graymap, magic_number: Optional[str] = None, comment: Optional[str] = None) -> bytes:
        magic_number = magic_number or grid.magic_number
        if MAGIC_NUMBERS.get(magic_number, ("", False))[0] != self.kind:
            raise InvalidMagicNumber(f"{magic_number!r} is not a PGM format", field="magic_number")
        header = write_header(magic_number, grid.width, grid.height, grid.max_value, comment)
        if magic_number == magic_for(self.kind, binary=True):
            return header + grid.data.tobytes()
        return header + format_rows(grid.data)

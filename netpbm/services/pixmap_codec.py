"""Кодек PPM: ASCII "P3" и бинарный "P6" (R, G, B по байту на пиксель)."""
from __future__ import annotations

from typing import Optional

import numpy as np

from netpbm.errors import InvalidMagicNumber
from netpbm.models.header import Header, magic_for, MAGIC_NUMBERS
from netpbm.models.image_model import Pixmap
from netpbm.services.payload import (
    check_raw_range,
    parse_samples,
    read_raw,
    read_tokens,
    write_header,
)


class PixmapCodec:
    kind = "pixmap"

    def decode(self, header: Header, data: bytes) -> Pixmap:
        """Декодирует P3/P6.

        В P3 тройки каналов не обязаны совпадать со строками файла,
        поэтому токены читаются сплошным потоком и группируются по три.
        """
        if header.kind != self.kind:
            raise InvalidMagicNumber(f"{header.magic_number} is not a PPM format", field="magic_number")
        count = header.width * header.height * 3
        shape = (header.height, header.width, 3)
        if header.is_binary:
            samples = read_raw(data, header.payload_offset, count)
            check_raw_range(samples, header.max_value)
        else:
            tokens = read_tokens(data, header.payload_offset, count)
            samples = np.array(parse_samples(tokens, header.max_value), dtype=np.uint8)
        return Pixmap(samples.reshape(shape), magic_number=header.magic_number, max_value=header.max_value)

    def encode(self, grid: Pixmap, magic_number: Optional[str] = None, comment: Optional[str] = None) -> bytes:
        magic_number = magic_number or grid.magic_number
        if MAGIC_NUMBERS.get(magic_number, ("", False))[0] != self.kind:
            raise InvalidMagicNumber(f"{magic_number!r} is not a PPM format", field="magic_number")
        header = write_header(magic_number, grid.width, grid.height, grid.max_value, comment)
        if magic_number == magic_for(self.kind, binary=True):
            return header + grid.data.tobytes()
        # one line per image row, "R G B " per pixel
        lines = [
            "".join(f"{r} {g} {b} " for r, g, b in row) + "\n" for row in grid.data.tolist()
        ]
        return header + "".join(lines).encode("ascii")

"""Декодирование/кодирование Netpbm и обмен с диском и PIL.

Принципы:
- SRP: сервис только выбирает кодек по magic number и управляет вводом-выводом.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- Всё или ничего: файл пишется только после полного кодирования.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
from PIL import Image

from netpbm.errors import InvalidMagicNumber, IOFailure
from netpbm.models.header import MAGIC_NUMBERS
from netpbm.models.image_model import Bitmap, Graymap, ImageGrid, Pixmap
from netpbm.services.bitmap_codec import BitmapCodec
from netpbm.services.graymap_codec import GraymapCodec
from netpbm.services.header_parser import HeaderParser
from netpbm.services.pixmap_codec import PixmapCodec

logger = logging.getLogger(__name__)

Codec = Union[BitmapCodec, GraymapCodec, PixmapCodec]


class ImageService:
    def __init__(self) -> None:
        self._header_parser = HeaderParser()
        self._codecs: Dict[str, Codec] = {
            codec.kind: codec for codec in (BitmapCodec(), GraymapCodec(), PixmapCodec())
        }

    # ---- Bytes ----
    def decode(self, data: bytes) -> ImageGrid:
        """Декодирует полный поток байт в сетку соответствующего вида.

        Raises:
            NetpbmFormatError: любая ошибка заголовка или payload; сетка не создаётся.
        """
        header = self._header_parser.parse(data)
        logger.debug(
            "decoding %s %dx%d max=%s payload@%d",
            header.magic_number, header.width, header.height, header.max_value, header.payload_offset,
        )
        return self._codecs[header.kind].decode(header, data)

    def encode(
        self, grid: ImageGrid, magic_number: Optional[str] = None, comment: Optional[str] = None
    ) -> bytes:
        """Кодирует сетку; `magic_number` переопределяет подформат (ASCII/бинарный)."""
        if magic_number is not None and MAGIC_NUMBERS.get(magic_number, ("", False))[0] != grid.kind:
            raise InvalidMagicNumber(
                f"cannot write {grid.kind} as {magic_number!r}", field="magic_number"
            )
        logger.debug("encoding %s %dx%d as %s", grid.kind, grid.width, grid.height, magic_number or grid.magic_number)
        return self._codecs[grid.kind].encode(grid, magic_number=magic_number, comment=comment)

    # ---- Files ----
    def load(self, file_path: str | Path) -> ImageGrid:
        """Загружает изображение с диска.

        Raises:
            IOFailure: если файл не существует или не читается.
            NetpbmFormatError: если содержимое не является корректным Netpbm.
        """
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise IOFailure(f"error opening file: {path}", field="path") from exc
        logger.debug("read %d bytes from %s", len(data), path)
        return self.decode(data)

    def save(
        self,
        grid: ImageGrid,
        file_path: str | Path,
        magic_number: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> None:
        path = Path(file_path)
        data = self.encode(grid, magic_number=magic_number, comment=comment)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise IOFailure(f"error creating file: {path}", field="path") from exc
        logger.debug("wrote %d bytes to %s", len(data), path)

    # ---- PIL interop ----
    def to_pil(self, grid: ImageGrid) -> Image.Image:
        """Возвращает `PIL.Image.Image`: "L" для PBM/PGM, "RGB" для PPM.

        Отсчёты растягиваются до 0..255; у PBM установленный бит становится чёрным (0).
        """
        if isinstance(grid, Bitmap):
            return Image.fromarray(np.where(grid.data, 0, 255).astype(np.uint8))
        scaled = grid.data.astype(np.uint16) * 255 // grid.max_value
        return Image.fromarray(scaled.astype(np.uint8))

    def from_pil(self, image: Image.Image, magic_number: str) -> ImageGrid:
        """Строит сетку из изображения PIL в виде, заданном `magic_number`."""
        kind = MAGIC_NUMBERS.get(magic_number, ("", False))[0]
        if kind == "bitmap":
            # PIL mode "1": True is white, PBM: True is black
            return Bitmap(~np.asarray(image.convert("1"), dtype=bool), magic_number=magic_number)
        if kind == "graymap":
            return Graymap(np.asarray(image.convert("L")), magic_number=magic_number)
        if kind == "pixmap":
            return Pixmap(np.asarray(image.convert("RGB")), magic_number=magic_number)
        raise InvalidMagicNumber(f"invalid magic number: {magic_number!r}", field="magic_number")

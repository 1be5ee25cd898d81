from __future__ import annotations

import numpy as np

from netpbm.errors import InvalidState
from netpbm.models.header import MAX_SAMPLE_VALUE, magic_for
from netpbm.models.image_model import Bitmap, Graymap, ImageGrid, Pixmap


class TransformService:
    # ---------- Вспомогательные функции ----------
    def _intensity(self, grid: ImageGrid) -> np.ndarray:
        """
        Яркость каждого пикселя как uint16-массив (h, w).
        Для Pixmap — целочисленное (R + G + B) // 3 с расширением типа до суммы.
        """
        if isinstance(grid, Pixmap):
            return grid.data.astype(np.uint16).sum(axis=2) // 3
        if isinstance(grid, Graymap):
            return grid.data.astype(np.uint16)
        raise InvalidState(f"{grid.kind} has no intensity channel", field="kind")

    def _threshold(self, grid: ImageGrid) -> Bitmap:
        # "чёрный" там, где яркость ниже половины max
        mask = self._intensity(grid) < grid.max_value // 2
        return Bitmap(mask, magic_number=magic_for("bitmap", binary=False))

    # ---------- Изменения на месте ----------
    def invert(self, grid: ImageGrid) -> None:
        """
        Негатив: для PBM — логическое НЕ, для PGM/PPM — v -> max - v.
        """
        if isinstance(grid, Bitmap):
            np.logical_not(grid.data, out=grid.data)
        else:
            np.subtract(grid.max_value, grid.data, out=grid.data)

    def flip(self, grid: ImageGrid) -> None:
        """Зеркало по горизонтали: порядок отсчётов в каждой строке обращается."""
        grid.data[...] = grid.data[:, ::-1].copy()

    def flop(self, grid: ImageGrid) -> None:
        """Зеркало по вертикали; средняя строка при нечётной высоте остаётся на месте."""
        grid.data[...] = grid.data[::-1].copy()

    def rescale_max_value(self, grid: ImageGrid, new_max: int) -> None:
        """
        Пересчитывает отсчёты под новый max: round(v * new_max / old_max).
        Округление «половина вверх» в целых числах, без float.
        """
        if isinstance(grid, Bitmap):
            raise InvalidState("bitmap max value is fixed at 1", field="max_value")
        old_max = grid.max_value
        if old_max == 0:
            raise InvalidState("current max value is 0", field="max_value")
        if not 1 <= new_max <= MAX_SAMPLE_VALUE:
            raise InvalidState(f"new max value {new_max} out of range 1..{MAX_SAMPLE_VALUE}", field="max_value")
        wide = grid.data.astype(np.uint32)
        grid.data[...] = (wide * new_max * 2 + old_max) // (2 * old_max)
        grid.max_value = int(new_max)

    # ---------- Новые сетки ----------
    def rotate_90_cw(self, grid: ImageGrid) -> ImageGrid:
        """
        Поворот на 90° по часовой стрелке: (i, j) -> (j, old_height - 1 - i).
        Возвращает новую сетку с переставленными шириной и высотой.
        """
        rotated = np.ascontiguousarray(grid.data[::-1].swapaxes(0, 1))
        return type(grid)(rotated, magic_number=grid.magic_number, max_value=grid.max_value)

    def pixmap_to_graymap(self, grid: Pixmap) -> Graymap:
        if not isinstance(grid, Pixmap):
            raise InvalidState(f"expected a pixmap, got {grid.kind}", field="kind")
        gray = self._intensity(grid).astype(np.uint8)
        return Graymap(gray, magic_number=magic_for("graymap", binary=False), max_value=grid.max_value)

    def pixmap_to_bitmap(self, grid: Pixmap) -> Bitmap:
        if not isinstance(grid, Pixmap):
            raise InvalidState(f"expected a pixmap, got {grid.kind}", field="kind")
        return self._threshold(grid)

    def graymap_to_bitmap(self, grid: Graymap) -> Bitmap:
        if not isinstance(grid, Graymap):
            raise InvalidState(f"expected a graymap, got {grid.kind}", field="kind")
        return self._threshold(grid)

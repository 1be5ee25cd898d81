"""Модели данных для изображений Netpbm.

Принципы:
- SRP: только структура данных и доступ к отсчётам, без логики обработки.
- Сетка владеет своим хранилищем: входной массив всегда копируется.
- Единая система координат: (row, col), `size()` возвращает (height, width).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Tuple, Union

import numpy as np

from netpbm.errors import (
    InvalidDimensions,
    InvalidMagicNumber,
    InvalidSampleValue,
)
from netpbm.models.header import MAGIC_NUMBERS, MAX_SAMPLE_VALUE


@dataclass(frozen=True)
class Pixel:
    """Неизменяемый RGB-отсчёт (копируется при чтении и записи)."""
    r: int
    g: int
    b: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(eq=False)
class ImageGrid:
    """Прямоугольная сетка отсчётов и метаданные формата.

    Fields:
        data: numpy-массив отсчётов (h, w) или (h, w, 3).
        magic_number: Тег формата, определяет подформат при сохранении.
        max_value: Максимальное значение отсчёта.
    """
    data: np.ndarray
    magic_number: str
    max_value: int

    kind: ClassVar[str] = ""
    dtype: ClassVar[Any] = np.uint8
    ndim: ClassVar[int] = 2

    def __post_init__(self) -> None:
        self._check_magic_number(self.magic_number)
        if not _is_integer(self.max_value) or not 1 <= self.max_value <= MAX_SAMPLE_VALUE:
            raise InvalidDimensions(
                f"max value {self.max_value!r} out of range 1..{MAX_SAMPLE_VALUE}", field="max_value"
            )
        self.max_value = int(self.max_value)

        raw = np.asarray(self.data)
        if raw.ndim != self.ndim or (self.ndim == 3 and raw.shape[2] != 3):
            raise InvalidDimensions(f"unexpected sample array shape {raw.shape}", field="data")
        if raw.shape[0] <= 0 or raw.shape[1] <= 0:
            raise InvalidDimensions(f"invalid size: {raw.shape[1]} x {raw.shape[0]}", field="data")
        if raw.dtype.kind not in "biu":
            raise InvalidSampleValue(f"unsupported sample dtype {raw.dtype}", field="data")
        if raw.dtype.kind != "b" and (raw.min() < 0 or raw.max() > self.max_value):
            raise InvalidSampleValue(f"samples out of range 0..{self.max_value}", field="data")
        self.data = np.array(raw, dtype=self.dtype)

    # ---- Metadata ----
    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    def size(self) -> Tuple[int, int]:
        """Возвращает (height, width)."""
        return self.height, self.width

    def set_magic_number(self, magic_number: str) -> None:
        """Переключает ASCII/бинарный подформат той же глубины цвета."""
        self._check_magic_number(magic_number)
        self.magic_number = magic_number

    # ---- Samples ----
    def at(self, row: int, col: int) -> Any:
        self._check_index(row, col)
        return self._from_storage(self.data[row, col])

    def set(self, row: int, col: int, value: Any) -> None:
        self._check_index(row, col)
        self.data[row, col] = self._to_storage(value)

    def copy(self) -> "ImageGrid":
        return replace(self, data=self.data.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageGrid):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.magic_number == other.magic_number
            and self.max_value == other.max_value
            and np.array_equal(self.data, other.data)
        )

    # ---- Helpers ----
    def _check_magic_number(self, magic_number: str) -> None:
        entry = MAGIC_NUMBERS.get(magic_number)
        if entry is None or entry[0] != self.kind:
            raise InvalidMagicNumber(
                f"magic number {magic_number!r} is not a {self.kind} format", field="magic_number"
            )

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"pixel ({row}, {col}) outside {self.height} x {self.width} grid")

    def _check_channel(self, value: Any) -> int:
        if not _is_integer(value) or not 0 <= value <= self.max_value:
            raise InvalidSampleValue(f"sample {value!r} out of range 0..{self.max_value}", field="sample")
        return int(value)

    def _from_storage(self, sample: Any) -> Any:
        raise NotImplementedError

    def _to_storage(self, value: Any) -> Any:
        raise NotImplementedError


@dataclass(eq=False)
class Bitmap(ImageGrid):
    """PBM: True — чёрный (установленный) пиксель."""
    magic_number: str = "P1"
    max_value: int = 1

    kind: ClassVar[str] = "bitmap"
    dtype: ClassVar[Any] = np.bool_

    def __post_init__(self) -> None:
        if self.max_value != 1:
            raise InvalidDimensions("bitmap max value is always 1", field="max_value")
        super().__post_init__()

    def _from_storage(self, sample: Any) -> bool:
        return bool(sample)

    def _to_storage(self, value: Any) -> bool:
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        if _is_integer(value) and value in (0, 1):
            return bool(value)
        raise InvalidSampleValue(f"bitmap sample must be 0/1, got {value!r}", field="sample")


@dataclass(eq=False)
class Graymap(ImageGrid):
    """PGM: один байт на отсчёт."""
    magic_number: str = "P2"
    max_value: int = MAX_SAMPLE_VALUE

    kind: ClassVar[str] = "graymap"

    def _from_storage(self, sample: Any) -> int:
        return int(sample)

    def _to_storage(self, value: Any) -> int:
        return self._check_channel(value)


@dataclass(eq=False)
class Pixmap(ImageGrid):
    """PPM: три байта (R, G, B) на пиксель."""
    magic_number: str = "P3"
    max_value: int = MAX_SAMPLE_VALUE

    kind: ClassVar[str] = "pixmap"
    ndim: ClassVar[int] = 3

    def _from_storage(self, sample: Any) -> Pixel:
        r, g, b = (int(channel) for channel in sample)
        return Pixel(r, g, b)

    def _to_storage(self, value: Union[Pixel, Tuple[int, int, int]]) -> Tuple[int, int, int]:
        channels = value.as_tuple() if isinstance(value, Pixel) else value
        try:
            r, g, b = channels
        except (TypeError, ValueError) as exc:
            raise InvalidSampleValue(f"pixel must have 3 channels, got {value!r}", field="sample") from exc
        return self._check_channel(r), self._check_channel(g), self._check_channel(b)


GRID_TYPES = {cls.kind: cls for cls in (Bitmap, Graymap, Pixmap)}

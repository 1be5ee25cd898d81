"""Модель заголовка Netpbm.

Принципы:
- SRP: только структура данных, разбор живёт в `HeaderParser`.
- Неизменяемость (`frozen=True`): заголовок фиксируется в момент декодирования.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

MAX_SAMPLE_VALUE = 255

# magic -> (вид изображения, бинарный ли payload)
MAGIC_NUMBERS: Dict[str, tuple[str, bool]] = {
    "P1": ("bitmap", False),
    "P2": ("graymap", False),
    "P3": ("pixmap", False),
    "P4": ("bitmap", True),
    "P5": ("graymap", True),
    "P6": ("pixmap", True),
}


def magic_for(kind: str, binary: bool) -> str:
    """Возвращает magic number для вида изображения и подформата."""
    for magic, (magic_kind, magic_binary) in MAGIC_NUMBERS.items():
        if magic_kind == kind and magic_binary == binary:
            return magic
    raise KeyError(kind)


@dataclass(frozen=True)
class Header:
    """Разобранный заголовок файла.

    Fields:
        magic_number: Один из "P1".."P6".
        width: Ширина, px (> 0).
        height: Высота, px (> 0).
        max_value: Максимальное значение отсчёта; `None` для PBM.
        payload_offset: Индекс байта, с которого начинаются пиксельные данные.
    """
    magic_number: str
    width: int
    height: int
    max_value: Optional[int]
    payload_offset: int

    @property
    def kind(self) -> str:
        return MAGIC_NUMBERS[self.magic_number][0]

    @property
    def is_binary(self) -> bool:
        return MAGIC_NUMBERS[self.magic_number][1]

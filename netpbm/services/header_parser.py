"""Разбор общего текстового заголовка форматов P1..P6.

Принципы:
- SRP: класс только токенизирует заголовок и запоминает смещение payload.
- Каждая ошибка указывает поле, на котором разбор остановился.
"""
from __future__ import annotations

from typing import Iterator, Optional, Tuple

from netpbm.errors import (
    InvalidDimensions,
    InvalidMagicNumber,
    MalformedDimensions,
    MalformedMaxValue,
)
from netpbm.models.header import MAGIC_NUMBERS, MAX_SAMPLE_VALUE, Header


def iter_lines(data: bytes, start: int = 0) -> Iterator[Tuple[bytes, int]]:
    """Итерирует строки, пропуская пустые и комментарии.

    Возвращает пары (содержимое строки без комментария, смещение за её переводом строки).
    """
    pos = start
    n = len(data)
    while pos < n:
        newline = data.find(b"\n", pos)
        end = n if newline < 0 else newline + 1
        line = data[pos:end].split(b"#", 1)[0].strip()
        pos = end
        if line:
            yield line, pos


def parse_decimal(token: bytes) -> Optional[int]:
    # optional minus sign, then ASCII digits only
    digits = token[1:] if token.startswith(b"-") else token
    if not digits.isdigit():
        return None
    return int(token)


class HeaderParser:
    def parse(self, data: bytes) -> Header:
        """Разбирает заголовок и возвращает `Header` с курсором начала payload.

        Args:
            data: Полное содержимое файла.

        Raises:
            InvalidMagicNumber: неизвестный тег формата.
            MalformedDimensions: строка размеров не из двух десятичных чисел.
            InvalidDimensions: ширина/высота не положительны, max вне 1..255.
            MalformedMaxValue: max value не десятичное число.
        """
        lines = iter_lines(data)

        line, offset = next(lines, (b"", 0))
        magic_number = line.decode("ascii", errors="replace")
        if magic_number not in MAGIC_NUMBERS:
            raise InvalidMagicNumber(f"invalid magic number: {magic_number!r}", field="magic_number")

        line, offset = next(lines, (b"", offset))
        width, height = self._parse_dimensions(line)

        max_value: Optional[int] = None
        if MAGIC_NUMBERS[magic_number][0] != "bitmap":
            line, offset = next(lines, (b"", offset))
            max_value = self._parse_max_value(line)

        return Header(
            magic_number=magic_number,
            width=width,
            height=height,
            max_value=max_value,
            payload_offset=offset,
        )

    def _parse_dimensions(self, line: bytes) -> Tuple[int, int]:
        tokens = line.split()
        if len(tokens) != 2:
            raise MalformedDimensions(f"bad dimensions line: {line!r}", field="dimensions")
        width, height = (parse_decimal(token) for token in tokens)
        if width is None or height is None:
            raise MalformedDimensions(f"non-numeric dimensions: {line!r}", field="dimensions")
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"invalid size: {width} x {height}", field="dimensions")
        return width, height

    def _parse_max_value(self, line: bytes) -> int:
        tokens = line.split()
        value = parse_decimal(tokens[0]) if len(tokens) == 1 else None
        if value is None:
            raise MalformedMaxValue(f"error parsing max value: {line!r}", field="max_value")
        if not 1 <= value <= MAX_SAMPLE_VALUE:
            raise InvalidDimensions(
                f"max value {value} out of range 1..{MAX_SAMPLE_VALUE}", field="max_value"
            )
        return value

"""Иерархия ошибок кодека Netpbm.

Принципы:
- Каждая ошибка знает поле (`field`), на котором упал разбор.
- Ошибки формата остаются `ValueError`, чтобы вызывающий код мог ловить их привычно.
"""
from __future__ import annotations

from typing import Optional


class NetpbmError(Exception):
    """Базовая ошибка библиотеки."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class IOFailure(NetpbmError):
    """Источник или приёмник недоступен для чтения/записи."""


class NetpbmFormatError(NetpbmError, ValueError):
    """Поток байт не соответствует формату Netpbm."""


class InvalidMagicNumber(NetpbmFormatError):
    pass


class MalformedDimensions(NetpbmFormatError):
    pass


class InvalidDimensions(NetpbmFormatError):
    pass


class MalformedMaxValue(NetpbmFormatError):
    pass


class TruncatedPayload(NetpbmFormatError):
    pass


class InvalidSampleValue(NetpbmFormatError):
    pass


class InvalidState(NetpbmError):
    """Операция невозможна в текущем состоянии изображения (например, max = 0)."""

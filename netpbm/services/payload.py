"""Общие функции чтения/записи payload для трёх кодеков."""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

import numpy as np

from netpbm.errors import InvalidSampleValue, TruncatedPayload
from netpbm.services.header_parser import iter_lines, parse_decimal

logger = logging.getLogger(__name__)


def read_rows(data: bytes, offset: int, height: int, width: int) -> List[List[bytes]]:
    """Читает ровно `height` строк по `width` токенов (P1, P2)."""
    rows: List[List[bytes]] = []
    for line, _ in iter_lines(data, offset):
        if len(rows) == height:
            break
        tokens = line.split()
        if len(tokens) < width:
            raise TruncatedPayload(
                f"row {len(rows)} has {len(tokens)} samples, expected {width}", field=f"row {len(rows)}"
            )
        if len(tokens) > width:
            raise InvalidSampleValue(
                f"row {len(rows)} has {len(tokens)} samples, expected {width}", field=f"row {len(rows)}"
            )
        rows.append(tokens)
    if len(rows) < height:
        raise TruncatedPayload(f"expected {height} rows, got {len(rows)}", field="payload")
    return rows


def read_tokens(data: bytes, offset: int, count: int) -> List[bytes]:
    """Читает `count` токенов, не привязываясь к границам строк (P3)."""
    tokens: List[bytes] = []
    for line, _ in iter_lines(data, offset):
        tokens.extend(line.split())
        if len(tokens) >= count:
            return tokens[:count]
    raise TruncatedPayload(f"expected {count} samples, got {len(tokens)}", field="payload")


def parse_samples(tokens: List[bytes], max_value: int) -> List[int]:
    """Переводит десятичные токены в отсчёты, проверяя диапазон [0, max_value]."""
    samples = []
    for index, token in enumerate(tokens):
        value = parse_decimal(token)
        if value is None or not 0 <= value <= max_value:
            raise InvalidSampleValue(
                f"sample {token!r} is not a decimal in 0..{max_value}", field=f"sample {index}"
            )
        samples.append(value)
    return samples


def read_raw(data: bytes, offset: int, size: int) -> np.ndarray:
    """Возвращает ровно `size` байт с позиции `offset` как массив uint8."""
    raw = data[offset:offset + size]
    if len(raw) < size:
        raise TruncatedPayload(f"expected {size} payload bytes, got {len(raw)}", field="payload")
    extra = len(data) - offset - size
    if extra > 0:
        logger.debug("ignoring %d bytes after payload", extra)
    return np.frombuffer(raw, dtype=np.uint8)


def check_raw_range(samples: np.ndarray, max_value: int) -> None:
    if samples.size and int(samples.max()) > max_value:
        index = int(np.argmax(samples > max_value))
        raise InvalidSampleValue(
            f"sample {int(samples.flat[index])} exceeds max value {max_value}", field=f"sample {index}"
        )


def format_rows(rows: np.ndarray, fmt: Callable[[Any], str] = str) -> bytes:
    """Пишет каждую строку сетки как значения через пробел с переводом строки."""
    lines = [" ".join(fmt(value) for value in row.tolist()) + "\n" for row in rows]
    return "".join(lines).encode("ascii")


def write_header(
    magic_number: str, width: int, height: int, max_value: Optional[int], comment: Optional[str] = None
) -> bytes:
    parts = [f"{magic_number}\n"]
    if comment:
        parts.extend(f"# {line}\n" for line in comment.splitlines())
    parts.append(f"{width} {height}\n")
    if max_value is not None:
        parts.append(f"{max_value}\n")
    return "".join(parts).encode("utf-8")

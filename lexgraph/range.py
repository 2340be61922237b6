"""Inclusive byte ranges used as edge labels in the lexer graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

RangeLike = Union["Range", int, str, tuple, list]


def _to_byte(value: int | str) -> int:
    """Convert an integer or a one-character string to a byte value."""
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError(f"expected a single character, got {value!r}")
        value = ord(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected a byte value, got {value!r}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value out of range: {value}")
    return value


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte < 0x7F


@dataclass(frozen=True)
class Range:
    """An inclusive range of byte values, ``start..=end``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        _to_byte(self.start)
        _to_byte(self.end)

    @classmethod
    def of(cls, value: RangeLike) -> Range:
        """Build a range from a range, a byte, a character or a ``(start, end)`` pair."""
        if isinstance(value, Range):
            return value
        if isinstance(value, (tuple, list)):
            if len(value) != 2:
                raise ValueError(f"expected a (start, end) pair, got {value!r}")
            start, end = value
            return cls(_to_byte(start), _to_byte(end))
        byte = _to_byte(value)
        return cls(byte, byte)

    def as_byte(self) -> int | None:
        """The single byte this range covers, or None if it covers several."""
        return self.start if self.is_byte() else None

    def is_byte(self) -> bool:
        return self.start == self.end

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.start < other.start

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.start <= other.start

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.start > other.start

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.start >= other.start

    def __str__(self) -> str:
        def show(byte: int) -> str:
            return chr(byte) if _is_printable(byte) else f"{byte:02X}"

        if self.start != self.end:
            return f"[{show(self.start)}-{show(self.end)}]"
        if _is_printable(self.start):
            return show(self.start)
        return f"[{show(self.start)}]"
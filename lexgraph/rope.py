"""Rope nodes: a fixed sequence of byte ranges leading to one node."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Union, overload

from .fork import Fork, _shake_target
from .range import Range


class MissKind(Enum):
    """How a rope behaves when its pattern fails to match."""

    NONE = "none"
    FIRST = "first"
    ANY = "any"


@dataclass(frozen=True)
class Miss:
    """Where a rope goes on a failed match."""

    kind: MissKind = MissKind.NONE
    node: int | None = None

    def __post_init__(self) -> None:
        if (self.kind is MissKind.NONE) != (self.node is None):
            raise ValueError(f"invalid miss: {self.kind} with node {self.node!r}")

    def is_none(self) -> bool:
        return self.kind is MissKind.NONE

    def first(self) -> int | None:
        """The node to go to when the first byte does not match."""
        return self.node

    def take_first(self) -> tuple[int | None, Miss]:
        """Return the first-byte miss and the miss that remains for the rest of the rope."""
        if self.kind is MissKind.FIRST:
            return self.node, Miss()
        return self.node, self

    def __str__(self) -> str:
        if self.kind is MissKind.FIRST:
            return str(self.node)
        if self.kind is MissKind.ANY:
            return f"{self.node}*"
        return "n/a"


MissLike = Union[Miss, int, None]


def _as_miss(value: MissLike) -> Miss:
    if isinstance(value, Miss):
        return value
    if value is None:
        return Miss()
    return Miss(MissKind.FIRST, value)


@dataclass(frozen=True)
class Pattern:
    """A sequence of byte ranges."""

    ranges: tuple[Range, ...] = ()

    @classmethod
    def of(cls, value: Pattern | str | bytes | bytearray | Iterable[Any]) -> Pattern:
        """Build a pattern from text (as UTF-8), bytes or an iterable of range-likes."""
        if isinstance(value, Pattern):
            return value
        if isinstance(value, str):
            value = value.encode("utf-8")
        if isinstance(value, (bytes, bytearray)):
            return cls(tuple(Range(byte, byte) for byte in value))
        return cls(tuple(Range.of(item) for item in value))

    def to_bytes(self) -> bytes | None:
        """The bytes this pattern matches, or None if any range spans several bytes."""
        if not all(range.is_byte() for range in self.ranges):
            return None
        return bytes(range.start for range in self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)

    def __iter__(self) -> Iterator[Range]:
        return iter(self.ranges)

    @overload
    def __getitem__(self, index: int) -> Range: ...

    @overload
    def __getitem__(self, index: slice) -> Pattern: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Pattern(self.ranges[index])
        return self.ranges[index]

    def __str__(self) -> str:
        return "".join(str(range) for range in self.ranges)


@dataclass(frozen=True, repr=False)
class Rope:
    """A node matching a fixed pattern, then continuing at ``then``."""

    pattern: Pattern
    then: int
    miss: Miss = field(default_factory=Miss)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", Pattern.of(self.pattern))
        object.__setattr__(self, "miss", _as_miss(self.miss))

    def with_miss(self, miss: MissLike) -> Rope:
        return Rope(self.pattern, self.then, _as_miss(miss))

    def with_miss_any(self, miss: int) -> Rope:
        return Rope(self.pattern, self.then, Miss(MissKind.ANY, miss))

    def into_fork(self, graph: Any) -> Fork:
        """Split off the first range into a fork leading to the rest of the rope."""
        if not self.pattern:
            raise ValueError("cannot turn an empty rope into a fork")
        first = self.pattern[0]
        miss, rest_miss = self.miss.take_first()
        rest = self.pattern[1:]
        then = self.then if not rest else graph.push(Rope(rest, self.then, rest_miss))
        return Fork().branch(first, then).with_miss(miss)

    def prefix(self, other: Rope) -> tuple[Pattern, Miss] | None:
        """The shared leading pattern of two ropes with their combined miss, if any."""
        count = 0
        for left, right in zip(self.pattern, other.pattern):
            if left != right:
                break
            count += 1
        if count == 0:
            return None
        if self.miss.is_none():
            miss = other.miss
        elif other.miss.is_none():
            miss = self.miss
        else:
            return None
        return self.pattern[:count], miss

    def split_at(self, at: int, graph: Any) -> Rope | None:
        """Split into a rope of the first ``at`` ranges leading to a new rope of the rest."""
        if at > len(self.pattern):
            raise IndexError(f"split position {at} beyond pattern length {len(self.pattern)}")
        if at == 0:
            return None
        if at == len(self.pattern):
            return self
        next_miss = self.miss if self.miss.kind is MissKind.ANY else Miss()
        next_id = graph.push(Rope(self.pattern[at:], self.then, next_miss))
        return Rope(self.pattern[:at], next_id, self.miss)

    def remainder(self, at: int, graph: Any) -> int:
        """Node id for what remains of the rope after dropping ``at`` ranges."""
        if at > len(self.pattern):
            raise IndexError(f"position {at} beyond pattern length {len(self.pattern)}")
        rest = self.pattern[at:]
        if not rest:
            return self.then
        return graph.push(Rope(rest, self.then, self.miss))

    def shake(self, graph: Any, filter: list[bool]) -> None:
        """Mark every node reachable from this rope in ``filter``."""
        miss = self.miss.first()
        if miss is not None:
            _shake_target(graph, miss, filter)
        _shake_target(graph, self.then, filter)

    def __repr__(self) -> str:
        arm = f"{self.pattern} ⇒ {self.then}"
        if self.miss.is_none():
            return arm
        return f"[{arm}, _ ⇒ {self.miss}]"
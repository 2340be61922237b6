"""Fork nodes: a byte lookup table leading to other nodes."""

from __future__ import annotations

from itertools import groupby
from operator import itemgetter
from typing import Any, Iterator

from .range import Range, RangeLike


def _shake_target(graph: Any, node_id: int, filter: list[bool]) -> None:
    """Mark ``node_id`` as referenced and descend into it if not seen before."""
    if filter[node_id]:
        return
    filter[node_id] = True
    node = graph[node_id]
    if isinstance(node, Fork):
        node.shake(graph, filter)
        return
    from .rope import Rope

    if isinstance(node, Rope):
        node.shake(graph, filter)


def _merge_ids(left: int | None, right: int | None, graph: Any) -> int | None:
    if left is None:
        return right
    if right is None:
        return left
    return graph.merge(left, right)


class Fork:
    """A node that maps each byte value to a target node, with an optional miss."""

    def __init__(self, miss: int | None = None) -> None:
        self._lut: list[int | None] = [None] * 256
        self.miss: int | None = miss

    def with_miss(self, miss: int | None) -> Fork:
        """Set the node to go to when no branch matches; returns self."""
        self.miss = miss
        return self

    def add_branch(self, range: RangeLike, then: int, graph: Any) -> None:
        """Add a branch, merging with existing targets through the graph."""
        for byte in Range.of(range):
            other = self._lut[byte]
            if other is not None and other != then:
                self._lut[byte] = graph.merge(other, then)
            else:
                self._lut[byte] = then

    def merge(self, other: Fork, graph: Any) -> None:
        """Merge another fork into this one, merging conflicting targets."""
        self.miss = _merge_ids(self.miss, other.miss, graph)
        self._lut = [
            _merge_ids(left, right, graph) for left, right in zip(self._lut, other._lut)
        ]

    def branches(self) -> Iterator[tuple[Range, int]]:
        """Yield runs of consecutive bytes sharing the same target."""
        for then, run in groupby(enumerate(self._lut), key=itemgetter(1)):
            if then is None:
                continue
            bytes_ = [byte for byte, _ in run]
            yield Range(bytes_[0], bytes_[-1]), then

    def contains(self, range: RangeLike) -> int | None:
        """Return the target if every byte in ``range`` leads to the same node."""
        targets = {self._lut[byte] for byte in Range.of(range)}
        if len(targets) != 1:
            return None
        return targets.pop()

    def branch(self, range: RangeLike, then: int) -> Fork:
        """Add a branch that must not conflict with existing ones; returns self."""
        for byte in Range.of(range):
            other = self._lut[byte]
            if other is not None and other != then:
                raise ValueError("Overlapping branches")
            self._lut[byte] = then
        return self

    def shake(self, graph: Any, filter: list[bool]) -> None:
        """Mark every node reachable from this fork in ``filter``."""
        if self.miss is not None:
            _shake_target(graph, self.miss, filter)
        for _, then in self.branches():
            _shake_target(graph, then, filter)

    def copy(self) -> Fork:
        fork = Fork(self.miss)
        fork._lut = list(self._lut)
        return fork

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fork):
            return NotImplemented
        return self.miss == other.miss and list(self.branches()) == list(other.branches())

    def __hash__(self) -> int:
        return hash((tuple(self.branches()), self.miss))

    def __repr__(self) -> str:
        arms = [f"{range} ⇒ {then}" for range, then in self.branches()]
        if self.miss is not None:
            arms.append(f"_ ⇒ {self.miss}")
        return "{" + ", ".join(arms) + "}"
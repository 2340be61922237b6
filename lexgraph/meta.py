"""Per-node analysis of a lexer graph: reference counts, minimum reads and loops."""

from __future__ import annotations

import sys
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Any

from .fork import Fork
from .rope import Rope

_UNBOUNDED = sys.maxsize


@dataclass
class MetaItem:
    """What the analysis found out about a single node."""

    refcount: int = 0
    """Number of references to this node."""
    min_read: int = 0
    """Minimum number of bytes that must be read for this node to find a match."""
    is_loop_init: bool = False
    """Whether this node leads to a loop entry node."""
    loop_entry_from: list[int] = field(default_factory=list)
    """Sorted ids of nodes pointing here while this node is on the stack."""

    def _loop_entry(self, node_id: int) -> None:
        idx = bisect_left(self.loop_entry_from, node_id)
        if idx == len(self.loop_entry_from) or self.loop_entry_from[idx] != node_id:
            self.loop_entry_from.insert(idx, node_id)


class Meta:
    """Analysis results for every node reachable from a root."""

    def __init__(self) -> None:
        self._map: dict[int, MetaItem] = {}

    @classmethod
    def analyze(cls, root: int, graph: Any) -> Meta:
        """Walk the graph from ``root`` and collect metadata for each node."""
        meta = cls()
        meta._first_pass(root, root, graph, [])
        return meta

    def __getitem__(self, id: int) -> MetaItem:
        return self._map[id]

    def _entry(self, node_id: int) -> MetaItem:
        return self._map.setdefault(node_id, MetaItem())

    def _first_pass(self, this: int, parent: int, graph: Any, stack: list[int]) -> MetaItem:
        meta = self._entry(this)
        is_done = meta.refcount > 0
        meta.refcount += 1

        if this in stack:
            meta._loop_entry(parent)
            self._entry(parent).is_loop_init = True
        if is_done:
            return meta

        stack.append(this)

        node = graph[this]
        if isinstance(node, Fork):
            min_read = _UNBOUNDED
            for _, target in node.branches():
                child = self._first_pass(target, this, graph, stack)
                if child.is_loop_init:
                    min_read = 1
                else:
                    min_read = min(min_read, child.min_read + 1)
            if node.miss is not None:
                child = self._first_pass(node.miss, this, graph, stack)
                if child.is_loop_init:
                    min_read = 0
                else:
                    min_read = min(min_read, child.min_read)
            if min_read == _UNBOUNDED:
                min_read = 0
        elif isinstance(node, Rope):
            min_read = len(node.pattern)
            child = self._first_pass(node.then, this, graph, stack)
            if not child.is_loop_init:
                min_read += child.min_read
            miss = node.miss.first()
            if miss is not None:
                child = self._first_pass(miss, this, graph, stack)
                if child.is_loop_init:
                    min_read = 0
                else:
                    min_read = min(min_read, child.min_read)
        else:
            min_read = 0

        stack.pop()

        meta = self._entry(this)
        meta.min_read = min_read

        for entry in list(meta.loop_entry_from):
            self._second_pass(entry, graph)

        return self._entry(this)

    def _second_pass(self, node_id: int, graph: Any) -> None:
        node = graph[node_id]
        if isinstance(node, Fork):
            min_read = _UNBOUNDED
            for _, target in node.branches():
                child = self[target]
                if child.is_loop_init:
                    min_read = 1
                else:
                    min_read = min(min_read, child.min_read + 1)
            if min_read == _UNBOUNDED:
                min_read = 0
        elif isinstance(node, Rope):
            min_read = len(node.pattern)
            child = self[node.then]
            if not child.is_loop_init:
                min_read += child.min_read
        else:
            raise RuntimeError(f"leaf node {node_id} cannot be a loop entry")

        self._entry(node_id).min_read = min_read
"""The lexer graph: an arena of fork, rope and leaf nodes with merging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .fork import Fork
from .rope import Rope

LeafT = TypeVar("LeafT")


@dataclass(frozen=True)
class DisambiguationError:
    """Two leaves with equal priority that can match the same input."""

    a: int
    b: int


class ReservedId:
    """An id pointing at an empty slot that must later be filled by ``Graph.insert``."""

    __slots__ = ("_id",)

    def __init__(self, node_id: int) -> None:
        self._id = node_id

    def get(self) -> int:
        return self._id

    def __repr__(self) -> str:
        return f"ReservedId({self._id})"


@dataclass
class _DeferredMerge:
    awaiting: int
    with_: int
    into: ReservedId


def _is_leaf(node: Any) -> bool:
    return not isinstance(node, (Fork, Rope))


def _merge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


def _same_node(left: Any, right: Any) -> bool:
    if isinstance(left, Fork) and isinstance(right, Fork):
        return left == right
    if isinstance(left, Rope) and isinstance(right, Rope):
        return left == right
    return False


def node_miss(node: Any) -> int | None:
    """The node a fork or rope goes to on a miss; None for leaves."""
    if isinstance(node, Rope):
        return node.miss.first()
    if isinstance(node, Fork):
        return node.miss
    return None


class Graph(Generic[LeafT]):
    """Arena of nodes addressed by positive integer ids.

    Any node that is neither a :class:`Fork` nor a :class:`Rope` is a leaf.
    Leaves are disambiguated by ordering them with ``<`` and ``>``.
    """

    def __init__(self) -> None:
        # Slot 0 stays empty so that ids start at 1.
        self._nodes: list[Any] = [None]
        self._merges: dict[tuple[int, int], int] = {}
        self._hashes: dict[tuple[str, int], int] = {}
        self._errors: list[DisambiguationError] = []
        self._deferred: list[_DeferredMerge] = []

    def errors(self) -> tuple[DisambiguationError, ...]:
        """Disambiguation errors collected while merging."""
        return tuple(self._errors)

    def nodes(self) -> tuple[Any, ...]:
        """All slots, with None for empty ones (slot 0 included)."""
        return tuple(self._nodes)

    def _next_id(self) -> int:
        return len(self._nodes)

    def reserve(self) -> ReservedId:
        """Allocate an empty slot to be filled later by ``insert``."""
        node_id = self._next_id()
        self._nodes.append(None)
        return ReservedId(node_id)

    def insert(self, reserved: ReservedId, node: Any) -> int:
        """Fill a reserved slot and complete merges that were waiting on it."""
        node_id = reserved.get()
        if self._nodes[node_id] is not None:
            raise ValueError(f"slot {node_id} has already been filled")
        self._nodes[node_id] = node

        awaiting = [d for d in self._deferred if d.awaiting == node_id]
        self._deferred = [d for d in self._deferred if d.awaiting != node_id]

        for deferred in awaiting:
            self._merge_unchecked(deferred.awaiting, deferred.with_, deferred.into)

        return node_id

    def push(self, node: Any) -> int:
        """Add a node, reusing the id of an identical fork or rope if there is one."""
        if _is_leaf(node):
            return self._push_unchecked(node)

        key = (type(node).__name__, hash(node))
        existing = self._hashes.get(key)
        if existing is not None:
            if _same_node(self[existing], node):
                return existing
        else:
            self._hashes[key] = self._next_id()

        return self._push_unchecked(node)

    def _push_unchecked(self, node: Any) -> int:
        node_id = self._next_id()
        self._nodes.append(node)
        return node_id

    def _set_merged(self, a: int, b: int, product: int) -> None:
        self._merges[_merge_key(a, b)] = product
        self._merges[_merge_key(a, product)] = product
        self._merges[_merge_key(b, product)] = product

    def _defer(self, awaiting: int, with_: int, a: int, b: int) -> int:
        reserved = self.reserve()
        self._deferred.append(_DeferredMerge(awaiting, with_, reserved))
        self._set_merged(a, b, reserved.get())
        return reserved.get()

    def merge(self, a: int, b: int) -> int:
        """Merge nodes ``a`` and ``b``, returning the id of the result."""
        if a == b:
            return a

        found = self._merges.get(_merge_key(a, b))
        if found is not None:
            return found

        left, right = self.get(a), self.get(b)

        if left is None and right is None:
            raise RuntimeError("merging two reserved nodes")
        if left is None:
            return self._defer(a, b, a, b)
        if right is None:
            return self._defer(b, a, a, b)
        if _is_leaf(left) and _is_leaf(right):
            if left < right:
                return b
            if left > right:
                return a
            self._errors.append(DisambiguationError(a, b))
            return a

        reserved = self.reserve()
        self._set_merged(a, b, reserved.get())
        return self._merge_unchecked(a, b, reserved)

    def _merge_unchecked(self, a: int, b: int, reserved: ReservedId) -> int:
        left, right = self.get(a), self.get(b)

        merged_rope: Rope | None = None
        if isinstance(left, Rope):
            merged_rope = self._merge_rope(left, b)
        elif isinstance(right, Rope):
            merged_rope = self._merge_rope(right, a)

        if merged_rope is not None:
            return self.insert(reserved, merged_rope)

        fork = self.fork_off(a)
        fork.merge(self.fork_off(b), self)

        stack = [reserved.get()]

        # Flatten chains of misses into the fork.
        while fork.miss is not None:
            miss = fork.miss
            if miss in stack:
                break
            stack.append(miss)

            node = self.get(miss)
            if isinstance(node, Fork):
                other = node.copy()
            elif isinstance(node, Rope):
                other = node.into_fork(self)
            else:
                break

            if other.miss is not None and self.get(other.miss) is None:
                break
            fork.miss = None
            fork.merge(other, self)

        return self.insert(reserved, fork)

    def _merge_rope(self, rope: Rope, other: int) -> Rope | None:
        node = self.get(other)

        if isinstance(node, Fork):
            if not rope.miss.is_none():
                return None
            count = 0
            for range_ in rope.pattern:
                if node.contains(range_) != other:
                    break
                count += 1
            split = rope.split_at(count, self)
            if split is None:
                return None
            split = split.with_miss_any(other)
            return Rope(split.pattern, self.merge(split.then, other), split.miss)

        if isinstance(node, Rope):
            shared = rope.prefix(node)
            if shared is None:
                return None
            prefix, miss = shared
            first = rope.remainder(len(prefix), self)
            second = node.remainder(len(prefix), self)
            return Rope(prefix, self.merge(first, second), miss)

        if rope.miss.is_none():
            return rope.with_miss(other)
        return None

    def fork_off(self, id: int) -> Fork:
        """A fresh fork equivalent to the node at ``id``."""
        node = self.get(id)
        if isinstance(node, Fork):
            return node.copy()
        if isinstance(node, Rope):
            return node.into_fork(self)
        return Fork().with_miss(id)

    def shake(self, root: int) -> None:
        """Empty every slot not reachable from ``root``."""
        filter = [False] * len(self._nodes)
        filter[root] = True

        node = self[root]
        if isinstance(node, (Fork, Rope)):
            node.shake(self, filter)

        for node_id, referenced in enumerate(filter):
            if not referenced:
                self._nodes[node_id] = None

    def get(self, id: int) -> Any | None:
        """The node at ``id``, or None for empty or unknown slots."""
        if 0 <= id < len(self._nodes):
            return self._nodes[id]
        return None

    def unwrap_leaf(self, id: int) -> Any:
        """The leaf at ``id``; raises TypeError if it is a fork or rope."""
        node = self[id]
        if isinstance(node, Fork):
            raise TypeError("called unwrap_leaf on a fork")
        if isinstance(node, Rope):
            raise TypeError("called unwrap_leaf on a rope")
        return node

    def __getitem__(self, id: int) -> Any:
        node = self.get(id)
        if node is None:
            raise KeyError(f"indexing into an empty node: {id}")
        return node

    def __repr__(self) -> str:
        entries = (
            f"{node_id}: {node!r}"
            for node_id, node in enumerate(self._nodes)
            if node is not None
        )
        return "{" + ", ".join(entries) + "}"
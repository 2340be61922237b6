import pytest

from lexgraph.fork import Fork
from lexgraph.range import Range
from lexgraph.rope import Miss, MissKind, Pattern, Rope


class StubGraph:
    def __init__(self):
        self.nodes = [None]

    def push(self, node):
        self.nodes.append(node)
        return len(self.nodes) - 1

    def merge(self, a, b):
        if a == b:
            return a
        return self.push(("merged", a, b))

    def __getitem__(self, node_id):
        return self.nodes[node_id]


def test_into_fork():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    fork = Rope("foobar", leaf).into_fork(graph)
    assert leaf == 1
    assert fork == Fork().branch("f", 2)
    assert graph[2] == Rope("oobar", leaf)


def test_into_fork_one_byte():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    fork = Rope("!", leaf).into_fork(graph)
    assert leaf == 1
    assert fork == Fork().branch("!", 1)
    assert len(graph.nodes) == 2


def test_into_fork_miss_any():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    fork = Rope("42", leaf).with_miss_any(42).into_fork(graph)
    assert leaf == 1
    assert fork == Fork().branch("4", 2).with_miss(42)
    assert graph[2] == Rope("2", leaf).with_miss_any(42)


def test_into_fork_miss_first():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    fork = Rope("42", leaf).with_miss(Miss(MissKind.FIRST, 42)).into_fork(graph)
    assert leaf == 1
    assert fork == Fork().branch("4", 2).with_miss(42)
    assert graph[2] == Rope("2", leaf)


def test_into_fork_empty_pattern():
    with pytest.raises(ValueError):
        Rope("", 1).into_fork(StubGraph())


def test_split_at():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    rope = Rope("foobar", leaf)
    assert rope.split_at(6, graph) == rope
    split = rope.split_at(3, graph)
    expected_id = leaf + 1
    assert split == Rope("foo", expected_id)
    assert graph[expected_id] == Rope("bar", leaf)


def test_split_at_zero():
    assert Rope("foo", 1).split_at(0, StubGraph()) is None


def test_split_at_keeps_any_miss_on_both_halves():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    split = Rope("ab", leaf).with_miss_any(7).split_at(1, graph)
    assert split == Rope("a", 2).with_miss_any(7)
    assert graph[2] == Rope("b", leaf).with_miss_any(7)


def test_split_at_beyond_length():
    with pytest.raises(IndexError):
        Rope("ab", 1).split_at(3, StubGraph())


def test_pattern_to_bytes():
    assert Pattern.of("foobar").to_bytes() == b"foobar"
    ranges = Pattern.of([(0, 0), (42, 42), (ord("{"), ord("}"))])
    assert ranges.to_bytes() is None


def test_pattern_slicing():
    pattern = Pattern.of("abc")
    assert pattern[1:] == Pattern.of("bc")
    assert pattern[0] == Range.of("a")
    assert len(pattern) == 3


def test_prefix_shared():
    left = Rope("foobar", 1)
    right = Rope("foobaz", 2).with_miss(5)
    assert left.prefix(right) == (Pattern.of("fooba"), Miss(MissKind.FIRST, 5))


def test_prefix_none_in_common():
    assert Rope("abc", 1).prefix(Rope("xyz", 2)) is None


def test_prefix_both_misses():
    assert Rope("ab", 1).with_miss(3).prefix(Rope("ab", 2).with_miss(4)) is None


def test_remainder():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    rope = Rope("foo", leaf)
    assert rope.remainder(3, graph) == leaf
    rest = rope.remainder(1, graph)
    assert graph[rest] == Rope("oo", leaf)


def test_miss_take_first():
    assert Miss(MissKind.FIRST, 4).take_first() == (4, Miss())
    assert Miss(MissKind.ANY, 4).take_first() == (4, Miss(MissKind.ANY, 4))
    assert Miss().take_first() == (None, Miss())


def test_miss_first_and_is_none():
    assert Miss(MissKind.ANY, 9).first() == 9
    assert Miss().first() is None
    assert Miss().is_none() is True
    assert Miss(MissKind.FIRST, 1).is_none() is False


def test_invalid_miss():
    with pytest.raises(ValueError):
        Miss(MissKind.FIRST)


def test_shake():
    graph = StubGraph()
    leaf = graph.push("LEAF")
    other = graph.push("OTHER")
    rope = Rope("ab", leaf).with_miss(other)
    filter = [False] * 3
    rope.shake(graph, filter)
    assert filter == [False, True, True]


def test_repr():
    assert repr(Rope("ab", 1)) == "ab ⇒ 1"
    assert repr(Rope("ab", 1).with_miss(3)) == "[ab ⇒ 1, _ ⇒ 3]"
    assert repr(Rope("ab", 1).with_miss_any(3)) == "[ab ⇒ 1, _ ⇒ 3*]"


def test_equal_ropes_hash_equal():
    assert hash(Rope("xy", 1)) == hash(Rope(b"xy", 1))
    assert Rope("xy", 1) == Rope(b"xy", 1)
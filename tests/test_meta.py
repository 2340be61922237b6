import pytest

from lexgraph.fork import Fork
from lexgraph.graph import Graph
from lexgraph.meta import Meta
from lexgraph.rope import Rope


def test_single_leaf():
    graph = Graph()
    leaf = graph.push("LEAF")

    meta = Meta.analyze(leaf, graph)

    assert meta[leaf].min_read == 0
    assert meta[leaf].refcount == 1
    assert meta[leaf].loop_entry_from == []
    assert meta[leaf].is_loop_init is False


def test_rope_reads_its_whole_pattern():
    graph = Graph()
    leaf = graph.push("LEAF")
    rope = graph.push(Rope("foo", leaf))

    meta = Meta.analyze(rope, graph)

    assert meta[rope].min_read == len("foo")
    assert meta[leaf].refcount == 1


def test_rope_with_miss_takes_minimum_of_miss():
    graph = Graph()
    leaf = graph.push("LEAF")
    other = graph.push("OTHER")
    rope = graph.push(Rope("ab", leaf).with_miss(other))

    meta = Meta.analyze(rope, graph)

    assert meta[rope].min_read == meta[other].min_read
    assert meta[other].refcount == 1


def test_fork_takes_shortest_branch():
    graph = Graph()
    leaf = graph.push("LEAF")
    rope = graph.push(Rope("bc", leaf))
    fork = graph.push(Fork().branch("a", rope).branch("x", leaf))

    meta = Meta.analyze(fork, graph)

    assert meta[rope].min_read == len("bc")
    assert meta[fork].min_read == 1


def test_shared_target_is_counted_per_reference():
    graph = Graph()
    leaf = graph.push("LEAF")
    fork = graph.push(Fork().branch("a", leaf).branch("c", leaf))

    meta = Meta.analyze(fork, graph)

    assert meta[leaf].refcount == 2


def test_loop_is_detected():
    graph = Graph()
    ident_leaf = graph.push("IDENT")
    reserved = graph.reserve()
    root = graph.insert(reserved, Fork().branch(("a", "z"), reserved.get()).with_miss(ident_leaf))

    meta = Meta.analyze(root, graph)

    assert meta[root].loop_entry_from == [root]
    assert meta[root].is_loop_init is True
    assert meta[root].refcount > 1
    assert meta[root].min_read == 1
    assert meta[ident_leaf].loop_entry_from == []


def test_unvisited_node_raises():
    graph = Graph()
    leaf = graph.push("LEAF")
    unused = graph.push("UNUSED")

    meta = Meta.analyze(leaf, graph)

    assert meta[leaf].refcount == 1
    with pytest.raises(KeyError):
        meta[unused]
from lexgraph.graph import DisambiguationError, Graph
from lexgraph.leaf import Callback, CallbackKind, Leaf


def test_display_uses_ident():
    assert str(Leaf("Word")) == "Word"


def test_skip_leaf():
    leaf = Leaf.new_skip((0, 3))

    assert leaf.ident is None
    assert str(leaf) == "<skip>"
    assert leaf.callback == Callback(CallbackKind.SKIP, span=(0, 3))
    assert repr(leaf) == "::<skip> (<skip>)"


def test_repr_without_callback():
    assert repr(Leaf("Word")) == "::Word"


def test_repr_with_label_callback():
    leaf = Leaf("Word").with_callback(Callback(CallbackKind.LABEL, body="word_callback"))

    assert repr(leaf) == "::Word (word_callback)"


def test_repr_with_inline_callback():
    leaf = Leaf("Integer").with_callback(
        Callback(CallbackKind.INLINE, arg="lex", body="lex.slice().parse()")
    )

    assert repr(leaf) == "::Integer (<inline>)"


def test_builders_return_new_leaves():
    base = Leaf("Number", (4, 9))
    changed = base.with_priority(7).with_field("f64")

    assert base.priority == 0
    assert base.field is None
    assert changed.priority == 7
    assert changed.field == "f64"
    assert changed.ident == base.ident
    assert changed.span == base.span


def test_ordering_by_priority():
    low = Leaf("A").with_priority(2)
    high = Leaf("B").with_priority(4)

    assert low < high
    assert high > low
    assert not (low > high)
    assert not (low < Leaf("C").with_priority(2))


def test_graph_merge_prefers_higher_priority():
    graph = Graph()
    low = graph.push(Leaf("A").with_priority(2))
    high = graph.push(Leaf("B").with_priority(4))

    assert graph.merge(low, high) == high
    assert graph.merge(high, low) == high
    assert graph.errors() == ()


def test_graph_merge_equal_priority_is_an_error():
    graph = Graph()
    a = graph.push(Leaf("A").with_priority(3))
    b = graph.push(Leaf("B").with_priority(3))

    assert graph.merge(a, b) == a
    assert graph.errors() == (DisambiguationError(a, b),)
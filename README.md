# lexgraph

`lexgraph` provides the building blocks of the state graph that sits behind
a byte-oriented lexer: nodes that branch on a byte, nodes that match a fixed
run of bytes, and terminal nodes that stand for tokens. A graph merges such
nodes into one machine that accepts the input of all of them. The package
also ships four small command-line tools that lex or interpret text.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The graph

### Ranges

`lexgraph.range.Range` is an inclusive range of byte values (`start`,
`end`). `Range.of` builds one from a `Range`, a byte value, a one-character
string or a `(start, end)` pair. Iterating a range yields its bytes in
order; `is_byte` and `as_byte` tell whether it covers a single byte.
`str(range)` shows printable bytes as characters and others in hex, e.g.
`[a-z]` or `[FA-FF]`.

### Forks

`lexgraph.fork.Fork` maps each of the 256 byte values to a target node id,
with an optional `miss` node for bytes that have no branch.

- `branch(range, then)` adds a branch and returns the fork; overlapping a
  different target raises `ValueError("Overlapping branches")`.
- `add_branch(range, then, graph)` adds a branch, merging with existing
  targets through the graph.
- `merge(other, graph)` folds another fork in, merging targets that clash.
- `branches()` yields `(Range, target)` pairs for runs of bytes sharing a
  target.
- `contains(range)` returns the target if every byte of the range leads to
  the same node, else `None`.

### Ropes

`lexgraph.rope.Rope` matches a `Pattern` (a sequence of ranges) and then
continues at `then`. Its `Miss` says what happens on a failed match:
`MissKind.NONE` (fail), `MissKind.FIRST` (go to a node if the first byte
does not match) or `MissKind.ANY` (go to a node on any partial match).

- `Pattern.of` accepts text (as UTF-8), bytes or an iterable of ranges;
  `to_bytes` returns the bytes, or `None` if a range spans several bytes.
- `into_fork(graph)` splits off the first range into a fork.
- `prefix(other)`, `split_at(at, graph)` and `remainder(at, graph)` are
  used when two ropes are merged.

Ropes, patterns and misses are immutable; `with_miss` and `with_miss_any`
return new ropes.

### Leaves

Any node that is neither a fork nor a rope is a leaf. Leaves are compared
with `<` and `>` to decide which one wins when two are merged.
`lexgraph.leaf.Leaf` is such a leaf for a token definition: an `ident`
(or `None` for a skip rule, see `Leaf.new_skip`), a `priority`, an optional
`field` type name and an optional `Callback` (`CallbackKind.LABEL`,
`INLINE` or `SKIP`). Leaves order by priority.

### Graph

`lexgraph.graph.Graph` stores nodes under ids starting at 1.

- `push(node)` adds a node, returning the id of an identical fork or rope
  already stored.
- `reserve()` hands out a `ReservedId` for an empty slot, and
  `insert(reserved, node)` fills it; this is how a node refers to itself
  to form a loop.
- `merge(a, b)` builds a node accepting the input of both. A merge with a
  reserved, still empty slot is completed when that slot is filled. Two
  leaves that compare equal cannot be told apart: the clash is recorded as
  a `DisambiguationError` in `errors()` and the first leaf is kept.
- `fork_off(id)` returns a fresh fork equivalent to any node.
- `shake(root)` empties every slot not reachable from `root`.
- `graph[id]` raises `KeyError` for an empty slot; `get(id)` returns
  `None`; `unwrap_leaf(id)` raises `TypeError` for forks and ropes.
- `node_miss(node)` gives the miss target of a fork or rope.

```python
from lexgraph.fork import Fork
from lexgraph.graph import Graph

graph = Graph()
ident = graph.push("IDENT")
slot = graph.reserve()
loop = graph.insert(slot, Fork().branch(("a", "z"), slot.get()).with_miss(ident))
```

### Analysis

`lexgraph.meta.Meta.analyze(root, graph)` walks the graph from `root` and
gives a `MetaItem` per reachable node: `refcount`, `min_read` (the fewest
bytes to read before a match is possible), `is_loop_init` and
`loop_entry_from`.

### What is not included

The package does not compile regular expressions or token definitions into
a graph, and it does not generate lexer code from one: graphs are built by
hand from forks, ropes and leaves.

## Tools

Each tool is also importable as a module, and each command's `main` takes
an optional argument list and returns an exit status.

### Brainfuck interpreter

```
lexgraph-brainfuck path/to/program.bf
```

`lexgraph.brainfuck.parse` turns source text into a list of `Op` values,
ignoring every other character. `execute(code, reader, writer)` runs a
program on a 30,000-cell tape of wrapping bytes, reading bytes from
`reader` (standard input by default) and writing each output byte as a
character to `writer` (standard output by default). Unbalanced brackets,
running out of input and moving the pointer off the tape raise
`BrainfuckError`.

### Lexing with custom errors

```
lexgraph-custom-error ["some text"]
```

`lexgraph.custom_error.lex` skips spaces and tabs and yields `Token`
values for words of ASCII letters and for integers that fit in one byte
(their value in `value`). An integer above 255 yields a `LexingError` with
`reason` `"overflow error"`; any other character yields a `LexingError`
with `reason` `None` for that single character, and lexing carries on.
Without an argument the command lexes the sample line `Hello 256 Jérome`.

### Word positions

```
lexgraph-extras path/to/file
```

`lexgraph.extras.word_positions` yields a `WordPosition` for every word
with its zero-based line and column; the command prints
`Word '<word>' found at (<line>, <column>)` for each.

### JSON

```
lexgraph-json path/to/file.json
```

`lexgraph.json_parser.parse` reads the first JSON value from a string and
returns `None`, `bool`, `float`, `str`, `list` or `dict`. Strings, keys
included, are kept exactly as written, quotes and escapes and all.
`Lexer` yields `Token` values (an `ERROR` token for any unrecognised
character), and `parse_value`, `parse_array` and `parse_object` work on a
lexer directly. Malformed input raises `JsonError`, with a `message` and
the character `span` it refers to. The command prints the parsed value, or
the error with its line and column.
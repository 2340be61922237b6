"""Fork, rope and leaf nodes for byte-level lexer graphs, with small lexing tools."""

__version__ = "0.1.0"

__all__ = [
    "brainfuck",
    "custom_error",
    "extras",
    "fork",
    "graph",
    "json_parser",
    "leaf",
    "meta",
    "range",
    "rope",
]
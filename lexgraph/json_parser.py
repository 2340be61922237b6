"""A small JSON parser built on a hand-rolled tokenizer.

Values map onto Python types: ``None``, ``bool``, ``float``, ``str``,
``list`` and ``dict``. Strings, object keys included, are kept exactly as
written in the source, with their quotes and escape sequences.
"""

from __future__ import annotations

import argparse
import pprint
import re
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

Span = tuple[int, int]


class TokenKind(Enum):
    """All meaningful JSON tokens, plus ``ERROR`` for unrecognised input."""

    BOOL = "bool"
    BRACE_OPEN = "{"
    BRACE_CLOSE = "}"
    BRACKET_OPEN = "["
    BRACKET_CLOSE = "]"
    COLON = ":"
    COMMA = ","
    NULL = "null"
    NUMBER = "number"
    STRING = "string"
    ERROR = "error"


@dataclass(frozen=True)
class Token:
    """A lexed token with its text and character span.

    ``value`` holds the bool for ``BOOL``, the float for ``NUMBER`` and the
    raw slice for ``STRING``; it is None otherwise.
    """

    kind: TokenKind
    slice: str
    span: Span
    value: Any = None


class JsonError(Exception):
    """Invalid JSON, with the character span the problem was found at."""

    def __init__(self, message: str, span: Span) -> None:
        super().__init__(message)
        self.message = message
        self.span = span


_PATTERN = re.compile(
    r"""
    (?P<skip>[ \t\r\n\f]+)
    | (?P<string>"(?:[^"\\]|\\["\\bnfrt]|u[a-fA-F0-9]{4})*")
    | (?P<number>-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?)
    | (?P<true>true)
    | (?P<false>false)
    | (?P<null>null)
    | (?P<punct>[{}\[\]:,])
    """,
    re.VERBOSE,
)

_PUNCTUATION = {
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
}


class Lexer:
    """Iterator over the tokens of a JSON source.

    Whitespace is skipped. A character that starts no token yields a single
    ``ERROR`` token covering just that character.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._pos = 0
        self._span: Span = (0, 0)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        source = self.source
        while self._pos < len(source):
            match = _PATTERN.match(source, self._pos)
            if match is None:
                start = self._pos
                self._pos += 1
                self._span = (start, self._pos)
                return Token(TokenKind.ERROR, source[start], self._span)
            self._pos = match.end()
            group = match.lastgroup
            if group == "skip":
                continue
            self._span = match.span()
            text = match.group()
            if group == "string":
                return Token(TokenKind.STRING, text, self._span, text)
            if group == "number":
                return Token(TokenKind.NUMBER, text, self._span, float(text))
            if group == "true":
                return Token(TokenKind.BOOL, text, self._span, True)
            if group == "false":
                return Token(TokenKind.BOOL, text, self._span, False)
            if group == "null":
                return Token(TokenKind.NULL, text, self._span)
            return Token(_PUNCTUATION[text], text, self._span)
        self._span = (self._pos, self._pos)
        raise StopIteration

    def span(self) -> Span:
        """Span of the last token, or an empty span at the end of input."""
        return self._span


_SCALARS = {TokenKind.BOOL, TokenKind.NULL, TokenKind.NUMBER, TokenKind.STRING}


def _scalar(token: Token) -> Any:
    return None if token.kind is TokenKind.NULL else token.value


def parse_value(lexer: Lexer) -> Any:
    """Parse the next value from the token stream."""
    token = next(lexer, None)
    if token is None:
        raise JsonError("empty values are not allowed", lexer.span())
    if token.kind in _SCALARS:
        return _scalar(token)
    if token.kind is TokenKind.BRACE_OPEN:
        return parse_object(lexer)
    if token.kind is TokenKind.BRACKET_OPEN:
        return parse_array(lexer)
    raise JsonError("unexpected token here (context: value)", lexer.span())


def parse_array(lexer: Lexer) -> list[Any]:
    """Parse an array whose opening ``[`` has just been consumed."""
    array: list[Any] = []
    span = lexer.span()
    awaits_comma = False
    awaits_value = False

    for token in lexer:
        kind = token.kind
        if kind in _SCALARS and not awaits_comma:
            array.append(_scalar(token))
            awaits_value = False
        elif kind is TokenKind.BRACE_OPEN and not awaits_comma:
            array.append(parse_object(lexer))
            awaits_value = False
        elif kind is TokenKind.BRACKET_OPEN and not awaits_comma:
            array.append(parse_array(lexer))
            awaits_value = False
        elif kind is TokenKind.BRACKET_CLOSE and not awaits_value:
            return array
        elif kind is TokenKind.COMMA and awaits_comma:
            awaits_value = True
        else:
            raise JsonError("unexpected token here (context: array)", lexer.span())
        awaits_comma = not awaits_value

    raise JsonError("unmatched opening bracket defined here", span)


def parse_object(lexer: Lexer) -> dict[str, Any]:
    """Parse an object whose opening ``{`` has just been consumed."""
    mapping: dict[str, Any] = {}
    span = lexer.span()
    awaits_comma = False
    awaits_key = False

    for token in lexer:
        kind = token.kind
        if kind is TokenKind.BRACE_CLOSE and not awaits_key:
            return mapping
        if kind is TokenKind.COMMA and awaits_comma:
            awaits_key = True
        elif kind is TokenKind.STRING and not awaits_comma:
            colon = next(lexer, None)
            if colon is None or colon.kind is not TokenKind.COLON:
                raise JsonError("unexpected token here, expecting ':'", lexer.span())
            mapping[token.value] = parse_value(lexer)
            awaits_key = False
        else:
            raise JsonError("unexpected token here (context: object)", lexer.span())
        awaits_comma = not awaits_key

    raise JsonError("unmatched opening brace defined here", span)


def parse(source: str) -> Any:
    """Parse the first JSON value in ``source``."""
    return parse_value(Lexer(source))


def _location(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def main(argv: list[str] | None = None) -> int:
    """Parse the JSON file named on the command line and print its value."""
    parser = argparse.ArgumentParser(prog="json", description="Parse and print a JSON file.")
    parser.add_argument("path", help="file holding a JSON value")
    args = parser.parse_args(argv)

    try:
        source = Path(args.path).read_text(encoding="utf-8")
    except OSError as err:
        print(f"Failed to read file: {err}", file=sys.stderr)
        return 1

    try:
        value = parse(source)
    except JsonError as err:
        line, column = _location(source, err.span[0])
        start, end = err.span
        print("Error: Invalid JSON", file=sys.stderr)
        print(f"  --> {args.path}:{line}:{column}", file=sys.stderr)
        print(f"  {source[start:end]!r}: {err.message}", file=sys.stderr)
        return 1

    print(pprint.pformat(value))
    return 0
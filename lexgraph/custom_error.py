"""Lexer for blank-separated ASCII words and byte-sized integers, with typed errors."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

_U8_MAX = 0xFF
_DEMO = "Hello 256 Jérome"

_PATTERN = re.compile(r"(?P<skip>[ \t]+)|(?P<word>[a-zA-Z]+)|(?P<integer>[0-9]+)")


class TokenKind(Enum):
    WORD = "word"
    INTEGER = "integer"


@dataclass(frozen=True)
class Token:
    """A lexed token; ``span`` is in characters and ``value`` is set for integers."""

    kind: TokenKind
    slice: str
    span: tuple[int, int]
    value: int | None = None


class LexingError(Exception):
    """A piece of input that could not be lexed.

    ``reason`` describes an invalid integer (such as ``"overflow error"``);
    it is None when the input held a character that is not an ASCII letter.
    """

    def __init__(self, reason: str | None, slice: str, span: tuple[int, int]) -> None:
        super().__init__(reason if reason is not None else f"non-ascii character {slice!r}")
        self.reason = reason
        self.slice = slice
        self.span = span


def _integer(text: str, span: tuple[int, int]) -> Token | LexingError:
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(_U8_MAX)) or int(digits) > _U8_MAX:
        return LexingError("overflow error", text, span)
    return Token(TokenKind.INTEGER, text, span, int(digits))


def lex(source: str) -> Iterator[Token | LexingError]:
    """Yield tokens, or errors in their place, until the input is used up.

    Blanks and tabs are skipped. An unrecognised character yields an error
    covering just that character, and lexing carries on after it.
    """
    pos = 0
    while pos < len(source):
        match = _PATTERN.match(source, pos)
        if match is None:
            yield LexingError(None, source[pos], (pos, pos + 1))
            pos += 1
            continue
        pos = match.end()
        kind = match.lastgroup
        if kind == "skip":
            continue
        text, span = match.group(), match.span()
        if kind == "word":
            yield Token(TokenKind.WORD, text, span)
        else:
            yield _integer(text, span)


def main(argv: list[str] | None = None) -> int:
    """Lex the given text (or a sample line) and print each token or error."""
    parser = argparse.ArgumentParser(
        prog="custom-error", description="Lex ASCII words and byte-sized integers."
    )
    parser.add_argument("text", nargs="?", default=_DEMO, help="text to lex")
    args = parser.parse_args(argv)

    for item in lex(args.text):
        if isinstance(item, LexingError):
            print(f"error at {item.span}: {item} ({item.slice!r})")
        else:
            print(f"{item.kind.name} at {item.span}: {item.slice!r}")
    return 0
"""Report the line and column of every word in a text."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

_PATTERN = re.compile(r"\n|\w+")


@dataclass(frozen=True)
class WordPosition:
    """A word with its zero-based line and column (in characters)."""

    word: str
    line: int
    column: int


def word_positions(source: str) -> Iterator[WordPosition]:
    """Yield each word of ``source`` with where it starts."""
    line = 0
    line_start = 0
    for match in _PATTERN.finditer(source):
        if match.group() == "\n":
            line += 1
            line_start = match.end()
            continue
        yield WordPosition(match.group(), line, match.start() - line_start)


def main(argv: list[str] | None = None) -> int:
    """Print the position of every word in the file named on the command line."""
    parser = argparse.ArgumentParser(
        prog="extras", description="Print line and column positions of words in a file."
    )
    parser.add_argument("path", help="file to scan")
    args = parser.parse_args(argv)

    try:
        source = Path(args.path).read_text(encoding="utf-8")
    except OSError as err:
        print(f"Failed to read file: {err}", file=sys.stderr)
        return 1

    for position in word_positions(source):
        print(f"Word '{position.word}' found at ({position.line}, {position.column})")
    return 0
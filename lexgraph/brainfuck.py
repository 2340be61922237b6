"""A Brainfuck interpreter."""

from __future__ import annotations

import argparse
import sys
from enum import Enum
from pathlib import Path
from typing import BinaryIO, TextIO

_TAPE_SIZE = 30_000  # minimum recommended size


class Op(Enum):
    """The eight single-character Brainfuck commands."""

    INC_POINTER = ">"
    DEC_POINTER = "<"
    INC_DATA = "+"
    DEC_DATA = "-"
    OUT_DATA = "."
    INP_DATA = ","
    COND_JUMP_FORWARD = "["
    COND_JUMP_BACKWARD = "]"


_COMMANDS = frozenset(op.value for op in Op)


class BrainfuckError(Exception):
    """Raised for malformed programs and failures while running them."""


def parse(code: str) -> list[Op]:
    """Turn source text into operations, discarding every other character."""
    return [Op(char) for char in code if char in _COMMANDS]


def _match_jumps(operations: list[Op]) -> dict[int, int]:
    """Map each bracket position to the position of its partner."""
    open_positions: list[int] = []
    pairs: dict[int, int] = {}
    for position, op in enumerate(operations):
        if op is Op.COND_JUMP_FORWARD:
            open_positions.append(position)
        elif op is Op.COND_JUMP_BACKWARD:
            if not open_positions:
                raise BrainfuckError(
                    f"Unexpected conditional backward jump at position {position}, "
                    "does not match any '['"
                )
            start = open_positions.pop()
            pairs[start] = position
            pairs[position] = start
    if open_positions:
        raise BrainfuckError(
            f"Unmatched conditional forward jump at positions {open_positions}, "
            "expecting a closing ']' for each of them"
        )
    return pairs


def _read_byte(reader: BinaryIO | None) -> int:
    stream = reader if reader is not None else sys.stdin.buffer
    chunk = stream.read(1)
    if not chunk:
        raise BrainfuckError("An error occurred while reading byte!")
    if isinstance(chunk, str):
        return ord(chunk) & 0xFF
    return chunk[0]


def _cell(pointer: int) -> int:
    if pointer >= _TAPE_SIZE:
        raise BrainfuckError(f"data pointer {pointer} is beyond the end of the tape")
    return pointer


def execute(code: str, reader: BinaryIO | None = None, writer: TextIO | None = None) -> None:
    """Run Brainfuck code, reading from ``reader`` and writing to ``writer``.

    Input defaults to standard input (binary) and output to standard output.
    Each output byte is written as the character with that code point.
    """
    operations = parse(code)
    pairs = _match_jumps(operations)
    out = writer if writer is not None else sys.stdout

    data = bytearray(_TAPE_SIZE)
    pointer = 0
    position = 0

    while position < len(operations):
        match operations[position]:
            case Op.INC_POINTER:
                pointer += 1
            case Op.DEC_POINTER:
                if pointer == 0:
                    raise BrainfuckError("data pointer moved below the start of the tape")
                pointer -= 1
            case Op.INC_DATA:
                cell = _cell(pointer)
                data[cell] = (data[cell] + 1) & 0xFF
            case Op.DEC_DATA:
                cell = _cell(pointer)
                data[cell] = (data[cell] - 1) & 0xFF
            case Op.OUT_DATA:
                out.write(chr(data[_cell(pointer)]))
            case Op.INP_DATA:
                data[_cell(pointer)] = _read_byte(reader)
            case Op.COND_JUMP_FORWARD:
                if data[_cell(pointer)] == 0:
                    position = pairs[position]
            case Op.COND_JUMP_BACKWARD:
                if data[_cell(pointer)] != 0:
                    position = pairs[position]
        position += 1

    out.flush()


def main(argv: list[str] | None = None) -> int:
    """Run the Brainfuck program stored in the file named on the command line."""
    parser = argparse.ArgumentParser(prog="brainfuck", description="Run a Brainfuck program.")
    parser.add_argument("path", help="file holding the program")
    args = parser.parse_args(argv)

    try:
        source = Path(args.path).read_text(encoding="utf-8")
    except OSError as err:
        print(f"Failed to read file: {err}", file=sys.stderr)
        return 1

    try:
        execute(source)
    except BrainfuckError as err:
        print(err, file=sys.stderr)
        return 1
    return 0
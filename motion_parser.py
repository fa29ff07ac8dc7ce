"""
Motion script parsing for the rope simulation.

A motion script is one instruction per line: a direction letter (U, R, D, L)
and a positive step count separated by a single space, e.g. "R 4".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Iterator

from grid_types import Delta, Direction

__all__ = [
    "Operation",
    "ParseOpError",
    "expand_single_steps",
    "format_ops",
    "parse_op",
    "parse_ops",
    "read_ops",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    """Move the head step_count cells in one direction."""

    direction: Direction
    step_count: int

    @property
    def delta(self) -> Delta:
        return self.direction.delta * self.step_count

    def __str__(self) -> str:
        return f"{self.direction.value} {self.step_count}"


class ParseOpError(ValueError):
    """A motion script line could not be parsed."""

    def __init__(self, line: str, reason: str, line_number: int | None = None) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        location = f"  Line {line_number}\n" if line_number is not None else ""
        super().__init__(
            f"Failed to parse op: '{line}'\n"
            f"{location}"
            f"  Reason: {reason}\n"
            f"  Expected format: '<U|R|D|L> <count>' (e.g. 'R 4')"
        )


def parse_op(line: str, line_number: int | None = None) -> Operation:
    """
    Parse a single motion instruction.

    Raises:
        ParseOpError: If the line is not exactly a direction letter and a
            positive integer count separated by one space
    """
    text = line.strip()
    tokens = text.split(" ")
    if len(tokens) != 2:
        raise ParseOpError(text, f"expected 2 tokens, got {len(tokens)}", line_number)

    dir_token, count_token = tokens
    try:
        direction = Direction(dir_token)
    except ValueError:
        raise ParseOpError(text, f"unknown direction '{dir_token}'", line_number) from None

    if not (count_token.isascii() and count_token.isdecimal()):
        raise ParseOpError(text, f"step count '{count_token}' is not a number", line_number)
    step_count = int(count_token)
    if step_count < 1:
        raise ParseOpError(text, "step count must be at least 1", line_number)

    return Operation(direction, step_count)


def parse_ops(text: str) -> list[Operation]:
    """Parse every non-blank line of a motion script. The first bad line aborts."""
    ops = [
        parse_op(line, line_number)
        for line_number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    logger.debug("parse_ops: parsed %d operations", len(ops))
    return ops


def read_ops(path: str | Path) -> list[Operation]:
    """Read and parse a motion script file. I/O errors propagate unchanged."""
    with open(path, encoding="utf-8") as f:
        return parse_ops(f.read())


def expand_single_steps(ops: Iterable[Operation]) -> Iterator[Operation]:
    """Split each operation into step_count operations of one step each."""
    for op in ops:
        single = replace(op, step_count=1)
        for _ in range(op.step_count):
            yield single


def format_ops(ops: Iterable[Operation]) -> str:
    return "".join(f"{op}\n" for op in ops)

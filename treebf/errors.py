from __future__ import annotations

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every failure raised while scanning, parsing or running."""


class ParseError(BrainfuckError):
    position: Optional[int] = None


class UnmatchedLoopEnd(ParseError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__("Loop end at #{} has no beginning".format(position))


class UnmatchedLoopStart(ParseError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__("Loop starting at #{} has no matching end".format(position))


class ExecutionError(BrainfuckError):
    position: Optional[int] = None


class InputExhausted(ExecutionError):
    def __init__(self) -> None:
        super().__init__("Input stream exhausted while reading a cell")


class PointerOutOfBounds(ExecutionError, IndexError):
    def __init__(self, position: int, tape_size: int) -> None:
        self.position = position
        self.tape_size = tape_size
        super().__init__(
            "Pointer moved to {} outside the tape (valid range 0..{})".format(
                position, tape_size - 1
            )
        )


__all__ = [
    "BrainfuckError",
    "ParseError",
    "UnmatchedLoopEnd",
    "UnmatchedLoopStart",
    "ExecutionError",
    "InputExhausted",
    "PointerOutOfBounds",
]

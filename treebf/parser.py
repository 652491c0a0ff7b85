from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Tuple, Union

from .errors import UnmatchedLoopEnd, UnmatchedLoopStart
from .scanner import Opcode, scan


class Command(Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    WRITE = "."
    READ = ","


@dataclass(frozen=True)
class Loop:
    body: Tuple["Instruction", ...] = ()


Instruction = Union[Command, Loop]
Program = Tuple[Instruction, ...]


_COMMANDS: Dict[Opcode, Command] = {
    opcode: Command[opcode.name]
    for opcode in Opcode
    if opcode not in (Opcode.LOOP_BEGIN, Opcode.LOOP_END)
}


def parse(opcodes: Sequence[Opcode]) -> Program:
    """Build the instruction tree for an opcode sequence.

    Every matched ``[``/``]`` pair becomes a :class:`Loop` owning the
    instructions between them. Open loops are kept on an explicit stack of
    ``(start index, enclosing body)`` frames, so deep nesting does not hit the
    interpreter's recursion limit.

    Raises :class:`UnmatchedLoopEnd` with the index of a ``]`` that closes
    nothing, and :class:`UnmatchedLoopStart` with the index of the outermost
    ``[`` left open at the end of the sequence.
    """
    program: List[Instruction] = []
    frames: List[Tuple[int, List[Instruction]]] = []
    body = program

    for index, opcode in enumerate(opcodes):
        if opcode is Opcode.LOOP_BEGIN:
            frames.append((index, body))
            body = []
        elif opcode is Opcode.LOOP_END:
            if not frames:
                raise UnmatchedLoopEnd(index)
            _, enclosing = frames.pop()
            enclosing.append(Loop(tuple(body)))
            body = enclosing
        else:
            body.append(_COMMANDS[opcode])

    if frames:
        raise UnmatchedLoopStart(frames[0][0])
    return tuple(program)


def parse_source(source: str) -> Program:
    return parse(scan(source))


def count_commands(program: Sequence[Instruction]) -> int:
    """Number of non-loop instructions in the tree, nested bodies included."""
    total = 0
    pending: List[Sequence[Instruction]] = [program]
    while pending:
        for instruction in pending.pop():
            if isinstance(instruction, Loop):
                pending.append(instruction.body)
            else:
                total += 1
    return total


def count_loops(program: Sequence[Instruction]) -> int:
    total = 0
    pending: List[Sequence[Instruction]] = [program]
    while pending:
        for instruction in pending.pop():
            if isinstance(instruction, Loop):
                total += 1
                pending.append(instruction.body)
    return total


def nesting_depth(program: Sequence[Instruction]) -> int:
    deepest = 0
    pending: List[Tuple[Sequence[Instruction], int]] = [(program, 0)]
    while pending:
        body, depth = pending.pop()
        deepest = max(deepest, depth)
        for instruction in body:
            if isinstance(instruction, Loop):
                pending.append((instruction.body, depth + 1))
    return deepest


def format_program(program: Sequence[Instruction]) -> str:
    """Render the tree back to command symbols, without comments."""
    parts: List[str] = []
    pending: List[Iterator[Instruction]] = [iter(program)]
    while pending:
        instruction = next(pending[-1], None)
        if instruction is None:
            pending.pop()
            if pending:
                parts.append(Opcode.LOOP_END.value)
        elif isinstance(instruction, Loop):
            parts.append(Opcode.LOOP_BEGIN.value)
            pending.append(iter(instruction.body))
        else:
            parts.append(instruction.value)
    return "".join(parts)


__all__ = [
    "Command",
    "Loop",
    "Instruction",
    "Program",
    "parse",
    "parse_source",
    "count_commands",
    "count_loops",
    "nesting_depth",
    "format_program",
]

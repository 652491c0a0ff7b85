from .errors import (
    BrainfuckError,
    ExecutionError,
    InputExhausted,
    ParseError,
    PointerOutOfBounds,
    UnmatchedLoopEnd,
    UnmatchedLoopStart,
)
from .executor import TAPE_SIZE, Machine, execute, run
from .parser import Command, Instruction, Loop, Program, parse, parse_source
from .scanner import Opcode, scan

__all__ = [
    "BrainfuckError",
    "ExecutionError",
    "InputExhausted",
    "ParseError",
    "PointerOutOfBounds",
    "UnmatchedLoopEnd",
    "UnmatchedLoopStart",
    "TAPE_SIZE",
    "Machine",
    "execute",
    "run",
    "Command",
    "Instruction",
    "Loop",
    "Program",
    "parse",
    "parse_source",
    "Opcode",
    "scan",
]

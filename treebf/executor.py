from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterable, List, Sequence, Tuple, Union

from .errors import InputExhausted, PointerOutOfBounds
from .parser import Command, Instruction, Loop, parse_source

TAPE_SIZE = 1024


@dataclass
class Machine:
    """Tape, data pointer and byte streams shared by every loop body of a run."""

    input_stream: BinaryIO
    output_stream: BinaryIO
    tape: bytearray = field(default_factory=lambda: bytearray(TAPE_SIZE), repr=False)
    pointer: int = 0

    @property
    def cell(self) -> int:
        return self.tape[self.pointer]

    def move(self, offset: int) -> None:
        target = self.pointer + offset
        if not 0 <= target < len(self.tape):
            raise PointerOutOfBounds(target, len(self.tape))
        self.pointer = target

    def add(self, delta: int) -> None:
        self.tape[self.pointer] = (self.tape[self.pointer] + delta) % 256

    def write(self) -> None:
        self.output_stream.write(bytes((self.tape[self.pointer],)))

    def read(self) -> None:
        data = self.input_stream.read(1)
        if not data:
            raise InputExhausted()
        self.tape[self.pointer] = data[0]


def execute(instructions: Sequence[Instruction], machine: Machine) -> None:
    """Run an instruction tree against ``machine``.

    Loop bodies are entered from an explicit frame stack; each frame remembers
    the index of its loop so the condition is re-checked after every pass.
    """
    frames: List[Tuple[Sequence[Instruction], int]] = []
    body, index = instructions, 0
    try:
        while True:
            if index >= len(body):
                if not frames:
                    break
                body, index = frames.pop()
                continue

            instruction = body[index]
            if isinstance(instruction, Loop):
                if machine.cell:
                    frames.append((body, index))
                    body, index = instruction.body, 0
                else:
                    index += 1
                continue

            _apply(instruction, machine)
            index += 1
    finally:
        flush = getattr(machine.output_stream, "flush", None)
        if flush is not None:
            flush()


def _apply(command: Command, machine: Machine) -> None:
    if command is Command.MOVE_RIGHT:
        machine.move(1)
    elif command is Command.MOVE_LEFT:
        machine.move(-1)
    elif command is Command.INCREMENT:
        machine.add(1)
    elif command is Command.DECREMENT:
        machine.add(-1)
    elif command is Command.WRITE:
        machine.write()
    elif command is Command.READ:
        machine.read()


def run(source: str, input_data: Union[bytes, Iterable[int]] = b"") -> bytes:
    """Scan, parse and execute ``source`` on a fresh tape, returning its output."""
    program = parse_source(source)
    output = io.BytesIO()
    machine = Machine(io.BytesIO(bytes(input_data)), output)
    execute(program, machine)
    return output.getvalue()


__all__ = ["TAPE_SIZE", "Machine", "execute", "run"]

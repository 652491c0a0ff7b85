from __future__ import annotations

from enum import Enum
from typing import Dict, List


class Opcode(Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    WRITE = "."
    READ = ","
    LOOP_BEGIN = "["
    LOOP_END = "]"


_SYMBOLS: Dict[str, Opcode] = {opcode.value: opcode for opcode in Opcode}


def scan(source: str) -> List[Opcode]:
    """Turn source text into opcodes. Anything that is not a command is a comment."""
    return [_SYMBOLS[char] for char in source if char in _SYMBOLS]


__all__ = ["Opcode", "scan"]

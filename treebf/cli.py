from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .errors import ExecutionError, ParseError
from .executor import Machine, execute
from .parser import parse_source


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="treebf",
        description="Run a Brainfuck program against stdin/stdout",
    )
    parser.add_argument("source", help="Path to the Brainfuck source file")
    args = parser.parse_args(argv)

    try:
        source_text = _read_source(args.source)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Cannot read source file {args.source}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"Source file {args.source} is not valid UTF-8: {exc.reason}", file=sys.stderr)
        return 1

    try:
        program = parse_source(source_text)
    except ParseError as exc:
        print(f"Parse error: {exc}", file=sys.stderr)
        return 1

    machine = Machine(sys.stdin.buffer, sys.stdout.buffer)
    try:
        execute(program, machine)
    except ExecutionError as exc:
        print(f"Runtime error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

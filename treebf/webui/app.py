from __future__ import annotations

from typing import List

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, field_validator

from treebf.errors import BrainfuckError, ExecutionError, ParseError
from treebf.executor import run
from treebf.parser import count_commands, count_loops, format_program, nesting_depth, parse
from treebf.scanner import scan


def _string_to_input_bytes(data: str) -> bytes:
    return bytes(ord(ch) for ch in data)


def _error_detail(exc: BrainfuckError) -> dict:
    return {
        "error": type(exc).__name__,
        "message": str(exc),
        "position": getattr(exc, "position", None),
    }


class ParseRequest(BaseModel):
    code: str


class ParseResponse(BaseModel):
    opcode_count: int
    command_count: int
    loop_count: int
    nesting_depth: int
    program: str


class RunRequest(BaseModel):
    code: str
    input: str = ""

    @field_validator("input")
    @classmethod
    def validate_input(cls, value: str) -> str:
        for ch in value:
            if ord(ch) > 255:
                raise ValueError(f"input character {ch!r} does not fit in a single byte")
        return value


class RunResponse(BaseModel):
    output: str
    output_bytes: List[int]


def create_app() -> FastAPI:
    app = FastAPI(title="treebf API", version="0.1.0")

    @app.post("/api/parse", response_model=ParseResponse)
    def parse_program(payload: ParseRequest) -> ParseResponse:
        opcodes = scan(payload.code)
        try:
            program = parse(opcodes)
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=_error_detail(exc),
            ) from exc
        return ParseResponse(
            opcode_count=len(opcodes),
            command_count=count_commands(program),
            loop_count=count_loops(program),
            nesting_depth=nesting_depth(program),
            program=format_program(program),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_program(payload: RunRequest) -> RunResponse:
        try:
            output = run(payload.code, input_data=_string_to_input_bytes(payload.input))
        except ParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=_error_detail(exc),
            ) from exc
        except ExecutionError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=_error_detail(exc),
            ) from exc
        return RunResponse(output=output.decode("latin-1"), output_bytes=list(output))

    return app


__all__ = ["create_app"]

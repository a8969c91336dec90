from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field, validator

from bfllvm.codegen import LLVMCodeGenerator
from bfllvm.context import GenerationContext
from bfllvm.instructions import describe
from bfllvm.interpreter import InstructionInterpreter, StepLimitExceeded
from bfllvm.module import Boilerplate
from bfllvm.parser import ParseError, parse

logger = logging.getLogger(__name__)


def _string_to_input_bytes(data: str) -> List[int]:
    return [ord(ch) for ch in data]


def _parse_or_422(source: str):
    try:
        return parse(source)
    except ParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


class SourceRequest(BaseModel):
    source: str = ""


class InstructionInfo(BaseModel):
    index: int
    kind: str
    count: int
    partner: Optional[int]


class ParseResponse(BaseModel):
    instructions: List[InstructionInfo]


class CompileRequest(BaseModel):
    source: str = ""
    eof_sentinel: int = Field(default=255, ge=0, le=255)
    eof_value: int = Field(default=0, ge=0, le=255)
    include_boilerplate: bool = True


class Counters(BaseModel):
    address: int
    cell_pointer: int
    byte: int
    char: int
    boolean: int


class CompileResponse(BaseModel):
    ir: str
    instruction_count: int
    counters: Counters


class RunRequest(BaseModel):
    source: str = ""
    input: str = ""
    max_steps: Optional[int] = Field(default=100_000, ge=1)
    eof_sentinel: int = Field(default=255, ge=0, le=255)
    eof_value: int = Field(default=0, ge=0, le=255)

    @validator("input")
    def validate_input(cls, value: str) -> str:
        if any(ord(ch) > 255 for ch in value):
            raise ValueError("input must only contain characters in the range 0-255")
        return value


class RunResponse(BaseModel):
    output: str
    steps: int


def create_app(boilerplate: Optional[Boilerplate] = None) -> FastAPI:
    frame = boilerplate or Boilerplate.default()
    app = FastAPI(title="bfllvm API", version="0.1.0")

    @app.post("/api/parse", response_model=ParseResponse)
    def parse_source(payload: SourceRequest) -> ParseResponse:
        instructions = _parse_or_422(payload.source)
        return ParseResponse(
            instructions=[
                InstructionInfo(**describe(instruction, index))
                for index, instruction in enumerate(instructions)
            ]
        )

    @app.post("/api/compile", response_model=CompileResponse)
    def compile_source(payload: CompileRequest) -> CompileResponse:
        instructions = _parse_or_422(payload.source)
        generator = LLVMCodeGenerator(
            eof_sentinel=payload.eof_sentinel,
            eof_value=payload.eof_value,
        )
        ctx = GenerationContext()
        body = generator.generate(instructions, ctx)
        ir = frame.header + body + frame.footer if payload.include_boilerplate else body
        logger.debug("compiled %d instructions over HTTP", len(instructions))
        return CompileResponse(
            ir=ir,
            instruction_count=len(instructions),
            counters=Counters(**ctx.snapshot()),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run_source(payload: RunRequest) -> RunResponse:
        instructions = _parse_or_422(payload.source)
        interpreter = InstructionInterpreter(
            eof_sentinel=payload.eof_sentinel,
            eof_value=payload.eof_value,
        )
        try:
            output = interpreter.run(
                instructions,
                input_data=_string_to_input_bytes(payload.input),
                max_steps=payload.max_steps,
            )
        except (StepLimitExceeded, IndexError) as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc
        return RunResponse(output=output, steps=interpreter.steps)

    return app


__all__ = ["create_app"]

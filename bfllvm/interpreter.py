from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .instructions import (
    DecByte,
    DecPtr,
    IncByte,
    IncPtr,
    Instruction,
    LoopEnd,
    LoopStart,
    ReadByte,
    WriteByte,
)


class StepLimitExceeded(RuntimeError):
    """Raised when execution exceeds the configured step budget."""


@dataclass
class InstructionInterpreter:
    """Execute a parsed instruction sequence the way the compiled module would.

    Input handling mirrors the generated ``select``: a read that hits end of
    input, or returns the sentinel byte itself, stores ``eof_value``.
    """

    tape_length: int = 30000
    eof_sentinel: int = 255
    eof_value: int = 0

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    output_buffer: List[str] = field(init=False, repr=False)
    steps: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.tape = [0] * self.tape_length
        self.pointer = 0
        self.output_buffer = []
        self.steps = 0

    def run(
        self,
        instructions: Sequence[Instruction],
        input_data: Optional[Iterable[int]] = None,
        max_steps: Optional[int] = None,
    ) -> str:
        self.reset()
        input_iter = iter(list(input_data or []))
        pc = 0
        while pc < len(instructions):
            if max_steps is not None and self.steps >= max_steps:
                raise StepLimitExceeded("Program exceeded allowed step count")
            pc = self._execute(pc, instructions[pc], input_iter)
            self.steps += 1
        return "".join(self.output_buffer)

    def _execute(self, pc: int, instruction: Instruction, input_iter: Iterator[int]) -> int:
        new_pc = pc + 1
        if isinstance(instruction, IncPtr):
            self._move(instruction.count)
        elif isinstance(instruction, DecPtr):
            self._move(-instruction.count)
        elif isinstance(instruction, IncByte):
            self.tape[self.pointer] = (self.tape[self.pointer] + instruction.count) % 256
        elif isinstance(instruction, DecByte):
            self.tape[self.pointer] = (self.tape[self.pointer] - instruction.count) % 256
        elif isinstance(instruction, ReadByte):
            value: Optional[int] = None
            for _ in range(instruction.count):
                value = next(input_iter, None)
            if value is None or value % 256 == self.eof_sentinel:
                self.tape[self.pointer] = self.eof_value
            else:
                self.tape[self.pointer] = value % 256
        elif isinstance(instruction, WriteByte):
            self.output_buffer.append(chr(self.tape[self.pointer]) * instruction.count)
        elif isinstance(instruction, LoopStart):
            if self.tape[self.pointer] == 0:
                new_pc = instruction.partner
        elif isinstance(instruction, LoopEnd):
            if self.tape[self.pointer] != 0:
                new_pc = instruction.partner
        return new_pc

    def _move(self, delta: int) -> None:
        self.pointer += delta
        if self.pointer >= self.tape_length:
            raise IndexError("Pointer moved beyond the tape length.")
        if self.pointer < 0:
            raise IndexError("Pointer moved before start of tape.")


__all__ = [
    "InstructionInterpreter",
    "StepLimitExceeded",
]

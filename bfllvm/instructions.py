from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class InstructionKind(str, Enum):
    INC_PTR = "inc_ptr"
    DEC_PTR = "dec_ptr"
    INC_BYTE = "inc_byte"
    DEC_BYTE = "dec_byte"
    READ_BYTE = "read_byte"
    WRITE_BYTE = "write_byte"
    LOOP_START = "loop_start"
    LOOP_END = "loop_end"


# === Instructions ===


class Instruction:
    kind: InstructionKind


@dataclass(frozen=True)
class IncPtr(Instruction):
    count: int
    kind = InstructionKind.INC_PTR


@dataclass(frozen=True)
class DecPtr(Instruction):
    count: int
    kind = InstructionKind.DEC_PTR


@dataclass(frozen=True)
class IncByte(Instruction):
    count: int
    kind = InstructionKind.INC_BYTE


@dataclass(frozen=True)
class DecByte(Instruction):
    count: int
    kind = InstructionKind.DEC_BYTE


@dataclass(frozen=True)
class ReadByte(Instruction):
    count: int
    kind = InstructionKind.READ_BYTE


@dataclass(frozen=True)
class WriteByte(Instruction):
    count: int
    kind = InstructionKind.WRITE_BYTE


@dataclass(frozen=True)
class LoopStart(Instruction):
    """Opening bracket.

    ``partner`` is one-based: the index of the matching ``LoopEnd`` plus one.
    """

    position: int
    partner: int
    kind = InstructionKind.LOOP_START


@dataclass(frozen=True)
class LoopEnd(Instruction):
    """Closing bracket; ``partner`` is the matching ``LoopStart`` index plus one."""

    position: int
    partner: int
    kind = InstructionKind.LOOP_END


def describe(instruction: Instruction, index: int) -> dict:
    if isinstance(instruction, (LoopStart, LoopEnd)):
        return {
            "index": index,
            "kind": instruction.kind.value,
            "count": 1,
            "partner": instruction.partner,
        }
    return {
        "index": index,
        "kind": instruction.kind.value,
        "count": instruction.count,
        "partner": None,
    }


def format_program(instructions: List[Instruction]) -> str:
    lines: List[str] = []
    for index, instruction in enumerate(instructions):
        info = describe(instruction, index)
        if info["partner"] is None:
            lines.append(f"{index:5}  {info['kind']:<10} x{info['count']}")
        else:
            lines.append(f"{index:5}  {info['kind']:<10} -> {info['partner'] - 1}")
    return "\n".join(lines)


__all__ = [
    "DecByte",
    "DecPtr",
    "IncByte",
    "IncPtr",
    "Instruction",
    "InstructionKind",
    "LoopEnd",
    "LoopStart",
    "ReadByte",
    "WriteByte",
    "describe",
    "format_program",
]

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

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

logger = logging.getLogger(__name__)


class ParseError(Exception):
    pass


_COUNTED = {
    ">": IncPtr,
    "<": DecPtr,
    "+": IncByte,
    "-": DecByte,
    ",": ReadByte,
    ".": WriteByte,
}

COMMANDS = frozenset(_COUNTED) | {"[", "]"}


def _tokenize(source: str) -> List[Tuple[str, int, int]]:
    """Fold runs of identical operators into ``(command, count, offset)`` tuples.

    Comment characters are dropped before folding, so ``"+ +"`` is one run.
    Brackets always stand alone.
    """
    tokens: List[Tuple[str, int, int]] = []
    for offset, char in enumerate(source):
        if char not in COMMANDS:
            continue
        if char in _COUNTED and tokens and tokens[-1][0] == char:
            command, count, start = tokens[-1]
            tokens[-1] = (command, count + 1, start)
            continue
        tokens.append((char, 1, offset))
    return tokens


def _match_brackets(tokens: List[Tuple[str, int, int]]) -> Dict[int, int]:
    jump_map: Dict[int, int] = {}
    stack: List[int] = []
    for index, (command, _, offset) in enumerate(tokens):
        if command == "[":
            stack.append(index)
        elif command == "]":
            if not stack:
                raise ParseError(f"Unmatched ']' at offset {offset}")
            start = stack.pop()
            jump_map[start] = index
            jump_map[index] = start
    if stack:
        raise ParseError(f"Unmatched '[' at offset {tokens[stack.pop()][2]}")
    return jump_map


def parse(source: str) -> List[Instruction]:
    tokens = _tokenize(source)
    jump_map = _match_brackets(tokens)
    instructions: List[Instruction] = []
    for index, (command, count, _) in enumerate(tokens):
        if command == "[":
            instructions.append(LoopStart(position=index, partner=jump_map[index] + 1))
        elif command == "]":
            instructions.append(LoopEnd(position=index, partner=jump_map[index] + 1))
        else:
            instructions.append(_COUNTED[command](count))
    logger.debug(
        "parsed %d source characters into %d instructions (%d loops)",
        len(source),
        len(instructions),
        len(jump_map) // 2,
    )
    return instructions


__all__ = ["COMMANDS", "ParseError", "parse"]

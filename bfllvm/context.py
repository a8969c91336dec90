from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass
class GenerationContext:
    """Next unused virtual identifier for each value category.

    Counters only move forward and each category is numbered independently, so
    ``%byte.3`` and ``%char.3`` may both exist but ``%byte.3`` is defined once.
    """

    address: int = 0
    cell_pointer: int = 0
    byte: int = 0
    char: int = 0
    boolean: int = 0

    def advance(
        self,
        *,
        address: int = 0,
        cell_pointer: int = 0,
        byte: int = 0,
        char: int = 0,
        boolean: int = 0,
    ) -> None:
        self.address += address
        self.cell_pointer += cell_pointer
        self.byte += byte
        self.char += char
        self.boolean += boolean

    def snapshot(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["GenerationContext"]

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Optional

from .codegen import LLVMCodeGenerator
from .context import GenerationContext
from .instructions import Instruction
from .parser import parse

logger = logging.getLogger(__name__)

MARKER = "{{REPLACE}}"
DEFAULT_BOILERPLATE_PATH = Path(__file__).resolve().parent / "boilerplate.ll"


class BoilerplateError(ValueError):
    pass


@dataclass(frozen=True)
class Boilerplate:
    header: str
    footer: str

    @classmethod
    def from_text(cls, text: str, marker: str = MARKER) -> "Boilerplate":
        occurrences = text.count(marker)
        if occurrences != 1:
            raise BoilerplateError(
                f"Boilerplate must contain exactly one {marker} marker, found {occurrences}"
            )
        header, footer = text.split(marker)
        return cls(header=header, footer=footer)

    @classmethod
    def from_path(cls, path: Path, marker: str = MARKER) -> "Boilerplate":
        return cls.from_text(Path(path).read_text(encoding="utf-8"), marker)

    @classmethod
    def default(cls) -> "Boilerplate":
        return cls.from_path(DEFAULT_BOILERPLATE_PATH)


def write_module(
    instructions: Iterable[Instruction],
    sink: IO[str],
    *,
    generator: Optional[LLVMCodeGenerator] = None,
    boilerplate: Optional[Boilerplate] = None,
) -> GenerationContext:
    """Write header, one fragment per instruction, then footer to ``sink``.

    Write failures propagate as-is; whatever reached the sink stays there.
    """
    codegen = generator or LLVMCodeGenerator()
    frame = boilerplate or Boilerplate.default()
    sink.write(frame.header)
    ctx = codegen.write(instructions, sink)
    sink.write(frame.footer)
    logger.debug("module written, counters %s", ctx.snapshot())
    return ctx


def compile_instructions(
    instructions: Iterable[Instruction],
    *,
    generator: Optional[LLVMCodeGenerator] = None,
    boilerplate: Optional[Boilerplate] = None,
) -> str:
    buffer = io.StringIO()
    write_module(instructions, buffer, generator=generator, boilerplate=boilerplate)
    return buffer.getvalue()


def compile_source(
    source: str,
    *,
    generator: Optional[LLVMCodeGenerator] = None,
    boilerplate: Optional[Boilerplate] = None,
) -> str:
    instructions = parse(source)
    return compile_instructions(instructions, generator=generator, boilerplate=boilerplate)


__all__ = [
    "Boilerplate",
    "BoilerplateError",
    "DEFAULT_BOILERPLATE_PATH",
    "MARKER",
    "compile_instructions",
    "compile_source",
    "write_module",
]

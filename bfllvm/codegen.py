from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, Optional

from .context import GenerationContext
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
from .templates import Template

logger = logging.getLogger(__name__)


@dataclass
class LLVMCodeGenerator:
    """Translate instructions to LLVM IR text in a single forward pass.

    ``eof_sentinel`` is the byte ``getchar`` yields at end of input once its
    result is narrowed to ``i8`` (255 for libc's ``EOF == -1``); it is stored
    into the cell as ``eof_value``.
    """

    eof_sentinel: int = 255
    eof_value: int = 0

    def emit(self, index: int, instruction: Instruction, ctx: GenerationContext) -> str:
        if isinstance(instruction, (IncPtr, DecPtr)):
            template = Template.ADDRESS_ADD if isinstance(instruction, IncPtr) else Template.ADDRESS_SUB
            text = template.render(
                intptr=ctx.address,
                intptr_next=ctx.address + 1,
                n=instruction.count,
            )
            ctx.advance(address=1)
            return text

        if isinstance(instruction, (IncByte, DecByte)):
            template = Template.BYTE_ADD if isinstance(instruction, IncByte) else Template.BYTE_SUB
            text = template.render(
                intptr=ctx.address,
                ptr=ctx.cell_pointer,
                byte=ctx.byte,
                byte_next=ctx.byte + 1,
                n=instruction.count % 256,
            )
            ctx.advance(cell_pointer=1, byte=2)
            return text

        if isinstance(instruction, ReadByte):
            parts = [Template.READ_RESOLVE.render(intptr=ctx.address, ptr=ctx.cell_pointer)]
            parts.extend(Template.READ_DISCARD.render() for _ in range(instruction.count - 1))
            parts.append(
                Template.READ_STORE.render(
                    ptr=ctx.cell_pointer,
                    char=ctx.char,
                    char_next=ctx.char + 1,
                    bool=ctx.boolean,
                    eof=self.eof_sentinel,
                    eof_value=self.eof_value,
                )
            )
            ctx.advance(cell_pointer=1, char=2, boolean=1)
            return "".join(parts)

        if isinstance(instruction, WriteByte):
            parts = [Template.WRITE_LOAD.render(intptr=ctx.address, ptr=ctx.cell_pointer, char=ctx.char)]
            call = Template.WRITE_CALL.render(char=ctx.char)
            parts.extend(call for _ in range(instruction.count))
            ctx.advance(cell_pointer=1, char=1)
            return "".join(parts)

        if isinstance(instruction, LoopStart):
            text = Template.LOOP_START.render(
                intptr=ctx.address,
                ptr=ctx.cell_pointer,
                byte=ctx.byte,
                bool=ctx.boolean,
                start=index,
                end=instruction.partner - 1,
            )
            ctx.advance(cell_pointer=1, byte=1, boolean=1)
            return text

        if isinstance(instruction, LoopEnd):
            text = Template.LOOP_END.render(
                intptr=ctx.address,
                ptr=ctx.cell_pointer,
                byte=ctx.byte,
                bool=ctx.boolean,
                start=instruction.partner - 1,
                end=index,
            )
            ctx.advance(cell_pointer=1, byte=1, boolean=1)
            return text

        raise TypeError(f"Unsupported instruction: {instruction!r}")

    def iter_fragments(
        self,
        instructions: Iterable[Instruction],
        ctx: Optional[GenerationContext] = None,
    ) -> Iterator[str]:
        context = ctx if ctx is not None else GenerationContext()
        count = 0
        for index, instruction in enumerate(instructions):
            yield self.emit(index, instruction, context)
            count += 1
        logger.debug("generated %d instructions, final counters %s", count, context.snapshot())

    def generate(
        self,
        instructions: Iterable[Instruction],
        ctx: Optional[GenerationContext] = None,
    ) -> str:
        return "".join(self.iter_fragments(instructions, ctx))

    def write(
        self,
        instructions: Iterable[Instruction],
        sink: IO[str],
        ctx: Optional[GenerationContext] = None,
    ) -> GenerationContext:
        context = ctx if ctx is not None else GenerationContext()
        for fragment in self.iter_fragments(instructions, context):
            sink.write(fragment)
        return context


__all__ = ["LLVMCodeGenerator"]

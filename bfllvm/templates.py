"""Fixed LLVM IR fragments for each instruction kind.

Placeholders are ``str.format`` fields and are filled with plain decimal
numbers. Any "next id" value (``intptr_next``, ``byte_next``, ``char_next``)
is computed by the caller; the templates never do arithmetic.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class Template(str, Enum):
    ADDRESS_ADD = (
        "    %intptr.{intptr_next} = add i64 %intptr.{intptr}, {n}\n"
    )
    ADDRESS_SUB = (
        "    %intptr.{intptr_next} = sub i64 %intptr.{intptr}, {n}\n"
    )
    BYTE_ADD = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
        "    %byte.{byte} = load i8, ptr %ptr.{ptr}\n"
        "    %byte.{byte_next} = add i8 %byte.{byte}, {n}\n"
        "    store i8 %byte.{byte_next}, ptr %ptr.{ptr}\n"
    )
    BYTE_SUB = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
        "    %byte.{byte} = load i8, ptr %ptr.{ptr}\n"
        "    %byte.{byte_next} = sub i8 %byte.{byte}, {n}\n"
        "    store i8 %byte.{byte_next}, ptr %ptr.{ptr}\n"
    )
    # ReadByte(n): resolve once, n - 1 discarded reads, one stored read.
    READ_RESOLVE = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
    )
    READ_DISCARD = (
        "    call i8 @getchar()\n"
    )
    READ_STORE = (
        "    %char.{char} = call i8 @getchar()\n"
        "    %bool.{bool} = icmp eq i8 {eof}, %char.{char}\n"
        "    %char.{char_next} = select i1 %bool.{bool}, i8 {eof_value}, i8 %char.{char}\n"
        "    store i8 %char.{char_next}, ptr %ptr.{ptr}\n"
    )
    # WriteByte(n): one load, n calls.
    WRITE_LOAD = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
        "    %char.{char} = load i8, ptr %ptr.{ptr}\n"
    )
    WRITE_CALL = (
        "    call i8 @putchar(i8 %char.{char})\n"
    )
    LOOP_START = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
        "    %byte.{byte} = load i8, ptr %ptr.{ptr}\n"
        "    %bool.{bool} = icmp eq i8 0, %byte.{byte}\n"
        "    br i1 %bool.{bool}, label %loop_end_{end}, label %loop_start_{start}\n"
        "loop_start_{start}:\n"
    )
    LOOP_END = (
        "    %ptr.{ptr} = inttoptr i64 %intptr.{intptr} to ptr\n"
        "    %byte.{byte} = load i8, ptr %ptr.{ptr}\n"
        "    %bool.{bool} = icmp ne i8 0, %byte.{byte}\n"
        "    br i1 %bool.{bool}, label %loop_start_{start}, label %loop_end_{end}\n"
        "loop_end_{end}:\n"
    )

    def render(self, **fields: int) -> str:
        return self.value.format(**fields)


__all__ = ["Template"]

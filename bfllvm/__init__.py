from .codegen import LLVMCodeGenerator
from .context import GenerationContext
from .instructions import (
    DecByte,
    DecPtr,
    IncByte,
    IncPtr,
    Instruction,
    InstructionKind,
    LoopEnd,
    LoopStart,
    ReadByte,
    WriteByte,
)
from .interpreter import InstructionInterpreter, StepLimitExceeded
from .module import Boilerplate, BoilerplateError, compile_instructions, compile_source, write_module
from .parser import ParseError, parse

__all__ = [
    "Boilerplate",
    "BoilerplateError",
    "DecByte",
    "DecPtr",
    "GenerationContext",
    "IncByte",
    "IncPtr",
    "Instruction",
    "InstructionInterpreter",
    "InstructionKind",
    "LLVMCodeGenerator",
    "LoopEnd",
    "LoopStart",
    "ParseError",
    "ReadByte",
    "StepLimitExceeded",
    "WriteByte",
    "compile_instructions",
    "compile_source",
    "parse",
    "write_module",
]

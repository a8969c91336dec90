from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

from .codegen import LLVMCodeGenerator
from .instructions import format_program
from .interpreter import InstructionInterpreter, StepLimitExceeded
from .module import Boilerplate, BoilerplateError, write_module
from .parser import ParseError, parse

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _to_input_bytes(data: str) -> Iterable[int]:
    return [ord(ch) for ch in data]


def _byte(value: str) -> int:
    number = int(value, 0)
    if not 0 <= number <= 255:
        raise argparse.ArgumentTypeError(f"expected a byte value 0-255, got {value}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compile Brainfuck to LLVM IR")
    parser.add_argument("source", help="Path to Brainfuck source file")
    parser.add_argument("output", help="Destination .ll file ('-' for stdout)")
    parser.add_argument(
        "--boilerplate",
        help="IR file framing the generated body; must contain one {{REPLACE}} marker",
    )
    parser.add_argument(
        "--eof-sentinel",
        type=_byte,
        default=255,
        help="Byte returned by getchar at end of input (default: 255)",
    )
    parser.add_argument(
        "--eof-value",
        type=_byte,
        default=0,
        help="Value stored in the cell when input is exhausted (default: 0)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the parsed instruction listing to stderr",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Interpret the program after compiling and print its output (to stderr when OUTPUT is '-')",
    )
    parser.add_argument(
        "--input",
        default="",
        help="Input string supplied to the program when running",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort --run after this many instructions",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("BFLLVM_LOG", "WARNING"),
        help="Logging level (default WARNING, or $BFLLVM_LOG)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        source_text = _read_source(args.source)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    try:
        instructions = parse(source_text)
    except ParseError as exc:
        print(f"Parse error: {exc}", file=sys.stderr)
        return 1

    try:
        boilerplate = Boilerplate.from_path(args.boilerplate) if args.boilerplate else Boilerplate.default()
    except (OSError, BoilerplateError) as exc:
        print(f"Boilerplate error: {exc}", file=sys.stderr)
        return 1

    if args.list:
        print(format_program(instructions), file=sys.stderr)

    generator = LLVMCodeGenerator(eof_sentinel=args.eof_sentinel, eof_value=args.eof_value)
    if args.output == "-":
        write_module(instructions, sys.stdout, generator=generator, boilerplate=boilerplate)
    else:
        try:
            with open(args.output, "w", encoding="utf-8") as sink:
                ctx = write_module(instructions, sink, generator=generator, boilerplate=boilerplate)
        except OSError as exc:
            print(f"Output error: {exc}", file=sys.stderr)
            return 1
        logger.info("wrote %s (%d instructions, counters %s)", args.output, len(instructions), ctx.snapshot())

    if args.run:
        interpreter = InstructionInterpreter(eof_sentinel=args.eof_sentinel, eof_value=args.eof_value)
        try:
            output = interpreter.run(
                instructions,
                input_data=_to_input_bytes(args.input),
                max_steps=args.max_steps,
            )
        except (StepLimitExceeded, IndexError) as exc:
            print(f"Run error: {exc}", file=sys.stderr)
            return 1
        # stdout already carries the module when OUTPUT is '-'
        run_sink = sys.stderr if args.output == "-" else sys.stdout
        run_sink.write(output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

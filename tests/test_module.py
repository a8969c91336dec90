import io
import unittest
from pathlib import Path
import tempfile

from bfllvm import (
    Boilerplate,
    BoilerplateError,
    IncPtr,
    LLVMCodeGenerator,
    ParseError,
    compile_instructions,
    compile_source,
    write_module,
)
from bfllvm.module import DEFAULT_BOILERPLATE_PATH, MARKER


class BoilerplateTests(unittest.TestCase):
    def test_split_around_marker(self) -> None:
        frame = Boilerplate.from_text("head\n{{REPLACE}}\nfoot\n")
        self.assertEqual(frame.header, "head\n")
        self.assertEqual(frame.footer, "\nfoot\n")

    def test_missing_marker(self) -> None:
        with self.assertRaises(BoilerplateError):
            Boilerplate.from_text("define i32 @main() { ret i32 0 }")

    def test_duplicate_marker(self) -> None:
        with self.assertRaises(BoilerplateError):
            Boilerplate.from_text(f"{MARKER}{MARKER}")

    def test_default_boilerplate_declares_io(self) -> None:
        self.assertTrue(DEFAULT_BOILERPLATE_PATH.exists())
        frame = Boilerplate.default()
        self.assertIn("declare i8 @getchar()", frame.header)
        self.assertIn("declare i8 @putchar(i8)", frame.header)
        self.assertIn("%intptr.0 =", frame.header)
        self.assertIn("ret i32 0", frame.footer)

    def test_from_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "frame.ll"
            path.write_text("A{{REPLACE}}B", encoding="utf-8")
            frame = Boilerplate.from_path(path)
        self.assertEqual((frame.header, frame.footer), ("A", "B"))


class ModuleAssemblyTests(unittest.TestCase):
    def test_body_is_framed_by_header_and_footer(self) -> None:
        frame = Boilerplate(header="<head>\n", footer="<foot>\n")
        module = compile_instructions([IncPtr(1)], boilerplate=frame)
        self.assertEqual(module, "<head>\n    %intptr.1 = add i64 %intptr.0, 1\n<foot>\n")

    def test_write_module_returns_final_counters(self) -> None:
        sink = io.StringIO()
        ctx = write_module([IncPtr(2), IncPtr(3)], sink)
        self.assertEqual(ctx.address, 2)
        text = sink.getvalue()
        self.assertTrue(text.startswith(Boilerplate.default().header))
        self.assertTrue(text.endswith(Boilerplate.default().footer))

    def test_compile_source_uses_generator_settings(self) -> None:
        module = compile_source(",", generator=LLVMCodeGenerator(eof_sentinel=0))
        self.assertIn("icmp eq i8 0, %char.0", module)
        self.assertNotIn(MARKER, module)

    def test_compile_source_propagates_parse_error(self) -> None:
        with self.assertRaises(ParseError):
            compile_source("[")

    def test_sink_errors_propagate(self) -> None:
        class BrokenSink:
            def __init__(self) -> None:
                self.writes = 0

            def write(self, data: str) -> int:
                self.writes += 1
                if self.writes > 1:
                    raise OSError("disk full")
                return len(data)

        sink = BrokenSink()
        with self.assertRaises(OSError):
            write_module([IncPtr(1)], sink)
        self.assertEqual(sink.writes, 2)

    def test_hello_world_module_is_deterministic(self) -> None:
        source = (
            "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++."
            ">>.<-.<.+++.------.--------.>>+.>++."
        )
        first = compile_source(source)
        second = compile_source(source)
        self.assertEqual(first, second)
        self.assertEqual(first.count("@putchar(i8 %char."), 13)


if __name__ == "__main__":
    unittest.main()

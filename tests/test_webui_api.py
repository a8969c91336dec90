from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from bfllvm.module import Boilerplate, compile_source
from bfllvm.webui import create_app


class WebApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_parse_lists_instructions(self) -> None:
        response = self.client.post("/api/parse", json={"source": "++[>.<-]"})
        self.assertEqual(response.status_code, 200, response.text)
        instructions = response.json()["instructions"]
        self.assertEqual(len(instructions), 7)
        self.assertEqual(
            [item["kind"] for item in instructions],
            ["inc_byte", "loop_start", "inc_ptr", "write_byte", "dec_ptr", "dec_byte", "loop_end"],
        )
        self.assertEqual(instructions[0], {"index": 0, "kind": "inc_byte", "count": 2, "partner": None})
        self.assertEqual(instructions[1]["partner"], 7)
        self.assertIsNone(instructions[5]["partner"])
        self.assertEqual(instructions[6]["partner"], 2)

    def test_parse_error_is_unprocessable(self) -> None:
        response = self.client.post("/api/parse", json={"source": "]"})
        self.assertEqual(response.status_code, 422, response.text)
        self.assertIn("Unmatched", response.json()["detail"])

    def test_compile_matches_library_output(self) -> None:
        source = "+[->+<]>."
        response = self.client.post("/api/compile", json={"source": source})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["ir"], compile_source(source))
        self.assertEqual(payload["instruction_count"], 9)
        self.assertEqual(
            payload["counters"],
            {"address": 3, "cell_pointer": 6, "byte": 8, "char": 1, "boolean": 2},
        )

    def test_compile_body_only(self) -> None:
        response = self.client.post(
            "/api/compile",
            json={"source": ",", "include_boilerplate": False, "eof_sentinel": 0, "eof_value": 1},
        )
        self.assertEqual(response.status_code, 200, response.text)
        ir = response.json()["ir"]
        self.assertNotIn(Boilerplate.default().header, ir)
        self.assertIn("icmp eq i8 0, %char.0", ir)
        self.assertIn("select i1 %bool.0, i8 1, i8 %char.0", ir)

    def test_compile_rejects_out_of_range_sentinel(self) -> None:
        response = self.client.post("/api/compile", json={"source": ",", "eof_sentinel": 256})
        self.assertEqual(response.status_code, 422, response.text)

    def test_compile_parse_error(self) -> None:
        response = self.client.post("/api/compile", json={"source": "[[]"})
        self.assertEqual(response.status_code, 422, response.text)

    def test_run_returns_output(self) -> None:
        response = self.client.post("/api/run", json={"source": ",[.,]", "input": "abc"})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["output"], "abc")
        self.assertGreater(payload["steps"], 0)

    def test_run_uses_requested_eof_convention(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"source": ",.", "input": "", "eof_value": 65},
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["output"], "A")

        response = self.client.post(
            "/api/run",
            json={"source": ",.", "input": "\n", "eof_sentinel": 10, "eof_value": 66},
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["output"], "B")

    def test_run_rejects_out_of_range_eof_value(self) -> None:
        response = self.client.post("/api/run", json={"source": ",", "eof_value": 300})
        self.assertEqual(response.status_code, 422, response.text)

    def test_run_step_limit_conflict(self) -> None:
        response = self.client.post("/api/run", json={"source": "+[]", "max_steps": 10})
        self.assertEqual(response.status_code, 409, response.text)
        self.assertIn("detail", response.json())

    def test_run_rejects_wide_input(self) -> None:
        response = self.client.post("/api/run", json={"source": ",.", "input": "あ"})
        self.assertEqual(response.status_code, 422, response.text)


if __name__ == "__main__":
    unittest.main()

"""
Test suite for the exprscope command line interface.
"""

import json
import unittest
import sys
import os
import tempfile
from pathlib import Path

from click.testing import CliRunner

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from exprscope import __version__
from exprscope.cli import main


class TestCli(unittest.TestCase):
    """Test cases for the `exprscope` command."""

    def setUp(self):
        self.runner = CliRunner()
        self._tmp = tempfile.TemporaryDirectory()
        self.history_file = str(Path(self._tmp.name) / "history.json")

    def tearDown(self):
        self._tmp.cleanup()

    def _invoke(self, args, input=None, env=None):
        return self.runner.invoke(main, ["--history-file", self.history_file] + args,
                                  input=input, env=env)

    def test_valid_input_exits_zero(self):
        result = self._invoke(["--no-history"], input="x = (a + b) * 2\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Analysis Summary", result.stdout)
        self.assertIn("Valid: 1", result.stdout)

    def test_invalid_input_exits_one(self):
        result = self._invoke(["--no-history"], input="3 +\n")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Expression cannot end with operator '+'", result.stdout)

    def test_source_file(self):
        source = Path(self._tmp.name) / "input.txt"
        source.write_text("1 + 2\n\nx = 3\n", encoding="utf-8")

        result = self._invoke(["--no-history", "--json", str(source)])
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertEqual([line["line_number"] for line in data["lines"]], [1, 3])
        self.assertEqual(data["stats"]["valid"], 2)

    def test_json_with_graph(self):
        result = self._invoke(["--no-history", "--json", "--graph"], input="1 + 2")
        data = json.loads(result.stdout)
        self.assertEqual(data["graphs"]["1"]["nodes"][0]["label"], "expr")
        self.assertTrue(data["lines"][0]["accepted"])

    def test_mermaid_graph(self):
        result = self._invoke(["--no-history", "--graph"], input="1 + 2")
        self.assertIn("%% line 1", result.stdout)
        self.assertIn("graph TD", result.stdout)

    def test_empty_input(self):
        result = self._invoke([], input="  \n\n")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("No expressions to analyze.", result.stdout)
        self.assertFalse(Path(self.history_file).exists())

    def test_history_round_trip(self):
        self._invoke([], input="1 + 1")
        self._invoke([], input="3 +")

        result = self._invoke(["--show-history", "--json"])
        records = json.loads(result.stdout)
        self.assertEqual([r["input"] for r in records], ["3 +", "1 + 1"])
        self.assertEqual(records[1]["summary"]["valid"], 1)
        self.assertEqual(records[0]["summary"]["errors"], 2)

        result = self._invoke(["--show-history"])
        self.assertIn("tokens=3", result.stdout)

        result = self._invoke(["--clear-history"])
        self.assertIn("History cleared.", result.stdout)

        result = self._invoke(["--show-history"])
        self.assertIn("No history.", result.stdout)

    def test_show_history_skips_malformed_records(self):
        Path(self.history_file).write_text('[1, "x"]', encoding="utf-8")

        result = self._invoke(["--show-history"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No history.", result.stdout)

        self._invoke([], input="1 + 1")
        records = json.loads(Path(self.history_file).read_text(encoding="utf-8"))
        self.assertEqual([r["input"] for r in records], ["1 + 1"])

    def test_undecodable_source_is_lexical_error(self):
        """Bytes that are not UTF-8 are analyzed as invalid characters."""
        source = Path(self._tmp.name) / "latin.txt"
        source.write_bytes(b"1 + \xff\n")

        result = self._invoke(["--no-history", "--json", str(source)])
        self.assertEqual(result.exit_code, 1, result.output)
        diagnostics = json.loads(result.stdout)["lines"][0]["diagnostics"]
        self.assertEqual(
            [(d["kind"], d["message"]) for d in diagnostics],
            [("lexical", "Invalid character '\ufffd' at position 5")]
        )

    def test_no_history_flag(self):
        self._invoke(["--no-history"], input="1")
        self.assertFalse(Path(self.history_file).exists())

    def test_history_limit_from_env(self):
        env = {"EXPRSCOPE_HISTORY_LIMIT": "1"}
        self._invoke([], input="a", env=env)
        self._invoke([], input="b", env=env)

        result = self._invoke(["--show-history", "--json"], env=env)
        self.assertEqual([r["input"] for r in json.loads(result.stdout)], ["b"])

    def test_bad_env_is_usage_error(self):
        result = self._invoke(["--no-history"], input="1", env={"EXPRSCOPE_HISTORY_LIMIT": "zero"})
        self.assertEqual(result.exit_code, 2)

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)


if __name__ == '__main__':
    unittest.main()

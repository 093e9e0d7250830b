"""End-to-end tests for the click command line."""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from NoteSearch.cli import cli

_CONFIG_TEMPLATE = """
log:
  level: WARNING
  to_file: false
  dir: log

search:
  fields: [cw, text]
  max_results: 20
  order: newest

storage:
  db_path: {db_path}

output:
  format: console
"""

_NOTES = [
    {"text": "apple tart recipe", "created_at": "2024-01-01T08:00:00Z"},
    {"text": "apple pie for later", "created_at": "2024-01-02T08:00:00Z"},
    {"cw": "food", "text": "Pear crumble", "created_at": 1704268800},
]


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        tmp_path = Path(self.tmp.name)
        self.config_path = tmp_path / "config.yml"
        self.config_path.write_text(
            _CONFIG_TEMPLATE.format(db_path=json.dumps(str(tmp_path / "notes.db"))),
            encoding="utf-8",
        )
        self.notes_path = tmp_path / "notes.json"
        self.notes_path.write_text(json.dumps(_NOTES), encoding="utf-8")
        self.runner = CliRunner()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def _invoke(self, *args: str):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def test_parse_console(self) -> None:
        result = self._invoke("parse", "A (b OR c)")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "a (b OR c)\n")

    def test_parse_json(self) -> None:
        result = self._invoke("parse", "--format", "json", "--", "-foo")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"type": "not_contains", "value": "foo"})

    def test_explain(self) -> None:
        result = self._invoke("explain", "50%")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            result.output,
            "fold(coalesce(cw, '') || coalesce(text, '')) LIKE :q1 ESCAPE '\\'\n"
            "  :q1 = '%50\\\\%%'\n",
        )

    def test_explain_blank_query(self) -> None:
        result = self._invoke("explain", "  ")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "(no filter)\n")

    def test_import_then_search(self) -> None:
        result = self._invoke("import", str(self.notes_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "Imported 3 notes\n")

        result = self._invoke("search", "apple -pie")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("apple tart recipe", result.output)
        self.assertNotIn("apple pie", result.output)
        self.assertTrue(result.output.startswith("1. [#1] 2024-01-01 08:00"))

    def test_search_json_and_limit(self) -> None:
        self._invoke("import", str(self.notes_path))

        result = self._invoke("search", "--format", "json", "--limit", "2", "")
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(payload["condition"], {"type": "empty"})
        self.assertEqual([note["text"] for note in payload["notes"]], ["Pear crumble", "apple pie for later"])
        self.assertEqual(payload["notes"][0]["cw"], "food")

    def test_search_matches_content_warning(self) -> None:
        self._invoke("import", str(self.notes_path))

        result = self._invoke("search", "FOOD")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("CW: food", result.output)

    def test_search_without_results(self) -> None:
        self._invoke("import", str(self.notes_path))

        result = self._invoke("search", "banana")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "No notes found.\n")

    def test_invalid_import_aborts(self) -> None:
        bad_path = Path(self.tmp.name) / "bad.json"
        bad_path.write_text(json.dumps({"text": "not a list"}), encoding="utf-8")

        result = self._invoke("import", str(bad_path))
        self.assertNotEqual(result.exit_code, 0)

    def test_limit_must_be_positive(self) -> None:
        result = self._invoke("search", "--limit", "0", "apple")
        self.assertEqual(result.exit_code, 2)


if __name__ == "__main__":
    unittest.main()

"""Tests for layered config parsing and validation."""

import sys
import unittest
from copy import deepcopy
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from NoteSearch.config import load_config, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": True, "dir": "log"},
        "search": {
            "fields": ["cw", "text"],
            "max_results": 5,
            "order": "newest",
        },
        "storage": {"db_path": "database/notes.db"},
        "output": {"format": "console"},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertTrue(cfg.runtime.to_file)
        self.assertEqual(cfg.search.fields, ("cw", "text"))
        self.assertEqual(cfg.search.max_results, 5)
        self.assertTrue(cfg.search.newest_first)
        self.assertEqual(cfg.storage.db_path, "database/notes.db")
        self.assertEqual(cfg.output.format, "console")

    def test_optional_sections_use_defaults(self) -> None:
        raw = _base_raw_config()
        del raw["log"]
        del raw["output"]
        raw["search"] = {}
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.search.fields, ("cw", "text"))
        self.assertEqual(cfg.search.max_results, 20)
        self.assertEqual(cfg.output.format, "console")

    def test_missing_required_section(self) -> None:
        raw = _base_raw_config()
        del raw["storage"]
        with self.assertRaisesRegex(ValueError, "storage"):
            parse_config_dict(raw)

    def test_log_level_is_normalized_and_checked(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "debug"
        self.assertEqual(parse_config_dict(raw).runtime.level, "DEBUG")
        raw["log"]["level"] = "chatty"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_log_dir_required_when_logging_to_file(self) -> None:
        raw = _base_raw_config()
        raw["log"]["dir"] = "  "
        with self.assertRaisesRegex(ValueError, "log\\.dir"):
            parse_config_dict(raw)

    def test_search_fields_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["fields"] = ["Text", "text", " CW "]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.search.fields, ("text", "cw"))

    def test_search_fields_unknown_value(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["fields"] = ["text", "title"]
        with self.assertRaisesRegex(ValueError, "search\\.fields"):
            parse_config_dict(raw)

    def test_search_fields_empty_after_normalization(self) -> None:
        raw = deepcopy(_base_raw_config())
        raw["search"]["fields"] = ["  "]
        with self.assertRaisesRegex(ValueError, "search\\.fields"):
            parse_config_dict(raw)

    def test_search_max_results_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_results"] = "5"
        with self.assertRaisesRegex(TypeError, "search\\.max_results"):
            parse_config_dict(raw)

    def test_search_max_results_must_be_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_results"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.max_results"):
            parse_config_dict(raw)

    def test_search_order(self) -> None:
        raw = _base_raw_config()
        raw["search"]["order"] = "Oldest"
        self.assertFalse(parse_config_dict(raw).search.newest_first)
        raw["search"]["order"] = "random"
        with self.assertRaisesRegex(ValueError, "search\\.order"):
            parse_config_dict(raw)

    def test_output_unknown_format_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["output"]["format"] = "html"
        with self.assertRaisesRegex(ValueError, "output\\.format"):
            parse_config_dict(raw)

    def test_storage_db_path_not_empty(self) -> None:
        raw = _base_raw_config()
        raw["storage"]["db_path"] = " "
        with self.assertRaisesRegex(ValueError, "storage\\.db_path"):
            parse_config_dict(raw)

    def test_section_type_error(self) -> None:
        raw = _base_raw_config()
        raw["search"] = ["fields"]
        with self.assertRaisesRegex(TypeError, "search"):
            parse_config_dict(raw)

    def test_shipped_default_config_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.search.fields, ("cw", "text"))
        self.assertEqual(cfg.storage.db_path, "database/notes.db")
        self.assertEqual(cfg.output.format, "console")


if __name__ == "__main__":
    unittest.main()

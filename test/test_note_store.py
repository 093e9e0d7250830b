"""Tests for the SQLite note store and compiled search predicates."""

from __future__ import annotations

import sys
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from NoteSearch.core.condition import EMPTY, Contains
from NoteSearch.core.evaluate import matches
from NoteSearch.core.models import Note
from NoteSearch.core.parser import parse_search_string
from NoteSearch.storage.db import DatabaseManager, fold
from NoteSearch.storage.notes import NoteStore, compile_where, field_expression


def _at(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


NOTES = [
    Note(id=None, text="hello world", created_at=_at(1000)),
    Note(id=None, text="100% sure_thing", created_at=_at(2000)),
    Note(id=None, text="foo_bar baz", created_at=_at(3000)),
    Note(id=None, cw="Spoiler", text="Äpfel und Birnen", created_at=_at(4000)),
    Note(id=None, cw="cat", text="dog park", created_at=_at(5000)),
]


class TestFieldExpression(unittest.TestCase):
    def test_fields_are_concatenated_in_order(self) -> None:
        self.assertEqual(
            field_expression(("cw", "text")),
            "fold(coalesce(cw, '') || coalesce(text, ''))",
        )
        self.assertEqual(field_expression(("text",)), "fold(coalesce(text, ''))")

    def test_rejects_missing_or_unknown_fields(self) -> None:
        with self.assertRaises(ValueError):
            field_expression(())
        with self.assertRaises(ValueError):
            field_expression(("title",))

    def test_compile_empty_condition(self) -> None:
        self.assertEqual(compile_where(EMPTY, fields=("text",)), ("", {}))

    def test_compile_single_term(self) -> None:
        where, params = compile_where(Contains("a%"), fields=("text",))
        self.assertEqual(where, "fold(coalesce(text, '')) LIKE :q1 ESCAPE '\\'")
        self.assertEqual(params, {"q1": "%a\\%%"})


class TestFold(unittest.TestCase):
    def test_fold_lowercases_unicode(self) -> None:
        self.assertEqual(fold("ÄPFEL"), "äpfel")

    def test_fold_passes_null_through(self) -> None:
        self.assertIsNone(fold(None))

    def test_fold_has_no_final_sigma_rule(self) -> None:
        self.assertEqual(fold("ΟΔΟΣ"), "οδοσ")


class TestNoteStore(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.manager = DatabaseManager(Path(self.tmp_dir.name) / "notes.db")
        self.store = NoteStore(self.manager)
        self.store.add_notes(NOTES)

    def tearDown(self) -> None:
        self.manager.close()
        self.tmp_dir.cleanup()

    def _search_texts(self, query: str, **kwargs) -> list[str]:
        notes = self.store.search(parse_search_string(query), limit=100, **kwargs)
        return [note.text for note in notes]

    def test_add_notes_counts_rows(self) -> None:
        self.assertEqual(self.store.count(), len(NOTES))
        self.assertEqual(self.store.add_notes([]), 0)

    def test_stored_notes_get_ids_and_times(self) -> None:
        newest = self.store.search(EMPTY, limit=1)[0]
        self.assertIsNotNone(newest.id)
        self.assertEqual(newest.cw, "cat")
        self.assertEqual(newest.created_at, _at(5000))

    def test_empty_condition_returns_all_newest_first(self) -> None:
        self.assertEqual(
            self._search_texts(""),
            ["dog park", "Äpfel und Birnen", "foo_bar baz", "100% sure_thing", "hello world"],
        )

    def test_oldest_first_with_limit(self) -> None:
        notes = self.store.search(EMPTY, limit=2, newest_first=False)
        self.assertEqual([note.text for note in notes], ["hello world", "100% sure_thing"])

    def test_wildcards_match_literally(self) -> None:
        self.assertEqual(self._search_texts("o_w"), [])
        self.assertEqual(self._search_texts("%"), ["100% sure_thing"])
        self.assertEqual(self._search_texts("_"), ["foo_bar baz", "100% sure_thing"])

    def test_backslash_matches_literally(self) -> None:
        self.store.add_notes([Note(id=None, text="C:\\temp", created_at=_at(6000))])
        self.assertEqual(self._search_texts("c:\\\\temp"), ["C:\\temp"])
        self.assertEqual(self._search_texts("c:\\\\\\\\temp"), [])

    def test_unicode_is_case_folded(self) -> None:
        self.assertEqual(self._search_texts("ÄPFEL"), ["Äpfel und Birnen"])

    def test_greek_word_matches_itself(self) -> None:
        self.store.add_notes([Note(id=None, text="ΟΔΟΣ", created_at=_at(7000))])
        self.assertEqual(self._search_texts("ΟΔΟΣ"), ["ΟΔΟΣ"])
        self.assertTrue(matches(parse_search_string("ΟΔΟΣ"), "ΟΔΟΣ"))

    def test_content_warning_is_searched_before_text(self) -> None:
        self.assertEqual(self._search_texts("spoiler"), ["Äpfel und Birnen"])
        self.assertEqual(self._search_texts("catdog"), ["dog park"])

    def test_field_selection_excludes_content_warning(self) -> None:
        self.assertEqual(self._search_texts("spoiler", fields=("text",)), [])
        self.assertEqual(self._search_texts("dog", fields=("text",)), ["dog park"])

    def test_results_agree_with_in_memory_evaluation(self) -> None:
        queries = [
            "hello",
            "-hello",
            "hello OR dog",
            "(foo OR sure) -baz",
            "o -(world OR park)",
            '"und birnen" OR "100%"',
            "a b OR c",
            "-(a OR e)",
            "_ OR %",
        ]
        ordered = sorted(NOTES, key=lambda note: note.created_at, reverse=True)
        for query in queries:
            with self.subTest(query=query):
                condition = parse_search_string(query)
                expected = [note.text for note in ordered if matches(condition, note.searchable_text)]
                self.assertEqual(self._search_texts(query), expected)


if __name__ == "__main__":
    unittest.main()

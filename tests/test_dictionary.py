import tempfile
import unittest
from pathlib import Path

from crossfill.core.exceptions import DictionaryLoadError
from crossfill.data.dictionary import (DictionaryConfig, WordIndex, load_dictionary_file,
                                       parse_dictionary_text)
from crossfill.data.normalization import clean_word, parse_entry, parse_score


class NormalizationTests(unittest.TestCase):
    def test_clean_word_folds_accents_and_drops_symbols(self) -> None:
        self.assertEqual(clean_word("café-au lait"), "CAFEAULAIT")

    def test_parse_entry_accepts_both_separators(self) -> None:
        self.assertEqual(parse_entry("apple;90"), ("APPLE", 90))
        self.assertEqual(parse_entry("APPLE:75"), ("APPLE", 75))

    def test_parse_entry_defaults_missing_score_to_zero(self) -> None:
        self.assertEqual(parse_entry("mango"), ("MANGO", 0))
        self.assertEqual(parse_entry("mango;abc"), ("MANGO", 0))

    def test_parse_score_reads_leading_integer(self) -> None:
        self.assertEqual(parse_score(" 42points"), 42)
        self.assertEqual(parse_score("-5"), 0)
        self.assertEqual(parse_score("-5", clamp=False), -5)
        self.assertEqual(parse_score("", default=50), 50)


class DictionaryTextTests(unittest.TestCase):
    def test_invalid_words_are_skipped_and_scores_defaulted(self) -> None:
        text = "CAT;10\ndog\nbad word;5\n\nC4T;3\n"
        self.assertEqual(parse_dictionary_text(text), ["CAT;10", "DOG;50"])

    def test_zero_score_takes_default_and_negative_is_kept(self) -> None:
        text = "CAT;0\nDOG;-5\nCOW;x\n"
        self.assertEqual(parse_dictionary_text(text), ["CAT;50", "DOG;-5", "COW;50"])
        index = WordIndex(parse_dictionary_text(text))
        self.assertEqual([o.score for o in index.options_for("DOG")], [0])

    def test_parsing_stops_after_too_many_errors(self) -> None:
        text = "1\n2\n3\nCAT;10\n"
        self.assertEqual(parse_dictionary_text(text, max_errors=1), [])

    def test_load_dictionary_file_reads_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.dict"
            sample.write_text("apple;90\nmango\n", encoding="utf-8")
            entries = load_dictionary_file(DictionaryConfig(path=sample, default_score=30))
        self.assertEqual(entries, ["APPLE;90", "MANGO;30"])

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DictionaryLoadError):
                load_dictionary_file(Path(tmpdir) / "missing.dict")


class WordIndexTests(unittest.TestCase):
    def test_options_sorted_by_score_with_stable_ties(self) -> None:
        index = WordIndex(["CUT;5", "CAT;10", "COT;10", "DOG;99", "CART;80"])
        options = index.options_for("C?T")
        self.assertEqual([option.word for option in options], ["CAT", "COT", "CUT"])
        self.assertEqual(options[0].entry, "CAT;10")

    def test_fixed_letters_are_case_insensitive(self) -> None:
        index = WordIndex(["CAT;1", "BAT;1"])
        self.assertEqual([option.word for option in index.options_for("c??")], ["CAT"])

    def test_duplicate_entries_are_kept(self) -> None:
        index = WordIndex(["APPLE:90", "APPLE;50"])
        self.assertEqual(len(index), 2)
        self.assertEqual([option.score for option in index.options_for("?????")], [90, 50])

    def test_load_replaces_previous_entries(self) -> None:
        index = WordIndex(["CAT;1"])
        index.load(["DOG;1", "!!!"])
        self.assertEqual(len(index), 1)
        self.assertTrue(index.contains("dog"))
        self.assertFalse(index.contains("CAT"))


if __name__ == "__main__":
    unittest.main()

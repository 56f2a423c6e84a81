"""Tests for the word list."""

from src.engine.data import BUNDLED_WORDS, FALLBACK_WORDS, WordList, load_bundled


class TestWordList:
    """Loading and lookups."""

    def test_unloaded_rejects_everything(self):
        words = WordList()
        assert words.loaded is False
        assert words.contains("CAT") is False
        assert len(words) == 0

    def test_lookup_is_case_insensitive(self):
        words = WordList(["cat"])
        assert words.contains("CAT")
        assert words.contains("cat")
        assert "Cat" in words
        assert words("CAT")

    def test_normalization_filters_entries(self):
        """Entries are trimmed and upper-cased; short, long and non-alphabetic ones are dropped."""
        words = WordList(["  dog \n", "at", "abcdefghijk", "co-op", "house"])
        assert len(words) == 2
        assert "DOG" in words
        assert "HOUSE" in words
        assert "AT" not in words

    def test_load_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("cat\ndog\n\nrat\n")
        words = WordList()
        assert words.load_file(path) == 3
        assert words.loaded
        assert "RAT" in words

    def test_missing_file_uses_fallback(self, tmp_path):
        words = WordList()
        count = words.load_file(tmp_path / "missing.txt")
        assert count == len(FALLBACK_WORDS)
        assert "CAT" in words
        assert "HOUSE" not in words


class TestBundled:
    def test_bundled_file_ships_with_package(self):
        assert BUNDLED_WORDS.exists()

    def test_bundled_words(self):
        words = load_bundled()
        assert len(words) > len(FALLBACK_WORDS)
        assert "CAT" in words
        assert "HOUSE" in words
        assert "XQZ" not in words

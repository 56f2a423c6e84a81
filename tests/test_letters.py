"""Tests for letter tables, tile creation and the tile generator."""

import pytest

from src.engine import LETTER_DISTRIBUTION, LETTER_VALUES, TileGenerator, make_tile
from src.engine.letters import color_for_value, word_base_score


class TestTiles:
    def test_make_tile(self):
        tile = make_tile("q")
        assert tile.letter == "Q"
        assert tile.value == 10
        assert tile.color == color_for_value(10)

    def test_unknown_letter(self):
        with pytest.raises(ValueError):
            make_tile("?")

    def test_unknown_value_uses_default_color(self):
        assert color_for_value(7) == color_for_value(1)

    def test_word_base_score(self):
        assert word_base_score("CAT") == 5
        assert word_base_score("house") == 8

    def test_tables_cover_alphabet(self):
        assert len(LETTER_VALUES) == 26
        assert set(LETTER_DISTRIBUTION) == set(LETTER_VALUES)
        assert sum(LETTER_DISTRIBUTION.values()) == 98


class TestTileGenerator:
    """Seeded weighted sampling."""

    def test_same_seed_same_tiles(self):
        first = [t.letter for t in TileGenerator(seed=7).draw(20)]
        second = [t.letter for t in TileGenerator(seed=7).draw(20)]
        assert first == second

    def test_draw_count(self):
        tiles = TileGenerator(seed=1).draw(4)
        assert len(tiles) == 4
        assert all(t.letter in LETTER_VALUES for t in tiles)

    def test_never_runs_out(self):
        generator = TileGenerator(seed=2)
        assert len(generator.draw(500)) == 500

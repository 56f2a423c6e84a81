"""Tests for the headless runner, the text renderer and the CLI config loader."""

import json
import sys

import pytest

from src.engine import Grid, Position, PremiumLayout, WordList, make_tile
from src.main import load_config, main
from src.session import ActivePiece, GameConfig, GameRunner, RunConfig
from src.utils.grid_visualizer import render_grid


class ScriptedTiles:
    """Fixed tile sequence followed by filler Q tiles."""

    def __init__(self, letters: str = ""):
        self.letters = list(letters)

    def next_tile(self):
        return make_tile(self.letters.pop(0) if self.letters else "Q")

    def draw(self, count: int):
        return [self.next_tile() for _ in range(count)]


def scripted_runner(letters: str, **run_config) -> GameRunner:
    config = RunConfig(game=GameConfig(premium_squares={}), **run_config)
    runner = GameRunner.create(config=config, words=WordList(["CAT", "DOG"]))
    runner.session.tiles = ScriptedTiles(letters)
    runner.setup()
    return runner


class TestGameRunner:
    """Greedy headless play."""

    def test_step_before_setup_raises(self):
        runner = GameRunner.create(words=WordList(["CAT"]))
        with pytest.raises(ValueError):
            runner.step()

    def test_chooses_column_that_completes_word(self):
        runner = scripted_runner("T")
        grid = runner.session.grid
        grid.place(make_tile("C"), Position(0, 9))
        grid.place(make_tile("A"), Position(1, 9))

        assert runner.choose_column() == 2

        result = runner.step()
        assert result.letter == "T"
        assert result.column == 2
        assert result.drop_distance == 9
        assert [w.word for w in result.words] == ["CAT"]
        assert result.score_after == 18 + 5
        assert grid.occupied_count() == 0

    def test_prefers_deepest_landing_without_words(self):
        runner = scripted_runner("Q")
        grid = runner.session.grid
        for y in range(5, 10):
            grid.place(make_tile("Z"), Position(4, y))
        assert runner.choose_column() in (3, 5)

    def test_soft_drop_mode(self):
        """Soft drops earn one point per row before the lock delay runs out."""
        runner = scripted_runner("Q", drop_mode="soft", max_pieces=1, step_ms=100)
        result = runner.step()
        assert result.drop_distance == 9
        assert runner.session.score == 9
        assert runner.session.grid.get(Position(4, 9)).letter == "Q"
        assert runner.is_complete
        assert runner.end_reason == "Max pieces (1) reached"

    def test_step_after_completion_raises(self):
        runner = scripted_runner("Q", max_pieces=1)
        runner.step()
        with pytest.raises(RuntimeError):
            runner.step()

    def test_run_to_piece_limit(self):
        config = RunConfig(max_pieces=5, game=GameConfig(seed=3))
        runner = GameRunner.create(config=config, words=WordList(["CAT", "DOG"]))
        seen = []

        result = runner.run(on_piece=seen.append)

        assert result.pieces_played == 5
        assert len(seen) == 5
        assert result.end_reason == "Max pieces (5) reached"
        assert len(result.final_grid) == 10

    def test_missing_dictionary_uses_fallback(self, tmp_path):
        config = RunConfig(dictionary_path=str(tmp_path / "missing.txt"))
        runner = GameRunner.create(config=config)
        assert runner.session.is_valid_word("CAT")
        assert not runner.session.is_valid_word("HOUSE")

    def test_data_dir_enables_store(self, tmp_path):
        runner = GameRunner.create(config=RunConfig(data_dir=str(tmp_path)), words=WordList(["CAT"]))
        assert runner.session.store is not None
        assert GameRunner.create(words=WordList(["CAT"])).session.store is None

    def test_save_result(self, tmp_path):
        runner = scripted_runner("Q", max_pieces=2)
        runner.run()
        path = tmp_path / "out" / "run.json"
        runner.save_result(path)

        data = json.loads(path.read_text())
        assert data["pieces_played"] == 2
        assert len(data["piece_history"]) == 2
        assert data["config"]["max_pieces"] == 2


class TestRenderGrid:
    """Text rendering of the board."""

    def test_letters_and_empty_cells(self):
        grid = Grid.from_rows(["...", "CAT"])
        assert render_grid(grid) == ". . .\nC A T"

    def test_premium_markers_on_empty_cells(self):
        grid = Grid.from_rows(["...", "CAT"])
        layout = PremiumLayout({(0, 0): "DL", (2, 0): "TW", (1, 1): "DW"})
        assert render_grid(grid, premium_layout=layout) == "d . x\nC A T"

    def test_active_piece_marked(self):
        grid = Grid(3, 2)
        active = ActivePiece(make_tile("Z"), Position(2, 0))
        assert render_grid(grid, active) == ". . Z   <- Z\n. . ."

    def test_active_piece_above_grid_not_drawn(self):
        grid = Grid(3, 2)
        active = ActivePiece(make_tile("Z"), Position(2, -1))
        assert render_grid(grid, active) == ". . .\n. . ."


class TestCli:
    """YAML config loading and the entry point."""

    def test_load_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "max_pieces: 7\n"
            "drop_mode: soft\n"
            "game:\n"
            "  seed: 3\n"
            "  premium_squares:\n"
            "    '1,2': TL\n"
        )
        config = load_config(str(path))
        assert config.max_pieces == 7
        assert config.drop_mode == "soft"
        assert config.game.seed == 3
        assert config.game.premium_layout().at((1, 2)).letter_multiplier == 3

    def test_empty_config_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == RunConfig()

    def test_missing_config(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_main_writes_results(self, tmp_path, monkeypatch, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("max_pieces: 3\ngame:\n  cascade_delay_ms: 0\n")
        output = tmp_path / "result.json"
        monkeypatch.setattr(sys, "argv", ["wordfall", str(config), "--output", str(output), "--seed", "11"])

        assert main() == 0

        data = json.loads(output.read_text())
        assert data["pieces_played"] == 3
        assert data["config"]["game"]["seed"] == 11
        assert "=== Run Summary ===" in capsys.readouterr().out

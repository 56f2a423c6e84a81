"""Tests for high score and settings persistence."""

import json

from src.session import ScoreStore, Settings


class TestHighScore:
    def test_missing_file_is_zero(self, tmp_path):
        assert ScoreStore(tmp_path).load_high_score() == 0

    def test_save_and_load(self, tmp_path):
        store = ScoreStore(tmp_path)
        store.save_high_score(420)
        assert store.load_high_score() == 420
        assert json.loads(store.high_score_path.read_text()) == {"high_score": 420}

    def test_save_creates_directory(self, tmp_path):
        store = ScoreStore(tmp_path / "nested" / "dir")
        store.save_high_score(7)
        assert store.high_score_path.exists()

    def test_corrupt_file_falls_back(self, tmp_path):
        """Unparseable JSON is ignored rather than raised."""
        store = ScoreStore(tmp_path)
        store.high_score_path.write_text("{not json")
        assert store.load_high_score() == 0

    def test_negative_score_falls_back(self, tmp_path):
        store = ScoreStore(tmp_path)
        store.high_score_path.write_text('{"high_score": -5}')
        assert store.load_high_score() == 0


class TestSettings:
    def test_defaults(self, tmp_path):
        settings = ScoreStore(tmp_path).load_settings()
        assert settings == Settings()
        assert settings.volume == 0.7

    def test_round_trip(self, tmp_path):
        store = ScoreStore(tmp_path)
        store.save_settings(Settings(sound_enabled=False, volume=0.3))
        loaded = store.load_settings()
        assert loaded.sound_enabled is False
        assert loaded.music_enabled is True
        assert loaded.volume == 0.3

    def test_out_of_range_volume_falls_back(self, tmp_path):
        store = ScoreStore(tmp_path)
        store.settings_path.write_text('{"volume": 5}')
        assert store.load_settings() == Settings()


class TestWriteFailures:
    """Saving never raises; failures are reported as False."""

    def test_data_dir_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = ScoreStore(blocker)

        assert store.save_high_score(50) is False
        assert store.save_settings(Settings(volume=0.1)) is False
        assert store.load_high_score() == 0
        assert store.load_settings() == Settings()

    def test_successful_save_reports_true(self, tmp_path):
        assert ScoreStore(tmp_path).save_high_score(3) is True

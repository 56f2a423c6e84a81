"""High score and settings persistence as small JSON files."""

import json
import logging
from pathlib import Path
from pydantic import ValidationError

from .models import HighScoreRecord, Settings

logger = logging.getLogger(__name__)

HIGH_SCORE_FILE = "high_score.json"
SETTINGS_FILE = "settings.json"


class ScoreStore:
    """
    Loads and saves the high score and settings under one directory.

    Missing or corrupt files fall back to defaults (high score 0, default
    Settings) and failed writes are logged and reported as False, so a
    damaged or read-only save location never interrupts a game.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    @property
    def high_score_path(self) -> Path:
        return self.data_dir / HIGH_SCORE_FILE

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILE

    def _read(self, path: Path, model):
        if not path.exists():
            return model()
        try:
            with open(path) as f:
                data = json.load(f)
            return model.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable %s (%s); using defaults", path, e)
            return model()

    def _write(self, path: Path, record) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w') as f:
                json.dump(record.model_dump(), f, indent=2)
        except OSError as e:
            logger.warning("Could not save %s (%s)", path, e)
            return False
        return True

    def load_high_score(self) -> int:
        return self._read(self.high_score_path, HighScoreRecord).high_score

    def save_high_score(self, score: int) -> bool:
        return self._write(self.high_score_path, HighScoreRecord(high_score=score))

    def load_settings(self) -> Settings:
        return self._read(self.settings_path, Settings)

    def save_settings(self, settings: Settings) -> bool:
        return self._write(self.settings_path, settings)

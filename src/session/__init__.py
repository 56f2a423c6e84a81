"""Game session layer for wordfall."""

from .models import (
    GameConfig,
    Settings,
    HighScoreRecord,
    SessionSnapshot,
    PieceResult,
    RunConfig,
    RunResult,
)
from .lifecycle import ActivePiece, FALLING, LOCK_DELAY, LOCKED
from .storage import ScoreStore
from .session import GameSession
from .runner import GameRunner

__all__ = [
    "GameConfig",
    "Settings",
    "HighScoreRecord",
    "SessionSnapshot",
    "PieceResult",
    "RunConfig",
    "RunResult",
    "ActivePiece",
    "FALLING",
    "LOCK_DELAY",
    "LOCKED",
    "ScoreStore",
    "GameSession",
    "GameRunner",
]

"""
Pydantic models for the session layer.

This module contains the configuration, persisted-record, snapshot and result
models used by the session, the runner and the CLI. The main logic classes
(GameSession, ActivePiece, ScoreStore, GameRunner) live in their own files.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from ..engine.models import Position, PremiumKind, ScoredWord, Tile
from ..engine.premium import DEFAULT_PREMIUM_LAYOUT, PremiumLayout


DropMode = Literal["hard", "soft"]


class GameConfig(BaseModel):
    """Rules and timing for one game session. Times are in milliseconds."""
    width: int = Field(default=10, ge=3)
    height: int = Field(default=10, ge=3)
    spawn_x: int = Field(default=4, ge=0)
    spawn_y: int = 0  # Negative values spawn above the visible grid
    queue_size: int = Field(default=4, ge=1)

    lock_delay_ms: int = Field(default=500, ge=0)
    cascade_delay_ms: int = Field(default=450, ge=0)
    gravity_base_ms: int = Field(default=1000, gt=0)
    gravity_decrement_ms: int = Field(default=50, ge=0)
    gravity_min_ms: int = Field(default=100, gt=0)

    max_cascade_depth: int = Field(default=10, ge=0)
    recent_words_limit: int = Field(default=3, ge=0)
    words_per_level: int = Field(default=10, ge=1)
    max_level: int = Field(default=20, ge=1)
    count_combos: bool = False
    soft_drop_points: int = Field(default=1, ge=0)
    hard_drop_points: int = Field(default=2, ge=0)

    # "x,y" -> DL | TL | DW | TW; None uses the standard layout
    premium_squares: Optional[Dict[str, PremiumKind]] = None
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_layout(self) -> "GameConfig":
        if self.spawn_x >= self.width:
            raise ValueError(f"spawn_x ({self.spawn_x}) must be less than width ({self.width})")
        if self.spawn_y >= self.height:
            raise ValueError(f"spawn_y ({self.spawn_y}) must be less than height ({self.height})")
        if self.premium_squares is not None:
            self.premium_layout()
        return self

    @property
    def spawn_position(self) -> Position:
        return Position(self.spawn_x, self.spawn_y)

    def premium_layout(self) -> PremiumLayout:
        if self.premium_squares is None:
            return PremiumLayout(DEFAULT_PREMIUM_LAYOUT)
        layout = {}
        for key, kind in self.premium_squares.items():
            try:
                x, y = (int(part) for part in key.split(","))
            except ValueError:
                raise ValueError(f"Invalid premium square key '{key}', expected 'x,y'")
            layout[Position(x, y)] = kind
        return PremiumLayout(layout)


class Settings(BaseModel):
    """Player settings persisted between sessions."""
    sound_enabled: bool = True
    music_enabled: bool = True
    volume: float = Field(default=0.7, ge=0.0, le=1.0)


class HighScoreRecord(BaseModel):
    high_score: int = Field(default=0, ge=0)


class SessionSnapshot(BaseModel):
    """Full session state handed to the presentation layer after every change."""
    grid: List[List[Optional[Tile]]]
    active_tile: Optional[Tile] = None
    active_position: Optional[Position] = None
    upcoming: List[Tile] = Field(default_factory=list)
    score: int = 0
    level: int = 1
    words_formed: int = 0
    recent_words: List[ScoredWord] = Field(default_factory=list)
    cascade_depth: int = 0
    cascade_phase: str = "idle"
    animating_positions: List[Position] = Field(default_factory=list)
    lock_delay_active: bool = False
    paused: bool = False
    game_over: bool = False
    high_score: int = 0


class PieceResult(BaseModel):
    """Outcome of a single piece played by the runner."""
    piece_number: int
    letter: str
    column: int
    drop_distance: int = 0
    words: List[ScoredWord] = Field(default_factory=list)
    lines_cleared: int = 0
    score_after: int = 0
    level_after: int = 1
    game_over: bool = False


class RunConfig(BaseModel):
    """Configuration for a headless run."""
    game: GameConfig = Field(default_factory=GameConfig)
    max_pieces: int = Field(default=200, ge=1)
    step_ms: int = Field(default=50, gt=0)
    drop_mode: DropMode = "hard"
    dictionary_path: Optional[str] = None  # None uses the bundled word list
    data_dir: Optional[str] = None  # Where high score and settings live; None disables persistence


class RunResult(BaseModel):
    """Result of a complete headless run."""
    config: RunConfig
    pieces_played: int = 0
    score: int = 0
    level: int = 1
    words_formed: int = 0
    high_score: int = 0
    game_over: bool = False
    end_reason: str = ""
    words: List[str] = Field(default_factory=list)
    piece_history: List[PieceResult] = Field(default_factory=list)
    final_grid: List[str] = Field(default_factory=list)
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0

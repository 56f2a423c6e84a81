"""Data models for the word engine."""

from typing import List, Optional, Literal, NamedTuple
from pydantic import BaseModel, ConfigDict, Field, model_validator


Direction = Literal['horizontal', 'vertical']

PremiumKind = Literal['DL', 'TL', 'DW', 'TW']


class Position(NamedTuple):
    """A cell coordinate. ``y`` grows downward; negative ``y`` is above the grid."""
    x: int
    y: int


class Tile(BaseModel):
    """A single letter tile."""
    model_config = ConfigDict(frozen=True)

    letter: str = Field(..., pattern=r'^[A-Z]$')
    value: int = Field(..., gt=0)
    color: str = ""


class PremiumSquare(BaseModel):
    """A board cell granting a one-time letter or word multiplier."""
    model_config = ConfigDict(frozen=True)

    kind: PremiumKind
    letter_multiplier: Optional[int] = Field(default=None, gt=1)
    word_multiplier: Optional[int] = Field(default=None, gt=1)

    @model_validator(mode="after")
    def _exactly_one_multiplier(self) -> "PremiumSquare":
        if (self.letter_multiplier is None) == (self.word_multiplier is None):
            raise ValueError(f"{self.kind} square needs exactly one of letter_multiplier or word_multiplier")
        return self


class WordMatch(BaseModel):
    """A run of tiles that spells a dictionary word."""
    word: str = Field(..., min_length=3)
    positions: List[Position]
    direction: Direction
    base_score: int = 0


class ScoredWord(WordMatch):
    """A WordMatch with every scoring factor applied."""
    final_score: int
    length_bonus: float
    level_multiplier: int
    combo_multiplier: Optional[float] = None  # Only set when combo count > 1
    chain_multiplier: Optional[float] = None  # Only set when chain depth > 0

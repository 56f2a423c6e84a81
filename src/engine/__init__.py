"""Word detection, scoring and cascade engine for wordfall."""

from .models import Tile, Position, Direction, PremiumSquare, WordMatch, ScoredWord
from .grid import Grid
from .letters import LETTER_VALUES, LETTER_DISTRIBUTION, TileGenerator, make_tile
from .premium import PremiumLayout, DEFAULT_PREMIUM_LAYOUT
from .detector import find_words
from .scoring import (
    length_bonus,
    combo_multiplier,
    chain_multiplier,
    effective_score,
    select_highest,
    score_word,
    line_clear_score,
    level_for_words,
    gravity_interval,
)
from .cascade import CascadeResolver, CascadeResult
from .data import WordList, load_bundled

__all__ = [
    # Models
    "Tile",
    "Position",
    "Direction",
    "PremiumSquare",
    "WordMatch",
    "ScoredWord",
    # Grid
    "Grid",
    # Letters
    "LETTER_VALUES",
    "LETTER_DISTRIBUTION",
    "TileGenerator",
    "make_tile",
    # Premium squares
    "PremiumLayout",
    "DEFAULT_PREMIUM_LAYOUT",
    # Detection and scoring
    "find_words",
    "length_bonus",
    "combo_multiplier",
    "chain_multiplier",
    "effective_score",
    "select_highest",
    "score_word",
    "line_clear_score",
    "level_for_words",
    "gravity_interval",
    # Cascade
    "CascadeResolver",
    "CascadeResult",
    # Dictionary
    "WordList",
    "load_bundled",
]

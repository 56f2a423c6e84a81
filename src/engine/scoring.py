"""Word scoring, best-word selection, line-clear score, level and speed curves."""

import math
from typing import Dict, List, Optional

from .models import Position, ScoredWord, WordMatch
from .letters import LETTER_VALUES
from .grid import Grid
from .premium import PremiumLayout


# Word length bonus multipliers
WORD_LENGTH_BONUS: Dict[int, float] = {
    3: 1.0,
    4: 1.5,
    5: 2.0,
    6: 2.5,
    7: 3.0,
    8: 3.5,
    9: 4.0,
    10: 4.5,
}

# Multiple words at once
COMBO_MULTIPLIERS: List[float] = [1, 1, 1.5, 2.0, 2.5]

# Cascade words
CHAIN_MULTIPLIERS: List[float] = [1, 1.5, 2.0, 2.5]

LINE_CLEAR_BASE_SCORE = 25
WORDS_PER_LEVEL = 10
MAX_LEVEL = 20


def length_bonus(length: int) -> float:
    """Length multiplier: 1.0 at 3 letters, +0.5 per extra letter, unbounded past 10."""
    if length in WORD_LENGTH_BONUS:
        return WORD_LENGTH_BONUS[length]
    if length > 10:
        return WORD_LENGTH_BONUS[10] + (length - 10) * 0.5
    return 1.0


def _clamped(table: List[float], index: int) -> float:
    return table[max(0, min(index, len(table) - 1))]


def combo_multiplier(combo_count: int) -> float:
    return _clamped(COMBO_MULTIPLIERS, combo_count)


def chain_multiplier(chain_depth: int) -> float:
    return _clamped(CHAIN_MULTIPLIERS, chain_depth)


def premium_base_score(
    word: str,
    positions: List[Position],
    prior_grid: Grid,
    layout: PremiumLayout,
) -> int:
    """
    Base score with premium squares applied.

    A premium square counts only if it was empty in ``prior_grid`` (the grid
    as it was right before the last lock), so each bonus is consumed once.
    Word multipliers compound when a word covers more than one.
    """
    letter_total = 0
    word_mult = 1

    for letter, pos in zip(word, positions):
        value = LETTER_VALUES.get(letter, 0)
        square = layout.at(pos)
        if square is not None and prior_grid.get(pos) is None:
            if square.letter_multiplier:
                value *= square.letter_multiplier
            elif square.word_multiplier:
                word_mult *= square.word_multiplier
        letter_total += value

    return letter_total * word_mult


def effective_score(match: WordMatch, level: int) -> float:
    """Ranking score used to choose between coexisting matches."""
    return match.base_score * length_bonus(len(match.word)) * level


def select_highest(matches: List[WordMatch], level: int) -> Optional[WordMatch]:
    """
    Pick the match with the highest effective score.

    Ties keep the earliest match in detection order (rows, then columns).
    """
    best = None
    best_score = None
    for match in matches:
        score = effective_score(match, level)
        if best_score is None or score > best_score:
            best = match
            best_score = score
    return best


def score_word(
    match: WordMatch,
    level: int,
    combo_count: int = 1,
    chain_depth: int = 0,
) -> ScoredWord:
    """
    Apply every multiplier to a match.

    Args:
        match: The detected word
        level: Current level (used as a plain multiplier)
        combo_count: Number of words credited at once
        chain_depth: Cascade depth (0 for the word formed by the lock itself)

    Returns:
        ScoredWord with ``final_score`` floored to an integer
    """
    bonus = length_bonus(len(match.word))
    combo = combo_multiplier(combo_count)
    chain = chain_multiplier(chain_depth)
    final = math.floor(match.base_score * bonus * level * combo * chain)

    return ScoredWord(
        **match.model_dump(),
        final_score=final,
        length_bonus=bonus,
        level_multiplier=level,
        combo_multiplier=combo if combo_count > 1 else None,
        chain_multiplier=chain if chain_depth > 0 else None,
    )


def line_clear_score(lines_cleared: int, level: int) -> int:
    """Bonus for completed rows: single rows score flat, multiples scale."""
    if lines_cleared <= 0:
        return 0
    if lines_cleared == 1:
        return LINE_CLEAR_BASE_SCORE * level
    return LINE_CLEAR_BASE_SCORE * 2 * level * lines_cleared


def level_for_words(
    words_formed: int,
    words_per_level: int = WORDS_PER_LEVEL,
    max_level: int = MAX_LEVEL,
) -> int:
    return min(words_formed // words_per_level + 1, max_level)


def gravity_interval(
    level: int,
    base_ms: int = 1000,
    decrement_ms: int = 50,
    minimum_ms: int = 100,
) -> int:
    """Milliseconds between gravity ticks at a level."""
    return max(base_ms - (level - 1) * decrement_ms, minimum_ms)

"""Cascade resolution: detect, credit the best word, remove, reflow, repeat."""

from typing import List, Optional
from pydantic import BaseModel, Field

from .models import ScoredWord
from .grid import Grid
from .detector import WordPredicate, find_words
from .premium import PremiumLayout
from .scoring import (
    MAX_LEVEL,
    WORDS_PER_LEVEL,
    level_for_words,
    line_clear_score,
    score_word,
    select_highest,
)


# Resolver phases
IDLE = "idle"
ANIMATING = "animating"  # Word selected, awaiting removal
REMOVED = "removed"  # Word removed and grid reflowed
DETECTING = "detecting"

MAX_CASCADE_DEPTH = 10


class CascadeResult(BaseModel):
    """Everything one lock's cascade produced."""
    words: List[ScoredWord] = Field(default_factory=list)
    word_score: int = 0
    lines_cleared: int = 0
    line_score: int = 0
    depth: int = 0
    words_formed: int = 0  # Session total after this cascade
    level: int = 1

    @property
    def total_score(self) -> int:
        return self.word_score + self.line_score


class CascadeResolver:
    """
    Per-lock cascade state machine.

    IDLE -> ANIMATING(word) -> REMOVED -> DETECTING -> ANIMATING | IDLE

    The resolver mutates the grid it is started with. The presentation delay
    between selecting a word and removing it belongs to the caller: call
    ``step()`` when the delay has elapsed, or ``resolve()`` to run the whole
    cascade at once.
    """

    def __init__(
        self,
        is_valid_word: WordPredicate,
        premium_layout: Optional[PremiumLayout] = None,
        max_depth: int = MAX_CASCADE_DEPTH,
        count_combos: bool = False,
        words_per_level: int = WORDS_PER_LEVEL,
        max_level: int = MAX_LEVEL,
    ):
        self.is_valid_word = is_valid_word
        self.premium_layout = premium_layout
        self.max_depth = max_depth
        self.count_combos = count_combos
        self.words_per_level = words_per_level
        self.max_level = max_level

        self.phase = IDLE
        self.grid: Optional[Grid] = None
        self.level = 1
        self.depth = 0
        self.pending: Optional[ScoredWord] = None
        self.result: Optional[CascadeResult] = None
        self._words_formed_before = 0

    def reset(self) -> None:
        """Abandon any cascade in progress."""
        self.phase = IDLE
        self.grid = None
        self.depth = 0
        self.pending = None
        self.result = None

    @property
    def active(self) -> bool:
        return self.phase != IDLE

    def start(
        self,
        grid: Grid,
        prior_grid: Optional[Grid],
        level: int,
        words_formed: int,
    ) -> bool:
        """
        Begin a cascade on a freshly locked grid.

        Args:
            grid: The grid after the lock (mutated in place)
            prior_grid: Snapshot from just before the lock, for premium squares
            level: Level used for every word in this cascade
            words_formed: Session word count before this cascade

        Returns:
            True if a word was found and the resolver is now ANIMATING
        """
        if self.active:
            raise RuntimeError("A cascade is already in progress")

        self.grid = grid
        self.level = level
        self.depth = 0
        self.pending = None
        self._words_formed_before = words_formed
        self.result = CascadeResult(words_formed=words_formed, level=level)

        self.phase = DETECTING
        matches = find_words(grid, self.is_valid_word, prior_grid, self.premium_layout)
        if not matches:
            # Nothing formed: no row clearing, no level change
            self.phase = IDLE
            return False

        self._select(matches)
        return True

    def _select(self, matches) -> None:
        best = select_highest(matches, self.level)
        combo_count = len(matches) if self.count_combos else 1
        self.pending = score_word(best, self.level, combo_count, self.depth)
        self.phase = ANIMATING

    def step(self) -> Optional[ScoredWord]:
        """
        Remove the pending word, reflow, and look for the next one.

        Returns:
            The word just removed, or None if nothing was pending
        """
        if self.phase != ANIMATING or self.pending is None:
            return None

        word = self.pending
        self.grid.remove_at(word.positions)
        self.grid.apply_gravity()
        self.pending = None
        self.phase = REMOVED

        self.result.words.append(word)
        self.result.word_score += word.final_score

        self.phase = DETECTING
        # Premiums were consumed by the lock; cascades score plain letters
        matches = find_words(self.grid, self.is_valid_word)
        if matches and self.depth < self.max_depth:
            self.depth += 1
            self._select(matches)
        else:
            self._finalize()

        return word

    def _finalize(self) -> None:
        rows = self.grid.full_rows()
        lines = self.grid.clear_rows(rows)

        words_formed = self._words_formed_before + len(self.result.words)
        level = level_for_words(words_formed, self.words_per_level, self.max_level)

        self.result.lines_cleared = lines
        self.result.line_score = line_clear_score(lines, level)
        self.result.depth = self.depth
        self.result.words_formed = words_formed
        self.result.level = level
        self.phase = IDLE

    def resolve(self) -> CascadeResult:
        """Run the cascade to completion."""
        while self.phase == ANIMATING:
            self.step()
        return self.result

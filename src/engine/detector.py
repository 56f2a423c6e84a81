"""
Word detection over a grid.

Only maximal contiguous runs are candidates: a run is flushed when it hits an
empty cell or the edge of the grid, and a run of three or more letters is
reported if the whole run is a word. Shorter words inside a longer non-word run
are not searched for. A cell may belong to both a horizontal and a vertical
match; both are reported.
"""

from typing import Callable, Iterator, List, Optional, Tuple

from .models import Direction, Position, WordMatch
from .grid import Grid
from .letters import word_base_score
from .premium import PremiumLayout
from .scoring import premium_base_score


MIN_WORD_LENGTH = 3

WordPredicate = Callable[[str], bool]


def _runs(grid: Grid) -> Iterator[Tuple[str, List[Position], Direction]]:
    """Yield every maximal run, rows first (top to bottom), then columns."""
    # Horizontal runs
    for y in range(grid.height):
        word, positions = "", []
        for x in range(grid.width + 1):  # +1 to flush the last run
            tile = grid.cells[y][x] if x < grid.width else None
            if tile is not None:
                word += tile.letter
                positions.append(Position(x, y))
            else:
                if word:
                    yield word, positions, 'horizontal'
                word, positions = "", []

    # Vertical runs
    for x in range(grid.width):
        word, positions = "", []
        for y in range(grid.height + 1):
            tile = grid.cells[y][x] if y < grid.height else None
            if tile is not None:
                word += tile.letter
                positions.append(Position(x, y))
            else:
                if word:
                    yield word, positions, 'vertical'
                word, positions = "", []


def find_words(
    grid: Grid,
    is_valid_word: WordPredicate,
    prior_grid: Optional[Grid] = None,
    premium_layout: Optional[PremiumLayout] = None,
) -> List[WordMatch]:
    """
    Find all dictionary words formed by maximal runs in the grid.

    Args:
        grid: Grid to scan
        is_valid_word: Word-membership predicate
        prior_grid: Grid as it was before the most recent lock; enables
            premium squares for cells that were empty in it
        premium_layout: Premium squares to apply (defaults to the standard
            layout when ``prior_grid`` is given)

    Returns:
        Matches in detection order
    """
    if prior_grid is not None and premium_layout is None:
        premium_layout = PremiumLayout()

    matches: List[WordMatch] = []
    for word, positions, direction in _runs(grid):
        if len(word) < MIN_WORD_LENGTH or not is_valid_word(word):
            continue

        if prior_grid is not None:
            base = premium_base_score(word, positions, prior_grid, premium_layout)
        else:
            base = word_base_score(word)

        matches.append(WordMatch(
            word=word,
            positions=positions,
            direction=direction,
            base_score=base,
        ))

    return matches


import random
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from .models import Tile


# Scrabble letter point values
LETTER_VALUES: Dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2,
    "H": 4, "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1,
    "O": 1, "P": 3, "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1,
    "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10
}

# Scrabble tile bag distribution (98 tiles, no blanks), used as sampling weights
LETTER_DISTRIBUTION: Dict[str, int] = {
    "A": 9, "B": 2, "C": 2, "D": 4, "E": 12, "F": 2, "G": 3,
    "H": 2, "I": 9, "J": 1, "K": 1, "L": 4, "M": 2, "N": 6,
    "O": 8, "P": 2, "Q": 1, "R": 6, "S": 4, "T": 6, "U": 4,
    "V": 2, "W": 2, "X": 1, "Y": 2, "Z": 1
}

# Tile colors keyed by point value
LETTER_COLORS: Dict[int, str] = {
    1: "#4ecdc4",
    2: "#45b7d1",
    3: "#96ceb4",
    4: "#ffa351",
    5: "#ff8b94",
    8: "#ffd93d",
    10: "#ff6b6b",
}


def color_for_value(value: int) -> str:
    """Color for a point value, defaulting to the 1-point color."""
    return LETTER_COLORS.get(value, LETTER_COLORS[1])


def make_tile(letter: str) -> Tile:
    """Build the tile for a letter from the value and color tables."""
    letter = letter.upper()
    if letter not in LETTER_VALUES:
        raise ValueError(f"Unknown letter '{letter}'")
    value = LETTER_VALUES[letter]
    return Tile(letter=letter, value=value, color=color_for_value(value))


def word_base_score(word: str) -> int:
    """Sum of letter values for a word."""
    return sum(LETTER_VALUES.get(letter, 0) for letter in word.upper())


class TileGenerator(BaseModel):
    """
    Weighted-random tile source.

    Letters are drawn with replacement, weighted by LETTER_DISTRIBUTION, so the
    letter frequencies mirror a Scrabble bag without ever running out.

    Attributes:
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    def random_letter(self) -> str:
        """Draw a single letter according to the distribution weights."""
        letters = list(LETTER_DISTRIBUTION)
        weights = list(LETTER_DISTRIBUTION.values())
        return self._rng.choices(letters, weights=weights, k=1)[0]

    def next_tile(self) -> Tile:
        """Create a new tile with a random letter."""
        return make_tile(self.random_letter())

    def draw(self, count: int) -> List[Tile]:
        """Create ``count`` new tiles."""
        return [self.next_tile() for _ in range(count)]

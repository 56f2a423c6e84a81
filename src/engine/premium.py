"""Premium square layout (Scrabble-style letter and word multipliers)."""

from typing import Dict, Optional

from .models import Position, PremiumSquare


PREMIUM_SQUARES: Dict[str, PremiumSquare] = {
    "DL": PremiumSquare(kind="DL", letter_multiplier=2),
    "TL": PremiumSquare(kind="TL", letter_multiplier=3),
    "DW": PremiumSquare(kind="DW", word_multiplier=2),
    "TW": PremiumSquare(kind="TW", word_multiplier=3),
}

# Sparse layout for the default 10x10 board, keyed by (x, y)
DEFAULT_PREMIUM_LAYOUT: Dict[Position, str] = {
    Position(2, 3): "DL",
    Position(6, 7): "DL",
    Position(8, 5): "TL",
    Position(4, 8): "DW",
}


class PremiumLayout:
    """Static mapping from positions to premium squares for one session."""

    def __init__(self, layout: Optional[Dict[Position, str]] = None):
        if layout is None:
            layout = DEFAULT_PREMIUM_LAYOUT
        self._squares: Dict[Position, PremiumSquare] = {}
        for pos, kind in layout.items():
            if kind not in PREMIUM_SQUARES:
                raise ValueError(f"Unknown premium square type '{kind}'")
            self._squares[Position(*pos)] = PREMIUM_SQUARES[kind]

    def at(self, pos: Position) -> Optional[PremiumSquare]:
        return self._squares.get(Position(*pos))

    def items(self):
        return self._squares.items()

    def __contains__(self, pos) -> bool:
        return Position(*pos) in self._squares

    def __len__(self) -> int:
        return len(self._squares)


def empty_layout() -> PremiumLayout:
    """A layout with no premium squares."""
    return PremiumLayout({})

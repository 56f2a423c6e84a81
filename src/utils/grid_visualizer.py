from typing import TYPE_CHECKING, Optional

from ..engine.grid import Grid
from ..engine.premium import PremiumLayout

if TYPE_CHECKING:
    from ..session.lifecycle import ActivePiece


# Markers for empty premium squares
PREMIUM_MARKERS = {
    "DL": "d",
    "TL": "t",
    "DW": "w",
    "TW": "x",
}


def render_grid(
    grid: Grid,
    active: Optional["ActivePiece"] = None,
    premium_layout: Optional[PremiumLayout] = None,
) -> str:
    """
    Render the grid as text, one line per row.

    Empty cells are '.', empty premium squares use a lowercase marker
    (d/t = double/triple letter, w/x = double/triple word), tiles show their
    letter. The active piece is drawn on its row, marked with an arrow, when it
    is inside the grid.
    """
    lines = []
    for y in range(grid.height):
        cells = []
        for x in range(grid.width):
            tile = grid.cells[y][x]
            if tile is not None:
                cells.append(tile.letter)
                continue
            square = premium_layout.at((x, y)) if premium_layout else None
            cells.append(PREMIUM_MARKERS[square.kind] if square else '.')
        if active is not None and active.position.y == y and 0 <= active.position.x < grid.width:
            cells[active.position.x] = active.tile.letter
            lines.append(' '.join(cells) + f"   <- {active.tile.letter}")
        else:
            lines.append(' '.join(cells))
    return '\n'.join(lines)

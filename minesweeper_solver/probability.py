"""Per-tile mine probabilities computed from a region's enumerated assignments."""

from dataclasses import dataclass
from functools import total_ordering
from typing import List, Sequence, Tuple

import numpy as np

from .assignments import RegionAssignment
from .errors import SolveError
from .utils import from_tile_id


@total_ordering
@dataclass(frozen=True)
class TileProbability:
    """
    Probability that the tile at (row, column) hides a mine.

    1.0 means the tile is certainly a mine, 0.0 means it is certainly safe.
    Instances order by probability, then row, then column.
    """

    row: int
    column: int
    probability: float

    def _sort_key(self) -> Tuple[float, int, int]:
        return self.probability, self.row, self.column

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TileProbability):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @property
    def is_certain_mine(self) -> bool:
        return self.probability == 1.0

    @property
    def is_certain_safe(self) -> bool:
        return self.probability == 0.0

    def __repr__(self) -> str:
        return (
            f"TileProbability(row={self.row}, column={self.column}, "
            f"probability={self.probability:.3f})"
        )


def region_probabilities(
    assignments: Sequence[RegionAssignment], columns: int
) -> List[TileProbability]:
    """
    Convert one region's assignments into per-tile mine probabilities.

    Every assignment is weighted equally: a tile's probability is the fraction
    of assignments that mark it MINE.

    Args:
        assignments: All legal assignments of one region; they must cover the
            same tiles.
        columns: Board column count, used to map tile ids back to coordinates.

    Returns:
        One TileProbability per assigned tile, in ascending tile id order.

    Raises:
        SolveError: If assignments is empty.
    """
    if not assignments:
        raise SolveError("Cannot solve - the flags on the board are not accurate.")

    tiles = sorted(assignments[0].tiles)

    # rows = assignments, columns = tiles
    mine_matrix = np.array(
        [[a.is_mine(t) for t in tiles] for a in assignments], dtype=bool
    )
    mine_counts = mine_matrix.sum(axis=0)
    probabilities = mine_counts / len(assignments)

    out: List[TileProbability] = []
    for tile, p in zip(tiles, probabilities):
        row, col = from_tile_id(tile, columns)
        out.append(TileProbability(row, col, float(p)))
    return out

"""Tile identity and adjacency helpers shared by the board and the solver."""

from typing import Dict, List, Tuple

# Module-level cache: (rows, columns) -> {(row, col): ((nr, nc), ...), ...}
_NEIGHBORHOODS_CACHE: Dict[
    Tuple[int, int],
    Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]
] = {}

# 8-connected offsets as (d_row, d_col)
ADJACENT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (0, -1), (1, 1), (1, 0), (1, -1), (-1, 1), (-1, 0), (-1, -1),
)


def get_neighborhoods(
    rows: int, columns: int
) -> Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]]:
    """
    Precompute and cache 8-connected neighbor coordinates for every tile in a grid.

    Args:
        rows: Number of rows. Must be positive.
        columns: Number of columns. Must be positive.

    Returns:
        Mapping from each tile (row, col) to a tuple of valid neighboring
        coordinates (nr, nc) under 8-connectivity.

    Raises:
        ValueError: If rows or columns is non-positive.
    """
    if rows <= 0 or columns <= 0:
        raise ValueError("rows and columns must be positive.")

    key = (rows, columns)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: Dict[Tuple[int, int], Tuple[Tuple[int, int], ...]] = {}
    for row in range(rows):
        for col in range(columns):
            nbrs: List[Tuple[int, int]] = []
            for d_row, d_col in ADJACENT_OFFSETS:
                nr, nc = row + d_row, col + d_col
                if 0 <= nr < rows and 0 <= nc < columns:
                    nbrs.append((nr, nc))
            neighborhoods[(row, col)] = tuple(nbrs)

    _NEIGHBORHOODS_CACHE[key] = neighborhoods
    return neighborhoods


def to_tile_id(row: int, col: int, columns: int) -> int:
    """Linearize a (row, col) coordinate into a single integer tile id."""
    return row * columns + col


def from_tile_id(tile: int, columns: int) -> Tuple[int, int]:
    """Inverse of to_tile_id: recover (row, col) from a tile id."""
    return divmod(tile, columns)

"""Partition a board's uncovered edge into independent constraint regions."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, FrozenSet, Iterator, List, Set, Tuple

from .board import ReadOnlyBoard, TilePredicate
from .utils import from_tile_id, to_tile_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """
    A maximal group of uncovered tiles whose numbers constrain a shared set of
    undecided tiles.

    Attributes:
        tiles: Ids of the uncovered tiles in the region.
        frontier: Ids of the undecided tiles adjacent to those uncovered tiles.
    """

    tiles: FrozenSet[int]
    frontier: FrozenSet[int]
    _ordered: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_ordered", tuple(sorted(self.tiles)))

    def __iter__(self) -> Iterator[int]:
        """Iterate the uncovered tiles in ascending id order."""
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, tile: object) -> bool:
        return tile in self.tiles


def _adjacent_ids(
    board: ReadOnlyBoard, tile: int, trusted_predicate: TilePredicate
) -> List[int]:
    """Ids of the neighbors of tile satisfying one of the board's trusted predicates."""
    row, col = from_tile_id(tile, board.columns)
    return [
        to_tile_id(nr, nc, board.columns)
        for nr, nc in board.adjacent_satisfying(row, col, trusted_predicate)
    ]


def is_on_edge(board: ReadOnlyBoard, row: int, col: int) -> bool:
    """True if (row, col) has at least one undecided neighbor."""
    return any(
        board.is_undecided_trusted(nr, nc) for nr, nc in board.neighbors(row, col)
    )


def uncovered_edges(board: ReadOnlyBoard) -> Set[int]:
    """Return the ids of all uncovered tiles adjacent to at least one undecided tile."""
    return {
        to_tile_id(row, col, board.columns)
        for row in range(board.rows)
        for col in range(board.columns)
        if board.is_uncovered_trusted(row, col) and is_on_edge(board, row, col)
    }


def find_regions(board: ReadOnlyBoard) -> List[Region]:
    """
    Group the uncovered edge tiles of a board into maximal, disjoint regions.

    Two uncovered tiles belong to the same region when they share an undecided
    neighbor, directly or through a chain of such shared neighbors. Each region
    is grown by a breadth-first closure over undecided tiles; every undecided
    tile enters the frontier queue at most once per region.

    Args:
        board: Board to partition. Only trusted queries are used.

    Returns:
        Regions in order of their smallest tile id. Empty when no uncovered tile
        touches an undecided tile (for example on a fully solved board).
    """
    edges = uncovered_edges(board)
    regions: List[Region] = []

    while edges:
        start = min(edges)
        edges.remove(start)

        tiles: Set[int] = {start}
        frontier: Deque[int] = deque(
            _adjacent_ids(board, start, board.is_undecided_trusted)
        )
        visited: Set[int] = set(frontier)

        while frontier:
            undecided = frontier.popleft()
            for uncovered in _adjacent_ids(board, undecided, board.is_uncovered_trusted):
                if uncovered in tiles:
                    continue
                tiles.add(uncovered)
                edges.discard(uncovered)

                for nxt in _adjacent_ids(board, uncovered, board.is_undecided_trusted):
                    if nxt not in visited:
                        visited.add(nxt)
                        frontier.append(nxt)

        regions.append(Region(frozenset(tiles), frozenset(visited)))

    logger.debug(
        f"Partitioned board into {len(regions)} regions "
        f"(sizes: {[len(r) for r in regions]})"
    )
    return regions

"""Enumerate every legal mine/safe assignment of the undecided tiles bordering a region."""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .board import ReadOnlyBoard
from .errors import SolveError
from .regions import Region
from .utils import from_tile_id, to_tile_id

logger = logging.getLogger(__name__)

# Tile states inside an assignment
MINE = "M"
SAFE = "S"


@dataclass(frozen=True)
class RegionAssignment:
    """
    One mine/safe labeling of undecided tiles around a region.

    Assignments are immutable values: with_states() and fork() return new
    assignments and never modify the receiver.

    Attributes:
        tiles: Assigned tile ids, in the order they were assigned.
        mines: Subset of tiles assigned MINE.
    """

    tiles: Tuple[int, ...] = field(default=(), compare=False)
    mines: FrozenSet[int] = frozenset()
    _tile_set: FrozenSet[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        tile_set = frozenset(self.tiles)
        if len(tile_set) != len(self.tiles):
            raise ValueError("An assignment cannot contain a tile twice.")
        if not self.mines <= tile_set:
            raise ValueError("Every mine must be one of the assigned tiles.")
        object.__setattr__(self, "_tile_set", tile_set)

    @property
    def mine_count(self) -> int:
        return len(self.mines)

    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, tile: object) -> bool:
        return tile in self._tile_set

    def state(self, tile: int) -> Optional[str]:
        """Return MINE, SAFE, or None when tile is not assigned."""
        if tile not in self._tile_set:
            return None
        return MINE if tile in self.mines else SAFE

    def is_mine(self, tile: int) -> bool:
        return tile in self.mines

    def with_states(self, tiles: Sequence[int], state: str) -> "RegionAssignment":
        """Return a copy with every tile in tiles assigned state."""
        if state not in (MINE, SAFE):
            raise ValueError(f"state must be {MINE!r} or {SAFE!r}.")
        if not tiles:
            return self
        mines = self.mines | frozenset(tiles) if state == MINE else self.mines
        return RegionAssignment(self.tiles + tuple(tiles), mines)

    def fork(self, tile: int) -> Tuple["RegionAssignment", "RegionAssignment"]:
        """Split on tile: (copy with tile SAFE, copy with tile MINE)."""
        return self.with_states((tile,), SAFE), self.with_states((tile,), MINE)


def distribute_mines(
    assignment: RegionAssignment,
    tiles: Sequence[int],
    quota: int,
    mine_budget: int,
) -> List[RegionAssignment]:
    """
    Extend assignment over tiles in every way that places exactly quota mines.

    Tiles are decided left to right. At each tile the search either keeps it
    SAFE or forks a copy with it as a MINE. Two cutoffs end a branch early:
    a zero quota marks the rest SAFE, and a quota equal to the tiles left marks
    the rest MINE. Either fill is kept only if the assignment's total stays
    within mine_budget; a negative budget therefore yields nothing.

    Args:
        assignment: Assignment to extend. It must not contain any of tiles.
        tiles: New tiles to assign, in the order they are decided.
        quota: Number of mines to place among tiles.
        mine_budget: Upper bound on the extended assignment's mine_count.

    Returns:
        All legal extensions, SAFE branches first. Empty when quota is negative,
        exceeds len(tiles), or cannot fit within mine_budget.
    """
    tiles = tuple(tiles)
    if quota < 0 or quota > len(tiles):
        return []

    results: List[RegionAssignment] = []
    # (partial assignment, index of next tile, mines still to place)
    stack: List[Tuple[RegionAssignment, int, int]] = [(assignment, 0, quota)]

    while stack:
        current, index, remaining = stack.pop()
        left = len(tiles) - index

        if remaining == 0:
            if current.mine_count <= mine_budget:
                results.append(current.with_states(tiles[index:], SAFE))
            continue

        if remaining == left:
            if current.mine_count + remaining <= mine_budget:
                results.append(current.with_states(tiles[index:], MINE))
            continue

        safe, mine = current.fork(tiles[index])
        if mine.mine_count + (remaining - 1) <= mine_budget:
            stack.append((mine, index + 1, remaining - 1))
        stack.append((safe, index + 1, remaining))

    return results


def _known_mines(
    board: ReadOnlyBoard, assignment: RegionAssignment, row: int, col: int
) -> int:
    """Neighbors of (row, col) that are flagged or assigned MINE."""
    columns = board.columns
    return board.count_adjacent(
        row,
        col,
        lambda nr, nc: board.is_flagged_trusted(nr, nc)
        or assignment.is_mine(to_tile_id(nr, nc, columns)),
    )


def _unassigned_undecided(
    board: ReadOnlyBoard, assignment: RegionAssignment, row: int, col: int
) -> List[int]:
    """Undecided neighbors of (row, col) not yet present in assignment."""
    columns = board.columns
    return [
        tile
        for tile in (
            to_tile_id(nr, nc, columns)
            for nr, nc in board.adjacent_satisfying(row, col, board.is_undecided_trusted)
        )
        if tile not in assignment
    ]


def _can_still_satisfy(
    board: ReadOnlyBoard, assignment: RegionAssignment, row: int, col: int, number: int
) -> bool:
    """False if (row, col) already has too many mines, or too few tiles left to reach number."""
    known = _known_mines(board, assignment, row, col)
    if known > number:
        return False
    return number - known <= len(_unassigned_undecided(board, assignment, row, col))


def enumerate_assignments(
    board: ReadOnlyBoard, region: Region, mine_budget: int
) -> List[RegionAssignment]:
    """
    Enumerate every assignment of the undecided tiles around region that agrees
    with all of the region's numbers and fits within mine_budget.

    Flags are trusted: a flagged neighbor always counts as a mine. Tiles of the
    region are processed in ascending id order. The first tile seeds the search
    from an empty assignment; each later tile first discards assignments it
    already contradicts, then extends the survivors over its undecided
    neighbors that no assignment covers yet.

    Args:
        board: Board the region was taken from.
        region: Region to enumerate.
        mine_budget: Maximum number of mines any assignment may contain.

    Returns:
        Non-empty list of assignments. All of them cover the same tiles.

    Raises:
        SolveError: If no assignment satisfies the region's constraints.
    """
    columns = board.columns
    assignments: List[RegionAssignment] = []

    for index, tile in enumerate(region):
        row, col = from_tile_id(tile, columns)
        number = board.displayed_number(row, col)

        if index == 0:
            seed = RegionAssignment()
            quota = number - _known_mines(board, seed, row, col)
            new_tiles = _unassigned_undecided(board, seed, row, col)
            assignments = distribute_mines(seed, new_tiles, quota, mine_budget)
        else:
            assignments = [
                a for a in assignments if _can_still_satisfy(board, a, row, col, number)
            ]
            if assignments:
                new_tiles = _unassigned_undecided(board, assignments[0], row, col)
                extended: List[RegionAssignment] = []
                for assignment in assignments:
                    quota = number - _known_mines(board, assignment, row, col)
                    extended.extend(
                        distribute_mines(assignment, new_tiles, quota, mine_budget)
                    )
                assignments = extended

        if not assignments:
            raise SolveError(
                f"Cannot solve - the flags on the board are not accurate "
                f"(no legal assignment around tile ({row}, {col}))."
            )

    logger.debug(
        f"Region of {len(region)} tiles: {len(assignments)} assignments "
        f"over {len(assignments[0])} undecided tiles (budget {mine_budget})"
    )
    return assignments

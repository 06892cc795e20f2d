"""Minesweeper probability solver: regions, assignment enumeration and aggregation."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Union

from .assignments import enumerate_assignments
from .board import ReadOnlyBoard
from .errors import BoardEndedError, SolveError
from .probability import TileProbability, region_probabilities
from .regions import find_regions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveStats:
    """
    Counters describing a single solve call.

    largest_region is the most undecided tiles bordering any one region.
    """

    regions_found: int = 0
    regions_skipped: int = 0
    assignments_enumerated: int = 0
    probabilities_emitted: int = 0
    largest_region: int = 0


class MinesweeperSolver:
    """
    Deduces mine probabilities for undecided tiles of a read-only board.

    The solver:
    1. Partitions the uncovered edge of the board into independent regions
    2. Enumerates every legal mine/safe assignment around each region
    3. Reports, per tile, the fraction of assignments in which it is a mine

    Only tiles adjacent to at least one uncovered tile receive a probability.
    All placed flags are assumed to be correct.
    """

    def __init__(
        self,
        board: ReadOnlyBoard,
        max_region_size: Union[int, float] = float("inf"),
    ) -> None:
        """
        Bind a solver to a board. The binding cannot be changed afterwards.

        Args:
            board: The board to solve. It is only ever read.
            max_region_size: Maximum number of undecided tiles bordering a
                region for it to be enumerated; larger regions are skipped and
                their tiles get no probability. The default never skips.

        Raises:
            TypeError: If board is not a ReadOnlyBoard.
            ValueError: If max_region_size is smaller than 1.
        """
        if not isinstance(board, ReadOnlyBoard):
            raise TypeError("board must be a ReadOnlyBoard.")
        if max_region_size < 1:
            raise ValueError("max_region_size must be at least 1.")
        self._board = board
        self.max_region_size: Union[int, float] = max_region_size

    @property
    def board(self) -> ReadOnlyBoard:
        return self._board

    def solve_current_state(
        self, on_found: Callable[[TileProbability], None]
    ) -> SolveStats:
        """
        Solve the board's current state, streaming results to on_found.

        on_found is called once per deduced tile as soon as its region has
        been enumerated. Regions are visited in partition order and tiles
        within a region in ascending row-major order.

        The remaining mine budget starts at the board's flags remaining and is
        reduced after each region by the fewest mines any of its assignments
        uses, so later regions cannot claim mines that earlier ones need.

        Args:
            on_found: Callback receiving each TileProbability.

        Returns:
            Statistics for this call.

        Raises:
            BoardEndedError: If the board has already been won or lost.
            SolveError: If the flags contradict the numbers shown. Results
                already passed to on_found must then be discarded.
        """
        board = self._board
        if board.is_ended():
            raise BoardEndedError("Board has already ended.")

        regions = find_regions(board)
        mine_budget: int = board.flags_remaining

        skipped = 0
        assignments_total = 0
        emitted = 0

        for i, region in enumerate(regions):
            if len(region.frontier) > self.max_region_size:
                skipped += 1
                logger.warning(
                    f"Skipping region {i} with {len(region.frontier)} undecided tiles "
                    f"(max_region_size={self.max_region_size})"
                )
                continue

            try:
                assignments = enumerate_assignments(board, region, mine_budget)
            except SolveError as e:
                logger.warning(f"Solve failed in region {i}: {e}")
                raise

            assignments_total += len(assignments)
            for tile_probability in region_probabilities(assignments, board.columns):
                on_found(tile_probability)
                emitted += 1

            mine_budget -= min(a.mine_count for a in assignments)
            logger.debug(f"Region {i} done, remaining mine budget {mine_budget}")

        stats = SolveStats(
            regions_found=len(regions),
            regions_skipped=skipped,
            assignments_enumerated=assignments_total,
            probabilities_emitted=emitted,
            largest_region=max((len(r.frontier) for r in regions), default=0),
        )
        logger.info(
            f"Solved {stats.regions_found - skipped}/{stats.regions_found} regions: "
            f"{emitted} probabilities from {assignments_total} assignments"
        )
        return stats

    def solve(self) -> List[TileProbability]:
        """Solve the current state and return all probabilities, sorted."""
        found: List[TileProbability] = []
        self.solve_current_state(found.append)
        return sorted(found)

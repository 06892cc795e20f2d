"""Shared fixtures for the solver tests."""

import random
from typing import Callable

import pytest

from minesweeper_solver.board import GridBoard


def _random_board(seed: int, rows: int = 6, columns: int = 6, mines: int = 7) -> GridBoard:
    """Ongoing board with random mines, 60% of safe tiles uncovered and some correct flags."""
    rng = random.Random(seed)
    tiles = [(r, c) for r in range(rows) for c in range(columns)]
    mine_set = set(rng.sample(tiles, mines))
    safe = [t for t in tiles if t not in mine_set]
    uncovered = set(rng.sample(safe, len(safe) * 3 // 5))
    flagged = {t for t in sorted(mine_set) if rng.random() < 0.3}
    return GridBoard(
        [[(r, c) in mine_set for c in range(columns)] for r in range(rows)],
        [[(r, c) in uncovered for c in range(columns)] for r in range(rows)],
        [[(r, c) in flagged for c in range(columns)] for r in range(rows)],
    )


@pytest.fixture
def random_board() -> Callable[..., GridBoard]:
    """Factory for seeded random ongoing boards whose flags are all correct."""
    return _random_board

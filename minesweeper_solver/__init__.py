"""
Minesweeper Probability Solver

Deduces, for undecided tiles of a Minesweeper board, the probability that each
hides a mine, using only logically guaranteed information:
- Region partitioning: independent groups of uncovered tiles on the board edge
- Assignment enumeration: every legal mine/safe labeling around each region
- Aggregation: per-tile mine frequency across those labelings
"""

from .assignments import MINE, SAFE, RegionAssignment, enumerate_assignments
from .board import NO_NUMBER, GameState, GridBoard, ReadOnlyBoard
from .errors import BoardEndedError, SolveError, SolverError
from .probability import TileProbability, region_probabilities
from .regions import Region, find_regions
from .solver import MinesweeperSolver, SolveStats

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "MinesweeperSolver",
    "SolveStats",
    "TileProbability",
    # Board capability
    "ReadOnlyBoard",
    "GridBoard",
    "GameState",
    "NO_NUMBER",
    # Building blocks
    "Region",
    "find_regions",
    "RegionAssignment",
    "enumerate_assignments",
    "region_probabilities",
    "MINE",
    "SAFE",
    # Errors
    "SolverError",
    "SolveError",
    "BoardEndedError",
]

"""
Quickstart example for the Minesweeper Probability Solver.

This script demonstrates basic usage of the solver.
"""

import logging

from minesweeper_solver import (
    GridBoard,
    MinesweeperSolver,
    SolveError,
)


BOARD_LAYOUT = """
    *.*.....
    121.....
    0001*...
    00011...
    0000012*
    000001*.
"""


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Minesweeper Probability Solver - Quickstart Example")
    print("=" * 60)

    # Example 1: Solve a board snapshot
    print("\n1. Board snapshot (mines shown as '*', covered tiles as '.'):")
    print("-" * 60)

    board = GridBoard.from_layout(BOARD_LAYOUT)
    print(board.to_layout())
    print(f"Flags remaining: {board.flags_remaining}")

    # Example 2: Collect sorted probabilities
    print("\n2. Mine probabilities, safest first:")
    print("-" * 60)

    solver = MinesweeperSolver(board)
    for tp in solver.solve():
        label = "safe" if tp.is_certain_safe else "mine" if tp.is_certain_mine else ""
        print(f"  ({tp.row}, {tp.column}): {tp.probability:.3f} {label}")

    # Example 3: Stream results as each region is solved
    print("\n3. Streaming results per region:")
    print("-" * 60)

    stats = solver.solve_current_state(lambda tp: print(f"  found {tp!r}"))
    print(f"Regions: {stats.regions_found}, assignments: {stats.assignments_enumerated}")

    # Example 4: A wrong flag makes the board unsolvable
    print("\n4. Board with a wrong flag:")
    print("-" * 60)

    try:
        MinesweeperSolver(GridBoard.from_layout("f0..*")).solve()
    except SolveError as e:
        print(f"Solve failed: {e}")

    print("\n" + "=" * 60)
    print("Done! See README.md for the layout format and API.")
    print("=" * 60)


if __name__ == "__main__":
    main()

"""End-to-end tests for MinesweeperSolver."""

import itertools
import logging

import pytest

from minesweeper_solver import (
    BoardEndedError,
    GridBoard,
    MinesweeperSolver,
    SolveError,
    SolveStats,
    TileProbability,
)


def solve_layout(layout: str):
    return MinesweeperSolver(GridBoard.from_layout(layout)).solve()


def as_dict(probabilities):
    return {(tp.row, tp.column): tp.probability for tp in probabilities}


# -----------------------------------------------------------------------------
# Scenarios
# -----------------------------------------------------------------------------


def test_trivial_isolated_one():
    assert solve_layout("1*..") == [TileProbability(0, 1, 1.0)]


def test_satisfied_number():
    assert solve_layout("F1..") == [TileProbability(0, 2, 0.0)]


def test_symmetric_ambiguity():
    assert as_dict(solve_layout(".1*.")) == {(0, 0): 0.5, (0, 2): 0.5}
    # the answer does not depend on which side the mine is really on
    assert solve_layout("*1..") == solve_layout(".1*.")


def test_symmetric_ambiguity_surrounded():
    result = solve_layout(
        """
        ...1*
        ...11
        """
    )
    # (0,3) sees (0,2), (0,4), (1,2); (1,3) and (1,4) add nothing new
    assert as_dict(result) == {(0, 2): 0.0, (1, 2): 0.0, (0, 4): 1.0}


def test_inconsistent_board():
    board = GridBoard.from_layout("f0..*")
    with pytest.raises(SolveError, match="not accurate"):
        MinesweeperSolver(board).solve()


def test_disjoint_regions_match_isolated_sub_boards():
    full = solve_layout(
        """
        *1......1*
        ..........
        """
    )
    left = solve_layout(
        """
        *1...
        .....
        """
    )
    right = solve_layout(
        """
        ...1*
        .....
        """
    )
    shifted_right = {(r, c + 5): p for (r, c), p in as_dict(right).items()}
    assert as_dict(full) == {**as_dict(left), **shifted_right}
    assert all(p == pytest.approx(0.2) for p in as_dict(full).values())


def test_one_two_one_pattern():
    result = solve_layout(
        """
        *.*
        121
        000
        """
    )
    assert as_dict(result) == {(0, 0): 1.0, (0, 1): 0.0, (0, 2): 1.0}


# -----------------------------------------------------------------------------
# Global mine budget
# -----------------------------------------------------------------------------


def test_budget_within_one_region():
    assert as_dict(solve_layout("*1.1*")) == {(0, 0): 0.5, (0, 2): 0.5, (0, 4): 0.5}
    assert as_dict(solve_layout(".1*1.")) == {(0, 0): 0.0, (0, 2): 1.0, (0, 4): 0.0}


def test_budget_is_threaded_across_regions():
    # Two mines in total. The left region needs exactly one, so the right
    # region, which could hold one or two, is limited to one.
    board = GridBoard.from_layout("*1....1*1.")
    result = as_dict(MinesweeperSolver(board).solve())
    assert result[(0, 0)] == 0.5
    assert result[(0, 2)] == 0.5
    assert result[(0, 7)] == 1.0
    assert result[(0, 5)] == 0.0
    assert result[(0, 9)] == 0.0


def test_more_flags_than_mines_is_inconsistent():
    # two wrong flags on a one-mine board leave a budget of -1
    board = GridBoard.from_layout(
        """
        ff...
        .....
        0....
        .....
        ...*.
        """
    )
    assert board.flags_remaining == -1
    with pytest.raises(SolveError, match="not accurate"):
        MinesweeperSolver(board).solve()


def test_exhausted_budget_is_inconsistent():
    # the wrong flag uses up the only mine, but (0,2) still needs one
    board = GridBoard.from_layout("f.1*.")
    assert board.flags_remaining == 0
    with pytest.raises(SolveError):
        MinesweeperSolver(board).solve()


# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------


def test_determinism(random_board):
    for seed in range(20):
        solver = MinesweeperSolver(random_board(seed))
        first = solver.solve()
        assert solver.solve() == first
        assert solver.solve() == first


def test_probability_bounds_and_certainty(random_board):
    for seed in range(40):
        board = random_board(seed)
        for tp in MinesweeperSolver(board).solve():
            assert 0.0 <= tp.probability <= 1.0
            assert board.is_undecided(tp.row, tp.column)
            if tp.is_certain_mine:
                assert board.has_mine(tp.row, tp.column)
            if tp.is_certain_safe:
                assert not board.has_mine(tp.row, tp.column)


def legal_layouts(board):
    """Every placement of the remaining mines on undecided tiles that matches all numbers."""
    undecided = [
        (row, col)
        for row in range(board.rows)
        for col in range(board.columns)
        if board.is_undecided(row, col)
    ]
    numbers = [
        (row, col, board.displayed_number(row, col))
        for row in range(board.rows)
        for col in range(board.columns)
        if board.is_uncovered(row, col)
    ]
    for mines in itertools.combinations(undecided, board.flags_remaining):
        mine_set = set(mines)
        if all(
            board.count_adjacent(
                row, col, lambda nr, nc: board.is_flagged(nr, nc) or (nr, nc) in mine_set
            )
            == number
            for row, col, number in numbers
        ):
            yield mine_set


def test_certain_tiles_hold_in_every_legal_layout(random_board):
    for seed in range(25):
        board = random_board(seed, rows=5, columns=5, mines=5)
        layouts = list(legal_layouts(board))
        assert layouts

        for tp in MinesweeperSolver(board).solve():
            cell = (tp.row, tp.column)
            if tp.is_certain_mine:
                assert all(cell in layout for layout in layouts)
            if tp.is_certain_safe:
                assert all(cell not in layout for layout in layouts)


def test_every_undecided_edge_neighbor_gets_one_probability(random_board):
    for seed in range(20):
        board = random_board(seed)
        result = MinesweeperSolver(board).solve()
        cells = [(tp.row, tp.column) for tp in result]
        assert len(cells) == len(set(cells))

        expected = {
            (nr, nc)
            for row in range(board.rows)
            for col in range(board.columns)
            if board.is_uncovered(row, col)
            for nr, nc in board.neighbors(row, col)
            if board.is_undecided(nr, nc)
        }
        assert set(cells) == expected


# -----------------------------------------------------------------------------
# Streaming, stats and configuration
# -----------------------------------------------------------------------------


def test_results_are_streamed_in_region_order():
    board = GridBoard.from_layout(
        """
        *1......1*
        ..........
        """
    )
    seen = []
    stats = MinesweeperSolver(board).solve_current_state(seen.append)

    assert [(tp.row, tp.column) for tp in seen] == [
        (0, 0), (0, 2), (1, 0), (1, 1), (1, 2),
        (0, 7), (0, 9), (1, 7), (1, 8), (1, 9),
    ]
    assert stats == SolveStats(
        regions_found=2,
        regions_skipped=0,
        assignments_enumerated=10,
        probabilities_emitted=10,
        largest_region=5,
    )


def test_partial_output_before_failure():
    # The first region is fine; the second contains a wrong flag.
    board = GridBoard.from_layout("1*...f0..*")
    seen = []
    with pytest.raises(SolveError):
        MinesweeperSolver(board).solve_current_state(seen.append)
    assert seen == [TileProbability(0, 1, 1.0)]


def test_empty_result_when_nothing_borders_an_undecided_tile():
    # (0,3) is undecided but only touches the flag
    board = GridBoard.from_layout("01F.")
    seen = []
    stats = MinesweeperSolver(board).solve_current_state(seen.append)
    assert seen == []
    assert stats == SolveStats()

    assert MinesweeperSolver(GridBoard.from_layout("*..")).solve() == []


def test_max_region_size_counts_undecided_tiles(caplog):
    # two uncovered tiles, three undecided neighbours
    board = GridBoard.from_layout(".1*1.")
    solver = MinesweeperSolver(board, max_region_size=2)
    seen = []
    with caplog.at_level(logging.WARNING, logger="minesweeper_solver.solver"):
        stats = solver.solve_current_state(seen.append)
    assert seen == []
    assert stats.regions_skipped == 1
    assert stats.largest_region == 3

    stats = MinesweeperSolver(board, max_region_size=3).solve_current_state(seen.append)
    assert stats.regions_skipped == 0
    assert len(seen) == 3
    assert "Skipping region" in caplog.text


def test_solving_an_ended_board_raises():
    with pytest.raises(BoardEndedError):
        MinesweeperSolver(GridBoard.from_layout("*1")).solve()
    with pytest.raises(BoardEndedError):
        MinesweeperSolver(GridBoard.from_layout("X1.")).solve()
    assert issubclass(BoardEndedError, RuntimeError)


def test_constructor_validation():
    with pytest.raises(TypeError):
        MinesweeperSolver(object())  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        MinesweeperSolver(GridBoard.from_layout("*1.."), max_region_size=0)


def test_board_binding_is_read_only():
    board = GridBoard.from_layout("*1..")
    solver = MinesweeperSolver(board)
    assert solver.board is board
    with pytest.raises(AttributeError):
        solver.board = GridBoard.from_layout("*1..")  # type: ignore[misc]


def test_solver_uses_trusted_queries():
    class HiddenFlagBoard(GridBoard):
        """Reports (0, 0) as flagged to the solver only."""

        def is_flagged_trusted(self, row, col):
            return (row, col) == (0, 0) or super().is_flagged_trusted(row, col)

        def is_undecided_trusted(self, row, col):
            return (row, col) != (0, 0) and super().is_undecided_trusted(row, col)

    layout = "*1.."
    plain = MinesweeperSolver(GridBoard.from_layout(layout)).solve()
    hidden = HiddenFlagBoard.from_layout(layout)
    trusted = MinesweeperSolver(hidden).solve()

    assert plain == [TileProbability(0, 0, 0.5), TileProbability(0, 2, 0.5)]
    assert trusted == [TileProbability(0, 2, 0.0)]

"""Read-only board capability consumed by the solver, plus a grid snapshot implementation."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .utils import get_neighborhoods

# Displayed number for tiles that should show no number.
NO_NUMBER: int = -1

TilePredicate = Callable[[int, int], bool]
TileAction = Callable[[int, int], None]


class GameState(Enum):
    """Lifecycle of a Minesweeper board."""

    NOT_STARTED = "not_started"
    ONGOING = "ongoing"
    WIN = "win"
    LOSS = "loss"


class ReadOnlyBoard(ABC):
    """
    Read-only view of a Minesweeper board.

    Every in-bounds tile is exactly one of uncovered, flagged or undecided.
    Implementations provide the per-tile predicates and board-wide queries;
    adjacency helpers and lifecycle checks are derived from them.

    The board exposes two query sets. The visible set (is_uncovered, is_flagged,
    is_undecided) reports what the player sees. The trusted set
    (is_uncovered_trusted, ...) reports the state a solver may rely on and
    defaults to the visible set. The solver only calls the trusted set.
    """

    # -------------------------------------------------------------------------
    # Abstract queries
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows, fixed for the board's lifetime."""

    @property
    @abstractmethod
    def columns(self) -> int:
        """Number of columns, fixed for the board's lifetime."""

    @property
    @abstractmethod
    def flags_remaining(self) -> int:
        """Flags still placeable, i.e. mines believed to remain."""

    @property
    @abstractmethod
    def state(self) -> GameState:
        """Current lifecycle state of the board."""

    @abstractmethod
    def is_uncovered(self, row: int, col: int) -> bool:
        """True if the tile is uncovered (exploded tiles included)."""

    @abstractmethod
    def is_flagged(self, row: int, col: int) -> bool:
        """True if the tile carries a flag."""

    @abstractmethod
    def is_undecided(self, row: int, col: int) -> bool:
        """True if the tile is neither uncovered nor flagged."""

    @abstractmethod
    def is_exploded(self, row: int, col: int) -> bool:
        """True if the tile was uncovered while holding a mine."""

    @abstractmethod
    def displayed_number(self, row: int, col: int) -> int:
        """Adjacent mine count shown on an uncovered tile, or NO_NUMBER."""

    @abstractmethod
    def exploded_tile(self) -> Optional[Tuple[int, int]]:
        """Location of the exploded tile after a loss, otherwise None."""

    # -------------------------------------------------------------------------
    # Trusted queries
    # -------------------------------------------------------------------------

    def is_uncovered_trusted(self, row: int, col: int) -> bool:
        return self.is_uncovered(row, col)

    def is_flagged_trusted(self, row: int, col: int) -> bool:
        return self.is_flagged(row, col)

    def is_undecided_trusted(self, row: int, col: int) -> bool:
        return self.is_undecided(row, col)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def is_ended(self) -> bool:
        return self.state in (GameState.WIN, GameState.LOSS)

    def is_ended_with_win(self) -> bool:
        return self.state is GameState.WIN

    def is_ended_with_loss(self) -> bool:
        return self.state is GameState.LOSS

    # -------------------------------------------------------------------------
    # Adjacency
    # -------------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.columns

    def neighbors(self, row: int, col: int) -> Tuple[Tuple[int, int], ...]:
        """Return the up to 8 in-bounds neighbor coordinates of a tile."""
        return get_neighborhoods(self.rows, self.columns)[(row, col)]

    def for_each_adjacent(self, row: int, col: int, action: TileAction) -> None:
        """Call action(nr, nc) for every neighbor of (row, col)."""
        for nr, nc in self.neighbors(row, col):
            action(nr, nc)

    def count_adjacent(self, row: int, col: int, predicate: TilePredicate) -> int:
        """Count neighbors of (row, col) satisfying predicate."""
        return sum(1 for nr, nc in self.neighbors(row, col) if predicate(nr, nc))

    def adjacent_satisfying(
        self, row: int, col: int, predicate: TilePredicate
    ) -> List[Tuple[int, int]]:
        """Collect neighbors of (row, col) satisfying predicate, in neighbor order."""
        return [(nr, nc) for nr, nc in self.neighbors(row, col) if predicate(nr, nc)]


class GridBoard(ReadOnlyBoard):
    """
    Immutable board snapshot with a known mine placement.

    Layout symbols accepted by from_layout():
        "."      covered tile without a mine
        "*"      covered tile with a mine
        "F"      flagged tile with a mine
        "f"      flagged tile without a mine (a wrong flag)
        "o"      uncovered tile without a mine
        "0".."8" uncovered tile without a mine; the digit must match
                 its adjacent mine count
        "X"      uncovered mine (the exploded tile)
    """

    _MINE_SYMBOLS = frozenset("*FX")
    _UNCOVERED_SYMBOLS = frozenset("oX012345678")
    _FLAG_SYMBOLS = frozenset("Ff")

    def __init__(
        self,
        mines: Sequence[Sequence[bool]],
        uncovered: Sequence[Sequence[bool]],
        flagged: Sequence[Sequence[bool]],
    ) -> None:
        """
        Build a board snapshot from three equally shaped boolean grids.

        Args:
            mines: mines[row][col] is True where a mine is placed.
            uncovered: uncovered[row][col] is True for uncovered tiles.
            flagged: flagged[row][col] is True for flagged tiles.

        Raises:
            ValueError: If the grids are empty, ragged, differently shaped, or
                a tile is both uncovered and flagged.
        """
        height = len(mines)
        if height == 0 or len(mines[0]) == 0:
            raise ValueError("Board must have at least one row and one column.")
        width = len(mines[0])

        for name, grid in (("mines", mines), ("uncovered", uncovered), ("flagged", flagged)):
            if len(grid) != height or any(len(r) != width for r in grid):
                raise ValueError(f"Grid {name!r} must be {height}x{width}.")

        self._rows: int = height
        self._columns: int = width
        self._mines: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(bool(v) for v in r) for r in mines
        )
        self._uncovered: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(bool(v) for v in r) for r in uncovered
        )
        self._flagged: Tuple[Tuple[bool, ...], ...] = tuple(
            tuple(bool(v) for v in r) for r in flagged
        )

        for row in range(height):
            for col in range(width):
                if self._uncovered[row][col] and self._flagged[row][col]:
                    raise ValueError(
                        f"Tile ({row}, {col}) cannot be both uncovered and flagged."
                    )

        self.mines_count: int = sum(sum(r) for r in self._mines)
        self.flags_count: int = sum(sum(r) for r in self._flagged)
        self._adjacent_mines: List[List[int]] = self._get_adjacent_mine_counts()

    @classmethod
    def from_layout(cls, layout: str) -> "GridBoard":
        """
        Parse a text layout (see class docstring) into a board snapshot.

        Blank lines and spaces are ignored, so rows may be indented or spaced
        out for readability.

        Raises:
            ValueError: On unknown symbols, ragged rows, or digits that do not
                match the adjacent mine count.
        """
        lines = [line.replace(" ", "") for line in layout.strip().splitlines()]
        lines = [line for line in lines if line]
        if not lines:
            raise ValueError("Layout is empty.")

        mines: List[List[bool]] = []
        uncovered: List[List[bool]] = []
        flagged: List[List[bool]] = []
        for y, line in enumerate(lines):
            if len(line) != len(lines[0]):
                raise ValueError(f"Layout row {y} has length {len(line)}, expected {len(lines[0])}.")
            for symbol in line:
                if symbol not in ".*Ff" and symbol not in cls._UNCOVERED_SYMBOLS:
                    raise ValueError(f"Unknown layout symbol {symbol!r} in row {y}.")
            mines.append([s in cls._MINE_SYMBOLS for s in line])
            uncovered.append([s in cls._UNCOVERED_SYMBOLS for s in line])
            flagged.append([s in cls._FLAG_SYMBOLS for s in line])

        board = cls(mines, uncovered, flagged)

        for y, line in enumerate(lines):
            for x, symbol in enumerate(line):
                if symbol.isdigit() and int(symbol) != board._adjacent_mines[y][x]:
                    raise ValueError(
                        f"Tile ({y}, {x}) shows {symbol} but has "
                        f"{board._adjacent_mines[y][x]} adjacent mines."
                    )
        return board

    def _get_adjacent_mine_counts(self) -> List[List[int]]:
        """Adjacent mine count for every tile (mines included)."""
        counts: List[List[int]] = []
        for row in range(self._rows):
            counts.append([
                sum(1 for nr, nc in self.neighbors(row, col) if self._mines[nr][nc])
                for col in range(self._columns)
            ])
        return counts

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise ValueError(f"Tile ({row}, {col}) is outside the board.")

    # -------------------------------------------------------------------------
    # ReadOnlyBoard implementation
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def flags_remaining(self) -> int:
        return self.mines_count - self.flags_count

    @property
    def state(self) -> GameState:
        any_uncovered = False
        safe_covered = False
        for row in range(self._rows):
            for col in range(self._columns):
                if self._uncovered[row][col]:
                    if self._mines[row][col]:
                        return GameState.LOSS
                    any_uncovered = True
                elif not self._mines[row][col]:
                    safe_covered = True

        if not any_uncovered:
            return GameState.NOT_STARTED
        if not safe_covered:
            return GameState.WIN
        return GameState.ONGOING

    def is_uncovered(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._uncovered[row][col]

    def is_flagged(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._flagged[row][col]

    def is_undecided(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return not self._uncovered[row][col] and not self._flagged[row][col]

    def is_exploded(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return self._uncovered[row][col] and self._mines[row][col]

    def displayed_number(self, row: int, col: int) -> int:
        self._check_bounds(row, col)
        if not self._uncovered[row][col] or self._mines[row][col]:
            return NO_NUMBER
        return self._adjacent_mines[row][col]

    def exploded_tile(self) -> Optional[Tuple[int, int]]:
        for row in range(self._rows):
            for col in range(self._columns):
                if self._uncovered[row][col] and self._mines[row][col]:
                    return row, col
        return None

    # -------------------------------------------------------------------------
    # Ground truth
    # -------------------------------------------------------------------------

    def has_mine(self, row: int, col: int) -> bool:
        """Ground truth: whether a mine is placed at (row, col)."""
        self._check_bounds(row, col)
        return self._mines[row][col]

    def to_layout(self) -> str:
        """Render the snapshot as layout text accepted by from_layout()."""

        def tile_symbol(row: int, col: int) -> str:
            mine = self._mines[row][col]
            if self._flagged[row][col]:
                return "F" if mine else "f"
            if self._uncovered[row][col]:
                return "X" if mine else str(self._adjacent_mines[row][col])
            return "*" if mine else "."

        return "\n".join(
            "".join(tile_symbol(row, col) for col in range(self._columns))
            for row in range(self._rows)
        )

    def __repr__(self) -> str:
        return (
            f"GridBoard(rows={self._rows}, columns={self._columns}, "
            f"mines={self.mines_count}, flags={self.flags_count})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridBoard):
            return NotImplemented
        return (
            self._mines == other._mines
            and self._uncovered == other._uncovered
            and self._flagged == other._flagged
        )

    def __hash__(self) -> int:
        return hash((self._mines, self._uncovered, self._flagged))

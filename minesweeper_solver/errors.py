"""Exceptions raised by the solver."""


class SolverError(Exception):
    """Base class for all solver errors."""


class SolveError(SolverError):
    """
    The board cannot be solved because the placed flags contradict the numbers.

    The solver assumes every flag covers a mine. When some region has no legal
    assignment under that assumption, the whole solve call is aborted with this
    error; results already streamed for earlier regions must be discarded.
    """


class BoardEndedError(SolverError, RuntimeError):
    """Solving was requested on a board that has already been won or lost."""

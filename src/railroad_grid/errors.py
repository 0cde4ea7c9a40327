"""Error types raised by railroad-grid.

Every error is fatal to the render in progress. Nothing in the core retries
or suppresses; isolating one failed rule from its siblings is the job of
:class:`railroad_grid.diagram.Diagram`.
"""

from __future__ import annotations


class RailroadError(Exception):
    """Base class for all railroad-grid errors."""


class InvalidState(RailroadError):
    """A path operation was invoked out of sequence."""


class UnsupportedTransition(RailroadError):
    """A turn was requested between headings that have no quarter arc."""


class MeasurementFailure(RailroadError):
    """The text measurer could not produce a usable width."""


class ExpressionSyntaxError(RailroadError, ValueError):
    """The expression source could not be parsed."""

    def __init__(self, message: str, src: str = "", pos: int = 0) -> None:
        self.pos = pos
        self.line = src.count("\n", 0, pos) + 1
        self.column = pos - (src.rfind("\n", 0, pos) + 1) + 1
        super().__init__(f"{message} (line {self.line}, column {self.column})")
        self.message = message

"""Exceptions raised by the stone graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from stonegraph.stones import Point, Stone


class StoneGraphError(Exception):
    """Base class for all stone graph errors."""


class OccupiedError(StoneGraphError, ValueError):
    """
    A stone was placed on a point that already holds one.

    Attributes:
        position (Point): The requested point
        stone (Stone): The stone already occupying it
    """

    def __init__(self, position: "Point", stone: "Stone"):
        super().__init__(f"position {tuple(position)} is already occupied by {stone}")
        self.position = position
        self.stone = stone


class NoSuchStoneError(StoneGraphError, LookupError):
    """A query referenced a stone that is not live on the board."""

    def __init__(self, message: str, position: Optional["Point"] = None):
        super().__init__(message)
        self.position = position


class InvalidAdjacencyStateError(StoneGraphError, AssertionError):
    """Internal invariant violation: an edge does not match the live stones."""

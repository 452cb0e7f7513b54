"""
Data model for the stone graph.

This module contains the value types shared by the board graph and the
group analyzer:
- Color: The two stone colors (an empty point is simply the absence of a stone)
- Point: A board coordinate on an unbounded integer lattice
- Stone: A colored stone occupying one point (a graph node)
- Edge: An undirected link between two adjacent same-colored stones
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from enum import IntEnum
from typing import NamedTuple, Sequence

from stonegraph.errors import InvalidAdjacencyStateError


class Color(IntEnum):
    """
    Stone color.

    The integer codes match the dense board codes in ``stonegraph.config``.
    There is no EMPTY member: an unoccupied point has no stone at all.
    """

    BLACK = 1
    WHITE = 2

    def opponent(self) -> "Color":
        """
        Return the opponent color.

        Returns:
            Color: WHITE for BLACK, BLACK for WHITE
        """
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    def __str__(self) -> str:
        return self.name.lower()


class Point(NamedTuple):
    """A board coordinate."""

    x: int
    y: int

    @classmethod
    def of(cls, position: Sequence[int]) -> "Point":
        """
        Normalize any (x, y) pair to a Point.

        This is the validating constructor: calling ``Point(x, y)`` directly
        does not check the coordinates, so board code always goes through
        ``Point.of``, even for existing Point instances.

        Args:
            position (Sequence[int]): Two integer coordinates

        Returns:
            Point: The normalized point

        Raises:
            TypeError: If the position is not a pair of integers
        """
        try:
            x, y = position
        except (TypeError, ValueError):
            raise TypeError(f"position must be an (x, y) pair, got {position!r}")
        # bool is an int subclass but never a coordinate
        for value in (x, y):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise TypeError(f"coordinates must be integers, got {position!r}")
        return cls(int(x), int(y))

    def is_adjacent(self, other: "Point") -> bool:
        """Check whether two points differ by exactly 1 along exactly one axis."""
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


@dataclass(frozen=True)
class Stone:
    """
    A stone placed on the board.

    Attributes:
        position (Point): Where the stone sits
        color (Color): Stone color
    """

    position: Point
    color: Color

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", Point.of(self.position))
        object.__setattr__(self, "color", Color(self.color))

    @property
    def label(self) -> str:
        """Node label used by presentation code, e.g. ``(1,2)``."""
        return f"({self.position.x},{self.position.y})"

    def __str__(self) -> str:
        return f"{self.label} {self.color}"


@dataclass(frozen=True)
class Edge:
    """
    Undirected connection between two orthogonally adjacent stones of one color.

    Endpoints are stored sorted by position, so ``Edge(a, b) == Edge(b, a)``.
    """

    a: Stone
    b: Stone

    def __post_init__(self) -> None:
        if self.a.color != self.b.color or not self.a.position.is_adjacent(
            self.b.position
        ):
            raise InvalidAdjacencyStateError(
                f"cannot link {self.a} and {self.b}: not same-colored neighbours"
            )
        if self.b.position < self.a.position:
            a, b = self.b, self.a
            object.__setattr__(self, "a", a)
            object.__setattr__(self, "b", b)

    @property
    def color(self) -> Color:
        return self.a.color

    def __iter__(self):
        yield self.a
        yield self.b

    def __contains__(self, stone: object) -> bool:
        return stone == self.a or stone == self.b

    def __str__(self) -> str:
        return f"{self.a.label} -- {self.b.label}"

"""
Board graph for a two-color stone grid.

Stones are the nodes of the graph. An edge joins two stones of the same
color that sit on orthogonally adjacent points. Edges are derived data:
they are discovered when a stone is placed and dropped when a captured
group is removed, and can never be set directly.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from stonegraph import config
from stonegraph.errors import (
    InvalidAdjacencyStateError,
    NoSuchStoneError,
    OccupiedError,
)
from stonegraph.stones import Color, Edge, Point, Stone

logger = logging.getLogger(__name__)


class BoardGraph:
    """
    Owns the placed stones and the adjacency edges between them.

    Stones are indexed by position, so occupancy and neighbour lookups
    are O(1). Both stones and edges keep their insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty board graph."""
        self._stones: Dict[Point, Stone] = {}
        self._edges: Dict[FrozenSet[Point], Edge] = {}

    # ======================
    # Basic utilities
    # ======================

    @staticmethod
    def adjacent_points(position) -> Tuple[Point, ...]:
        """
        Return the four orthogonal neighbours of a position.

        No board bounds are applied: the lattice is unbounded.

        Args:
            position (tuple[int, int]): Board coordinate

        Returns:
            tuple[Point, ...]: Neighbour coordinates
        """
        x, y = Point.of(position)
        return tuple(Point(x + dx, y + dy) for dx, dy in config.ORTHOGONAL_OFFSETS)

    def stone_at(self, position) -> Optional[Stone]:
        """
        Return the stone at a position, or None if the point is empty.

        Args:
            position (tuple[int, int]): Board coordinate

        Returns:
            Stone | None: The live stone at that point
        """
        return self._stones.get(Point.of(position))

    def is_empty(self, position) -> bool:
        return Point.of(position) not in self._stones

    def is_live(self, stone: Stone) -> bool:
        """Check that this exact stone (position and color) is on the board."""
        return self._stones.get(stone.position) == stone

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Stone):
            return self.is_live(item)
        try:
            return not self.is_empty(item)  # type: ignore[arg-type]
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._stones)

    def __iter__(self) -> Iterator[Stone]:
        return iter(tuple(self._stones.values()))

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    # ======================
    # Placement
    # ======================

    def place(self, position, color: Color | int) -> Stone:
        """
        Place a stone and link it to its same-colored orthogonal neighbours.

        The new node and all of its edges are computed first and then
        committed together, so the graph is never left half-updated.

        Args:
            position (tuple[int, int]): Board coordinate
            color (Color | int): Stone color

        Returns:
            Stone: The newly placed stone

        Raises:
            OccupiedError: If the position already holds a stone (nothing changes)
            ValueError: If the color is not BLACK or WHITE
            TypeError: If the position is not a pair of integers
        """
        point = Point.of(position)
        color = Color(color)

        occupant = self._stones.get(point)
        if occupant is not None:
            raise OccupiedError(point, occupant)

        stone = Stone(point, color)
        new_edges = [Edge(stone, neighbour) for neighbour in self.neighbors_of(stone)]

        self._stones[point] = stone
        for edge in new_edges:
            self._edges[self._edge_key(edge)] = edge

        logger.debug("Placed %s with %d new edge(s)", stone, len(new_edges))
        if config.CHECK_INVARIANTS:
            self.check_invariants()
        return stone

    def place_black(self, position) -> Stone:
        """Place a black stone."""
        return self.place(position, Color.BLACK)

    def place_white(self, position) -> Stone:
        """Place a white stone."""
        return self.place(position, Color.WHITE)

    # ======================
    # Adjacency
    # ======================

    def neighbors_of(self, stone: Stone) -> Set[Stone]:
        """
        Return the live same-colored stones orthogonally adjacent to a stone.

        The stone itself does not need to be on the board, which allows
        hypothetical placements to be inspected.

        Args:
            stone (Stone): Reference stone

        Returns:
            set[Stone]: Adjacent stones of the same color
        """
        neighbours: Set[Stone] = set()
        for point in self.adjacent_points(stone.position):
            other = self._stones.get(point)
            if other is not None and other.color == stone.color:
                neighbours.add(other)
        return neighbours

    def occupied_neighbours(self, position) -> Set[Stone]:
        """Return every live stone, of either color, orthogonally adjacent to a point."""
        return {
            self._stones[point]
            for point in self.adjacent_points(position)
            if point in self._stones
        }

    @staticmethod
    def _edge_key(edge: Edge) -> FrozenSet[Point]:
        return frozenset((edge.a.position, edge.b.position))

    # ======================
    # Removal
    # ======================

    def remove_group(self, points: Iterable) -> Set[Stone]:
        """
        Remove captured groups of stones and every edge touching them.

        Only complete groups without liberties may be removed: if a removed
        stone has a same-colored neighbour outside the given points, or an
        empty point next to it, nothing is removed.

        Args:
            points (Iterable[tuple[int, int]]): Positions of the stones to remove

        Returns:
            set[Stone]: The removed stones

        Raises:
            NoSuchStoneError: If a position holds no stone
            ValueError: If the positions split a group or still have a liberty
        """
        targets: Set[Point] = {Point.of(p) for p in points}

        removed: Set[Stone] = set()
        for point in targets:
            stone = self._stones.get(point)
            if stone is None:
                raise NoSuchStoneError(f"no stone at {tuple(point)}", point)
            removed.add(stone)

        for stone in removed:
            for neighbour in self.neighbors_of(stone):
                if neighbour.position not in targets:
                    raise ValueError(
                        f"cannot remove {stone}: connected stone {neighbour} "
                        "is not part of the removed group"
                    )
            for point in self.adjacent_points(stone.position):
                if point not in self._stones:
                    raise ValueError(
                        f"cannot remove {stone}: its group still has a liberty "
                        f"at {tuple(point)}"
                    )

        # Edges never cross groups, so both endpoints of an incident edge are removed
        stale_edges = [
            key for key in self._edges if not key.isdisjoint(targets)
        ]
        for key in stale_edges:
            del self._edges[key]
        for point in targets:
            del self._stones[point]

        logger.debug(
            "Removed %d stone(s) and %d edge(s)", len(removed), len(stale_edges)
        )
        if config.CHECK_INVARIANTS:
            self.check_invariants()
        return removed

    # ======================
    # Snapshots
    # ======================

    def all_nodes(self) -> Tuple[Stone, ...]:
        """Return the live stones in insertion order."""
        return tuple(self._stones.values())

    def all_edges(self) -> Tuple[Edge, ...]:
        """Return the live edges in insertion order."""
        return tuple(self._edges.values())

    def to_array(
        self,
        origin: Optional[Tuple[int, int]] = None,
        shape: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """
        Build a dense board snapshot.

        Cell ``[x - ox, y - oy]`` holds config.EMPTY, config.BLACK or
        config.WHITE. Without arguments the window is the bounding box of
        the live stones. Stones outside an explicit window are left out.

        Args:
            origin (tuple[int, int] | None): Coordinate mapped to index [0, 0]
            shape (tuple[int, int] | None): Window size along x and y

        Returns:
            np.ndarray: 2D array of color codes
        """
        if origin is None:
            if self._stones:
                origin = (
                    min(p.x for p in self._stones),
                    min(p.y for p in self._stones),
                )
            else:
                origin = (0, 0)
        ox, oy = origin

        if shape is None:
            if self._stones:
                shape = (
                    max(p.x for p in self._stones) - ox + 1,
                    max(p.y for p in self._stones) - oy + 1,
                )
            else:
                shape = (0, 0)
        width, height = shape
        if width < 0 or height < 0:
            raise ValueError(f"invalid snapshot shape {shape!r}")

        board = np.full((width, height), config.EMPTY, dtype=config.ARRAY_DTYPE)
        codes = {Color.BLACK: config.BLACK, Color.WHITE: config.WHITE}
        for point, stone in self._stones.items():
            i, j = point.x - ox, point.y - oy
            if 0 <= i < width and 0 <= j < height:
                board[i, j] = codes[stone.color]
        return board

    # ======================
    # Invariants
    # ======================

    def check_invariants(self) -> None:
        """
        Verify that the edge set matches the live stones exactly.

        Raises:
            InvalidAdjacencyStateError: On a stale, mismatched or missing edge
        """
        for key, edge in self._edges.items():
            for stone in edge:
                if not self.is_live(stone):
                    raise InvalidAdjacencyStateError(
                        f"edge {edge} references removed stone {stone}"
                    )
            if edge.a.color != edge.b.color:
                raise InvalidAdjacencyStateError(f"edge {edge} links two colors")
            if key != self._edge_key(edge):
                raise InvalidAdjacencyStateError(f"edge {edge} is misindexed")

        expected: List[FrozenSet[Point]] = []
        for stone in self._stones.values():
            for neighbour in self.neighbors_of(stone):
                if stone.position < neighbour.position:
                    expected.append(frozenset((stone.position, neighbour.position)))
        missing = [key for key in expected if key not in self._edges]
        if missing or len(expected) != len(self._edges):
            raise InvalidAdjacencyStateError(
                f"edge set out of sync: {len(missing)} missing, "
                f"{len(self._edges)} stored, {len(expected)} expected"
            )

    def __repr__(self) -> str:
        return f"BoardGraph(stones={len(self._stones)}, edges={len(self._edges)})"

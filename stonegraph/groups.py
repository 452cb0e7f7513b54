"""
Group and liberty analysis on a board graph.

This module contains the GroupAnalyzer, which implements the capture rules
on top of a BoardGraph:
- Group discovery (breadth-first search over same-colored adjacency)
- Liberty computation
- Capture resolution, opponent groups first, then self-capture
- Move play (placement followed by capture resolution)
"""

from __future__ import annotations

import logging
from collections import deque
from typing import FrozenSet, Iterable, List, Optional, Set

from stonegraph.errors import NoSuchStoneError, OccupiedError
from stonegraph.graph import BoardGraph
from stonegraph.stones import Color, Point, Stone

logger = logging.getLogger(__name__)

Group = FrozenSet[Stone]


class GroupAnalyzer:
    """
    Computes groups and liberties and applies captures to a board graph.

    The analyzer holds no state of its own besides the graph it works on;
    groups are computed on demand.
    """

    def __init__(self, graph: BoardGraph):
        """
        Args:
            graph (BoardGraph): The board to analyze and mutate
        """
        self.graph: BoardGraph = graph

    # ======================
    # Groups and liberties
    # ======================

    def find_group(self, seed: Stone) -> Set[Stone]:
        """
        Compute the group containing a stone.

        Uses a BFS over the adjacency relation starting from the seed.

        Args:
            seed (Stone): A live stone

        Returns:
            set[Stone]: Every stone connected to the seed, seed included

        Raises:
            NoSuchStoneError: If the seed is not on the board
        """
        if not self.graph.is_live(seed):
            raise NoSuchStoneError(f"{seed} is not on the board", seed.position)

        visited: Set[Stone] = {seed}
        queue: deque[Stone] = deque([seed])

        while queue:
            current = queue.popleft()
            for neighbour in self.graph.neighbors_of(current):
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)

        logger.debug("Group of %s has %d stone(s)", seed, len(visited))
        return visited

    def group_at(self, position) -> Set[Stone]:
        """
        Compute the group of the stone at a position.

        Raises:
            NoSuchStoneError: If the point is empty
        """
        stone = self.graph.stone_at(position)
        if stone is None:
            point = Point.of(position)
            raise NoSuchStoneError(f"no stone at {tuple(point)}", point)
        return self.find_group(stone)

    def liberties_of(self, group: Iterable[Stone]) -> Set[Point]:
        """
        Compute the liberties of a group.

        A point adjacent to several members is counted once.

        Args:
            group (Iterable[Stone]): Stones of one group

        Returns:
            set[Point]: Empty points orthogonally adjacent to the group
        """
        liberties: Set[Point] = set()
        for stone in group:
            for point in self.graph.adjacent_points(stone.position):
                if self.graph.is_empty(point):
                    liberties.add(point)
        return liberties

    def count_liberties(self, seed: Stone) -> int:
        """Return the number of liberties of the group containing seed."""
        return len(self.liberties_of(self.find_group(seed)))

    # ======================
    # Captures
    # ======================

    def _distinct_groups(self, seeds: Iterable[Stone]) -> List[Group]:
        groups: List[Group] = []
        for seed in seeds:
            if any(seed in group for group in groups):
                continue
            groups.append(frozenset(self.find_group(seed)))
        return groups

    def _capture_all(self, seeds: Iterable[Stone]) -> List[Group]:
        """Capture every zero-liberty group among seeds, judged on one snapshot."""
        doomed = [
            group for group in self._distinct_groups(seeds) if not self.liberties_of(group)
        ]
        # All doomed groups go in one removal, judged with each other still on the board
        if doomed:
            self.graph.remove_group(stone.position for group in doomed for stone in group)
        return doomed

    def resolve_captures(
        self, seeds: Iterable[Stone], played: Optional[Stone] = None
    ) -> List[Group]:
        """
        Remove every candidate group that has no liberties left.

        When the stone that was just played is given, groups of the other
        color are resolved first, all against the board as it was before
        any removal. Groups of the played color are evaluated afterwards,
        so a capture can give liberties back to the player's own group.
        Without a played stone every candidate is judged on one snapshot.

        Args:
            seeds (Iterable[Stone]): One stone per candidate group (duplicates are fine)
            played (Stone | None): The stone that was just placed

        Returns:
            list[frozenset[Stone]]: Captured groups, in resolution order

        Raises:
            NoSuchStoneError: If a seed is not on the board
        """
        seeds = list(seeds)
        if played is None:
            phases = [seeds]
        else:
            phases = [
                [s for s in seeds if s.color != played.color],
                [s for s in seeds if s.color == played.color],
            ]

        captured: List[Group] = []
        for phase in phases:
            captured.extend(self._capture_all(phase))
        return captured

    # ======================
    # Playing a move
    # ======================

    def play(self, position, color: Color | int) -> List[Group]:
        """
        Place a stone and resolve the captures it causes.

        Opponent groups touching the new stone are captured first; the
        player's own group is removed only if it still has no liberty
        afterwards (self-capture).

        Args:
            position (tuple[int, int]): Board coordinate
            color (Color | int): Stone color

        Returns:
            list[frozenset[Stone]]: Captured groups, opponents first

        Raises:
            OccupiedError: If the position already holds a stone
        """
        stone = self.graph.place(position, color)
        seeds = [stone] + [
            neighbour
            for neighbour in self.graph.occupied_neighbours(stone.position)
            if neighbour.color != stone.color
        ]
        captured = self.resolve_captures(seeds, played=stone)

        for group in captured:
            group_color = next(iter(group)).color
            if group_color == stone.color:
                logger.warning(
                    "Self-capture: %s removed its own group of %d stone(s)",
                    stone,
                    len(group),
                )
            else:
                logger.info(
                    "%s captured %d %s stone(s)", stone, len(group), group_color
                )
        return captured

    def would_self_capture(self, position, color: Color | int) -> bool:
        """
        Check whether playing at a position would remove the played group.

        The board is not modified.

        Args:
            position (tuple[int, int]): Board coordinate
            color (Color | int): Stone color

        Returns:
            bool: True if the move captures nothing and leaves its group without liberties

        Raises:
            OccupiedError: If the position already holds a stone
        """
        stone = Stone(Point.of(position), Color(color))
        occupant = self.graph.stone_at(stone.position)
        if occupant is not None:
            raise OccupiedError(stone.position, occupant)

        neighbours = self.graph.occupied_neighbours(stone.position)

        # Capturing any adjacent opponent group frees a point next to the stone
        opponents = [n for n in neighbours if n.color != stone.color]
        for group in self._distinct_groups(opponents):
            if not self.liberties_of(group) - {stone.position}:
                return False

        if any(self.graph.is_empty(p) for p in self.graph.adjacent_points(stone.position)):
            return False

        friends = [n for n in neighbours if n.color == stone.color]
        for group in self._distinct_groups(friends):
            if self.liberties_of(group) - {stone.position}:
                return False
        return True

"""
Stone placement grid (as in the game of Go) modelled as a graph.

Stones are nodes carrying a position and a color; edges join orthogonally
adjacent stones of the same color. Modules:
- stones.py: Color, Point, Stone, Edge
- graph.py: BoardGraph (node and edge maintenance)
- groups.py: GroupAnalyzer (groups, liberties, captures)
- errors.py: exception hierarchy
- config.py: constants and environment switches

Typical use::

    graph = BoardGraph()
    analyzer = GroupAnalyzer(graph)
    analyzer.play((1, 2), Color.BLACK)
"""

from stonegraph.errors import (
    InvalidAdjacencyStateError,
    NoSuchStoneError,
    OccupiedError,
    StoneGraphError,
)
from stonegraph.graph import BoardGraph
from stonegraph.groups import GroupAnalyzer
from stonegraph.stones import Color, Edge, Point, Stone

__all__ = [
    "BoardGraph",
    "Color",
    "Edge",
    "GroupAnalyzer",
    "InvalidAdjacencyStateError",
    "NoSuchStoneError",
    "OccupiedError",
    "Point",
    "Stone",
    "StoneGraphError",
]

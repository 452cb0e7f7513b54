"""
Configuration constants for the stone graph.

Values that depend on the environment are read once at import time.
"""

import os

# Dense board codes (see BoardGraph.to_array)
EMPTY: int = 0
BLACK: int = 1
WHITE: int = 2

ARRAY_DTYPE = "int8"

# Orthogonal neighbour offsets, no diagonals
ORTHOGONAL_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))

# Re-verify every edge after each mutation (slow, for debugging)
CHECK_INVARIANTS: bool = os.environ.get(
    "STONEGRAPH_CHECK_INVARIANTS", "0"
).strip().lower() in ("1", "true", "yes", "on")

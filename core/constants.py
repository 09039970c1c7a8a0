"""Constants and enums for the Yinsh rules engine."""

from enum import Enum


class Player(Enum):
    """The two players. BLACK always moves first."""

    BLACK = "B"
    WHITE = "W"

    @property
    def other(self) -> "Player":
        """Return the opponent."""
        return Player.WHITE if self is Player.BLACK else Player.BLACK


class ElementKind(Enum):
    """Kinds of pieces that can occupy a board square."""

    RING = "ring"
    MARKER = "marker"


class Direction(Enum):
    """The six hex directions, in cyclic order."""

    N = "N"
    NE = "NE"
    SE = "SE"
    S = "S"
    SW = "SW"
    NW = "NW"


class Phase(Enum):
    """Steps of a turn, in the order they normally occur."""

    PLACE_RING = "place_ring"
    PLACE_MARKER = "place_marker"
    SLIDE_RING = "slide_ring"
    SWAP_PENDING = "swap_pending"
    REMOVE_RUN = "remove_run"
    REMOVE_RING = "remove_ring"


# Cyclic order used by opposite()
DIRECTION_ORDER = [
    Direction.N,
    Direction.NE,
    Direction.SE,
    Direction.S,
    Direction.SW,
    Direction.NW,
]

# Unit vectors on the lattice
DIRECTION_VECTORS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.NE: (1, 1),
    Direction.SE: (1, 0),
    Direction.S: (0, -1),
    Direction.SW: (-1, -1),
    Direction.NW: (-1, 0),
}

# One representative direction per lattice axis, in the order runs are searched
RUN_AXES = [Direction.NW, Direction.N, Direction.NE]

# Inclusive column range for each of the eleven rows (row numbers start at 1)
ROW_RANGES: list[tuple[int, int]] = [
    (2, 5),
    (1, 7),
    (1, 8),
    (1, 9),
    (1, 10),
    (2, 10),
    (2, 11),
    (3, 11),
    (4, 11),
    (5, 11),
    (7, 10),
]

NUM_BOARD_POINTS = 85

# Pieces
RINGS_PER_PLAYER = 5
TOTAL_RINGS = 2 * RINGS_PER_PLAYER
RUN_LENGTH = 5

# Points needed to win. Only the optional win check reads this.
POINTS_FOR_WIN = 2

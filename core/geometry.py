"""Hex lattice geometry for the Yinsh board.

Coordinates are (row, column) pairs on a triangular lattice. Three axes
run through every point: constant row, constant column, and constant
row - column. The playable board is a fixed set of 85 points cut out of
that lattice; everything off that set is unreachable.

All functions here are pure.
"""

from __future__ import annotations

from itertools import count
from typing import Any, Iterator

from .constants import (
    Direction,
    DIRECTION_ORDER,
    DIRECTION_VECTORS,
    ROW_RANGES,
)


# Type alias for clarity
Coord = tuple[int, int]


def board_coordinates() -> list[Coord]:
    """Return all points on the board, row by row."""
    return [
        (row, col)
        for row, (first, last) in enumerate(ROW_RANGES, start=1)
        for col in range(first, last + 1)
    ]


BOARD_COORDINATES: frozenset[Coord] = frozenset(board_coordinates())


def is_on_board(coord: Any) -> bool:
    """Check if a value is one of the board points.

    Accepts any value so that untrusted input can be tested directly;
    anything that is not a pair of ints naming a board point is simply
    off-board. Floats and bools compare equal to ints, so they are ruled
    out before the lookup.
    """
    if not isinstance(coord, tuple) or len(coord) != 2:
        return False
    if not all(type(v) is int for v in coord):
        return False
    return coord in BOARD_COORDINATES


def vector(direction: Direction) -> Coord:
    """Return the unit step for a direction."""
    return DIRECTION_VECTORS[direction]


def opposite(direction: Direction) -> Direction:
    """Return the direction three steps around the cycle."""
    idx = DIRECTION_ORDER.index(direction)
    return DIRECTION_ORDER[(idx + 3) % len(DIRECTION_ORDER)]


def add(a: Coord, b: Coord) -> Coord:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Coord, b: Coord) -> Coord:
    return (a[0] - b[0], a[1] - b[1])


def dot(a: Coord, b: Coord) -> int:
    return a[0] * b[0] + a[1] * b[1]


def norm2(a: Coord) -> int:
    """Squared euclidean norm."""
    return a[0] * a[0] + a[1] * a[1]


def connected(a: Coord, b: Coord) -> bool:
    """Check if two points lie on a common lattice axis."""
    return a[0] == b[0] or a[1] == b[1] or a[0] - a[1] == b[0] - b[1]


def neighbors(coord: Coord) -> list[Coord]:
    """Return the on-board points one step away in any direction."""
    candidates = (add(coord, vector(d)) for d in DIRECTION_ORDER)
    return [c for c in candidates if c in BOARD_COORDINATES]


def reachable(coord: Coord) -> list[Coord]:
    """Return all board points on a common axis with coord (coord included)."""
    return [c for c in board_coordinates() if connected(coord, c)]


def adjacent(start: Coord, direction: Direction) -> Iterator[Coord]:
    """Yield start and then every lattice point along direction, forever.

    The ray is not clipped to the board; callers stop it themselves.
    """
    dr, dc = vector(direction)
    for step in count():
        yield (start[0] + step * dr, start[1] + step * dc)


def between(a: Coord, b: Coord, c: Coord) -> bool:
    """Check if c lies strictly between a and b on the line through them.

    Uses only integer arithmetic: c must be collinear with a and b
    (equality case of Cauchy-Schwarz) and closer to each endpoint than
    the endpoints are to each other.
    """
    ab = sub(b, a)
    ac = sub(c, a)
    bc = sub(c, b)
    n_ab = norm2(ab)
    return (
        n_ab * norm2(ac) == dot(ab, ac) ** 2
        and norm2(ac) < n_ab
        and norm2(bc) < n_ab
    )


def line_between(a: Coord, b: Coord) -> list[Coord]:
    """Return the lattice points strictly between a and b, ordered from a.

    Raises:
        ValueError: If a and b do not share a lattice axis.
    """
    if not connected(a, b):
        raise ValueError(f"{a} and {b} are not on a common axis")

    dr, dc = sub(b, a)
    steps = max(abs(dr), abs(dc))
    if steps == 0:
        return []
    unit = (dr // steps, dc // steps)
    return [
        (a[0] + i * unit[0], a[1] + i * unit[1])
        for i in range(1, steps)
    ]

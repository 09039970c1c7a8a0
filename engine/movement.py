"""Ring movement for the Yinsh rules engine.

A ring moves in a straight line along one of the six directions:
- It may stop on any free point before it reaches a marker
- It can never pass over or land on another ring, or leave the board
- On reaching markers it must jump the whole contiguous block and stop
  on the first free point right after it

Markers jumped over are flipped to the other player (flip_markers).
"""

from __future__ import annotations

from core.constants import DIRECTION_ORDER, Direction
from core.board import Board
from core.geometry import Coord, BOARD_COORDINATES, add, line_between, vector


def destinations_in_direction(board: Board, origin: Coord, direction: Direction) -> list[Coord]:
    """Return the points a ring at origin may move to along one direction.

    Args:
        board: Current board (not modified).
        origin: Where the ring starts.
        direction: Direction of travel.

    Returns:
        Destinations ordered by distance from origin.
    """
    rings = board.all_rings()
    markers = board.all_markers()
    destinations: list[Coord] = []
    jumped = False

    current = add(origin, vector(direction))
    while current in BOARD_COORDINATES and current not in rings:
        if current in markers:
            jumped = True
        else:
            destinations.append(current)
            if jumped:
                # A ring stops on the first free point after a jump
                break
        current = add(current, vector(direction))

    return destinations


def valid_destinations(board: Board, origin: Coord) -> set[Coord]:
    """Return every point a ring at origin may legally move to."""
    return {
        coord
        for direction in DIRECTION_ORDER
        for coord in destinations_in_direction(board, origin, direction)
    }


def flip_markers(board: Board, start: Coord, end: Coord) -> Board:
    """Flip every marker strictly between start and end.

    Free points on the line are skipped.

    Raises:
        ValueError: If start and end are not on a common axis.
    """
    for coord in line_between(start, end):
        element = board.element_at(coord)
        if element is not None and element.is_marker():
            board = board.replace(coord, element.flipped())
    return board

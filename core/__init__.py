"""Core data models for the Yinsh rules engine."""

from .constants import (
    Player,
    ElementKind,
    Direction,
    Phase,
    DIRECTION_ORDER,
    DIRECTION_VECTORS,
    RUN_AXES,
    ROW_RANGES,
    NUM_BOARD_POINTS,
    RINGS_PER_PLAYER,
    TOTAL_RINGS,
    RUN_LENGTH,
    POINTS_FOR_WIN,
)

from .geometry import (
    Coord,
    BOARD_COORDINATES,
    board_coordinates,
    is_on_board,
    vector,
    opposite,
    connected,
    neighbors,
    reachable,
    adjacent,
    between,
    line_between,
)

from .board import Element, Board

from .game_state import TurnPhase, GameState

__all__ = [
    # Constants
    "Player",
    "ElementKind",
    "Direction",
    "Phase",
    "DIRECTION_ORDER",
    "DIRECTION_VECTORS",
    "RUN_AXES",
    "ROW_RANGES",
    "NUM_BOARD_POINTS",
    "RINGS_PER_PLAYER",
    "TOTAL_RINGS",
    "RUN_LENGTH",
    "POINTS_FOR_WIN",
    # Geometry
    "Coord",
    "BOARD_COORDINATES",
    "board_coordinates",
    "is_on_board",
    "vector",
    "opposite",
    "connected",
    "neighbors",
    "reachable",
    "adjacent",
    "between",
    "line_between",
    # Board
    "Element",
    "Board",
    # Game State
    "TurnPhase",
    "GameState",
]

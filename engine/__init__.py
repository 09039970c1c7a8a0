"""Game engine for the Yinsh rules engine.

This module provides the game logic including:
- Run detection and ring movement rules
- Turn state machine (apply_interaction)
- Game engine for driving a game session
"""

from .runs import (
    zip_alternate,
    has_run,
    part_of_run,
    run_coordinates,
)

from .movement import (
    valid_destinations,
    flip_markers,
)

from .phase_machine import (
    PHASE_TRANSITIONS,
    Rejected,
    InteractionResult,
    apply_interaction,
    is_rejected,
    legal_targets,
)

from .config import EngineConfig

from .game_engine import (
    GameEngine,
    StepResult,
    winner,
)

__all__ = [
    # Rules
    "zip_alternate",
    "has_run",
    "part_of_run",
    "run_coordinates",
    "valid_destinations",
    "flip_markers",
    # Phase machine
    "PHASE_TRANSITIONS",
    "Rejected",
    "InteractionResult",
    "apply_interaction",
    "is_rejected",
    "legal_targets",
    # Game engine
    "EngineConfig",
    "GameEngine",
    "StepResult",
    "winner",
]

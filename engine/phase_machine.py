"""Turn state machine for the Yinsh rules engine.

A turn is a fixed sequence of steps, each driven by one point the player
selects on the board:
- PLACE_RING: opening, players alternate placing rings until all are down
- PLACE_MARKER: the player picks one of their rings and leaves a marker in it
- SLIDE_RING: the picked ring moves, flipping the markers it jumps
- SWAP_PENDING: hands control back to the player who completed a run
- REMOVE_RUN: that player picks a marker of the run to take it off
- REMOVE_RING: that player takes one of their rings off and scores a point

apply_interaction() checks the selected point against the current step
and returns either the next GameState or a Rejected value. All checks run
before anything changes, so a rejection never leaves partial effects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Union

from core.constants import Phase, TOTAL_RINGS
from core.board import Element
from core.game_state import GameState, TurnPhase
from core.geometry import Coord, board_coordinates, is_on_board

from .movement import flip_markers, valid_destinations
from .runs import has_run, part_of_run, run_coordinates

logger = logging.getLogger(__name__)


# Valid phase transitions
PHASE_TRANSITIONS: dict[Phase, list[Phase]] = {
    # Opening: repeated until every ring is on the board
    Phase.PLACE_RING: [Phase.PLACE_RING, Phase.PLACE_MARKER],
    # Regular turn
    Phase.PLACE_MARKER: [Phase.SLIDE_RING],
    Phase.SLIDE_RING: [Phase.PLACE_MARKER, Phase.SWAP_PENDING],
    # Run completed: hand back to the scoring player, then remove run and ring
    Phase.SWAP_PENDING: [Phase.REMOVE_RUN],
    Phase.REMOVE_RUN: [Phase.REMOVE_RING],
    Phase.REMOVE_RING: [Phase.PLACE_MARKER],
}


@dataclass(frozen=True)
class Rejected:
    """Outcome of an interaction that failed the current phase's check.

    Attributes:
        state: The input state, unchanged.
        reason: Description of why the interaction was rejected.
    """

    state: GameState
    reason: str


InteractionResult = Union[GameState, Rejected]


# =============================================================================
# Phase handlers
# =============================================================================


def _place_ring(state: GameState, target: Any) -> InteractionResult:
    if not is_on_board(target):
        return Rejected(state, f"{target!r} is not a point on the board")
    if not state.board.is_free(target):
        return Rejected(state, f"{target} is already occupied")

    board = state.board.place(target, Element.ring(state.active_player))
    next_phase = (
        TurnPhase.place_ring()
        if board.ring_count() < TOTAL_RINGS
        else TurnPhase.place_marker()
    )
    return replace(
        state,
        active_player=state.active_player.other,
        phase=next_phase,
        board=board,
    )


def _place_marker(state: GameState, target: Any) -> InteractionResult:
    if not is_on_board(target) or target not in state.active_rings():
        return Rejected(
            state, f"{target!r} is not a ring of player {state.active_player.value}"
        )

    board = state.board.replace(target, Element.marker(state.active_player))
    return replace(state, phase=TurnPhase.slide_ring(target), board=board)


def _slide_ring(state: GameState, target: Any) -> InteractionResult:
    origin = state.phase.origin
    if not is_on_board(target) or target not in valid_destinations(state.board, origin):
        return Rejected(state, f"The ring at {origin} cannot move to {target!r}")

    player = state.active_player
    flipped = flip_markers(state.board, origin, target)
    board = flipped.place(target, Element.ring(player))
    next_phase = (
        TurnPhase.swap_pending()
        if has_run(board.markers(player))
        else TurnPhase.place_marker()
    )
    return replace(
        state,
        active_player=player.other,
        phase=next_phase,
        board=board,
    )


def _swap_pending(state: GameState, target: Any) -> InteractionResult:
    # Takes no input: the target is ignored
    return replace(
        state,
        active_player=state.active_player.other,
        phase=TurnPhase.remove_run(),
    )


def _remove_run(state: GameState, target: Any) -> InteractionResult:
    markers = state.active_markers()
    if not is_on_board(target) or not part_of_run(markers, target):
        return Rejected(
            state,
            f"{target!r} is not part of a run of player {state.active_player.value}",
        )

    board = state.board
    for coord in run_coordinates(markers, target):
        board = board.remove(coord)
    return replace(state, phase=TurnPhase.remove_ring(), board=board)


def _remove_ring(state: GameState, target: Any) -> InteractionResult:
    if not is_on_board(target) or target not in state.active_rings():
        return Rejected(
            state, f"{target!r} is not a ring of player {state.active_player.value}"
        )

    player = state.active_player
    scored = state.with_point_for(player)
    return replace(
        scored,
        active_player=player.other,
        phase=TurnPhase.place_marker(),
        board=state.board.remove(target),
    )


_HANDLERS: dict[Phase, Callable[[GameState, Any], InteractionResult]] = {
    Phase.PLACE_RING: _place_ring,
    Phase.PLACE_MARKER: _place_marker,
    Phase.SLIDE_RING: _slide_ring,
    Phase.SWAP_PENDING: _swap_pending,
    Phase.REMOVE_RUN: _remove_run,
    Phase.REMOVE_RING: _remove_ring,
}


# =============================================================================
# Public interface
# =============================================================================


def apply_interaction(state: GameState, target: Optional[Coord] = None) -> InteractionResult:
    """Apply the player's selected point to the current phase.

    Args:
        state: The current game state (never modified).
        target: The selected point. Any value is accepted; values that are
            not board points are rejected. Ignored in SWAP_PENDING, where
            None may be passed.

    Returns:
        The next GameState, or Rejected carrying the unchanged state.
    """
    # Decoded JSON gives lists
    if isinstance(target, list):
        target = tuple(target)

    current = state.phase.kind
    result = _HANDLERS[current](state, target)

    if isinstance(result, Rejected):
        logger.debug(
            f"Rejected {target!r} for player {state.active_player.value} "
            f"in {state.phase}: {result.reason}"
        )
        return result

    assert result.phase.kind in PHASE_TRANSITIONS[current], (
        f"Illegal transition {current.value} -> {result.phase.kind.value}"
    )
    logger.debug(
        f"Player {state.active_player.value} {state.phase} -> {result.phase} "
        f"at {target}, next player {result.active_player.value}"
    )
    return result


def is_rejected(result: InteractionResult) -> bool:
    """Check if an interaction result is a rejection."""
    return isinstance(result, Rejected)


def legal_targets(state: GameState) -> set[Coord]:
    """Return every point the current phase would accept.

    SWAP_PENDING takes no input and yields an empty set.
    """
    kind = state.phase.kind
    board = state.board

    if kind == Phase.PLACE_RING:
        return {c for c in board_coordinates() if board.is_free(c)}
    if kind in (Phase.PLACE_MARKER, Phase.REMOVE_RING):
        return set(state.active_rings())
    if kind == Phase.SLIDE_RING:
        return valid_destinations(board, state.phase.origin)
    if kind == Phase.REMOVE_RUN:
        markers = state.active_markers()
        return {c for c in markers if part_of_run(markers, c)}
    return set()

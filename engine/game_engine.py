"""Main game engine for the Yinsh rules engine.

The GameEngine owns "the current game state" for one game and feeds it
the players' selections one at a time. It provides:
- reset(): Start a new game (or resume from a given state)
- step(): Apply a selected point and advance the game state
- legal_targets(): Points the current phase would accept

The rules themselves live in phase_machine.apply_interaction; the engine
adds session concerns on top: auto-advancing SWAP_PENDING and the
optional win check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from core.constants import Phase, Player, POINTS_FOR_WIN
from core.game_state import GameState
from core.geometry import Coord

from .config import EngineConfig
from .phase_machine import Rejected, apply_interaction, legal_targets

logger = logging.getLogger(__name__)


def winner(state: GameState, points_for_win: int = POINTS_FOR_WIN) -> Optional[Player]:
    """Return the player who has reached points_for_win, if any.

    This check is layered on top of the state machine, which never ends
    a game by itself. BLACK is checked first; both players cannot reach
    the threshold on the same step since each step scores at most once.
    """
    for player in Player:
        if state.score(player) >= points_for_win:
            return player
    return None


@dataclass
class StepResult:
    """Result of executing a step in the game.

    Attributes:
        success: Whether the selection was accepted.
        state: The game state after the step (unchanged on failure).
        done: Whether the game has ended under the optional win check.
        info: Additional information about the step.
    """

    success: bool
    state: GameState
    done: bool
    info: dict[str, Any]


class GameEngine:
    """Session driver for a single Yinsh game.

    Usage:
        engine = GameEngine()
        engine.reset()

        while not engine.is_game_over():
            target = wait_for_click()  # UI or transport collaborator
            result = engine.step(target)
            if not result.success:
                show_error(result.info["error"])

    Not thread-safe: the owner must serialize calls to step().
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize the game engine.

        Args:
            config: Engine settings. Defaults to EngineConfig().
        """
        self.config = config if config is not None else EngineConfig()
        self._state: Optional[GameState] = None

    @property
    def state(self) -> GameState:
        """Get the current game state.

        Raises:
            RuntimeError: If the game has not been initialized.
        """
        if self._state is None:
            raise RuntimeError("Game not initialized. Call reset() first.")
        return self._state

    @property
    def phase(self) -> Phase:
        """Get the kind of the current phase."""
        return self.state.phase.kind

    @property
    def active_player(self) -> Player:
        return self.state.active_player

    def winner(self) -> Optional[Player]:
        """Return the winner under the configured threshold, if any."""
        if self.config.points_for_win is None:
            return None
        return winner(self.state, self.config.points_for_win)

    def is_game_over(self) -> bool:
        """Check if the game has ended under the optional win check."""
        return self._state is not None and self.winner() is not None

    # -------------------------------------------------------------------------
    # Game Initialization
    # -------------------------------------------------------------------------

    def reset(self, state: Optional[GameState] = None) -> GameState:
        """Start a new game.

        Args:
            state: Optional state to resume from (e.g. a loaded snapshot).
                If None, starts from the initial state.

        Returns:
            The current game state.
        """
        self._state = state if state is not None else GameState.create_initial_state()
        if self.config.auto_advance_swap and self._state.phase.kind == Phase.SWAP_PENDING:
            self._state = self._advance_swap(self._state)
        return self._state

    # -------------------------------------------------------------------------
    # Step Execution
    # -------------------------------------------------------------------------

    def step(self, target: Optional[Coord] = None) -> StepResult:
        """Apply a selected point to the current game state.

        Args:
            target: The point the active player selected.

        Returns:
            StepResult with the outcome of the selection.
        """
        state = self.state
        if self.is_game_over():
            return StepResult(
                success=False,
                state=state,
                done=True,
                info={"error": "Game has ended - no further moves"},
            )

        result = apply_interaction(state, target)
        if isinstance(result, Rejected):
            return StepResult(
                success=False,
                state=state,
                done=False,
                info={"error": result.reason},
            )

        info: dict[str, Any] = {
            "player": state.active_player.value,
            "target": target,
            "auto_advanced": False,
        }
        if self.config.auto_advance_swap and result.phase.kind == Phase.SWAP_PENDING:
            result = self._advance_swap(result)
            info["auto_advanced"] = True

        if self.config.validate_states:
            for error in result.validate():
                logger.warning(f"Inconsistent game state after {target}: {error}")

        self._state = result
        info["phase"] = str(result.phase)
        info["active_player"] = result.active_player.value

        done = self.is_game_over()
        if done:
            logger.info(
                f"Player {self.winner().value} wins "
                f"(B={result.score_black}, W={result.score_white})"
            )

        return StepResult(success=True, state=result, done=done, info=info)

    def legal_targets(self) -> set[Coord]:
        """Return every point the current phase would accept."""
        if self.is_game_over():
            return set()
        return legal_targets(self.state)

    def _advance_swap(self, state: GameState) -> GameState:
        """Resolve SWAP_PENDING, which needs no input."""
        result = apply_interaction(state, None)
        # SWAP_PENDING has no guard
        assert not isinstance(result, Rejected), result.reason
        return result

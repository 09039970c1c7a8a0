"""Game state for the Yinsh rules engine.

GameState is the single source of truth for a game in progress. It is
an immutable value: every accepted interaction produces a new GameState
and the previous one stays valid, so snapshots can be kept or shared
freely. It also provides serialization and state hashing for transport
and storage collaborators.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .constants import (
    ElementKind,
    Phase,
    Player,
    RINGS_PER_PLAYER,
)
from .board import Board, Element
from .geometry import Coord, is_on_board


@dataclass(frozen=True)
class TurnPhase:
    """The current step of a turn.

    SLIDE_RING carries the coordinate of the ring that is about to move;
    no other phase carries a coordinate. Construction enforces this, so a
    SLIDE_RING phase without an origin cannot exist.

    Attributes:
        kind: Which step of the turn this is.
        origin: The moving ring's coordinate (SLIDE_RING only).
    """

    kind: Phase
    origin: Optional[Coord] = None

    def __post_init__(self) -> None:
        if self.kind == Phase.SLIDE_RING and self.origin is None:
            raise ValueError("SLIDE_RING phase requires an origin")
        if self.kind != Phase.SLIDE_RING and self.origin is not None:
            raise ValueError(f"{self.kind.value} phase does not take an origin")
        if self.origin is not None and not isinstance(self.origin, tuple):
            # Frozen: bypass __setattr__
            object.__setattr__(self, "origin", tuple(self.origin))

    @classmethod
    def place_ring(cls) -> TurnPhase:
        return cls(Phase.PLACE_RING)

    @classmethod
    def place_marker(cls) -> TurnPhase:
        return cls(Phase.PLACE_MARKER)

    @classmethod
    def slide_ring(cls, origin: Coord) -> TurnPhase:
        return cls(Phase.SLIDE_RING, tuple(origin))

    @classmethod
    def swap_pending(cls) -> TurnPhase:
        return cls(Phase.SWAP_PENDING)

    @classmethod
    def remove_run(cls) -> TurnPhase:
        return cls(Phase.REMOVE_RUN)

    @classmethod
    def remove_ring(cls) -> TurnPhase:
        return cls(Phase.REMOVE_RING)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.kind.value,
            "origin": list(self.origin) if self.origin is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TurnPhase:
        """Rebuild a phase from to_dict() output.

        Raises:
            ValueError: If the name is unknown or the origin does not
                match the phase kind.
        """
        kind = Phase(data["name"])
        origin = data.get("origin")
        return cls(kind, tuple(origin) if origin is not None else None)

    def __str__(self) -> str:
        if self.origin is not None:
            return f"{self.kind.value}{self.origin}"
        return self.kind.value


@dataclass(frozen=True)
class GameState:
    """The complete game state.

    Attributes:
        active_player: The player whose input the current phase expects.
        phase: Current step of the turn.
        board: Current placement of rings and markers.
        score_black: Rings removed by BLACK so far.
        score_white: Rings removed by WHITE so far.
    """

    active_player: Player = Player.BLACK
    phase: TurnPhase = field(default_factory=TurnPhase.place_ring)
    board: Board = field(default_factory=Board.empty)
    score_black: int = 0
    score_white: int = 0

    @classmethod
    def create_initial_state(cls) -> GameState:
        """Create the state at the start of a game.

        Empty board, ring placement phase, BLACK to move, no points.
        """
        return cls(
            active_player=Player.BLACK,
            phase=TurnPhase.place_ring(),
            board=Board.empty(),
            score_black=0,
            score_white=0,
        )

    # -------------------------------------------------------------------------
    # Access helpers
    # -------------------------------------------------------------------------

    def score(self, player: Player) -> int:
        """Return a player's points."""
        return self.score_black if player == Player.BLACK else self.score_white

    def with_point_for(self, player: Player) -> GameState:
        """Return a copy with one point added to player's score."""
        if player == Player.BLACK:
            return replace(self, score_black=self.score_black + 1)
        return replace(self, score_white=self.score_white + 1)

    def active_rings(self) -> frozenset[Coord]:
        return self.board.rings(self.active_player)

    def active_markers(self) -> frozenset[Coord]:
        return self.board.markers(self.active_player)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the game state to a dictionary.

        All fields are preserved, including the SLIDE_RING origin, so
        from_dict(to_dict()) gives back an equal state.

        Returns:
            Dictionary representation of the game state.
        """
        return {
            "active_player": self.active_player.value,
            "phase": self.phase.to_dict(),
            "board": [
                {
                    "coord": list(coord),
                    "kind": element.kind.value,
                    "owner": element.owner.value,
                }
                for coord, element in sorted(self.board.elements().items())
            ],
            "score_black": self.score_black,
            "score_white": self.score_white,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        """Deserialize a game state produced by to_dict().

        No rule validation is done here; see validate() and
        data.loader.StateLoader for checked loading.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If an enum value is unknown, the phase is
                malformed, or two elements share a coordinate.
        """
        elements: dict[Coord, Element] = {}
        for entry in data["board"]:
            coord = tuple(entry["coord"])
            if coord in elements:
                raise ValueError(f"Duplicate board entry at {coord}")
            elements[coord] = Element(
                ElementKind(entry["kind"]),
                Player(entry["owner"]),
            )

        return cls(
            active_player=Player(data["active_player"]),
            phase=TurnPhase.from_dict(data["phase"]),
            board=Board.from_elements(elements),
            score_black=int(data["score_black"]),
            score_white=int(data["score_white"]),
        )

    def state_hash(self) -> str:
        """Compute a hash of the game state.

        Returns:
            A hex string hash of the serialized state.
        """
        state_json = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(state_json.encode()).hexdigest()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> list[str]:
        """Validate the game state for consistency.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: list[str] = []

        for coord in self.board.elements():
            if not is_on_board(coord):
                errors.append(f"Element at off-board coordinate {coord}")

        for player in Player:
            num_rings = len(self.board.rings(player))
            if num_rings > RINGS_PER_PLAYER:
                errors.append(
                    f"Player {player.value} has {num_rings} rings "
                    f"(max {RINGS_PER_PLAYER})"
                )
            if self.score(player) < 0:
                errors.append(f"Negative score for player {player.value}: {self.score(player)}")
            if self.score(player) + num_rings > RINGS_PER_PLAYER:
                errors.append(
                    f"Player {player.value} has {num_rings} rings on the board "
                    f"and {self.score(player)} removed (max {RINGS_PER_PLAYER} total)"
                )

        # The moving ring has not been placed yet; its marker marks the origin
        if self.phase.kind == Phase.SLIDE_RING:
            origin = self.phase.origin
            if self.board.element_at(origin) != Element.marker(self.active_player):
                errors.append(
                    f"Slide origin {origin} does not hold a marker of "
                    f"player {self.active_player.value}"
                )

        return errors

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        lines = [
            f"GameState(phase={self.phase}, active={self.active_player.value})",
            f"  Score: B={self.score_black} W={self.score_white}",
        ]
        for player in Player:
            lines.append(
                f"  {player.value}: rings={sorted(self.board.rings(player))}, "
                f"markers={sorted(self.board.markers(player))}"
            )
        return "\n".join(lines)

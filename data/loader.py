"""Game state loader for the Yinsh rules engine.

Loads and validates game state snapshots from JSON files, converting
them into GameState instances. The JSON layout is the one produced by
GameState.to_dict().
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import ElementKind, Phase, Player
from core.game_state import GameState
from core.geometry import is_on_board


def resource_path(relative_path: str) -> Path:
    """Get absolute path to a file bundled in the data/ directory."""
    return Path(__file__).parent / relative_path


class StateLoadError(Exception):
    """Raised when state loading or validation fails."""
    pass


class StateLoader:
    """Loads and validates game states from JSON files."""

    REQUIRED_FIELDS = ["active_player", "phase", "board", "score_black", "score_white"]

    def __init__(self, strict: bool = True):
        """Initialize the loader.

        Args:
            strict: If True, also reject states that fail
                    GameState.validate() (too many rings, etc.).
                    Set to False for hand-built test positions.
        """
        self.strict = strict

    def load_from_file(self, file_path: str | Path) -> GameState:
        """Load a game state from a JSON file.

        Args:
            file_path: Path to the JSON state file.

        Returns:
            The loaded GameState.

        Raises:
            StateLoadError: If the file cannot be read or parsed.
            StateLoadError: If validation fails.
        """
        path = Path(file_path)

        if not path.exists():
            raise StateLoadError(f"State file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StateLoadError(f"Invalid JSON in state file: {e}")
        except IOError as e:
            raise StateLoadError(f"Error reading state file: {e}")

        return self.load_from_dict(data)

    def load_from_dict(self, data: dict[str, Any]) -> GameState:
        """Load a game state from a dictionary.

        Args:
            data: Dictionary in the GameState.to_dict() layout.

        Returns:
            The loaded GameState.

        Raises:
            StateLoadError: If validation fails.
        """
        self._validate_structure(data)

        try:
            state = GameState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StateLoadError(f"Invalid game state: {e}")

        if self.strict:
            errors = state.validate()
            if errors:
                raise StateLoadError(f"Inconsistent game state: {'; '.join(errors)}")

        return state

    def _validate_structure(self, data: Any) -> None:
        """Validate the basic structure of the state data."""
        if not isinstance(data, dict):
            raise StateLoadError("State data must be a dictionary")

        for field in self.REQUIRED_FIELDS:
            if field not in data:
                raise StateLoadError(f"State data missing '{field}' key")

        valid_players = [p.value for p in Player]
        if data["active_player"] not in valid_players:
            raise StateLoadError(
                f"Invalid active player {data['active_player']!r}. "
                f"Valid players: {valid_players}"
            )

        phase = data["phase"]
        if not isinstance(phase, dict) or "name" not in phase:
            raise StateLoadError("'phase' must be a dictionary with a 'name' key")
        valid_phases = [p.value for p in Phase]
        if phase["name"] not in valid_phases:
            raise StateLoadError(
                f"Invalid phase {phase['name']!r}. Valid phases: {valid_phases}"
            )
        if phase.get("origin") is not None:
            self._validate_coord(phase["origin"], "phase origin")

        for field in ("score_black", "score_white"):
            if not isinstance(data[field], int) or isinstance(data[field], bool):
                raise StateLoadError(f"'{field}' must be an integer")

        if not isinstance(data["board"], list):
            raise StateLoadError("'board' must be a list")

        valid_kinds = [k.value for k in ElementKind]
        for entry in data["board"]:
            if not isinstance(entry, dict):
                raise StateLoadError("Board entries must be dictionaries")
            for field in ("coord", "kind", "owner"):
                if field not in entry:
                    raise StateLoadError(f"Board entry missing required field: {field}")
            self._validate_coord(entry["coord"], "board entry")
            if entry["kind"] not in valid_kinds:
                raise StateLoadError(
                    f"Invalid element kind {entry['kind']!r} at {entry['coord']}. "
                    f"Valid kinds: {valid_kinds}"
                )
            if entry["owner"] not in valid_players:
                raise StateLoadError(
                    f"Invalid owner {entry['owner']!r} at {entry['coord']}"
                )

    def _validate_coord(self, value: Any, context: str) -> None:
        """Check that value is a [row, column] pair on the board."""
        if (
            not isinstance(value, list)
            or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
        ):
            raise StateLoadError(f"Invalid coordinate in {context}: {value!r}")
        if not is_on_board(tuple(value)):
            raise StateLoadError(f"Off-board coordinate in {context}: {value}")


def load_state(file_path: str | Path, strict: bool = True) -> GameState:
    """Convenience function to load a game state from a file.

    Args:
        file_path: Path to the JSON state file.
        strict: If True, enforce rule consistency checks.

    Returns:
        The loaded GameState.
    """
    loader = StateLoader(strict=strict)
    return loader.load_from_file(file_path)


def save_state(state: GameState, file_path: str | Path) -> Path:
    """Write a game state to a JSON file.

    Args:
        state: The state to save.
        file_path: Destination path. Parent directories must exist.

    Returns:
        The path written.
    """
    path = Path(file_path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.to_dict(), f, indent=2)
        f.write("\n")
    return path


def load_sample_state() -> GameState:
    """Load the bundled sample position.

    Five rings per player and a few markers, BLACK to place a marker.

    Raises:
        StateLoadError: If the sample file is missing or invalid.
    """
    return load_state(resource_path("sample_position.json"), strict=True)

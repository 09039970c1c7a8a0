"""Configuration for the Yinsh game engine.

Rule constants (board shape, ring and run counts) live in
core.constants and are not configurable. This module only covers how
the GameEngine drives the state machine.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from core.constants import POINTS_FOR_WIN


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EngineConfig:
    """Settings for a GameEngine session.

    Attributes:
        auto_advance_swap: Resolve the SWAP_PENDING phase immediately after
            the slide that produced it, so callers never see it.
        points_for_win: Score that ends the game in the optional win check.
            None disables the check and play continues indefinitely.
        validate_states: Run GameState.validate() after every accepted step
            and log any problems found.
    """

    auto_advance_swap: bool = True
    points_for_win: Optional[int] = POINTS_FOR_WIN
    validate_states: bool = False

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from environment variables.

        YINSH_AUTO_ADVANCE_SWAP and YINSH_VALIDATE_STATES are boolean flags.
        YINSH_POINTS_FOR_WIN is an integer; "0" or "none" disables the win
        check.

        Raises:
            ValueError: If YINSH_POINTS_FOR_WIN is not an integer.
        """
        points: Optional[int] = POINTS_FOR_WIN
        raw_points = os.getenv("YINSH_POINTS_FOR_WIN", "").strip()
        if raw_points:
            if raw_points.lower() == "none":
                points = None
            else:
                try:
                    points = int(raw_points)
                except ValueError:
                    raise ValueError(
                        f"YINSH_POINTS_FOR_WIN must be an integer, got {raw_points!r}"
                    )
                if points <= 0:
                    points = None

        return cls(
            auto_advance_swap=_env_flag("YINSH_AUTO_ADVANCE_SWAP", True),
            points_for_win=points,
            validate_states=_env_flag("YINSH_VALIDATE_STATES", False),
        )

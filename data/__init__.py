"""Data loading utilities for the Yinsh rules engine."""

from .loader import (
    StateLoadError,
    StateLoader,
    load_state,
    save_state,
    load_sample_state,
    resource_path,
)

__all__ = [
    "StateLoadError",
    "StateLoader",
    "load_state",
    "save_state",
    "load_sample_state",
    "resource_path",
]

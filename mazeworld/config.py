"""Central configuration for mazeworld.

Game constants live here as plain module values. A few runtime settings can
be overridden through environment variables; invalid values fall back to the
default silently.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple


def _get_int_env(name: str, default: Optional[int], minval: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


# ---------------- Board geometry ----------------
MAZE_SIZE: int = 11
WORLD_SIZE: int = 5
MIN_MAZE_SIZE: int = 5

# Checkpoints per maze, independent of maze size
CHECKPOINT_COUNT: int = 6

# The player always starts in maze (0, 1); the final exit never lives there
START_MAZE: Tuple[int, int] = (0, 1)
FALLBACK_EXIT_MAZE: Tuple[int, int] = (0, 2)

# Used when a maze has no interior path cell to place the player on
FALLBACK_PLAYER_CELL: Tuple[int, int] = (1, 1)


# ---------------- Persistence ----------------
BEST_TIME_KEY = "mazeBestTime"
THEME_KEY = "theme"
THEMES = ("dark", "light")

ENV_STORE = "MAZEWORLD_STORE"
DEFAULT_STORE_PATH = Path("data/mazeworld.json")


def get_store_path() -> Path:
    """Path of the JSON preferences file. Var: MAZEWORLD_STORE."""
    raw = os.getenv(ENV_STORE)
    if not raw:
        return DEFAULT_STORE_PATH
    return Path(raw)


# ---------------- Runtime ----------------
ENV_SEED = "MAZEWORLD_SEED"
ENV_MOVE_LOCKOUT_MS = "MAZEWORLD_MOVE_LOCKOUT_MS"


def get_seed() -> Optional[int]:
    """Seed for world generation, or None for a fresh random world. Var: MAZEWORLD_SEED."""
    return _get_int_env(ENV_SEED, None)


def get_move_lockout() -> float:
    """Seconds during which a second move is refused. Var: MAZEWORLD_MOVE_LOCKOUT_MS.

    Headless sessions default to no lockout; a UI typically sets ~50ms.
    """
    ms = _get_int_env(ENV_MOVE_LOCKOUT_MS, 0, minval=0)
    return (ms or 0) / 1000.0


__all__ = [
    # Geometry
    "MAZE_SIZE", "WORLD_SIZE", "MIN_MAZE_SIZE", "CHECKPOINT_COUNT",
    "START_MAZE", "FALLBACK_EXIT_MAZE", "FALLBACK_PLAYER_CELL",
    # Persistence
    "BEST_TIME_KEY", "THEME_KEY", "THEMES", "ENV_STORE", "DEFAULT_STORE_PATH",
    "get_store_path",
    # Runtime
    "ENV_SEED", "ENV_MOVE_LOCKOUT_MS", "get_seed", "get_move_lockout",
]

"""Maze world generation and traversal engine."""

__all__ = [
    "Cell",
    "Position",
    "Direction",
    "MazeGenerator",
    "MazeEvaluator",
    "MazeEvaluationResult",
    "MazeSlot",
    "World",
    "WorldBuilder",
    "WorldEvaluationResult",
    "GameStatus",
    "GameSnapshot",
    "MoveResult",
    "TraversalEngine",
    "apply_move",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "Preferences",
]

from .maze import (
    Cell,
    Position,
    Direction,
    MazeGenerator,
    MazeEvaluator,
    MazeEvaluationResult,
)
from .world import (
    MazeSlot,
    World,
    WorldBuilder,
    WorldEvaluationResult,
    GameStatus,
    GameSnapshot,
    MoveResult,
    TraversalEngine,
    apply_move,
)
from .storage import KeyValueStore, MemoryStore, JsonFileStore, Preferences

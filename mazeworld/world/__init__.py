"""World assembly, traversal and evaluation package."""

__all__ = [
    "MazeSlot",
    "World",
    "WorldBuilder",
    "GameStatus",
    "GameState",
    "GameSnapshot",
    "MoveResult",
    "TraversalEngine",
    "apply_move",
    "WorldEvaluationResult",
    "evaluate_world",
]

from .builder import MazeSlot, World, WorldBuilder
from .traversal import GameStatus, GameState, GameSnapshot, MoveResult, TraversalEngine, apply_move
from .evaluator import WorldEvaluationResult, evaluate_world

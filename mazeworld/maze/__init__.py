"""Single-maze generation and validation package."""

__all__ = [
    "Cell",
    "Position",
    "Direction",
    "MazeGenerator",
    "MazeEvaluator",
    "MazeEvaluationResult",
]

from .cells import Cell, Position, Direction
from .generator import MazeGenerator
from .evaluator import MazeEvaluator, MazeEvaluationResult

"""Cell values, positions and move directions shared by every maze."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import NamedTuple


class Cell(IntEnum):
    PATH = 0
    WALL = 1
    PLAYER = 2
    EXIT = 3
    CHECKPOINT = 4
    EXPLORED = 5
    # Only used by the minimap for mazes the player has not entered yet
    UNEXPLORED = 6


class Position(NamedTuple):
    row: int
    col: int


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def step(self, pos: Position) -> Position:
        dr, dc = self.value
        return Position(pos.row + dr, pos.col + dc)


__all__ = ["Cell", "Position", "Direction"]

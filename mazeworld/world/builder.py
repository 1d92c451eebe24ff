"""World builder assembling a grid of connected mazes."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .. import config
from ..maze.cells import Cell, Position
from ..maze.generator import Maze, MazeGenerator, find_cells

logger = logging.getLogger(__name__)


@dataclass
class MazeSlot:
    maze: Maze
    has_final_exit: bool = False
    explored: bool = False

    def copy(self) -> "MazeSlot":
        return MazeSlot(maze=self.maze.copy(), has_final_exit=self.has_final_exit, explored=self.explored)


@dataclass
class World:
    """A square grid of maze slots; slot (r, c) borders (r±1, c) and (r, c±1)."""

    slots: List[List[MazeSlot]]

    @property
    def size(self) -> int:
        return len(self.slots)

    def slot(self, pos: Tuple[int, int]) -> MazeSlot:
        row, col = pos
        return self.slots[row][col]

    def contains(self, pos: Tuple[int, int]) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def positions(self) -> List[Position]:
        return [Position(r, c) for r in range(self.size) for c in range(self.size)]

    def final_exit_mazes(self) -> List[Position]:
        return [pos for pos in self.positions() if self.slot(pos).has_final_exit]

    def find_player(self) -> Optional[Tuple[Position, Position]]:
        """Return ``(maze_pos, cell_pos)`` of the first player cell, if any."""

        for pos in self.positions():
            cells = find_cells(self.slot(pos).maze, Cell.PLAYER)
            if cells:
                return pos, cells[0]
        return None

    def count_cells(self, cell: Cell) -> int:
        return sum(int(np.count_nonzero(self.slot(pos).maze == cell)) for pos in self.positions())

    def copy(self) -> "World":
        return World(slots=[[slot.copy() for slot in row] for row in self.slots])

    def minimap(self, current: Optional[Tuple[int, int]] = None, *, reveal_exit: bool = False) -> np.ndarray:
        """One cell per maze: PLAYER, EXIT, EXPLORED or UNEXPLORED."""

        grid = np.full((self.size, self.size), Cell.UNEXPLORED, dtype=np.int8)
        for pos in self.positions():
            slot = self.slot(pos)
            if current is not None and pos == tuple(current):
                grid[pos] = Cell.PLAYER
            elif reveal_exit and slot.has_final_exit:
                grid[pos] = Cell.EXIT
            elif slot.explored:
                grid[pos] = Cell.EXPLORED
        return grid


class WorldBuilder:
    """Build a fresh world of mazes with a single final exit."""

    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        maze_size: int = config.MAZE_SIZE,
        world_size: int = config.WORLD_SIZE,
    ) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self.maze_size = maze_size
        self.world_size = world_size
        self.maze_generator = MazeGenerator(rng=self._rng, world_size=world_size)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def build_world(self) -> World:
        exit_pos = self._choose_final_exit()
        start = Position(*config.START_MAZE)

        slots: List[List[MazeSlot]] = []
        for row in range(self.world_size):
            slot_row: List[MazeSlot] = []
            for col in range(self.world_size):
                has_final_exit = (row, col) == exit_pos
                maze = self.maze_generator.generate(
                    self.maze_size,
                    has_final_exit,
                    row,
                    col,
                    (row, col) == start,
                )
                slot_row.append(MazeSlot(maze=maze, has_final_exit=has_final_exit))
            slots.append(slot_row)

        world = World(slots=slots)
        world.slot(start).explored = True
        logger.debug("Built %dx%d world, final exit in maze %s", self.world_size, self.world_size, exit_pos)
        return world

    def _choose_final_exit(self) -> Position:
        row = self._rng.randrange(self.world_size)
        col = self._rng.randrange(self.world_size)
        if (row, col) == config.START_MAZE:
            return Position(*config.FALLBACK_EXIT_MAZE)
        return Position(row, col)


__all__ = ["MazeSlot", "World", "WorldBuilder"]

"""Maze generator for the cells of a maze world.

Each maze is carved with a randomized depth-first search (recursive
backtracker), then opened up along the borders that face neighbouring mazes
with checkpoint cells, and optionally the world's final exit.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

import numpy as np

from .. import config
from .cells import Cell, Position

logger = logging.getLogger(__name__)

Maze = np.ndarray

# Processing order matters: remainder checkpoints go to the first edges
EDGE_ORDER = ("right", "bottom", "left", "top")

_CARVE_STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))
_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MazeGenerator:
    """Generate single square mazes placed at a given spot of the world grid."""

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        checkpoint_count: int = config.CHECKPOINT_COUNT,
        world_size: int = config.WORLD_SIZE,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self.checkpoint_count = checkpoint_count
        self.world_size = world_size

    def generate(
        self,
        size: int = config.MAZE_SIZE,
        has_final_exit: bool = False,
        world_row: int = 0,
        world_col: int = 0,
        is_start_maze: bool = False,
    ) -> Maze:
        maze = self.carve(size)

        edges = self.edge_candidates(size, world_row, world_col)
        checkpoints = self._place_checkpoints(maze, edges)

        if has_final_exit:
            used = set(checkpoints)
            remaining = [pos for edge in EDGE_ORDER for pos in edges.get(edge, []) if pos not in used]
            if remaining:
                exit_pos = self._rng.choice(remaining)
                maze[exit_pos] = Cell.EXIT
                self.ensure_path_to(maze, exit_pos)
                logger.debug("Final exit at %s in maze (%d, %d)", exit_pos, world_row, world_col)
            else:
                logger.warning("No free border cell for the final exit in maze (%d, %d)", world_row, world_col)

        if is_start_maze:
            start = self.random_open_cell(maze, self._rng)
            maze[start] = Cell.PLAYER

        return maze

    # ------------------------------------------------------------------

    def carve(self, size: int) -> Maze:
        """Return a freshly carved maze with no checkpoints, exit or player."""

        if size < config.MIN_MAZE_SIZE or size % 2 == 0:
            raise ValueError(f"maze size must be odd and at least {config.MIN_MAZE_SIZE}, got {size}")

        maze = np.full((size, size), Cell.WALL, dtype=np.int8)
        start = Position(self._rng.randrange(1, size - 1, 2), self._rng.randrange(1, size - 1, 2))
        maze[start] = Cell.PATH

        stack: List[Position] = [start]
        while stack:
            current = stack[-1]
            neighbours = self._unvisited_neighbours(maze, current)
            if not neighbours:
                stack.pop()
                continue
            nxt = self._rng.choice(neighbours)
            between = Position((current.row + nxt.row) // 2, (current.col + nxt.col) // 2)
            maze[between] = Cell.PATH
            maze[nxt] = Cell.PATH
            stack.append(nxt)
        return maze

    def edge_candidates(self, size: int, world_row: int, world_col: int) -> Dict[str, List[Position]]:
        """Odd-indexed border cells for every edge that faces another maze."""

        last = self.world_size - 1
        odd = range(1, size - 1, 2)
        edges: Dict[str, List[Position]] = {}
        if world_col < last:
            edges["right"] = [Position(i, size - 1) for i in odd]
        if world_row < last:
            edges["bottom"] = [Position(size - 1, i) for i in odd]
        if world_col > 0:
            edges["left"] = [Position(i, 0) for i in odd]
        if world_row > 0:
            edges["top"] = [Position(0, i) for i in odd]
        return edges

    def _place_checkpoints(self, maze: Maze, edges: Dict[str, List[Position]]) -> List[Position]:
        if not edges:
            return []
        per_edge, remainder = divmod(self.checkpoint_count, len(edges))
        placed: List[Position] = []
        for edge in EDGE_ORDER:
            if edge not in edges:
                continue
            candidates = list(edges[edge])
            self._rng.shuffle(candidates)
            wanted = per_edge
            if remainder > 0:
                wanted += 1
                remainder -= 1
            for pos in candidates[:wanted]:
                maze[pos] = Cell.CHECKPOINT
                self.ensure_path_to(maze, pos)
                placed.append(pos)
        return placed

    @staticmethod
    def ensure_path_to(maze: Maze, border: Position) -> None:
        """Open the interior cell behind a border cell and its interior neighbours."""

        size = maze.shape[0]
        row, col = border
        if row == 0:
            inner = Position(1, col)
        elif row == size - 1:
            inner = Position(size - 2, col)
        elif col == 0:
            inner = Position(row, 1)
        else:
            inner = Position(row, size - 2)

        maze[inner] = Cell.PATH
        for dr, dc in _NEIGHBOURS:
            nr, nc = inner.row + dr, inner.col + dc
            if 0 < nr < size - 1 and 0 < nc < size - 1:
                maze[nr, nc] = Cell.PATH

    @staticmethod
    def random_open_cell(maze: Maze, rng: random.Random) -> Position:
        """Pick a uniformly random interior PATH cell, or the fixed fallback."""

        interior = maze[1:-1, 1:-1]
        cells = np.argwhere(interior == Cell.PATH)
        if len(cells) == 0:
            logger.debug("No open interior cell, falling back to %s", config.FALLBACK_PLAYER_CELL)
            return Position(*config.FALLBACK_PLAYER_CELL)
        row, col = cells[rng.randrange(len(cells))]
        return Position(int(row) + 1, int(col) + 1)

    @staticmethod
    def _unvisited_neighbours(maze: Maze, pos: Position) -> List[Position]:
        size = maze.shape[0]
        result: List[Position] = []
        for dr, dc in _CARVE_STEPS:
            nr, nc = pos.row + dr, pos.col + dc
            if 0 < nr < size - 1 and 0 < nc < size - 1 and maze[nr, nc] == Cell.WALL:
                result.append(Position(nr, nc))
        return result


def find_cells(maze: Maze, cell: Cell) -> List[Position]:
    """All positions of ``cell`` in row-major order."""

    return [Position(int(r), int(c)) for r, c in np.argwhere(maze == cell)]


__all__ = ["MazeGenerator", "Maze", "EDGE_ORDER", "find_cells"]

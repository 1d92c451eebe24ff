"""Structural checks for generated mazes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .. import config
from .cells import Cell, Position
from .generator import EDGE_ORDER, Maze, MazeGenerator


@dataclass
class MazeEvaluationResult:
    connected: bool
    border_ok: bool
    checkpoint_count: int
    expected_checkpoints: int
    has_exit: bool
    exit_ok: bool
    player_count: int
    message: str

    @property
    def is_valid(self) -> bool:
        return (
            self.connected
            and self.border_ok
            and self.checkpoint_count == self.expected_checkpoints
            and self.exit_ok
            and self.player_count <= 1
        )

    def to_dict(self) -> dict:
        return {
            "connected": self.connected,
            "border_ok": self.border_ok,
            "checkpoint_count": self.checkpoint_count,
            "expected_checkpoints": self.expected_checkpoints,
            "has_exit": self.has_exit,
            "exit_ok": self.exit_ok,
            "player_count": self.player_count,
            "message": self.message,
        }


def reachable_cells(maze: Maze, start: Tuple[int, int]) -> Set[Position]:
    """Every non-wall cell reachable from ``start`` through 4-neighbour steps."""

    rows, cols = maze.shape
    start = Position(*start)
    if maze[start] == Cell.WALL:
        return set()
    queue: deque[Position] = deque([start])
    visited = {start}
    while queue:
        r, c = queue.popleft()
        for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and maze[nr, nc] != Cell.WALL:
                nxt = Position(nr, nc)
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
    return visited


def open_cells(maze: Maze) -> List[Position]:
    return [Position(int(r), int(c)) for r, c in np.argwhere(maze != Cell.WALL)]


def is_connected(maze: Maze) -> bool:
    cells = open_cells(maze)
    if not cells:
        return False
    return len(reachable_cells(maze, cells[0])) == len(cells)


def carving_vertices(maze: Maze) -> List[Position]:
    """Open cells on the odd-parity carving grid."""

    size = maze.shape[0]
    return [
        Position(r, c)
        for r in range(1, size - 1, 2)
        for c in range(1, size - 1, 2)
        if maze[r, c] != Cell.WALL
    ]


def carving_edges(maze: Maze) -> List[Position]:
    """Open interior connector cells, i.e. cells with exactly one odd coordinate."""

    size = maze.shape[0]
    edges: List[Position] = []
    for r in range(1, size - 1):
        for c in range(1, size - 1):
            if (r % 2) != (c % 2) and maze[r, c] != Cell.WALL:
                edges.append(Position(r, c))
    return edges


def is_perfect_carving(maze: Maze) -> bool:
    """True when the carved grid is a spanning tree: connected with V - 1 edges."""

    vertices = carving_vertices(maze)
    if not vertices:
        return False
    if len(carving_edges(maze)) != len(vertices) - 1:
        return False
    return is_connected(maze)


def expected_checkpoint_count(
    size: int,
    world_row: int,
    world_col: int,
    *,
    total: int = config.CHECKPOINT_COUNT,
    world_size: int = config.WORLD_SIZE,
) -> int:
    edges = MazeGenerator(world_size=world_size).edge_candidates(size, world_row, world_col)
    if not edges:
        return 0
    per_edge, remainder = divmod(total, len(edges))
    expected = 0
    for edge in EDGE_ORDER:
        if edge not in edges:
            continue
        wanted = per_edge + (1 if remainder > 0 else 0)
        remainder = max(0, remainder - 1)
        expected += min(wanted, len(edges[edge]))
    return expected


class MazeEvaluator:
    """Check the invariants a generated maze must satisfy."""

    def __init__(
        self,
        *,
        checkpoint_count: int = config.CHECKPOINT_COUNT,
        world_size: int = config.WORLD_SIZE,
    ) -> None:
        self.checkpoint_count = checkpoint_count
        self.world_size = world_size

    def evaluate(
        self,
        maze: Maze,
        *,
        world_row: int,
        world_col: int,
        expect_exit: Optional[bool] = None,
    ) -> MazeEvaluationResult:
        size = maze.shape[0]
        connected = is_connected(maze)
        border_ok = self._border_ok(maze)
        checkpoints = int(np.count_nonzero(maze == Cell.CHECKPOINT))
        expected = expected_checkpoint_count(
            size,
            world_row,
            world_col,
            total=self.checkpoint_count,
            world_size=self.world_size,
        )
        has_exit = bool(np.any(maze == Cell.EXIT))
        players = int(np.count_nonzero(maze == Cell.PLAYER))
        exit_ok = expect_exit is None or has_exit == expect_exit

        if not connected:
            message = "Open cells are not a single connected region."
        elif not border_ok:
            message = "Border holds cells other than walls, checkpoints and the exit."
        elif checkpoints != expected:
            message = f"Expected {expected} checkpoints, found {checkpoints}."
        elif players > 1:
            message = f"Found {players} player cells."
        elif not exit_ok:
            message = "Final exit present in the wrong maze." if has_exit else "Final exit missing."
        else:
            message = "Maze is valid."

        return MazeEvaluationResult(
            connected=connected,
            border_ok=border_ok,
            checkpoint_count=checkpoints,
            expected_checkpoints=expected,
            has_exit=has_exit,
            exit_ok=exit_ok,
            player_count=players,
            message=message,
        )

    @staticmethod
    def _border_ok(maze: Maze) -> bool:
        allowed = (Cell.WALL, Cell.CHECKPOINT, Cell.EXIT)
        border: Iterable[int] = np.concatenate([maze[0, :], maze[-1, :], maze[:, 0], maze[:, -1]])
        return all(int(value) in allowed for value in border)


__all__ = [
    "MazeEvaluator",
    "MazeEvaluationResult",
    "reachable_cells",
    "open_cells",
    "is_connected",
    "carving_vertices",
    "carving_edges",
    "is_perfect_carving",
    "expected_checkpoint_count",
]

"""Player movement across the mazes of a world, and the game state machine.

``apply_move`` is the single mutating step: it validates a one-cell move,
updates the cells it touches and, when the player steps on a checkpoint,
hands the player over to the adjacent maze. ``TraversalEngine`` owns the
game state (world, positions, status, timer) and routes start/restart and
key presses to it.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from .. import config
from ..maze.cells import Cell, Direction, Position
from ..maze.generator import MazeGenerator
from ..storage import Preferences
from .builder import World, WorldBuilder

logger = logging.getLogger(__name__)

KEY_BINDINGS: Dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}
CONFIRM_KEY = "Space"


class GameStatus(Enum):
    NOT_STARTED = "not-started"
    RUNNING = "running"
    WON = "won"


@dataclass
class MoveResult:
    moved: bool
    player_pos: Position
    maze_pos: Position
    won: bool = False
    transitioned: bool = False


@dataclass
class GameState:
    world: World
    maze_pos: Position
    player_pos: Position
    status: GameStatus = GameStatus.NOT_STARTED
    elapsed_seconds: int = 0


@dataclass(frozen=True)
class GameSnapshot:
    world: World
    maze_pos: Position
    player_pos: Position
    elapsed_seconds: int
    status: GameStatus
    best_time: Optional[int]
    minimap: np.ndarray


def adjacent_maze(maze_pos: Position, cell: Position, size: int) -> Position:
    """Maze on the other side of the border cell ``cell``."""

    if cell.row == 0:
        return Position(maze_pos.row - 1, maze_pos.col)
    if cell.row == size - 1:
        return Position(maze_pos.row + 1, maze_pos.col)
    if cell.col == 0:
        return Position(maze_pos.row, maze_pos.col - 1)
    return Position(maze_pos.row, maze_pos.col + 1)


def enter_maze(world: World, maze_pos: Position, rng: random.Random) -> Position:
    """Drop the player on a random open cell of ``maze_pos`` and mark it explored."""

    slot = world.slot(maze_pos)
    slot.maze[slot.maze == Cell.PLAYER] = Cell.PATH
    cell = MazeGenerator.random_open_cell(slot.maze, rng)
    slot.maze[cell] = Cell.PLAYER
    slot.explored = True
    return cell


def apply_move(
    world: World,
    maze_pos: Position,
    player_pos: Position,
    direction: Direction,
    rng: random.Random,
) -> MoveResult:
    maze_pos = Position(*maze_pos)
    player_pos = Position(*player_pos)
    rejected = MoveResult(moved=False, player_pos=player_pos, maze_pos=maze_pos)

    maze = world.slot(maze_pos).maze
    size = maze.shape[0]
    dest = direction.step(player_pos)
    if not (0 <= dest.row < size and 0 <= dest.col < size):
        return rejected
    target = Cell(int(maze[dest]))
    if target == Cell.WALL:
        return rejected

    if target == Cell.CHECKPOINT:
        next_maze = adjacent_maze(maze_pos, dest, size)
        if not world.contains(next_maze):
            logger.debug("Checkpoint %s in maze %s leads outside the world", dest, maze_pos)
            return rejected
        maze[player_pos] = Cell.EXPLORED
        cell = enter_maze(world, next_maze, rng)
        logger.debug("Moved from maze %s to maze %s at %s", maze_pos, next_maze, cell)
        return MoveResult(moved=True, player_pos=cell, maze_pos=next_maze, transitioned=True)

    maze[player_pos] = Cell.EXPLORED
    maze[dest] = Cell.PLAYER
    return MoveResult(moved=True, player_pos=dest, maze_pos=maze_pos, won=target == Cell.EXIT)


class TraversalEngine:
    """Owns a game: the world, where the player is, the status and the timer."""

    def __init__(
        self,
        *,
        builder: Optional[WorldBuilder] = None,
        seed: Optional[int] = None,
        preferences: Optional[Preferences] = None,
        move_lockout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if builder is None:
            builder = WorldBuilder(seed=seed if seed is not None else config.get_seed())
        self.builder = builder
        self.preferences = preferences if preferences is not None else Preferences()
        self.move_lockout = config.get_move_lockout() if move_lockout is None else move_lockout
        self._clock = clock
        self._last_move_at: Optional[float] = None
        self.state = self._new_state()

    @property
    def status(self) -> GameStatus:
        return self.state.status

    def _new_state(self) -> GameState:
        world = self.builder.build_world()
        found = world.find_player()
        if found is None:
            player_pos = Position(*config.FALLBACK_PLAYER_CELL)
        else:
            player_pos = found[1]
        return GameState(world=world, maze_pos=Position(*config.START_MAZE), player_pos=player_pos)

    # ------------------------------------------------------------------

    def start(self) -> bool:
        if self.state.status is not GameStatus.NOT_STARTED:
            return False
        self.state.status = GameStatus.RUNNING
        return True

    def restart(self) -> None:
        self.state = self._new_state()
        self._last_move_at = None
        logger.debug("Game restarted")

    def confirm(self) -> GameStatus:
        if self.state.status is GameStatus.WON:
            self.restart()
        elif self.state.status is GameStatus.NOT_STARTED:
            self.start()
        return self.state.status

    def tick(self, seconds: int = 1) -> int:
        if self.state.status is GameStatus.RUNNING:
            self.state.elapsed_seconds += seconds
        return self.state.elapsed_seconds

    def move(self, direction: Direction) -> MoveResult:
        state = self.state
        if state.status is not GameStatus.RUNNING or self._locked_out():
            return MoveResult(moved=False, player_pos=state.player_pos, maze_pos=state.maze_pos)

        result = apply_move(state.world, state.maze_pos, state.player_pos, direction, self.builder.rng)
        if not result.moved:
            return result

        self._last_move_at = self._clock()
        state.player_pos = result.player_pos
        state.maze_pos = result.maze_pos
        if result.won:
            state.status = GameStatus.WON
            if self.preferences.record_time(state.elapsed_seconds):
                logger.info("New best time %ds", state.elapsed_seconds)
        return result

    def handle_key(self, code: str) -> bool:
        """Route a keyboard code. Returns True when the game state changed."""

        if code == CONFIRM_KEY:
            status = self.state.status
            return self.confirm() is not status
        direction = KEY_BINDINGS.get(code)
        if direction is None:
            return False
        return self.move(direction).moved

    def snapshot(self, *, reveal_exit: bool = False) -> GameSnapshot:
        state = self.state
        return GameSnapshot(
            world=state.world.copy(),
            maze_pos=state.maze_pos,
            player_pos=state.player_pos,
            elapsed_seconds=state.elapsed_seconds,
            status=state.status,
            best_time=self.preferences.best_time,
            minimap=state.world.minimap(state.maze_pos, reveal_exit=reveal_exit),
        )

    def _locked_out(self) -> bool:
        if self.move_lockout <= 0 or self._last_move_at is None:
            return False
        return self._clock() - self._last_move_at < self.move_lockout


__all__ = [
    "GameStatus",
    "GameState",
    "GameSnapshot",
    "MoveResult",
    "TraversalEngine",
    "KEY_BINDINGS",
    "CONFIRM_KEY",
    "adjacent_maze",
    "enter_maze",
    "apply_move",
]

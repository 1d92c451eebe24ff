"""Invariant checks for a built world."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .. import config
from ..maze.cells import Cell, Position
from ..maze.evaluator import MazeEvaluationResult, MazeEvaluator
from ..maze.generator import find_cells
from .builder import World


@dataclass
class MazeReport:
    maze_pos: Tuple[int, int]
    result: MazeEvaluationResult

    def to_dict(self) -> dict:
        payload = self.result.to_dict()
        payload["maze_pos"] = list(self.maze_pos)
        return payload


@dataclass
class WorldEvaluationResult:
    world_id: str
    final_exit_count: int
    exit_in_start_maze: bool
    player_count: int
    player_in_start_maze: bool
    start_explored: bool
    mazes: List[MazeReport]
    message: str

    @property
    def is_valid(self) -> bool:
        return (
            self.final_exit_count == 1
            and not self.exit_in_start_maze
            and self.player_count == 1
            and self.player_in_start_maze
            and self.start_explored
            and all(report.result.is_valid for report in self.mazes)
        )

    def to_dict(self) -> dict:
        return {
            "world_id": self.world_id,
            "valid": self.is_valid,
            "final_exit_count": self.final_exit_count,
            "exit_in_start_maze": self.exit_in_start_maze,
            "player_count": self.player_count,
            "player_in_start_maze": self.player_in_start_maze,
            "start_explored": self.start_explored,
            "mazes": [report.to_dict() for report in self.mazes],
            "message": self.message,
        }


def evaluate_world(world: World, world_id: str = "") -> WorldEvaluationResult:
    """Check a freshly built world: one final exit, one player in the start maze."""

    start = Position(*config.START_MAZE)
    evaluator = MazeEvaluator(world_size=world.size)
    exit_mazes = world.final_exit_mazes()
    player_count = world.count_cells(Cell.PLAYER)
    start_players = find_cells(world.slot(start).maze, Cell.PLAYER)

    reports = [
        MazeReport(
            maze_pos=pos,
            result=evaluator.evaluate(
                world.slot(pos).maze,
                world_row=pos.row,
                world_col=pos.col,
                expect_exit=world.slot(pos).has_final_exit,
            ),
        )
        for pos in world.positions()
    ]

    exit_in_start = world.slot(start).has_final_exit
    broken = [report for report in reports if not report.result.is_valid]
    if len(exit_mazes) != 1:
        message = f"Expected one final exit maze, found {len(exit_mazes)}."
    elif exit_in_start:
        message = "Final exit is in the start maze."
    elif player_count != 1 or len(start_players) != 1:
        message = f"Expected one player cell in the start maze, found {player_count} in the world."
    elif not world.slot(start).explored:
        message = "Start maze is not marked explored."
    elif broken:
        first = broken[0]
        message = f"Maze {tuple(first.maze_pos)}: {first.result.message}"
    else:
        message = "World is valid."

    return WorldEvaluationResult(
        world_id=world_id,
        final_exit_count=len(exit_mazes),
        exit_in_start_maze=exit_in_start,
        player_count=player_count,
        player_in_start_maze=len(start_players) == 1,
        start_explored=world.slot(start).explored,
        mazes=reports,
        message=message,
    )


__all__ = ["WorldEvaluationResult", "MazeReport", "evaluate_world"]

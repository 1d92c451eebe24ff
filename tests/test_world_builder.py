import unittest
from unittest import mock

import numpy as np

from mazeworld.maze import Cell
from mazeworld.world import WorldBuilder
from mazeworld.world.evaluator import evaluate_world


class WorldBuilderTests(unittest.TestCase):
    def test_exactly_one_final_exit_outside_start_maze(self) -> None:
        for seed in range(20):
            world = WorldBuilder(seed=seed).build_world()
            exits = world.final_exit_mazes()
            self.assertEqual(len(exits), 1)
            self.assertNotEqual(tuple(exits[0]), (0, 1))
            self.assertEqual(world.count_cells(Cell.EXIT), 1)

    def test_start_maze_pick_is_redirected(self) -> None:
        builder = WorldBuilder(seed=0)
        with mock.patch.object(builder.rng, "randrange", side_effect=[0, 1]):
            self.assertEqual(tuple(builder._choose_final_exit()), (0, 2))

    def test_single_player_in_start_maze(self) -> None:
        world = WorldBuilder(seed=7).build_world()
        self.assertEqual(world.count_cells(Cell.PLAYER), 1)
        maze_pos, cell = world.find_player()
        self.assertEqual(tuple(maze_pos), (0, 1))
        self.assertEqual(world.slot(maze_pos).maze[cell], Cell.PLAYER)

    def test_only_start_maze_is_explored(self) -> None:
        world = WorldBuilder(seed=7).build_world()
        explored = [tuple(pos) for pos in world.positions() if world.slot(pos).explored]
        self.assertEqual(explored, [(0, 1)])

    def test_built_worlds_pass_evaluation(self) -> None:
        for seed in range(5):
            result = evaluate_world(WorldBuilder(seed=seed).build_world(), f"w{seed}")
            self.assertTrue(result.is_valid, result.message)
            self.assertEqual(len(result.mazes), 25)

    def test_copy_is_independent(self) -> None:
        world = WorldBuilder(seed=1).build_world()
        clone = world.copy()
        clone.slot((2, 2)).maze[:] = Cell.WALL
        clone.slot((2, 2)).explored = True
        self.assertFalse(np.all(world.slot((2, 2)).maze == Cell.WALL))
        self.assertFalse(world.slot((2, 2)).explored)

    def test_minimap_marks_current_explored_and_exit(self) -> None:
        world = WorldBuilder(seed=1).build_world()
        world.slot((1, 1)).explored = True
        minimap = world.minimap((1, 1))
        self.assertEqual(minimap[1, 1], Cell.PLAYER)
        self.assertEqual(minimap[0, 1], Cell.EXPLORED)
        self.assertEqual(minimap[4, 4], Cell.UNEXPLORED)

        exit_pos = world.final_exit_mazes()[0]
        revealed = world.minimap((1, 1), reveal_exit=True)
        if tuple(exit_pos) != (1, 1):
            self.assertEqual(revealed[tuple(exit_pos)], Cell.EXIT)


class WorldSeedingTests(unittest.TestCase):
    def test_same_seed_builds_same_world(self) -> None:
        first = WorldBuilder(seed=21).build_world()
        second = WorldBuilder(seed=21).build_world()
        self.assertEqual(first.final_exit_mazes(), second.final_exit_mazes())
        for pos in first.positions():
            self.assertTrue(np.array_equal(first.slot(pos).maze, second.slot(pos).maze))

    def test_successive_builds_draw_from_one_stream(self) -> None:
        builder = WorldBuilder(seed=21)
        first = builder.build_world()
        second = builder.build_world()
        self.assertFalse(
            all(np.array_equal(first.slot(pos).maze, second.slot(pos).maze) for pos in first.positions())
        )


class WorldInvariantTests(unittest.TestCase):
    def test_extra_final_exit_is_reported(self) -> None:
        world = WorldBuilder(seed=5).build_world()
        world.slot((0, 1)).has_final_exit = True

        result = evaluate_world(world, "two-exits")

        self.assertFalse(result.is_valid)
        self.assertEqual(result.final_exit_count, 2)
        self.assertTrue(result.exit_in_start_maze)

    def test_second_player_is_reported(self) -> None:
        world = WorldBuilder(seed=5).build_world()
        world.slot((3, 3)).maze[1, 1] = Cell.PLAYER

        result = evaluate_world(world)

        self.assertFalse(result.is_valid)
        self.assertEqual(result.player_count, 2)

    def test_unexplored_start_maze_is_reported(self) -> None:
        world = WorldBuilder(seed=5).build_world()
        world.slot((0, 1)).explored = False

        result = evaluate_world(world)

        self.assertFalse(result.is_valid)
        self.assertEqual(result.message, "Start maze is not marked explored.")

    def test_report_serializes_every_maze(self) -> None:
        payload = evaluate_world(WorldBuilder(seed=2).build_world(), "w").to_dict()
        self.assertTrue(payload["valid"])
        self.assertEqual(len(payload["mazes"]), 25)
        self.assertEqual(payload["mazes"][0]["maze_pos"], [0, 0])


if __name__ == "__main__":
    unittest.main()

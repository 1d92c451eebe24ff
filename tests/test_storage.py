import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from mazeworld import config
from mazeworld.storage import JsonFileStore, MemoryStore, Preferences


class PreferencesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.preferences = Preferences(self.store)

    def test_best_time_starts_unset(self) -> None:
        self.assertIsNone(self.preferences.best_time)

    def test_record_time_keeps_only_improvements(self) -> None:
        self.assertTrue(self.preferences.record_time(50))
        self.assertFalse(self.preferences.record_time(60))
        self.assertFalse(self.preferences.record_time(50))
        self.assertTrue(self.preferences.record_time(35))
        self.assertEqual(self.preferences.best_time, 35)
        self.assertEqual(self.store.get("mazeBestTime"), "35")

    def test_corrupt_best_time_is_unset(self) -> None:
        for raw in ("abc", "", "-4", "1.5"):
            self.store.set("mazeBestTime", raw)
            self.assertIsNone(self.preferences.best_time, raw)
        self.assertTrue(self.preferences.record_time(80))

    def test_theme_round_trip_and_toggle(self) -> None:
        self.assertIsNone(self.preferences.theme)
        self.assertEqual(self.preferences.toggle_theme(), "dark")
        self.assertEqual(self.store.get("theme"), "dark")
        self.assertEqual(self.preferences.toggle_theme(), "light")
        self.preferences.set_theme("dark")
        self.assertEqual(self.preferences.theme, "dark")

    def test_unknown_theme_value_is_unset(self) -> None:
        self.store.set("theme", "purple")
        self.assertIsNone(self.preferences.theme)
        with self.assertRaises(ValueError):
            self.preferences.set_theme("purple")


class JsonFileStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "prefs" / "store.json"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_values_persist_across_instances(self) -> None:
        JsonFileStore(self.path).set("theme", "dark")
        Preferences(JsonFileStore(self.path)).record_time(12)

        reopened = Preferences(JsonFileStore(self.path))
        self.assertEqual(reopened.theme, "dark")
        self.assertEqual(reopened.best_time, 12)

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertIsNone(JsonFileStore(self.path).get("theme"))

    def test_corrupt_file_reads_as_empty_and_is_replaced(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(self.path)
        with self.assertLogs("mazeworld.storage", level="WARNING"):
            self.assertIsNone(store.get("theme"))
        store.set("theme", "light")
        self.assertEqual(store.get("theme"), "light")

    def test_default_path_comes_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {config.ENV_STORE: str(self.path)}):
            self.assertEqual(JsonFileStore().path, self.path)


class ConfigTests(unittest.TestCase):
    def test_move_lockout_reads_milliseconds(self) -> None:
        with mock.patch.dict(os.environ, {config.ENV_MOVE_LOCKOUT_MS: "50"}):
            self.assertAlmostEqual(config.get_move_lockout(), 0.05)

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        with mock.patch.dict(os.environ, {config.ENV_MOVE_LOCKOUT_MS: "-3", config.ENV_SEED: "abc"}):
            self.assertEqual(config.get_move_lockout(), 0.0)
            self.assertIsNone(config.get_seed())

    def test_seed_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {config.ENV_SEED: "17"}):
            self.assertEqual(config.get_seed(), 17)


if __name__ == "__main__":
    unittest.main()

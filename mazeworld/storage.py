"""Key/value persistence for the best completion time and the theme preference.

The engine only needs ``get`` and ``set`` on string keys. Missing or corrupt
values are reported as unset, never as errors.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from . import config

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-process store, handy for tests and headless sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """Flat JSON object on disk, rewritten on every ``set``."""

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else config.get_store_path()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class Preferences:
    """Typed access to the two persisted values."""

    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self.store: KeyValueStore = store if store is not None else MemoryStore()

    @property
    def best_time(self) -> Optional[int]:
        raw = self.store.get(config.BEST_TIME_KEY)
        if raw is None:
            return None
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Ignoring corrupt best time %r", raw)
            return None
        return value if value >= 0 else None

    def record_time(self, seconds: int) -> bool:
        """Store ``seconds`` if it beats the current best. Returns True when stored."""

        best = self.best_time
        if best is not None and seconds >= best:
            return False
        self.store.set(config.BEST_TIME_KEY, str(int(seconds)))
        logger.debug("New best time: %ds", seconds)
        return True

    @property
    def theme(self) -> Optional[str]:
        raw = self.store.get(config.THEME_KEY)
        return raw if raw in config.THEMES else None

    def set_theme(self, theme: str) -> None:
        if theme not in config.THEMES:
            raise ValueError(f"theme must be one of {config.THEMES}, got {theme!r}")
        self.store.set(config.THEME_KEY, theme)

    def toggle_theme(self, *, default: str = "light") -> str:
        current = self.theme or default
        new = "light" if current == "dark" else "dark"
        self.set_theme(new)
        return new


__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore", "Preferences"]

"""
best score persistence

the engine only ever talks to BestScoreStore; where the value actually
lives is up to the KeyValueStore behind it
"""
import json
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import BEST_SCORE_KEY
from .errors import PersistenceError
from .logging_config import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """dict backed store, used by default and in tests"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data = dict(initial or {})

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value


class JsonFileStore:
    """
    key-value pairs kept as one JSON object in a file

    a missing file reads as empty. any other I/O or decode problem is
    raised as PersistenceError
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise PersistenceError(f"cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key):
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key, value):
        try:
            data = self._load()
        except PersistenceError as e:
            # damaged files get replaced
            logger.warning("Overwriting unreadable store: %s", e)
            data = {}
        data[key] = value

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"cannot write {self.path}: {e}") from e


class BestScoreStore:
    """
    reads and writes the best score through a KeyValueStore

    storage problems never reach the player: a failed read counts as 0 and
    a failed write is logged and dropped
    """

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = BEST_SCORE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.key = key

    def read_best_score(self) -> int:
        try:
            raw = self.store.get(self.key)
        except (PersistenceError, OSError) as e:
            logger.warning("Best score unavailable, using 0: %s", e)
            return 0

        if raw is None:
            return 0
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring corrupt best score %r", raw)
            return 0
        return max(value, 0)

    def write_best_score(self, value: int) -> None:
        try:
            self.store.set(self.key, str(int(value)))
        except (PersistenceError, OSError) as e:
            logger.warning("Could not save best score %d: %s", value, e)

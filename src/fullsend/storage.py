"""
storage.py: Key-value persistence for cross-session progress (high score, unlocks).
"""

import json
import sqlite3
from typing import Dict, List, Optional, Protocol

from .constants import HIGH_SCORE_KEY, UNLOCKS_KEY
from .data_models import DEFAULT_UNLOCKS, FLYING_OBJECTS
from .logger import get_logger

log = get_logger("storage")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store, used by tests and when no database is wanted."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value


class SqliteStore:
    """Handles all interaction with the SQLite database."""

    def __init__(self, db_file: str):
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table if it doesn't exist."""
        try:
            self.cur.execute("""
                CREATE TABLE IF NOT EXISTS KeyValue (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            log.warning(f"Progress database unusable, playing without it: {e}")

    def get(self, key: str) -> Optional[str]:
        self.cur.execute("SELECT value FROM KeyValue WHERE key=?", (key,))
        row = self.cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str):
        self.cur.execute(
            "INSERT INTO KeyValue (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value", (key, value))
        self.conn.commit()

    def close(self):
        self.conn.close()


class ProgressStore:
    """
    Encodes high score and unlock flags on top of a KeyValueStore.
    Missing, malformed or unreadable records fall back to defaults; writes never raise.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_high_score(self) -> int:
        raw = self._read(HIGH_SCORE_KEY)
        if raw is None:
            return 0
        try:
            value = int(raw)
        except ValueError:
            log.warning(f"Ignoring malformed high score record: {raw!r}")
            return 0
        return max(value, 0)

    def save_high_score(self, score: int):
        self._write(HIGH_SCORE_KEY, str(score))

    def load_unlocks(self) -> List[bool]:
        raw = self._read(UNLOCKS_KEY)
        if raw is None:
            return list(DEFAULT_UNLOCKS)
        try:
            unlocks = json.loads(raw)
        except ValueError:
            unlocks = None

        if (not isinstance(unlocks, list) or len(unlocks) != len(FLYING_OBJECTS)
                or not all(isinstance(flag, bool) for flag in unlocks)):
            log.warning(f"Ignoring malformed unlocks record: {raw!r}")
            return list(DEFAULT_UNLOCKS)

        # The base craft is always available
        unlocks[0] = True
        return unlocks

    def save_unlocks(self, unlocks: List[bool]):
        self._write(UNLOCKS_KEY, json.dumps(list(unlocks)))

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except sqlite3.Error as e:
            log.warning(f"Could not read {key}: {e}")
            return None

    def _write(self, key: str, value: str):
        try:
            self.store.set(key, value)
        except sqlite3.Error as e:
            log.warning(f"Could not persist {key}: {e}")

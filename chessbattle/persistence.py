"""JSON-file store for saved games, one FEN per user.

Layout of the file:

    {
      "<user_id>": {"fen": "<FEN>", "last_updated": "<ISO-8601 UTC>"},
      ...
    }

Writes go to a temp file which then replaces the real one, so a crash never
leaves a half-written store behind.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

import chess

from chessbattle.errors import StoreError

log = logging.getLogger(__name__)


class GameStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, dict]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read saved games from {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Saved games file {self.path} is not a JSON object")
        return data

    def _write(self, data: Dict[str, dict]):
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=directory, prefix=".games-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write saved games to {self.path}: {e}") from e

    def save(self, user_id: str, board: chess.Board):
        with self._lock:
            data = self._read()
            data[user_id] = {
                "fen": board.fen(),
                "last_updated": datetime.now(timezone.utc).isoformat(),
            }
            self._write(data)
        log.debug("saved game for %s", user_id)

    def load(self, user_id: str) -> Optional[chess.Board]:
        """Return the saved board for `user_id`, or None when nothing usable is stored."""
        with self._lock:
            entry = self._read().get(user_id)
        if not entry or "fen" not in entry:
            return None
        try:
            return chess.Board(entry["fen"])
        except ValueError:
            log.warning("Discarding corrupt saved FEN for %s: %r", user_id, entry["fen"])
            return None

    def delete(self, user_id: str) -> bool:
        with self._lock:
            data = self._read()
            if user_id not in data:
                return False
            del data[user_id]
            self._write(data)
        return True

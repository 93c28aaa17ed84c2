from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ScoreStore:
    """
    A single persisted best-score slot.
    set() overwrites unconditionally; callers decide whether a value is a record.
    """

    def get(self) -> Optional[int]:
        raise NotImplementedError

    def set(self, value: int) -> None:
        raise NotImplementedError


class MemoryScoreStore(ScoreStore):
    def __init__(self, value: Optional[int] = None):
        self._value = value

    def get(self) -> Optional[int]:
        return self._value

    def set(self, value: int) -> None:
        self._value = int(value)


class FileScoreStore(ScoreStore):
    """
    Stores the slot as decimal text in <root>/<key>.txt.

    A missing, unreadable or unparseable file reads back as "no best score".
    Write failures are logged and otherwise ignored so a read-only cache
    never interrupts a session; until a write succeeds again, get() answers
    from the last value handed to set().
    """

    def __init__(self, root: Path, key: str):
        self.key = key
        self.path = Path(root) / f"{key}.txt"
        self._last: Optional[int] = None
        self._unsynced = False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning(f"Score cache {self.path.parent} unavailable: {exc}")

    def get(self) -> Optional[int]:
        if self._unsynced or not self.path.exists():
            return self._last
        try:
            text = self.path.read_text(encoding="utf-8").strip()
            self._last = int(text)
        except (OSError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable best score in {self.path}: {exc}")
        return self._last

    def set(self, value: int) -> None:
        self._last = int(value)
        try:
            self.path.write_text(str(self._last), encoding="utf-8")
            self._unsynced = False
        except OSError as exc:
            self._unsynced = True
            logger.warning(f"Could not persist best score to {self.path}: {exc}")

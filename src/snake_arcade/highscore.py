"""High-score persistence backends."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_KEY = "snakeHighScore"


class HighScoreStore(Protocol):
    """A durable cell holding the best score ever reached."""

    def get_high_score(self) -> int: ...

    def save_high_score(self, candidate: int) -> None: ...


class MemoryHighScoreStore:
    """Process-local store, lost when the process exits."""

    def __init__(self, initial: int = 0) -> None:
        if initial < 0:
            raise ValueError("initial high score must be >= 0.")
        self._value = initial

    def get_high_score(self) -> int:
        return self._value

    def save_high_score(self, candidate: int) -> None:
        if candidate > self._value:
            self._value = candidate


class JsonFileHighScoreStore:
    """Stores the high score under a fixed key in a JSON object file.

    Other keys in the document are preserved on write. Anything that
    cannot be read back as a non-negative integer counts as 0.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        try:
            raw = self.path.read_text()
        except FileNotFoundError:
            logger.debug("High-score file %s does not exist yet.", self.path)
            return {}
        except OSError:
            logger.warning("Could not read high-score file %s.", self.path)
            return {}
        try:
            doc = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("High-score file %s is not valid JSON.", self.path)
            return {}
        if not isinstance(doc, dict):
            logger.warning("High-score file %s is not a JSON object.", self.path)
            return {}
        return doc

    def get_high_score(self) -> int:
        value = self._read_document().get(self.key, 0)
        if isinstance(value, str):
            try:
                value = int(value, 10)
            except ValueError:
                return 0
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return 0
        return value

    def save_high_score(self, candidate: int) -> None:
        """Persist *candidate* only if it beats the stored value.

        Write failures are logged and swallowed so a finished game never
        fails on storage.
        """
        if candidate <= self.get_high_score():
            return
        doc = self._read_document()
        doc[self.key] = candidate
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc, indent=2))
        except OSError:
            logger.warning(
                "Could not save high score %d to %s.", candidate, self.path,
            )
            return
        logger.info("New high score %d saved to %s", candidate, self.path)

    def clear(self) -> None:
        """Forget the stored high score, keeping other keys."""
        doc = self._read_document()
        if doc.pop(self.key, None) is None:
            return
        self.path.write_text(json.dumps(doc, indent=2))
        logger.info("High score cleared in %s", self.path)

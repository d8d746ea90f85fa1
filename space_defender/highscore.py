"""Local persistence of the best score under a single ``highScore`` key."""

import json
import os

from .config import HIGHSCORE_KEY
from .log import get_logger

logger = get_logger(__name__)


class HighScoreStore:
    """
    Small JSON key-value file holding the high score.
    The file is read once on construction. Any failure to read or write is
    logged and the game carries on with the in-memory value.
    """

    def __init__(self, path: str):
        self.path  = path
        self.value = self._load()

    def _load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            value = int(data.get(HIGHSCORE_KEY, 0))
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning("Could not read high score from %s: %s", self.path, e)
            return 0
        return max(0, value)

    def _save(self):
        # The old file is only replaced once the new one is fully written
        tmp_path = self.path + ".tmp"
        try:
            folder = os.path.dirname(self.path)
            if folder:
                os.makedirs(folder, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump({HIGHSCORE_KEY: self.value}, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            if os.path.isfile(tmp_path):
                os.remove(tmp_path)

    def submit(self, score: int) -> bool:
        """Record ``score`` if it beats the stored value. Returns True if it did."""
        if score <= self.value:
            return False
        self.value = score
        self._save()
        logger.info("New high score: %d", score)
        return True

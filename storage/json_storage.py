import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class JsonStateStorage:
    """Loads and saves the serialised app state as a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict | None:
        """Returns None on missing, corrupt or non-object file; never raises."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No saved state at %s, starting fresh", self.path)
            return None
        except (OSError, ValueError) as e:
            logger.warning("Could not read state file %s: %s", self.path, e)
            return None
        if not isinstance(data, dict):
            logger.warning("State file %s does not hold a JSON object", self.path)
            return None
        logger.info("Loaded state from %s", self.path)
        return data

    def save(self, state: dict) -> None:
        """Atomic write via .tmp + os.replace(); parent folder created if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(state, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Could not save state to %s", self.path)
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Saved state to %s", self.path)

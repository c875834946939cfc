"""Local JSON file backend."""

import json
import os
import tempfile
from pathlib import Path

import structlog

from people_connect.backend import Backend
from people_connect.codec import people_from_list, people_to_list
from people_connect.models import Person

logger = structlog.get_logger()


class JsonFileBackend(Backend):
    """Backend storing the collection as a JSON array in a single file."""

    def __init__(self, path: str | Path) -> None:
        """Initialize JSON file backend.

        Args:
            path: File holding the collection (created on first save)
        """
        self.path = Path(path).expanduser()
        logger.debug("Initializing JSON file backend", path=str(self.path))

    def load(self) -> list[Person]:
        """Load the collection.

        A missing file, unparsable content or a non-list document all yield an
        empty collection.
        """
        if not self.path.exists():
            logger.debug("Store file does not exist, starting empty", path=str(self.path))
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                logger.warning("Store file is not a list, starting empty", path=str(self.path))
                return []
            people = people_from_list(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Failed to load store file, starting empty", path=str(self.path), error=str(e))
            return []

        logger.debug("Store loaded", path=str(self.path), count=len(people))
        return people

    def save(self, people: list[Person]) -> None:
        """Write the collection, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(people_to_list(people), f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("Failed to save store file", path=str(self.path), error=str(e))
            Path(tmp_name).unlink(missing_ok=True)
            raise ValueError(f"Failed to save people to {self.path}: {e}") from e

        logger.debug("Store saved", path=str(self.path), count=len(people))

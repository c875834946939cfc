"""Export and import of the whole collection."""

import json
from pathlib import Path

import structlog

from people_connect.codec import people_from_list, people_to_list
from people_connect.models import Person

logger = structlog.get_logger()

DEFAULT_EXPORT_FILENAME = "people_connect_backup.json"


class ImportFormatError(ValueError):
    """Raised when an imported document is not a list of people."""


def export_people(people: list[Person]) -> str:
    """Serialize the collection to a JSON document."""
    return json.dumps(people_to_list(people), ensure_ascii=False)


def export_to_file(people: list[Person], path: str | Path = DEFAULT_EXPORT_FILENAME) -> Path:
    target = Path(path)
    target.write_text(export_people(people), encoding="utf-8")
    logger.info("Collection exported", path=str(target), count=len(people))
    return target


def import_people(text: str) -> list[Person]:
    """Parse an exported document into a new collection.

    The result replaces the current collection wholesale. Only the top-level
    shape is validated.

    Raises:
        ImportFormatError: If the document is not valid JSON, its top level is
            not a list, or an entry cannot be decoded
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Import document is not valid JSON", error=str(e))
        raise ImportFormatError("Invalid file format") from e

    if not isinstance(parsed, list):
        logger.warning("Import document is not a list", type=type(parsed).__name__)
        raise ImportFormatError("Invalid file format")

    try:
        people = people_from_list(parsed)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Import document has malformed entries", error=str(e))
        raise ImportFormatError("Invalid file format") from e

    logger.info("Collection imported", count=len(people))
    return people


def import_from_file(path: str | Path) -> list[Person]:
    return import_people(Path(path).read_text(encoding="utf-8"))

"""Operations on the people collection.

Every mutation returns a new collection or person; inputs are never modified.
"""

import re
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Literal

import structlog

from people_connect.models import Note, Person, RelationshipKind, generate_id

logger = structlog.get_logger()

SortOption = Literal["name", "created", "country"]

# fromisoformat on 3.10 only accepts 3 or 6 fractional digits
_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)")
_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


class PersonNotFoundError(KeyError):
    """Raised when a person id does not resolve."""


def new_person(
    name: str,
    phone: str = "",
    country: str = "",
    institute: str = "",
    linkedin: str | None = None,
    special_info: str | None = None,
    photo: str | None = None,
    role: RelationshipKind | None = None,
) -> Person:
    """Create a new person with a fresh id."""
    if not name or not name.strip():
        raise ValueError("Name is required")
    return Person(
        id=generate_id(),
        name=name.strip(),
        phone=phone,
        country=country,
        institute=institute,
        linkedin=linkedin,
        special_info=special_info,
        photo=photo,
        role=role,
    )


def find_person(people: list[Person], person_id: str) -> Person:
    for person in people:
        if person.id == person_id:
            return person
    raise PersonNotFoundError(person_id)


def save_person(people: list[Person], person: Person) -> list[Person]:
    """Replace the person with the same id, or append it if new."""
    if any(p.id == person.id for p in people):
        logger.info("Updating person", person_id=person.id)
        return [person if p.id == person.id else p for p in people]
    logger.info("Adding person", person_id=person.id)
    return [*people, person]


def delete_person(people: list[Person], person_id: str, confirm: Callable[[str], bool]) -> list[Person]:
    """Delete a person and every link that targets them.

    Returns:
        The new collection, or ``people`` itself if the deletion was not confirmed
    """
    person = find_person(people, person_id)
    if not confirm(f"Delete {person.name}? This action cannot be undone."):
        logger.debug("Deletion declined", person_id=person_id)
        return people

    remaining = []
    for p in people:
        if p.id == person_id:
            continue
        if any(link.target_id == person_id for link in p.links):
            p = replace(p, links=[link for link in p.links if link.target_id != person_id])
        remaining.append(p)

    logger.info("Person deleted", person_id=person_id, remaining=len(remaining))
    return remaining


def _parse_date(value: str) -> datetime:
    """Parse a note date for ordering; undated or malformed notes sort last."""
    normalized = _FRACTION.sub(lambda m: m.group(1) + "." + m.group(2)[:6].ljust(6, "0"), value.strip())
    try:
        parsed = datetime.fromisoformat(normalized.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable note date", date=value)
        return _UNDATED
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC timestamp with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def add_note(person: Person, content: str, date: datetime | None = None) -> Person:
    """Add a note, keeping notes ordered newest first."""
    if not content or not content.strip():
        raise ValueError("Note content is required")

    note = Note(id=generate_id(), date=format_timestamp(date or datetime.now(timezone.utc)), content=content)
    notes = sorted([note, *person.notes], key=lambda n: _parse_date(n.date), reverse=True)
    logger.info("Note added", person_id=person.id, note_id=note.id)
    return replace(person, notes=notes)


def delete_note(person: Person, note_id: str, confirm: Callable[[str], bool]) -> Person:
    """Delete a note from a person.

    Returns:
        The updated person, or ``person`` itself if the deletion was not confirmed
    """
    if not any(note.id == note_id for note in person.notes):
        raise ValueError(f"Note {note_id} not found for {person.id}")
    if not confirm("Delete this note?"):
        return person

    logger.info("Note deleted", person_id=person.id, note_id=note_id)
    return replace(person, notes=[note for note in person.notes if note.id != note_id])


def set_special_info(person: Person, text: str | None) -> Person:
    return replace(person, special_info=text or None)


def _matches_query(person: Person, query: str) -> bool:
    lower = query.lower()
    return (
        lower in person.name.lower()
        or lower in person.institute.lower()
        or any(lower in note.content.lower() for note in person.notes)
    )


def _has_kind(person: Person, kind: RelationshipKind) -> bool:
    return person.role == kind or any(link.kind == kind for link in person.links)


def search_people(
    people: list[Person],
    query: str = "",
    kind: RelationshipKind | None = None,
    sort_by: SortOption = "name",
) -> list[Person]:
    """Search, filter and sort the collection.

    Args:
        people: The full collection
        query: Case-insensitive text matched against name, institute and note content
        kind: Keep only people whose role or any link has this kind
        sort_by: "name" or "country" ascending, or "created" newest first

    Returns:
        Matching people in the requested order
    """
    result = [p for p in people if _matches_query(p, query)]
    if kind is not None:
        result = [p for p in result if _has_kind(p, kind)]

    if sort_by == "name":
        result.sort(key=lambda p: p.name.casefold())
    elif sort_by == "country":
        result.sort(key=lambda p: p.country.casefold())
    elif sort_by == "created":
        result.sort(key=lambda p: p.created_at, reverse=True)
    else:
        raise ValueError(f"Unknown sort option: {sort_by}")

    logger.debug("Searched people", query=query, sort_by=sort_by, count=len(result))
    return result

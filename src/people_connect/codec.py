"""Conversion between people and their JSON document form."""

from typing import Any

import structlog

from people_connect.models import Link, Note, Person, kind_label, now_millis, parse_kind

logger = structlog.get_logger()

# Older documents stored a person's own role as a relationship with this target.
LEGACY_SELF_TARGET = "SELF"


def note_to_dict(note: Note) -> dict[str, Any]:
    return {"id": note.id, "date": note.date, "content": note.content}


def link_to_dict(link: Link) -> dict[str, Any]:
    data: dict[str, Any] = {"targetId": link.target_id, "type": kind_label(link.kind)}
    if link.note is not None:
        data["note"] = link.note
    return data


def person_to_dict(person: Person) -> dict[str, Any]:
    """Convert a person to a JSON-compatible dict.

    Optional fields are omitted when unset.
    """
    data: dict[str, Any] = {
        "id": person.id,
        "name": person.name,
        "phone": person.phone,
        "country": person.country,
        "institute": person.institute,
    }
    if person.linkedin is not None:
        data["linkedin"] = person.linkedin
    if person.special_info is not None:
        data["specialInfo"] = person.special_info
    if person.photo is not None:
        data["photo"] = person.photo
    if person.role is not None:
        data["role"] = kind_label(person.role)
    data["notes"] = [note_to_dict(note) for note in person.notes]
    data["relationships"] = [link_to_dict(link) for link in person.links]
    data["createdAt"] = person.created_at
    return data


def note_from_dict(data: dict[str, Any]) -> Note:
    return Note(id=str(data["id"]), date=str(data.get("date", "")), content=str(data.get("content", "")))


def person_from_dict(data: dict[str, Any]) -> Person:
    """Convert a document dict to a person.

    Missing fields get defaults. A legacy self-role relationship becomes the
    person's role and is dropped from its links.
    """
    role = parse_kind(data["role"]) if data.get("role") else None
    links = []
    for rel in data.get("relationships", []):
        target_id = str(rel["targetId"])
        if target_id == LEGACY_SELF_TARGET:
            if role is None and rel.get("type"):
                role = parse_kind(rel["type"])
                logger.debug("Migrated legacy self role", person_id=data.get("id"), role=rel["type"])
            continue
        links.append(Link(target_id=target_id, kind=parse_kind(rel.get("type", "Other")), note=rel.get("note")))

    return Person(
        id=str(data["id"]),
        name=data.get("name", ""),
        phone=data.get("phone", ""),
        country=data.get("country", ""),
        institute=data.get("institute", ""),
        linkedin=data.get("linkedin"),
        special_info=data.get("specialInfo"),
        photo=data.get("photo"),
        role=role,
        notes=[note_from_dict(note) for note in data.get("notes", [])],
        links=links,
        created_at=int(data.get("createdAt", now_millis())),
    )


def people_to_list(people: list[Person]) -> list[dict[str, Any]]:
    return [person_to_dict(person) for person in people]


def people_from_list(items: list[dict[str, Any]]) -> list[Person]:
    return [person_from_dict(item) for item in items]

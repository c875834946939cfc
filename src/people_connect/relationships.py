"""Relationship views and link mutations.

Links are directed and stored on their owner. A person's relationships are the
links they hold plus the links other people hold towards them; when both sides
exist for the same counterpart, the person's own link wins.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace

import structlog

from people_connect.models import Link, Person, RelationshipKind, RelationshipView

logger = structlog.get_logger()


def build_relationship_view(person: Person, people: list[Person]) -> list[RelationshipView]:
    """Build the deduplicated relationship list for a person.

    Args:
        person: The person being viewed
        people: The full collection

    Returns:
        Direct relationships in link order, followed by implied ones in
        collection order, one entry per counterpart
    """
    by_id = {p.id: p for p in people}

    direct = []
    for link in person.links:
        target = by_id.get(link.target_id)
        if target is None:
            logger.debug("Skipping stale link", person_id=person.id, target_id=link.target_id)
            continue
        direct.append(RelationshipView(person=target, kind=link.kind, note=link.note, direct=True))

    implied = []
    for other in people:
        if other.id == person.id:
            continue
        link = next((lnk for lnk in other.links if lnk.target_id == person.id), None)
        if link is not None:
            implied.append(RelationshipView(person=other, kind=link.kind, note=link.note, direct=False))

    merged: dict[str, RelationshipView] = {}
    for view in direct + implied:
        if view.counterpart_id not in merged:
            merged[view.counterpart_id] = view

    logger.debug(
        "Built relationship view",
        person_id=person.id,
        direct=len(direct),
        implied=len(implied),
        total=len(merged),
    )
    return list(merged.values())


def upsert_links(
    person: Person,
    target_ids: Iterable[str],
    kind: RelationshipKind,
    note: str | None = None,
) -> Person:
    """Add or replace links from a person to each target.

    An existing link to a target is replaced in place, keeping its position.
    New targets are appended. The kind and note fully replace any prior link.
    """
    links = list(person.links)
    for target_id in target_ids:
        if target_id == person.id:
            logger.debug("Ignoring link to self", person_id=person.id)
            continue
        link = Link(target_id=target_id, kind=kind, note=note)
        index = next((i for i, existing in enumerate(links) if existing.target_id == target_id), None)
        if index is None:
            links.append(link)
        else:
            links[index] = link

    logger.info("Links upserted", person_id=person.id, added=len(links) - len(person.links))
    return replace(person, links=links)


def remove_link(person: Person, target_id: str) -> Person:
    """Return a copy of person without its links to target_id."""
    return replace(person, links=[link for link in person.links if link.target_id != target_id])


def remove_relationship(
    people: list[Person],
    person: Person,
    view: RelationshipView,
    confirm: Callable[[str], bool],
) -> list[Person]:
    """Remove a relationship wherever its link is stored.

    A direct relationship is removed from the viewed person. An implied one is
    removed from the counterpart, whose link to the viewed person is what makes
    it exist.

    Returns:
        The new collection, or ``people`` itself if the removal was not confirmed
    """
    if not confirm(f"Remove relationship with {view.person.name}?"):
        logger.debug("Relationship removal declined", person_id=person.id, counterpart_id=view.counterpart_id)
        return people

    if view.direct:
        owner_id, target_id = person.id, view.counterpart_id
    else:
        owner_id, target_id = view.counterpart_id, person.id

    logger.info("Removing relationship", owner_id=owner_id, target_id=target_id, direct=view.direct)
    return [remove_link(p, target_id) if p.id == owner_id else p for p in people]


def link_candidates(person: Person, people: list[Person], query: str) -> list[Person]:
    """People a person could be linked to, matched by name or institute."""
    if not query:
        return []
    lower = query.lower()
    return [
        p for p in people if p.id != person.id and (lower in p.name.lower() or lower in p.institute.lower())
    ]

"""Shared test helpers."""

import pytest

from people_connect.models import Link, Person, StandardKind


def make_person(person_id: str, name: str | None = None, links: list[Link] | None = None, **kwargs) -> Person:
    """Build a person with a fixed id."""
    return Person(id=person_id, name=name or person_id.title(), links=links or [], **kwargs)


@pytest.fixture
def people() -> list[Person]:
    """Alice -> Bob (Friend), Carol -> Alice (Mentor), Bob -> Alice (Colleague)."""
    return [
        make_person("alice", links=[Link("bob", StandardKind.FRIEND, "school")], created_at=1),
        make_person("bob", links=[Link("alice", StandardKind.COLLEAGUE)], created_at=2),
        make_person("carol", links=[Link("alice", StandardKind.MENTOR, "thesis")], created_at=3),
    ]

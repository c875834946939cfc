"""Tests for backend interface."""

import pytest

from people_connect.backend import Backend
from people_connect.contacts import add_note, delete_person, new_person, save_person
from people_connect.models import Person, StandardKind
from people_connect.relationships import upsert_links


class MockBackend(Backend):
    """Mock backend for testing."""

    def __init__(self) -> None:
        """Initialize mock backend."""
        self.saved: list[list[Person]] = []

    def load(self) -> list[Person]:
        """Return the last saved collection."""
        return list(self.saved[-1]) if self.saved else []

    def save(self, people: list[Person]) -> None:
        """Record the collection."""
        self.saved.append(list(people))


def test_backend_is_abstract() -> None:
    with pytest.raises(TypeError):
        Backend()  # type: ignore[abstract]


def test_load_empty() -> None:
    assert MockBackend().load() == []


def test_mutations_save_full_snapshots() -> None:
    """Each accepted mutation persists a complete new collection."""
    backend = MockBackend()

    ada = new_person("Ada")
    backend.save(save_person(backend.load(), ada))
    bob = new_person("Bob")
    backend.save(save_person(backend.load(), bob))

    people = backend.load()
    backend.save(save_person(people, upsert_links(people[0], [bob.id], StandardKind.FRIEND)))
    people = backend.load()
    backend.save(save_person(people, add_note(people[1], "Coffee")))

    assert len(backend.saved) == 4
    assert [p.name for p in backend.saved[0]] == ["Ada"]
    assert backend.saved[1][0].links == []
    assert backend.saved[2][0].links[0].target_id == bob.id
    assert backend.saved[3][1].notes[0].content == "Coffee"


def test_declined_delete_keeps_snapshot() -> None:
    backend = MockBackend()
    backend.save([new_person("Ada")])
    people = backend.load()

    result = delete_person(people, people[0].id, lambda _message: False)

    assert result is people
    assert len(backend.load()) == 1

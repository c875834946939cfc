"""Link management commands for people connect CLI."""

from cyclopts import App

from people_connect.contacts import find_person, save_person
from people_connect.models import StandardKind, kind_label
from people_connect.relationships import build_relationship_view, link_candidates, remove_relationship, upsert_links

link_app = App(name="link", help="Manage relationships between people")


@link_app.command
def add(
    person_id: str,
    *target_ids: str,
    kind: str = StandardKind.COLLEAGUE.value,
    custom: str | None = None,
    note: str | None = None,
) -> None:
    """Link a person to one or more others, replacing existing links to them."""
    from people_connect.cli import get_backend, kind_from_options

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)
    for target_id in target_ids:
        find_person(people, target_id)

    updated = upsert_links(person, target_ids, kind_from_options(kind, custom), note)
    backend.save(save_person(people, updated))
    print(f"Linked {len(target_ids)} person(s) to {person_id}")


@link_app.command
def remove(person_id: str, counterpart_id: str, yes: bool = False) -> None:
    """Remove the relationship between a person and a counterpart."""
    from people_connect.cli import confirmer, get_backend

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    view = next((v for v in build_relationship_view(person, people) if v.counterpart_id == counterpart_id), None)
    if view is None:
        print(f"No relationship between {person_id} and {counterpart_id}")
        return

    updated = remove_relationship(people, person, view, confirmer(yes))
    if updated is people:
        print("Cancelled")
        return
    backend.save(updated)
    print(f"Removed relationship between {person_id} and {counterpart_id}")


@link_app.command(name="list")
def list_links(person_id: str) -> None:
    """List all relationships of a person, direct and implied."""
    from people_connect.cli import get_backend

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)
    views = build_relationship_view(person, people)

    if not views:
        print(f"No relationships found for {person_id}")
        return

    print(f"Relationships for {person_id}:\n")
    for view in views:
        source = "direct" if view.direct else "implied"
        note = f" - {view.note}" if view.note else ""
        print(f"  {view.person.id}: {view.person.name} [{kind_label(view.kind)}] ({source}){note}")


@link_app.command
def search(person_id: str, query: str) -> None:
    """Find people to link to, matched by name or institute."""
    from people_connect.cli import format_person_line, get_backend

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)
    candidates = link_candidates(person, people, query)

    if not candidates:
        print(f"No people matching '{query}'")
        return

    print(f"Candidates for {person_id}:\n")
    for candidate in candidates:
        print(f"  {format_person_line(candidate)}")

"""CLI for people connect."""

import base64
import mimetypes
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Literal

import structlog
from cyclopts import App, Parameter

from people_connect.assistant import get_assistant
from people_connect.backend import Backend
from people_connect.backends import JsonFileBackend
from people_connect.config import get_config
from people_connect.config_commands import config_app
from people_connect.contacts import (
    PersonNotFoundError,
    delete_person,
    find_person,
    new_person,
    save_person,
    search_people,
)
from people_connect.link_commands import link_app
from people_connect.models import Person, RelationshipKind, StandardKind, kind_label, parse_kind, resolve_kind
from people_connect.note_commands import note_app
from people_connect.relationships import build_relationship_view
from people_connect.transfer import DEFAULT_EXPORT_FILENAME, ImportFormatError, export_to_file, import_from_file

logger = structlog.get_logger()

app = App(
    help="People Connect - A personal contact and relationship manager",
)

app.command(note_app)
app.command(link_app)
app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_backend() -> Backend:
    """Get the configured backend."""
    config = get_config()
    return JsonFileBackend(config.store_path)


def confirm_prompt(message: str) -> bool:
    """Ask a yes/no question on stdin."""
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def confirmer(yes: bool) -> Callable[[str], bool]:
    """Return a confirmation callback, auto-accepting when yes is set."""
    if yes:
        return lambda _message: True
    return confirm_prompt


def kind_from_options(kind: str | None, custom: str | None = None) -> RelationshipKind | None:
    """Turn a --kind/--custom option pair into a relationship kind.

    Standard labels match case-insensitively; anything else is free text.
    A blank kind means no kind, which clears a role on edit.
    """
    if kind is None or not kind.strip():
        return None
    for standard in StandardKind:
        if standard.value.lower() == kind.strip().lower():
            return resolve_kind(standard, custom)
    return parse_kind(kind.strip())


def read_photo(path: Path) -> str:
    """Read an image file as a base64 data URL."""
    mime, _ = mimetypes.guess_type(path.name)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ValueError(f"Cannot read photo {path}: {e}") from e
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{encoded}"


def format_person_line(person: Person) -> str:
    role = kind_label(person.role) if person.role else "Contact"
    details = ", ".join(part for part in (person.institute, person.country) if part)
    suffix = f" ({details})" if details else ""
    return f"{person.id}: {person.name} [{role}]{suffix}"


@app.command
def add(
    name: str,
    phone: str = "",
    country: str = "",
    institute: str = "",
    linkedin: str | None = None,
    info: str | None = None,
    role: str | None = None,
    custom_role: str | None = None,
    photo: Path | None = None,
) -> None:
    """Add a new person."""
    backend = get_backend()
    people = backend.load()

    person = new_person(
        name,
        phone=phone,
        country=country,
        institute=institute,
        linkedin=linkedin,
        special_info=info,
        photo=read_photo(photo) if photo else None,
        role=kind_from_options(role, custom_role),
    )
    backend.save(save_person(people, person))
    print(f"Added {person.id}: {person.name}")


@app.command
def edit(
    person_id: str,
    name: str | None = None,
    phone: str | None = None,
    country: str | None = None,
    institute: str | None = None,
    linkedin: str | None = None,
    info: str | None = None,
    role: str | None = None,
    custom_role: str | None = None,
    photo: Path | None = None,
) -> None:
    """Edit a person's profile fields."""
    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    if name is not None and not name.strip():
        raise ValueError("Name is required")

    updated = replace(
        person,
        name=name.strip() if name is not None else person.name,
        phone=phone if phone is not None else person.phone,
        country=country if country is not None else person.country,
        institute=institute if institute is not None else person.institute,
        linkedin=linkedin if linkedin is not None else person.linkedin,
        special_info=info if info is not None else person.special_info,
        photo=read_photo(photo) if photo else person.photo,
        role=kind_from_options(role, custom_role) if role is not None else person.role,
    )
    backend.save(save_person(people, updated))
    print(f"Updated {updated.id}: {updated.name}")


@app.command
def show(person_id: str) -> None:
    """Show a person with notes and relationships."""
    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    print(f"Person: {person.id}")
    print(f"Name: {person.name}")
    print(f"Role: {kind_label(person.role) if person.role else 'Contact'}")
    if person.phone:
        print(f"Phone: {person.phone}")
    if person.country:
        print(f"Country: {person.country}")
    if person.institute:
        print(f"Institute: {person.institute}")
    if person.linkedin:
        print(f"LinkedIn: {person.linkedin}")
    if person.special_info:
        print(f"Info: {person.special_info}")

    if person.notes:
        print("\nNotes:")
        for note in person.notes:
            print(f"  [{note.id}] {note.date[:10]}  {note.content}")

    views = build_relationship_view(person, people)
    if views:
        print("\nRelationships:")
        for view in views:
            marker = "->" if view.direct else "<-"
            note = f" ({view.note})" if view.note else ""
            print(f"  {marker} {view.person.id}: {view.person.name} [{kind_label(view.kind)}]{note}")


@app.command
def delete(person_id: str, yes: bool = False) -> None:
    """Delete a person and every relationship pointing at them."""
    backend = get_backend()
    people = backend.load()

    remaining = delete_person(people, person_id, confirmer(yes))
    if remaining is people:
        print("Cancelled")
        return
    backend.save(remaining)
    print(f"Deleted {person_id}")


@app.command(name="list")
def list_people(
    search: str = "",
    kind: str | None = None,
    custom: str | None = None,
    sort: Literal["name", "created", "country"] = "name",
) -> None:
    """List people with optional search, kind filter and sorting."""
    backend = get_backend()
    people = search_people(backend.load(), query=search, kind=kind_from_options(kind, custom), sort_by=sort)

    print(f"Found {len(people)} person(s):\n")
    for person in people:
        print(format_person_line(person))


@app.command
def suggest(person_id: str) -> None:
    """Suggest conversation starters based on a person's notes."""
    backend = get_backend()
    person = find_person(backend.load(), person_id)

    suggestions = get_assistant(get_config()).suggest_conversation_starters(
        person.name, [note.content for note in person.notes]
    )
    if not suggestions:
        print("No suggestions available")
        return
    for i, suggestion in enumerate(suggestions, 1):
        print(f"{i}. {suggestion}")


@app.command
def export(path: Path = Path(DEFAULT_EXPORT_FILENAME)) -> None:
    """Export all people to a JSON document."""
    backend = get_backend()
    people = backend.load()
    target = export_to_file(people, path)
    print(f"Exported {len(people)} person(s) to {target}")


@app.command(name="import")
def import_(path: Path) -> None:
    """Replace all people with the contents of an exported document."""
    backend = get_backend()
    try:
        people = import_from_file(path)
    except (ImportFormatError, OSError) as e:
        print(f"Import failed: {e}")
        return
    backend.save(people)
    print(f"Imported {len(people)} person(s)")


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    try:
        app(tokens)
    except PersonNotFoundError as e:
        print(f"Person not found: {e.args[0]}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    app.meta()

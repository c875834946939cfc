"""Note commands for people connect CLI."""

from datetime import date as date_type
from datetime import datetime, timezone

from cyclopts import App

from people_connect.contacts import add_note, delete_note, find_person, save_person, set_special_info

note_app = App(name="note", help="Manage notes about a person")


@note_app.command
def add(person_id: str, text: str, date: str | None = None, polish: bool = False) -> None:
    """Add a dated note to a person.

    Args:
        person_id: Person to add the note to
        text: Note content
        date: Note date as YYYY-MM-DD (defaults to now)
        polish: Rewrite the note with the assistant before saving
    """
    from people_connect.assistant import get_assistant
    from people_connect.cli import get_backend
    from people_connect.config import get_config

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    if polish:
        text = get_assistant(get_config()).polish_note(text)

    when = None
    if date:
        day = date_type.fromisoformat(date)
        when = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)

    updated = add_note(person, text, when)
    backend.save(save_person(people, updated))
    print(f"Added note to {person_id}")


@note_app.command
def delete(person_id: str, note_id: str, yes: bool = False) -> None:
    """Delete a note from a person."""
    from people_connect.cli import confirmer, get_backend

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    updated = delete_note(person, note_id, confirmer(yes))
    if updated is person:
        print("Cancelled")
        return
    backend.save(save_person(people, updated))
    print(f"Deleted note {note_id}")


@note_app.command
def info(person_id: str, text: str = "") -> None:
    """Set or clear a person's special info."""
    from people_connect.cli import get_backend

    backend = get_backend()
    people = backend.load()
    person = find_person(people, person_id)

    backend.save(save_person(people, set_special_info(person, text)))
    print(f"Updated info for {person_id}")


@note_app.command
def polish(text: str) -> None:
    """Print a polished version of some note text."""
    from people_connect.assistant import get_assistant
    from people_connect.config import get_config

    print(get_assistant(get_config()).polish_note(text))

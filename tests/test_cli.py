"""Tests for CLI commands."""

import json
from unittest.mock import MagicMock, patch

import pytest

from people_connect import cli, link_commands, note_commands
from people_connect.backends.json_file import JsonFileBackend
from people_connect.models import CustomKind, Link, Person, StandardKind


@pytest.fixture
def backend(tmp_path):
    backend = JsonFileBackend(tmp_path / "people.json")
    backend.save(
        [
            Person(id="ada", name="Ada", institute="Royal Society", created_at=1),
            Person(id="bob", name="Bob", links=[Link("ada", StandardKind.MENTOR)], created_at=2),
        ]
    )
    with patch("people_connect.cli.get_backend", return_value=backend):
        yield backend


def test_kind_from_options() -> None:
    assert cli.kind_from_options(None) is None
    assert cli.kind_from_options("friend") is StandardKind.FRIEND
    assert cli.kind_from_options("Other", "Neighbour") == CustomKind("Neighbour")
    assert cli.kind_from_options("other") is StandardKind.OTHER
    assert cli.kind_from_options("Landlord") == CustomKind("Landlord")


def test_add_person(backend, capsys) -> None:
    cli.add("Cleo", country="Egypt", role="Other", custom_role="Pharaoh")

    people = backend.load()
    assert people[-1].name == "Cleo"
    assert people[-1].role == CustomKind("Pharaoh")
    assert "Added" in capsys.readouterr().out


def test_add_person_with_photo(backend, tmp_path) -> None:
    photo = tmp_path / "face.png"
    photo.write_bytes(b"\x89PNG")

    cli.add("Cleo", photo=photo)

    assert backend.load()[-1].photo == "data:image/png;base64,iVBORw=="


def test_edit_person(backend) -> None:
    cli.edit("ada", phone="123", role="Family")

    ada = backend.load()[0]
    assert ada.phone == "123"
    assert ada.role is StandardKind.FAMILY
    assert ada.name == "Ada"


def test_show_lists_implied_relationship(backend, capsys) -> None:
    cli.show("ada")

    out = capsys.readouterr().out
    assert "Name: Ada" in out
    assert "<- bob: Bob [Mentor]" in out


def test_list_people_search(backend, capsys) -> None:
    cli.list_people(search="royal")

    out = capsys.readouterr().out
    assert "Found 1 person(s)" in out
    assert "ada: Ada [Contact] (Royal Society)" in out


def test_delete_confirmed(backend) -> None:
    cli.delete("ada", yes=True)

    people = backend.load()
    assert [p.id for p in people] == ["bob"]
    assert people[0].links == []


def test_delete_declined(backend, capsys) -> None:
    with patch("builtins.input", return_value="n"):
        cli.delete("ada")

    assert len(backend.load()) == 2
    assert "Cancelled" in capsys.readouterr().out


def test_export_import(backend, tmp_path, capsys) -> None:
    target = tmp_path / "backup.json"
    cli.export(target)
    original = backend.load()

    backend.save([])
    cli.import_(target)

    assert backend.load() == original


def test_import_invalid_keeps_collection(backend, tmp_path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"not": "a list"}))

    cli.import_(bad)

    assert len(backend.load()) == 2
    assert "Import failed" in capsys.readouterr().out


def test_suggest(backend, capsys) -> None:
    assistant = MagicMock()
    assistant.suggest_conversation_starters.return_value = ["How is the society?"]
    with patch("people_connect.cli.get_config"), patch("people_connect.cli.get_assistant", return_value=assistant):
        cli.suggest("ada")

    assert "1. How is the society?" in capsys.readouterr().out
    assistant.suggest_conversation_starters.assert_called_once_with("Ada", [])


def test_note_add_and_delete(backend) -> None:
    note_commands.add("ada", "Coffee chat", date="2024-02-03")

    note = backend.load()[0].notes[0]
    assert note.content == "Coffee chat"
    assert note.date == "2024-02-03T00:00:00.000Z"

    note_commands.delete("ada", note.id, yes=True)
    assert backend.load()[0].notes == []


def test_note_add_polished(backend) -> None:
    assistant = MagicMock()
    assistant.polish_note.return_value = "Had a coffee chat."
    with patch("people_connect.config.get_config"), patch(
        "people_connect.assistant.get_assistant", return_value=assistant
    ):
        note_commands.add("ada", "coffee chat", polish=True)

    assert backend.load()[0].notes[0].content == "Had a coffee chat."


def test_note_info(backend) -> None:
    note_commands.info("ada", "Prefers email")
    assert backend.load()[0].special_info == "Prefers email"


def test_link_add_and_list(backend, capsys) -> None:
    link_commands.add("ada", "bob", kind="Other", custom="Co-author", note="paper")

    ada = backend.load()[0]
    assert ada.links == [Link("bob", CustomKind("Co-author"), "paper")]

    link_commands.list_links("ada")
    assert "bob: Bob [Co-author] (direct) - paper" in capsys.readouterr().out


def test_link_add_unknown_target(backend) -> None:
    with pytest.raises(KeyError):
        link_commands.add("ada", "ghost")


def test_link_remove_implied(backend) -> None:
    link_commands.remove("ada", "bob", yes=True)

    people = backend.load()
    assert people[1].links == []


def test_edit_clears_role(backend) -> None:
    cli.edit("ada", role="Client")
    assert backend.load()[0].role is StandardKind.CLIENT

    cli.edit("ada", role="")
    assert backend.load()[0].role is None


def test_add_person_missing_photo(backend, tmp_path) -> None:
    with pytest.raises(ValueError, match="Cannot read photo"):
        cli.add("Cleo", photo=tmp_path / "missing.png")

    assert len(backend.load()) == 2


def test_import_missing_file(backend, tmp_path, capsys) -> None:
    cli.import_(tmp_path / "missing.json")

    assert len(backend.load()) == 2
    assert "Import failed" in capsys.readouterr().out


def test_link_search(backend, capsys) -> None:
    link_commands.search("bob", "royal")
    assert "ada: Ada [Contact] (Royal Society)" in capsys.readouterr().out

    link_commands.search("ada", "ada")
    assert "No people matching 'ada'" in capsys.readouterr().out

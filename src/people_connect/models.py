"""Data models for people connect."""

import secrets
import string
import time
from dataclasses import dataclass, field
from enum import Enum

_ID_ALPHABET = string.ascii_lowercase + string.digits


class StandardKind(str, Enum):
    """Fixed relationship kinds."""

    FRIEND = "Friend"
    COLLEAGUE = "Colleague"
    CLIENT = "Client"
    FAMILY = "Family"
    MENTOR = "Mentor"
    OTHER = "Other"


@dataclass(frozen=True)
class CustomKind:
    """Free-text relationship kind, used when the standard kind is Other."""

    text: str


RelationshipKind = StandardKind | CustomKind


def resolve_kind(kind: StandardKind, custom: str | None = None) -> RelationshipKind:
    """Pick the effective kind, applying the free-text override for Other.

    Free text that spells a standard label resolves to that standard kind.
    """
    if kind is StandardKind.OTHER:
        text = (custom or "").strip()
        return parse_kind(text) if text else StandardKind.OTHER
    return kind


def parse_kind(label: str) -> RelationshipKind:
    """Map a stored label back to a kind."""
    for kind in StandardKind:
        if kind.value == label:
            return kind
    return CustomKind(label)


def kind_label(kind: RelationshipKind) -> str:
    if isinstance(kind, CustomKind):
        return kind.text
    return kind.value


def generate_id() -> str:
    """Generate a short random identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class Note:
    """A dated free-text note about a person."""

    id: str
    date: str
    content: str


@dataclass
class Link:
    """A directed relationship to another person, stored on its owner."""

    target_id: str
    kind: RelationshipKind = StandardKind.COLLEAGUE
    note: str | None = None


@dataclass
class Person:
    """Represents a contact with profile fields, notes and links."""

    id: str
    name: str
    phone: str = ""
    country: str = ""
    institute: str = ""
    linkedin: str | None = None
    special_info: str | None = None
    photo: str | None = None
    role: RelationshipKind | None = None
    notes: list[Note] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    created_at: int = field(default_factory=now_millis)


@dataclass
class RelationshipView:
    """A relationship as seen from one person.

    ``direct`` is True when the link is stored on the viewed person, False when
    it is only implied by the counterpart's own link.
    """

    person: Person
    kind: RelationshipKind
    note: str | None = None
    direct: bool = True

    @property
    def counterpart_id(self) -> str:
        return self.person.id

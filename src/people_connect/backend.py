"""Backend interface for people storage."""

from abc import ABC, abstractmethod

from people_connect.models import Person


class Backend(ABC):
    """Abstract base class for storage backends.

    A backend persists the whole collection at once.
    """

    @abstractmethod
    def load(self) -> list[Person]:
        """Load the collection, or an empty list if nothing usable was saved."""
        pass

    @abstractmethod
    def save(self, people: list[Person]) -> None:
        """Persist the whole collection."""
        pass

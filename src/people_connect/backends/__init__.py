"""Backend implementations."""

from people_connect.backends.json_file import JsonFileBackend

__all__ = ["JsonFileBackend"]

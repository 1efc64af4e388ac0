"""Shared enumerations for the backend."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class CredentialsErrorKind(_ValuesMixin, str, Enum):
    """Why credentials could not be loaded for a connection attempt."""

    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    UNAVAILABLE = "unavailable"


class ResourceFormat(_ValuesMixin, str, Enum):
    """Resource content formats, keyed by object-key extension."""

    JSON = "json"

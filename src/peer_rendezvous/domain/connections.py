"""Domain models for signaling connections."""

from dataclasses import dataclass

MAX_CONNECTION_NAME_LENGTH = 100


@dataclass(frozen=True)
class ConnectionRecord:
    """Represents a persisted connection with its offer and answer."""

    id: str
    password: str | None = None
    offer: str | None = None
    answer: str | None = None


def is_valid_connection_name(connection_name: str | None) -> bool:
    """Return True for non-empty names of at most 100 characters."""
    if not connection_name:
        return False
    return len(connection_name) <= MAX_CONNECTION_NAME_LENGTH

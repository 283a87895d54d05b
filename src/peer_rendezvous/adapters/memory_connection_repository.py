"""In-process connection repository."""

from dataclasses import replace
from threading import Lock

from peer_rendezvous.domain.connections import ConnectionRecord
from peer_rendezvous.services.signaling import ConnectionRepository

_MERGEABLE_FIELDS = {"password", "offer", "answer"}


class InMemoryConnectionRepository(ConnectionRepository):
    """Connection records kept in a dict, for local runs and tests.

    Records are immutable and swapped whole under a lock, so readers only
    ever see fully applied merges.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: dict[str, ConnectionRecord] = {}

    def get_connection(self, connection_id: str) -> ConnectionRecord | None:
        """Return a connection by id, if present."""
        with self._lock:
            return self._records.get(connection_id)

    def merge_connection(self, connection_id: str, fields: dict[str, str]) -> None:
        """Create the connection or update only the given fields."""
        unknown = set(fields) - _MERGEABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown connection fields: {sorted(unknown)}")
        with self._lock:
            current = self._records.get(connection_id) or ConnectionRecord(
                id=connection_id
            )
            self._records[connection_id] = replace(current, **fields)

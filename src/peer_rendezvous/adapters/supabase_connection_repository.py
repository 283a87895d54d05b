"""Supabase-backed connection repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from peer_rendezvous.domain.connections import ConnectionRecord
from peer_rendezvous.services.signaling import ConnectionRepository


@dataclass
class SupabaseConnectionRepository(ConnectionRepository):
    """Supabase implementation for connection records."""

    client: Client
    table_name: str = "connections"

    def get_connection(self, connection_id: str) -> ConnectionRecord | None:
        """Return a connection by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select("id, password, offer, answer")
            .eq("id", connection_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return ConnectionRecord(
            id=row["id"],
            password=_as_text(row.get("password")),
            offer=_as_text(row.get("offer")),
            answer=_as_text(row.get("answer")),
        )

    def merge_connection(self, connection_id: str, fields: dict[str, str]) -> None:
        """Upsert the connection row, touching only the given columns."""
        # A single INSERT ... ON CONFLICT DO UPDATE keeps the merge row-atomic.
        self.client.table(self.table_name).upsert(
            {
                "id": connection_id,
                **fields,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="id",
        ).execute()


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)

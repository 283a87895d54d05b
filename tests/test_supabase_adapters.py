"""Tests for the Supabase connection repository."""

from dataclasses import dataclass, field

from peer_rendezvous.adapters.supabase_connection_repository import (
    SupabaseConnectionRepository,
)
from peer_rendezvous.domain.connections import ConnectionRecord


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_get_connection_maps_row() -> None:
    client = FakeSupabaseClient()
    client.table("connections").queue(
        "select",
        [{"id": "room-1", "password": "secret", "offer": "o", "answer": None}],
    )
    repository = SupabaseConnectionRepository(client)

    record = repository.get_connection("room-1")

    assert record == ConnectionRecord(
        id="room-1", password="secret", offer="o", answer=None
    )
    assert client.table("connections").last_filters == [("id", "room-1")]


def test_get_connection_returns_none_when_missing() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseConnectionRepository(client)

    assert repository.get_connection("missing") is None


def test_get_connection_stringifies_non_text_columns() -> None:
    client = FakeSupabaseClient()
    client.table("connections").queue(
        "select", [{"id": "room-1", "password": 1234, "offer": "o"}]
    )
    repository = SupabaseConnectionRepository(client)

    record = repository.get_connection("room-1")

    assert record is not None
    assert record.password == "1234"
    assert record.answer is None


def test_merge_connection_upserts_given_fields() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseConnectionRepository(client, table_name="signaling")

    repository.merge_connection("room-1", {"answer": "a"})

    table = client.table("signaling")
    assert table.last_on_conflict == "id"
    assert isinstance(table.last_payload, dict)
    payload = dict(table.last_payload)
    assert payload.pop("updated_at")
    assert payload == {"id": "room-1", "answer": "a"}

"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from peer_rendezvous.adapters.memory_connection_repository import (
    InMemoryConnectionRepository,
)
from peer_rendezvous.config import Settings
from peer_rendezvous.containers import AppContainer
from peer_rendezvous.domain.connections import ConnectionRecord
from peer_rendezvous.services.signaling import ConnectionRepository, SignalingService


@dataclass
class FailingConnectionRepository(ConnectionRepository):
    """Repository whose reads and/or writes raise, for storage failure paths."""

    fail_reads: bool = True
    fail_writes: bool = True
    record: ConnectionRecord | None = None
    merges: list[dict[str, str]] = field(default_factory=list)

    def get_connection(self, connection_id: str) -> ConnectionRecord | None:
        if self.fail_reads:
            raise RuntimeError("store unavailable")
        return self.record

    def merge_connection(self, connection_id: str, fields: dict[str, str]) -> None:
        if self.fail_writes:
            raise RuntimeError("store unavailable")
        self.merges.append(fields)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        connection_store="memory",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def connection_repository() -> InMemoryConnectionRepository:
    return InMemoryConnectionRepository()


@pytest.fixture
def signaling_service(
    connection_repository: InMemoryConnectionRepository,
) -> SignalingService:
    return SignalingService(connection_repository)


@pytest.fixture
def container(
    settings: Settings,
    connection_repository: InMemoryConnectionRepository,
    signaling_service: SignalingService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        connection_repository=connection_repository,
        signaling_service=signaling_service,
        close_resources=close_resources,
    )

"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from peer_rendezvous.adapters.memory_connection_repository import (
    InMemoryConnectionRepository,
)
from peer_rendezvous.adapters.supabase_connection_repository import (
    SupabaseConnectionRepository,
)
from peer_rendezvous.config import Settings
from peer_rendezvous.services.signaling import ConnectionRepository, SignalingService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    connection_repository: ConnectionRepository
    signaling_service: SignalingService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    connection_repository = _build_connection_repository(resolved_settings)
    signaling_service = SignalingService(connection_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        connection_repository=connection_repository,
        signaling_service=signaling_service,
        close_resources=close_resources,
    )


def _build_connection_repository(settings: Settings) -> ConnectionRepository:
    if settings.connection_store == "memory":
        _logger.warning("Using in-memory connection store; data is not persisted")
        return InMemoryConnectionRepository()
    if not settings.supabase_url or not settings.supabase_service_key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for the "
            "supabase connection store"
        )
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    return SupabaseConnectionRepository(
        supabase_client, table_name=settings.connections_table
    )

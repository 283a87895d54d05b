"""Offer/answer exchange for peer connections."""

import hmac
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from peer_rendezvous.domain.connections import (
    ConnectionRecord,
    is_valid_connection_name,
)
from peer_rendezvous.domain.errors import (
    AnswerNotFoundError,
    ConnectionDoesNotExistError,
    ConnectionNotFoundError,
    InvalidConnectionNameError,
    InvalidOfferError,
    OfferNotFoundError,
    PasswordMismatchError,
    StorageFailureError,
)

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ConnectionRepository(Protocol):
    """Persistence interface for connection records."""

    def get_connection(self, connection_id: str) -> ConnectionRecord | None:
        """Return the connection for an id, if present."""

    def merge_connection(self, connection_id: str, fields: dict[str, str]) -> None:
        """Create the connection or update only the given fields, atomically."""


@dataclass
class SignalingService:
    """Publishes and retrieves offers and answers for named connections.

    The service holds no state of its own; every call reads from and writes
    to the repository.
    """

    repository: ConnectionRepository

    def publish_offer(
        self, connection_name: str, password: str | None, offer: str | None
    ) -> None:
        """Store an offer, creating the connection if needed.

        Re-publishing replaces the offer and password and keeps any answer.
        """
        _require_valid_name(connection_name)
        if not offer:
            raise InvalidOfferError
        self._call_store(
            lambda: self.repository.merge_connection(
                connection_name, {"password": password or "", "offer": offer}
            )
        )
        _logger.info("Offer published for connection %s", connection_name)

    def get_offer(self, connection_name: str, password: str | None) -> str:
        """Return the offer for a connection the caller may read."""
        _require_valid_name(connection_name)
        record = self._call_store(
            lambda: self.repository.get_connection(connection_name)
        )
        if record is None:
            raise ConnectionNotFoundError
        _require_password(record, password)
        return record.offer or ""

    def publish_answer(
        self, connection_name: str, password: str | None, answer: str | None
    ) -> None:
        """Store an answer for an existing offer.

        An absent answer is stored as an empty string.
        """
        _require_valid_name(connection_name)
        record = self._call_store(
            lambda: self.repository.get_connection(connection_name)
        )
        if record is None:
            raise ConnectionNotFoundError
        _require_password(record, password)
        if not record.offer:
            raise OfferNotFoundError
        self._call_store(
            lambda: self.repository.merge_connection(
                connection_name, {"answer": answer or ""}
            )
        )
        _logger.info("Answer published for connection %s", connection_name)

    def get_answer(self, connection_name: str) -> str:
        """Return the published answer for a connection."""
        # Answers are readable without the connection password.
        _require_valid_name(connection_name)
        record = self._call_store(
            lambda: self.repository.get_connection(connection_name)
        )
        if record is None:
            raise ConnectionDoesNotExistError
        if not record.answer:
            raise AnswerNotFoundError
        return record.answer

    def _call_store(self, func: Callable[[], _T]) -> _T:
        """Run a repository call, converting its failures to StorageFailureError."""
        try:
            return func()
        except Exception as exc:
            raise StorageFailureError(exc) from exc


def _require_valid_name(connection_name: str | None) -> None:
    if not is_valid_connection_name(connection_name):
        raise InvalidConnectionNameError


def _require_password(record: ConnectionRecord, password: str | None) -> None:
    stored = record.password or ""
    if not stored:
        return
    supplied = password or ""
    if not hmac.compare_digest(stored.encode(), supplied.encode()):
        raise PasswordMismatchError

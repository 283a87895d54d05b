"""Tests for connection name validation."""

import pytest

from peer_rendezvous.domain.connections import is_valid_connection_name


@pytest.mark.parametrize(
    "name",
    ["a", "room-1", "x" * 100, "spaces and ünïcode are fine", "../../etc"],
)
def test_valid_names(name: str) -> None:
    assert is_valid_connection_name(name)


@pytest.mark.parametrize("name", [None, "", "x" * 101, "y" * 500])
def test_invalid_names(name: str | None) -> None:
    assert not is_valid_connection_name(name)

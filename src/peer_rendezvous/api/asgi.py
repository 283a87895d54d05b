"""ASGI entrypoint for the peer rendezvous API."""

from peer_rendezvous.api.app import create_app
from peer_rendezvous.containers import build_container

app = create_app(build_container())

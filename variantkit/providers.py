"""Default data provider and event handler backed by a client."""

from __future__ import annotations

from typing import Any, Protocol

from variantkit.future import Future
from variantkit.models import PublishEvent


class _Client(Protocol):
    def get_context_data(self) -> Future: ...

    def publish(self, event: PublishEvent) -> Future: ...


class DefaultContextDataProvider:
    """Fetches context data through a client."""

    def __init__(self, client: _Client) -> None:
        self._client = client

    def get_context_data(self) -> Future:
        """Return a future of the client's context data."""
        return self._client.get_context_data()


class DefaultContextEventHandler:
    """Publishes events through a client."""

    def __init__(self, client: _Client) -> None:
        self._client = client

    def publish(self, context: Any, event: PublishEvent) -> Future:
        """Publish ``event`` and return a future of the outcome."""
        return self._client.publish(event)
"""Collaborator protocols shared by powstr services.

Services depend on these structural types rather than on ``nostr_sdk``,
so any object with the right methods can stand in for relay access:
[RelayGateway][powstr.services.common.gateway.RelayGateway] in
production, an ``AsyncMock`` in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Mapping

    from powstr.models.event import Event, UnsignedEvent


@runtime_checkable
class RelayQuery(Protocol):
    """Run a NIP-01 filter against relays and return the matching events."""

    async def query(self, event_filter: Mapping[str, Any]) -> list[Event]: ...


@runtime_checkable
class EventPublisher(Protocol):
    """Sign and publish event templates under one public key."""

    @property
    def public_key(self) -> str: ...

    async def publish(self, template: UnsignedEvent) -> Event: ...

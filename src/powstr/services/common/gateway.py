"""Relay gateway: the production [RelayQuery][powstr.services.common.types.RelayQuery]
and [EventPublisher][powstr.services.common.types.EventPublisher].

Wraps a connected ``nostr_sdk.Client`` and translates its failures into
the package exception hierarchy:

```text
TimeoutError                                -> RelayTimeoutError
OSError / NostrSdkError (query)             -> ConnectivityError
OSError / ValueError / NostrSdkError (send) -> PublishingError
```

Examples:
    ```python
    async with await RelayGateway.connect(config.client, keys=keys) as gateway:
        events = await gateway.query({"kinds": [1], "limit": 10})
        event = await gateway.publish(template)
    ```
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Self

from nostr_sdk import NostrSdkError

from powstr.core.exceptions import (
    ConnectivityError,
    PublishingError,
    RelayTimeoutError,
)
from powstr.core.logger import Logger
from powstr.utils.keys import public_key_hex
from powstr.utils.protocol import connect_client, fetch_events, send_event, shutdown_client


if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from nostr_sdk import Client, Keys

    from powstr.models.event import Event, UnsignedEvent

    from .configs import ClientConfig


class RelayGateway:
    """Query and publish through one ``nostr_sdk.Client``.

    Args:
        client: A connected client.
        keys: Signing keys; ``None`` makes the gateway read-only.
        timeout: Seconds allowed per query.
    """

    def __init__(self, client: Client, keys: Keys | None = None, *, timeout: float = 10.0) -> None:
        self._client = client
        self._keys = keys
        self._timeout = timeout
        self._logger = Logger("powstr.gateway")

    @classmethod
    async def connect(cls, config: ClientConfig, keys: Keys | None = None) -> Self:
        """Connect to the configured relays.

        Raises:
            RelayTimeoutError: If connecting timed out.
            ConnectivityError: If the relays could not be reached.
        """
        try:
            client = await connect_client(config.relays, timeout=config.timeout)
        except TimeoutError as e:
            raise RelayTimeoutError(f"connecting to relays timed out: {e}") from e
        except (OSError, NostrSdkError) as e:
            raise ConnectivityError(f"cannot connect to relays: {e}") from e
        return cls(client, keys, timeout=config.timeout)

    @property
    def public_key(self) -> str:
        """Hex public key of the signing keys.

        Raises:
            PublishingError: If the gateway is read-only.
        """
        if self._keys is None:
            raise PublishingError("no signing keys configured")
        return public_key_hex(self._keys)

    @property
    def can_publish(self) -> bool:
        return self._keys is not None

    async def query(self, event_filter: Mapping[str, Any]) -> list[Event]:
        """Fetch the events matching *event_filter*.

        Raises:
            RelayTimeoutError: If the query exceeded its timeout.
            ConnectivityError: If the relays failed the query.
        """
        try:
            async with asyncio.timeout(self._timeout * 2):
                events = await fetch_events(self._client, event_filter, timeout=self._timeout)
        except TimeoutError as e:
            raise RelayTimeoutError(f"query timed out after {self._timeout}s") from e
        except (OSError, NostrSdkError) as e:
            raise ConnectivityError(f"query failed: {e}") from e
        self._logger.debug("query_completed", filter=dict(event_filter), events=len(events))
        return events

    async def publish(self, template: UnsignedEvent) -> Event:
        """Sign *template* and send it; the returned event keeps the template's id.

        Raises:
            PublishingError: If the gateway is read-only, the template was
                built for another author, or no relay accepted the event.
        """
        if self._keys is None:
            raise PublishingError("no signing keys configured")
        if template.pubkey != self.public_key:
            raise PublishingError(
                f"template pubkey {template.pubkey} does not match signing key {self.public_key}"
            )
        try:
            event = await send_event(self._client, template, self._keys)
        except (OSError, TimeoutError, ValueError, NostrSdkError) as e:
            raise PublishingError(f"publish failed: {e}") from e
        self._logger.info("event_published", id=event.id, kind=event.kind)
        return event

    async def close(self) -> None:
        await shutdown_client(self._client)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

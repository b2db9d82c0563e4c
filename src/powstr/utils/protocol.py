"""Nostr client operations for powstr.

Thin async helpers over ``nostr_sdk.Client``: client construction,
multi-relay connection, filtered fetches converted to
[Event][powstr.models.event.Event] models, and signed sends. Failures
surface as the builtin ``TimeoutError`` / ``OSError`` / ``ValueError``; the
service layer's [RelayGateway][powstr.services.common.gateway.RelayGateway]
maps them onto the package exception hierarchy.

Attributes:
    create_client: Client factory.
    connect_client: Create a client and connect it to a list of relays.
    fetch_events: Run a NIP-01 filter and return model events.
    send_event: Sign a template and send it, returning the signed model event.

Examples:
    ```python
    client = await connect_client(["wss://relay.damus.io"], timeout=10.0)
    events = await fetch_events(client, {"kinds": [1], "limit": 20}, timeout=10.0)
    ```
"""

from __future__ import annotations

import contextlib
import json
import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from nostr_sdk import Client, ClientBuilder, Filter, RelayUrl, ReqTarget

from powstr.models.event import Event
from powstr.nips.event_builders import to_event_builder
from powstr.nips.nip01 import compute_event_id


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from nostr_sdk import Keys

    from powstr.models.event import UnsignedEvent


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def create_client() -> Client:
    """Create a Nostr client; events are signed explicitly by [send_event()][powstr.utils.protocol.send_event]."""
    return ClientBuilder().build()


async def connect_client(
    relays: Iterable[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,  # noqa: ASYNC109
) -> Client:
    """Create a client, add every relay and wait for connections.

    Relays that do not connect within *timeout* are left to reconnect in
    the background; the client is usable as long as one relay answers.

    Raises:
        ValueError: If *relays* is empty or a URL is malformed.
    """
    urls = list(relays)
    if not urls:
        raise ValueError("at least one relay URL is required")

    client = create_client()
    for url in urls:
        await client.add_relay(RelayUrl.parse(url))
    await client.connect(and_wait=timedelta(seconds=timeout))
    logger.debug("client_connected relays=%s", len(urls))
    return client


def _to_filter(event_filter: Mapping[str, Any]) -> Filter:
    return Filter.from_json(json.dumps(dict(event_filter)))


async def fetch_events(
    client: Client,
    event_filter: Mapping[str, Any],
    *,
    timeout: float = DEFAULT_TIMEOUT,  # noqa: ASYNC109
) -> list[Event]:
    """Fetch the events matching a NIP-01 filter from the client's relays.

    Events that do not convert to a valid [Event][powstr.models.event.Event]
    are skipped.
    """
    target = ReqTarget.auto([_to_filter(event_filter)])
    events = await client.fetch_events(target, timedelta(seconds=timeout))
    result: list[Event] = []
    for nostr_event in events:
        try:
            result.append(Event.from_nostr(nostr_event))
        except (ValueError, TypeError) as e:
            logger.debug("event_skipped error=%s", e)
    logger.debug("events_fetched count=%s", len(result))
    return result


async def send_event(client: Client, template: UnsignedEvent, keys: Keys) -> Event:
    """Sign *template* with *keys* and send it to the client's relays.

    The signed id is checked against the template's id before anything is
    sent, so an event that would not carry the mined id never leaves the
    process.

    Raises:
        ValueError: If the signed id differs from the template's id.
        OSError: If no relay accepted the event.
    """
    signed = to_event_builder(template).finalize(keys)
    signed_id = signed.id().to_hex()
    expected_id = compute_event_id(template)
    if signed_id != expected_id:
        raise ValueError(f"signed id {signed_id} differs from template id {expected_id}")

    output = await client.send_event(signed)
    if not output.success:
        raise OSError(f"no relay accepted event {signed_id}: {output.failed}")
    event = Event.from_nostr(signed)
    logger.debug("event_sent id=%s relays=%s", event.id, len(output.success))
    return event


async def shutdown_client(client: Client) -> None:
    """Shut the client down, ignoring errors from already-closed connections."""
    with contextlib.suppress(Exception):
        await client.shutdown()

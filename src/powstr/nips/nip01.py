"""NIP-01 event id computation.

The event id is the SHA-256 of the canonical serialization
``[0, pubkey, created_at, kind, tags, content]``. Both the serialization and
the hash are delegated to ``nostr_sdk.EventId.compute`` so a mined id is
byte-for-byte the id relays compute for the signed event. This is the
default hash collaborator used by the [Miner][powstr.nips.nip13.miner.Miner].

See Also:
    [UnsignedEvent][powstr.models.event.UnsignedEvent]: The template being
        hashed.
    [to_event_builder()][powstr.nips.event_builders.to_event_builder]: Signs
        the same fields, so the signed event keeps the computed id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nostr_sdk import EventId, Kind, PublicKey, Tag, Timestamp


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from powstr.models.event import UnsignedEvent


def to_nostr_tags(tags: Iterable[Sequence[str]]) -> list[Tag]:
    """Convert tag arrays into ``nostr_sdk.Tag`` objects, preserving every value."""
    return [Tag.parse(list(tag)) for tag in tags]


def compute_event_id(event: UnsignedEvent) -> str:
    """Return the lowercase hex event id of *event*.

    Raises:
        NostrSdkError: If the pubkey is not a valid secp256k1 public key.
    """
    return EventId.compute(
        PublicKey.parse(event.pubkey),
        Timestamp.from_secs(event.created_at),
        Kind(event.kind),
        to_nostr_tags(event.tags),
        event.content,
    ).to_hex()

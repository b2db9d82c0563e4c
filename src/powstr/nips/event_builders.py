"""Event templates for comments and notes, and their ``nostr_sdk`` builders.

Standalone functions that assemble [UnsignedEvent][powstr.models.event.UnsignedEvent]
templates for kind 1111 comments (NIP-22) and kind 1 text notes (NIP-01),
and convert any template into a ``nostr_sdk.EventBuilder`` that reproduces
it field for field, so a signed event keeps the id the template hashes to.

See Also:
    [powstr.nips.nip22.tags][powstr.nips.nip22.tags]: Tag codec used by
        [build_comment()][powstr.nips.event_builders.build_comment].
    [RelayGateway][powstr.services.common.gateway.RelayGateway]: Signs and sends the
        builders produced here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nostr_sdk import EventBuilder, Kind, Timestamp

from powstr.models.constants import EventKind
from powstr.models.event import UnsignedEvent

from .nip01 import to_nostr_tags
from .nip22.tags import comment_tags


if TYPE_CHECKING:
    from powstr.models.event import Event
    from powstr.models.reference import Root


# =============================================================================
# Kind 1111 (NIP-22)
# =============================================================================


def build_comment(
    root: Root,
    content: str,
    *,
    pubkey: str,
    created_at: int,
    reply: Event | None = None,
) -> UnsignedEvent:
    """Build a kind 1111 comment on *root*, optionally replying to *reply*."""
    return UnsignedEvent(
        pubkey=pubkey,
        created_at=created_at,
        kind=EventKind.COMMENT,
        tags=comment_tags(root, reply),
        content=content,
    )


# =============================================================================
# Kind 1 (NIP-01)
# =============================================================================


def build_text_note(
    content: str,
    *,
    pubkey: str,
    created_at: int,
    kind: int = EventKind.TEXT_NOTE,
) -> UnsignedEvent:
    """Build a text note template with no tags (mining adds the ``nonce`` tag)."""
    return UnsignedEvent(pubkey=pubkey, created_at=created_at, kind=kind, content=content)


# =============================================================================
# nostr_sdk conversion
# =============================================================================


def to_event_builder(template: UnsignedEvent) -> EventBuilder:
    """Convert a template into an ``EventBuilder`` with the same kind, tags, content and time."""
    return (
        EventBuilder(Kind(template.kind), template.content)
        .tags(to_nostr_tags(template.tags))
        .custom_created_at(Timestamp.from_secs(template.created_at))
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "build_comment",
    "build_text_note",
    "to_event_builder",
]

"""Shared constants for the models layer.

Defines enumerations and kind-range boundaries used across multiple model
modules and by the NIP implementations. Placing them here avoids circular
dependencies between the models and nips layers.

See Also:
    [powstr.models.event][]: Uses [KindClass][powstr.models.constants.KindClass]
        to classify events by addressing behavior.
    [powstr.nips.nip22][]: Selects the comment tag vocabulary from the
        root's [KindClass][powstr.models.constants.KindClass].
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class KindClass(StrEnum):
    """Addressing behavior of an event kind (NIP-01).

    Attributes:
        REGULAR: Identified solely by the event id.
        REPLACEABLE: Only the latest event per ``(pubkey, kind)`` matters;
            referenced by the coordinate ``kind:pubkey:``.
        ADDRESSABLE: Several events per ``(pubkey, kind)`` coexist,
            distinguished by their ``d`` tag; referenced by the coordinate
            ``kind:pubkey:d``.

    See Also:
        [classify_kind()][powstr.models.event.classify_kind]: The pure
            function mapping a kind number to one of these values.
    """

    REGULAR = "regular"
    REPLACEABLE = "replaceable"
    ADDRESSABLE = "addressable"


class EventKind(IntEnum):
    """Well-known Nostr event kinds used across the package.

    Attributes:
        SET_METADATA: Kind 0 -- user profile metadata (NIP-01, replaceable).
        TEXT_NOTE: Kind 1 -- short text note; the kind mined by
            [PowMiner][powstr.services.miner.PowMiner].
        CONTACTS: Kind 3 -- contact list (NIP-02, replaceable).
        COMMENT: Kind 1111 -- NIP-22 comment managed by
            [CommentThread][powstr.nips.nip22.thread.CommentThread].
    """

    SET_METADATA = 0
    TEXT_NOTE = 1
    CONTACTS = 3
    COMMENT = 1111


class ServiceName(StrEnum):
    """Canonical service identifiers used in logging and metrics labels.

    Attributes:
        COMMENTS: NIP-22 comment thread fetching and posting
            ([CommentsService][powstr.services.comments.CommentsService]).
        FEED: PoW-ranked note feed
            ([PowFeed][powstr.services.feed.PowFeed]).
        MINER: NIP-13 note mining
            ([PowMiner][powstr.services.miner.PowMiner]).
    """

    COMMENTS = "comments"
    FEED = "feed"
    MINER = "miner"


#: Kinds below 10000 that are replaceable for historical reasons.
LEGACY_REPLACEABLE_KINDS = frozenset({EventKind.SET_METADATA, EventKind.CONTACTS})

REPLACEABLE_RANGE = range(10_000, 20_000)
ADDRESSABLE_RANGE = range(30_000, 40_000)

EVENT_KIND_MAX = 65_535

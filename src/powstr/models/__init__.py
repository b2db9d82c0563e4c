"""Pure frozen dataclasses with zero I/O for Nostr events and references.

The models layer is the foundation of the diamond DAG. It has **no
dependencies** on any other powstr package. Every model uses
``@dataclass(frozen=True, slots=True)`` for immutability, and all
validation happens in ``__post_init__`` so invalid instances never escape
the constructor.

Attributes:
    Event: Signed Nostr event as received from a relay, with tag lookup
        helpers and NIP-01 JSON / ``nostr_sdk`` conversion.
    UnsignedEvent: Hashable event template used for mining and publishing.
    classify_kind: Maps a kind number to its
        [KindClass][powstr.models.constants.KindClass].
    ExternalResource: Normalized URL usable as a comment root.
    RegularRef, ReplaceableRef, AddressableRef, ExternalRef: The four ways a
        comment can address its root or parent.

Note:
    Models use ``object.__setattr__`` in ``__post_init__`` to store
    normalized fields on frozen dataclasses. This is safe because
    ``__post_init__`` runs before the instance is exposed to callers.
"""

from .constants import EVENT_KIND_MAX, EventKind, KindClass, ServiceName
from .event import Event, Tags, UnsignedEvent, classify_kind
from .reference import (
    AddressableRef,
    ExternalRef,
    ExternalResource,
    Reference,
    RegularRef,
    ReplaceableRef,
    Root,
    format_coordinate,
)


__all__ = [
    "EVENT_KIND_MAX",
    "AddressableRef",
    "Event",
    "EventKind",
    "ExternalRef",
    "ExternalResource",
    "KindClass",
    "Reference",
    "RegularRef",
    "ReplaceableRef",
    "Root",
    "ServiceName",
    "Tags",
    "UnsignedEvent",
    "classify_kind",
    "format_coordinate",
]

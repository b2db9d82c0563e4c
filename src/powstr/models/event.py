"""
Immutable Nostr event records and kind classification.

[Event][powstr.models.event.Event] is a signed record received from a relay;
[UnsignedEvent][powstr.models.event.UnsignedEvent] is the hashable template
used when mining and publishing. Both are frozen dataclasses whose tag
arrays are normalized to tuples at construction, so instances can be shared
freely between callers.

See Also:
    [powstr.nips.nip01][]: Event id computation for an
        [UnsignedEvent][powstr.models.event.UnsignedEvent].
    [powstr.nips.nip22][]: Comment addressing built on
        [classify_kind()][powstr.models.event.classify_kind].
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from ._validation import (
    freeze_string_tags,
    freeze_tags,
    validate_hex,
    validate_instance,
    validate_non_negative_int,
    validate_utf8,
)
from .constants import ADDRESSABLE_RANGE, LEGACY_REPLACEABLE_KINDS, REPLACEABLE_RANGE, KindClass


if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from nostr_sdk import Event as NostrEvent


Tag = tuple[Any, ...]
Tags = tuple[Tag, ...]

_MIN_VALUED_TAG_LEN = 2


def classify_kind(kind: int) -> KindClass:
    """Classify an event kind by its addressing behavior.

    Pure and total over non-negative integers:

    * ``0``, ``3`` and ``[10000, 20000)`` are replaceable.
    * ``[30000, 40000)`` is addressable.
    * Everything else is regular.

    Examples:
        ```python
        classify_kind(1)      # KindClass.REGULAR
        classify_kind(10002)  # KindClass.REPLACEABLE
        classify_kind(30023)  # KindClass.ADDRESSABLE
        ```
    """
    if kind in LEGACY_REPLACEABLE_KINDS or kind in REPLACEABLE_RANGE:
        return KindClass.REPLACEABLE
    if kind in ADDRESSABLE_RANGE:
        return KindClass.ADDRESSABLE
    return KindClass.REGULAR


def _iter_tag_values(tags: Tags, name: str) -> Iterator[Any]:
    for tag in tags:
        if len(tag) >= _MIN_VALUED_TAG_LEN and tag[0] == name:
            yield tag[1]


@dataclass(frozen=True, slots=True)
class UnsignedEvent:
    """Event fields that feed the NIP-01 id hash, without ``id`` and ``sig``.

    Unlike [Event][powstr.models.event.Event], a template is strict: every
    tag must be a non-empty array of strings and the content must be valid
    UTF-8, so any template can be hashed and signed.

    Attributes:
        pubkey: Author public key as hex.
        created_at: Unix timestamp in seconds.
        kind: Event kind.
        tags: Tag arrays, frozen to a tuple of tuples.
        content: Opaque content string.

    See Also:
        [compute_event_id()][powstr.nips.nip01.compute_event_id]: Hashes
            this template into an event id.
        [Miner][powstr.nips.nip13.miner.Miner]: Varies the ``nonce`` tag of
            a template via [with_tag()][powstr.models.event.UnsignedEvent.with_tag].
    """

    pubkey: str
    created_at: int
    kind: int
    tags: Tags = ()
    content: str = ""

    def __post_init__(self) -> None:
        validate_hex(self.pubkey, "pubkey")
        validate_non_negative_int(self.created_at, "created_at")
        validate_non_negative_int(self.kind, "kind")
        validate_instance(self.content, str, "content")
        validate_utf8(self.content, "content")
        object.__setattr__(self, "tags", freeze_string_tags(self.tags))

    @property
    def kind_class(self) -> KindClass:
        return classify_kind(self.kind)

    def with_tag(self, tag: Sequence[str]) -> UnsignedEvent:
        """Return a copy where every tag named ``tag[0]`` is replaced by *tag*.

        The new tag is appended after the remaining tags.
        """
        name = tag[0]
        kept = [t for t in self.tags if not (t and t[0] == name)]
        return replace(self, tags=(*kept, tuple(tag)))

    def tags_as_lists(self) -> list[list[Any]]:
        """Return the tags as a list of lists (the NIP-01 JSON shape)."""
        return [list(tag) for tag in self.tags]


@dataclass(frozen=True, slots=True)
class Event:
    """Immutable, signed Nostr event as received from a relay.

    The ``id`` and ``sig`` fields are consumed as-is: the package never
    recomputes the id of a received event nor verifies its signature.

    Validation is performed eagerly at construction time: ``id`` and
    ``pubkey`` must be hex strings, ``created_at`` and ``kind`` must be
    non-negative integers, and ``content`` must be a string. Tag entries are
    never rejected; malformed ones are simply never matched.

    Attributes:
        id: Event id, the lowercase hex SHA-256 of the canonical serialization.
        pubkey: Author public key as hex.
        created_at: Unix timestamp in seconds (ordering only).
        kind: Event kind.
        tags: Tag arrays, frozen to a tuple of tuples.
        content: Opaque content string.
        sig: Schnorr signature as hex (not inspected).

    Examples:
        ```python
        event = Event.from_dict(
            {"id": "ab...", "pubkey": "cd...", "created_at": 1700000000,
             "kind": 1111, "tags": [["e", "ef..."]], "content": "hi", "sig": "..."}
        )
        event.tag_values("e")   # ["ef..."]
        event.kind_class        # KindClass.REGULAR
        ```
    """

    id: str
    pubkey: str
    created_at: int
    kind: int
    tags: Tags = ()
    content: str = ""
    sig: str = ""

    def __post_init__(self) -> None:
        validate_hex(self.id, "id")
        validate_hex(self.pubkey, "pubkey")
        validate_non_negative_int(self.created_at, "created_at")
        validate_non_negative_int(self.kind, "kind")
        validate_instance(self.content, str, "content")
        validate_instance(self.sig, str, "sig")
        object.__setattr__(self, "tags", freeze_tags(self.tags))

    @property
    def kind_class(self) -> KindClass:
        """Addressing behavior of this event's kind."""
        return classify_kind(self.kind)

    @property
    def d_identifier(self) -> str:
        """Value of the first ``d`` tag, or ``""`` when absent."""
        value = self.first_tag_value("d")
        return value if isinstance(value, str) else ""

    def tag_values(self, name: str) -> list[Any]:
        """Return the second element of every tag named *name*, in tag order."""
        return list(_iter_tag_values(self.tags, name))

    def first_tag_value(self, name: str) -> Any | None:
        """Return the second element of the first tag named *name*, if any."""
        return next(_iter_tag_values(self.tags, name), None)

    def has_tag_value(self, name: str, value: str) -> bool:
        """Whether any tag named *name* carries *value*."""
        return any(v == value for v in _iter_tag_values(self.tags, name))

    def unsigned(self) -> UnsignedEvent:
        """Return the hashable fields of this event as an UnsignedEvent.

        Raises:
            TypeError: If a tag is not an array of strings.
            ValueError: If a tag is empty.
        """
        return UnsignedEvent(
            pubkey=self.pubkey,
            created_at=self.created_at,
            kind=self.kind,
            tags=self.tags,
            content=self.content,
        )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the event in its NIP-01 JSON object shape."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Build an Event from a NIP-01 JSON object.

        Raises:
            KeyError: If ``id``, ``pubkey``, ``created_at`` or ``kind`` is missing.
            TypeError: If a field has the wrong type.
            ValueError: If a field has an invalid value.
        """
        return cls(
            id=data["id"],
            pubkey=data["pubkey"],
            created_at=data["created_at"],
            kind=data["kind"],
            tags=data.get("tags", ()),
            content=data.get("content", ""),
            sig=data.get("sig", ""),
        )

    @classmethod
    def from_json(cls, raw: str) -> Event:
        """Build an Event from its NIP-01 JSON text."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError(f"event JSON must be an object, got {type(data).__name__}")
        return cls.from_dict(data)

    @classmethod
    def from_nostr(cls, nostr_event: NostrEvent) -> Event:
        """Convert a ``nostr_sdk.Event`` into an Event."""
        return cls(
            id=nostr_event.id().to_hex(),
            pubkey=nostr_event.author().to_hex(),
            created_at=nostr_event.created_at().as_secs(),
            kind=nostr_event.kind().as_u16(),
            tags=[tag.to_vec() for tag in nostr_event.tags()],
            content=nostr_event.content(),
            sig=nostr_event.signature(),
        )

"""NIP-22 comment addressing: tag codec and relay filter.

A comment records two addresses: its **root** (upper-case tags) and its
immediate **parent** (lower-case tags). Both are derived from the same
[reference_of()][powstr.nips.nip22.tags.reference_of] dispatch, so
producing tags and matching them are exact inverses of each other:

```text
root kind       reference tag             K          P
-------------   -----------------------   --------   ------
external        I <url>                   hostname   -
replaceable     A <kind>:<pubkey>:        kind       pubkey
addressable     A <kind>:<pubkey>:<d>     kind       pubkey
regular         E <id>                    kind       pubkey
```

Matching never raises: a comment whose tags are malformed or missing
simply does not match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from powstr.models.constants import EventKind, KindClass
from powstr.models.event import Event
from powstr.models.reference import (
    AddressableRef,
    ExternalRef,
    ExternalResource,
    RegularRef,
    ReplaceableRef,
)


if TYPE_CHECKING:
    from powstr.models.reference import Reference, Root


def reference_of(target: Root) -> Reference:
    """Return the reference variant addressing *target*.

    Addressable events without a ``d`` tag use the empty identifier, so
    two such events by the same author and kind share one address.

    Raises:
        TypeError: If *target* is neither an Event nor an ExternalResource.
    """
    if isinstance(target, ExternalResource):
        return ExternalRef(target.url)
    if not isinstance(target, Event):
        raise TypeError(f"target must be an Event or ExternalResource, got {type(target).__name__}")

    kind_class = target.kind_class
    if kind_class == KindClass.REPLACEABLE:
        return ReplaceableRef(target.kind, target.pubkey)
    if kind_class == KindClass.ADDRESSABLE:
        return AddressableRef(target.kind, target.pubkey, target.d_identifier)
    return RegularRef(target.id)


def reference_tag_name(reference: Reference) -> str:
    """Return the lower-case tag name (``e``, ``a`` or ``i``) carrying *reference*."""
    if isinstance(reference, ExternalRef):
        return "i"
    if isinstance(reference, (ReplaceableRef, AddressableRef)):
        return "a"
    return "e"


def _address_tags(target: Root, *, root: bool) -> list[list[str]]:
    reference = reference_of(target)
    name = reference_tag_name(reference)
    tags = [[name, reference.value]]
    if isinstance(target, ExternalResource):
        tags.append(["k", target.hostname])
    else:
        tags.append(["k", str(target.kind)])
        tags.append(["p", target.pubkey])
    if root:
        for tag in tags:
            tag[0] = tag[0].upper()
    return tags


def root_tags(root: Root) -> list[list[str]]:
    """Return the upper-case ``E``/``A``/``I`` + ``K`` (+ ``P``) tags addressing *root*."""
    return _address_tags(root, root=True)


def reply_tags(target: Root) -> list[list[str]]:
    """Return the lower-case ``e``/``a``/``i`` + ``k`` (+ ``p``) tags addressing *target*."""
    return _address_tags(target, root=False)


def comment_tags(root: Root, reply: Event | None = None) -> list[list[str]]:
    """Return the full tag set of a new comment on *root*.

    A top-level comment (no *reply*) addresses the root as its parent too.
    """
    return root_tags(root) + reply_tags(reply if reply is not None else root)


def matches_root(comment: Event, root: Root) -> bool:
    """Whether *comment* is a direct (top-level) comment on *root*.

    Checks every lower-case ``e``/``a``/``i`` tag of the name selected by the
    root's addressing class against the root's reference value.
    """
    reference = reference_of(root)
    return comment.has_tag_value(reference_tag_name(reference), reference.value)


def root_key(root: Root) -> str:
    """Return a stable cache key for *root*: its URL, or its event id."""
    if isinstance(root, ExternalResource):
        return root.url
    return root.id


def comment_filter(root: Root, limit: int | None = None) -> dict[str, Any]:
    """Return the NIP-01 relay filter for every comment on *root*, at any depth.

    Examples:
        ```python
        comment_filter(ExternalResource("https://example.com/a"), limit=500)
        # {"kinds": [1111], "#I": ["https://example.com/a"], "limit": 500}
        ```
    """
    reference = reference_of(root)
    tag_filter = f"#{reference_tag_name(reference).upper()}"
    result: dict[str, Any] = {"kinds": [EventKind.COMMENT.value], tag_filter: [reference.value]}
    if limit is not None:
        result["limit"] = limit
    return result

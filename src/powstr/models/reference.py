"""
Reference variants for addressing a comment's root or parent.

NIP-22 comments point at their subject in one of four ways. Each way is a
small frozen dataclass exposing the string ``value`` that goes into the
reference tag:

```text
RegularRef(id)                       -> "<id>"
ReplaceableRef(kind, pubkey)         -> "<kind>:<pubkey>:"
AddressableRef(kind, pubkey, d)      -> "<kind>:<pubkey>:<d>"
ExternalRef(url)                     -> "<url>"
```

[ExternalResource][powstr.models.reference.ExternalResource] is the
non-event root type: a normalized URL with a host component.

See Also:
    [reference_of()][powstr.nips.nip22.tags.reference_of]: Maps a root or
        parent to its reference variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rfc3986 import uri_reference

from ._validation import validate_instance, validate_str_not_empty
from .event import Event


def format_coordinate(kind: int, pubkey: str, identifier: str = "") -> str:
    """Format the ``kind:pubkey:d`` coordinate of a replaceable or addressable event."""
    return f"{kind}:{pubkey}:{identifier}"


@dataclass(frozen=True, slots=True)
class ExternalResource:
    """An external resource (web page, podcast feed, ...) used as a comment root.

    The URL is normalized on construction: scheme and host are lower-cased
    and an empty path becomes ``/``, so ``https://Example.com`` and
    ``https://example.com/`` address the same root.

    Attributes:
        url: Normalized URL string.
        hostname: Host component without port.

    Raises:
        TypeError: If *url* is not a string.
        ValueError: If *url* is empty or has no scheme or host.
    """

    url: str
    hostname: str = field(init=False)

    def __post_init__(self) -> None:
        validate_str_not_empty(self.url, "url")
        uri = uri_reference(self.url.strip()).normalize()
        if not uri.scheme or not uri.host:
            raise ValueError(f"url must have a scheme and a host: {self.url!r}")
        if not uri.path:
            uri = uri.copy_with(path="/")
        object.__setattr__(self, "url", uri.unsplit())
        object.__setattr__(self, "hostname", uri.host)

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True, slots=True)
class RegularRef:
    """Reference to a regular event by id (``E``/``e`` tags)."""

    id: str

    @property
    def value(self) -> str:
        return self.id


@dataclass(frozen=True, slots=True)
class ReplaceableRef:
    """Reference to the latest replaceable event of an author (``A``/``a`` tags)."""

    kind: int
    pubkey: str

    @property
    def value(self) -> str:
        return format_coordinate(self.kind, self.pubkey)


@dataclass(frozen=True, slots=True)
class AddressableRef:
    """Reference to an addressable event by ``kind:pubkey:d`` (``A``/``a`` tags)."""

    kind: int
    pubkey: str
    identifier: str = ""

    @property
    def value(self) -> str:
        return format_coordinate(self.kind, self.pubkey, self.identifier)


@dataclass(frozen=True, slots=True)
class ExternalRef:
    """Reference to an external resource by URL (``I``/``i`` tags)."""

    url: str

    def __post_init__(self) -> None:
        validate_instance(self.url, str, "url")

    @property
    def value(self) -> str:
        return self.url


Reference = RegularRef | ReplaceableRef | AddressableRef | ExternalRef

#: Anything a comment can be attached to.
Root = Event | ExternalResource

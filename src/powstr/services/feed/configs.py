"""PoW feed configuration models.

See Also:
    [PowFeed][powstr.services.feed.PowFeed]: The service class that
        consumes this configuration.
"""

from __future__ import annotations

from pydantic import Field

from powstr.core.base_service import BaseServiceConfig
from powstr.models.constants import EVENT_KIND_MAX, EventKind


class FeedConfig(BaseServiceConfig):
    """PoW feed configuration.

    Attributes:
        kind: Event kind listed in the feed.
        limit: Maximum events requested from relays.
        fetch_timeout: Seconds allowed for the feed query.
        page_size: Entries per page.
        min_strength: Default minimum strength in bits.
    """

    kind: int = Field(default=EventKind.TEXT_NOTE, ge=0, le=EVENT_KIND_MAX)
    limit: int = Field(default=500, ge=1, le=5000, description="Events per feed query")
    fetch_timeout: float = Field(default=10.0, gt=0.0, le=120.0, description="Query timeout")
    page_size: int = Field(default=10, ge=1, le=100)
    min_strength: int = Field(default=1, ge=0, le=256)

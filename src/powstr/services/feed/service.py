"""PoW feed service for powstr.

Lists recent notes ranked by proof-of-work strength. Relays cannot filter
on strength (the ``nonce`` tag is not a single-letter indexed tag), so the
feed fetches the most recent ``limit`` events of the configured kind and
scores them locally with [strength()][powstr.nips.nip13.pow.strength].

See Also:
    [FeedConfig][powstr.services.feed.FeedConfig]: Kind, limit, timeout and
        page size.
    [powstr.services.feed.utils][powstr.services.feed.utils]: Ranking and
        pagination helpers.

Examples:
    ```python
    feed = PowFeed(relay=gateway)
    page = await feed.page(min_strength=16, page=1, order="desc")
    for item in page.items:
        print(item.label, item.event.content[:40])
    ```
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, ClassVar

from powstr.core.base_service import BaseService
from powstr.core.exceptions import RelayTimeoutError
from powstr.models.constants import ServiceName

from .configs import FeedConfig
from .utils import FeedPage, ScoredEvent, SortOrder, paginate, rank, score


if TYPE_CHECKING:
    from powstr.services.common.types import RelayQuery


class PowFeed(BaseService[FeedConfig]):
    """Fetch, score, rank and paginate notes by proof-of-work strength."""

    SERVICE_NAME: ClassVar[ServiceName] = ServiceName.FEED
    CONFIG_CLASS: ClassVar[type[FeedConfig]] = FeedConfig

    def __init__(self, relay: RelayQuery, config: FeedConfig | None = None) -> None:
        super().__init__(config=config)
        self._relay = relay

    async def fetch(self, min_strength: int | None = None) -> list[ScoredEvent]:
        """Fetch recent events and keep those reaching *min_strength*.

        Args:
            min_strength: Minimum strength in bits; defaults to
                ``config.min_strength``.

        Raises:
            RelayTimeoutError: If the query exceeded ``fetch_timeout``.
        """
        minimum = self._config.min_strength if min_strength is None else min_strength
        event_filter = {"kinds": [self._config.kind], "limit": self._config.limit}
        try:
            async with asyncio.timeout(self._config.fetch_timeout):
                events = await self._relay.query(event_filter)
        except TimeoutError as e:
            raise RelayTimeoutError(
                f"feed query timed out after {self._config.fetch_timeout}s"
            ) from e

        scored = score(events, minimum)
        self.inc_counter("feeds_fetched")
        self.set_gauge("feed_notes", len(scored))
        self._logger.info("feed_fetched", events=len(events), kept=len(scored), min_strength=minimum)
        return scored

    async def page(
        self,
        *,
        min_strength: int | None = None,
        page: int = 1,
        order: SortOrder | str = SortOrder.DESC,
    ) -> FeedPage:
        """Fetch, rank and return one page of the feed."""
        ranked = rank(await self.fetch(min_strength), order)
        return paginate(ranked, page, self._config.page_size)

"""Comments service for powstr.

Fetches the NIP-22 comments on a root (an event or an external URL),
resolves them into a [CommentThread][powstr.nips.nip22.thread.CommentThread],
and posts new comments. Resolved threads are cached per root and query
limit; posting a comment invalidates every cached thread of its root so
the next fetch sees it.

See Also:
    [CommentsConfig][powstr.services.comments.CommentsConfig]: Query limit
        and timeout.
    [comment_filter()][powstr.nips.nip22.tags.comment_filter]: The relay
        filter used to fetch a thread.
    [build_comment()][powstr.nips.event_builders.build_comment]: Builds the
        kind 1111 template that gets published.

Examples:
    ```python
    service = CommentsService(relay=gateway, publisher=gateway)
    async with service:
        thread = await service.fetch_thread(ExternalResource("https://example.com/post"))
        await service.post_comment(thread.root, "Nice post", reply=thread.top_level[0])
    ```
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, ClassVar

from powstr.core.base_service import BaseService
from powstr.core.exceptions import PublishingError, RelayTimeoutError
from powstr.models.constants import ServiceName
from powstr.nips.event_builders import build_comment
from powstr.nips.nip22 import CommentThread, comment_filter, root_key

from .configs import CommentsConfig


if TYPE_CHECKING:
    from collections.abc import Callable

    from powstr.models.event import Event
    from powstr.models.reference import Root
    from powstr.services.common.types import EventPublisher, RelayQuery


class CommentsService(BaseService[CommentsConfig]):
    """Fetch, cache and post NIP-22 comments.

    Args:
        relay: Collaborator running relay queries.
        publisher: Collaborator signing and sending events; ``None`` makes
            the service read-only.
        config: Service configuration.
        clock: Wall clock used for the ``created_at`` of new comments.
    """

    SERVICE_NAME: ClassVar[ServiceName] = ServiceName.COMMENTS
    CONFIG_CLASS: ClassVar[type[CommentsConfig]] = CommentsConfig

    def __init__(
        self,
        relay: RelayQuery,
        publisher: EventPublisher | None = None,
        config: CommentsConfig | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(config=config)
        self._relay = relay
        self._publisher = publisher
        self._clock = clock
        self._threads: dict[tuple[str, int], CommentThread] = {}

    async def fetch_thread(self, root: Root, *, refresh: bool = False) -> CommentThread:
        """Return the resolved comment thread of *root*.

        Args:
            root: The event or external resource commented on.
            refresh: Bypass the cache and query the relays again.

        Raises:
            RelayTimeoutError: If the query exceeded ``fetch_timeout``.
        """
        key = (root_key(root), self._config.limit)
        if not refresh and key in self._threads:
            return self._threads[key]

        event_filter = comment_filter(root, limit=self._config.limit)
        try:
            async with asyncio.timeout(self._config.fetch_timeout):
                events = await self._relay.query(event_filter)
        except TimeoutError as e:
            raise RelayTimeoutError(
                f"comments query timed out after {self._config.fetch_timeout}s"
            ) from e

        thread = CommentThread(root, events)
        self._threads[key] = thread
        self.inc_counter("threads_fetched")
        self.set_gauge("thread_comments", len(thread))
        self._logger.info(
            "thread_fetched", root=key[0], comments=len(thread), top_level=len(thread.top_level)
        )
        return thread

    async def post_comment(self, root: Root, content: str, reply: Event | None = None) -> Event:
        """Publish a comment on *root*, replying to *reply* when given.

        Raises:
            PublishingError: If the service has no publisher or publishing failed.
        """
        if self._publisher is None:
            raise PublishingError("comments service has no publisher")

        template = build_comment(
            root,
            content,
            pubkey=self._publisher.public_key,
            created_at=int(self._clock()),
            reply=reply,
        )
        event = await self._publisher.publish(template)
        removed = self.invalidate(root)
        self.inc_counter("comments_posted")
        self._logger.info(
            "comment_posted",
            id=event.id,
            root=root_key(root),
            reply=reply.id if reply is not None else None,
            invalidated=removed,
        )
        return event

    def invalidate(self, root: Root) -> int:
        """Drop every cached thread of *root*; return how many were dropped."""
        target = root_key(root)
        stale = [key for key in self._threads if key[0] == target]
        for key in stale:
            del self._threads[key]
        return len(stale)

"""Comment-thread resolution over a flat set of NIP-22 comments.

Relays answer a [comment_filter()][powstr.nips.nip22.tags.comment_filter]
query with an unordered, possibly over-inclusive set of kind-1111 events.
[CommentThread][powstr.nips.nip22.thread.CommentThread] turns that set into
a reply tree once, then answers lookups from its indexes:

```text
arena:     id -> Event                (first occurrence wins)
children:  parent id -> [Event, ...]  (every lower-case ``e`` tag)
```

Ordering:

* [top_level][powstr.nips.nip22.thread.CommentThread.top_level]:
  newest first.
* [direct_replies()][powstr.nips.nip22.thread.ReplyIndex.direct_replies]
  and [descendants()][powstr.nips.nip22.thread.ReplyIndex.descendants]:
  oldest first, in reading order.

All sorts are stable, so events with equal ``created_at`` keep their
input order. Traversal tracks visited ids, so cyclic ``e`` references in a
malformed relay response terminate.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from operator import attrgetter
from typing import TYPE_CHECKING

from .tags import matches_root


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from powstr.models.event import Event
    from powstr.models.reference import Root


logger = logging.getLogger(__name__)

_by_created_at = attrgetter("created_at")


class ReplyIndex:
    """Parent-to-reply index over a set of comments.

    Built once from *events*; per-parent descendant lists are memoized, so
    repeated lookups are amortized ``O(1)``. Every accessor returns a fresh
    list and no event is ever modified.
    """

    def __init__(self, events: Iterable[Event]) -> None:
        self._arena: dict[str, Event] = {}
        for event in events:
            self._arena.setdefault(event.id, event)

        children: defaultdict[str, list[Event]] = defaultdict(list)
        for event in self._arena.values():
            for parent_id in dict.fromkeys(event.tag_values("e")):
                if isinstance(parent_id, str):
                    children[parent_id].append(event)
        self._children: dict[str, tuple[Event, ...]] = {
            parent_id: tuple(sorted(replies, key=_by_created_at))
            for parent_id, replies in children.items()
        }
        self._descendants: dict[str, tuple[Event, ...]] = {}

    @property
    def all_comments(self) -> list[Event]:
        """Every distinct comment, in input order."""
        return list(self._arena.values())

    def get(self, event_id: str) -> Event | None:
        return self._arena.get(event_id)

    def __len__(self) -> int:
        return len(self._arena)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._arena

    def direct_replies(self, parent_id: str) -> list[Event]:
        """Comments with a lower-case ``e`` tag equal to *parent_id*, oldest first."""
        return list(self._children.get(parent_id, ()))

    def descendants(self, parent_id: str) -> list[Event]:
        """Every comment below *parent_id* at any depth, oldest first.

        Each comment appears at most once, even if the input contains
        duplicate or cyclic ``e`` references.
        """
        cached = self._descendants.get(parent_id)
        if cached is None:
            cached = tuple(sorted(self._collect_descendants(parent_id), key=_by_created_at))
            self._descendants[parent_id] = cached
        return list(cached)

    def _collect_descendants(self, parent_id: str) -> list[Event]:
        # Direct replies first, then the subtree of each reply in turn.
        visited = {parent_id}
        collected: list[Event] = []

        def expand(node_id: str) -> Iterator[Event]:
            fresh = [e for e in self._children.get(node_id, ()) if e.id not in visited]
            visited.update(e.id for e in fresh)
            collected.extend(fresh)
            return iter(fresh)

        stack = [expand(parent_id)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            stack.append(expand(child.id))
        return collected


class CommentThread(ReplyIndex):
    """Reply tree of the comments on one root.

    Args:
        root: The event or external resource being commented on.
        events: Candidate comments, in relay order.

    Examples:
        ```python
        thread = CommentThread(root, events)
        for comment in thread.top_level:
            replies = thread.descendants(comment.id)
        ```
    """

    def __init__(self, root: Root, events: Iterable[Event]) -> None:
        super().__init__(events)
        self._root = root
        self._top_level = tuple(
            sorted(
                (event for event in self._arena.values() if matches_root(event, root)),
                key=_by_created_at,
                reverse=True,
            )
        )
        logger.debug(
            "thread_built comments=%s top_level=%s", len(self._arena), len(self._top_level)
        )

    @property
    def root(self) -> Root:
        return self._root

    @property
    def top_level(self) -> list[Event]:
        """Comments addressing the root as their parent, newest first."""
        return list(self._top_level)

    def walk(self) -> Iterator[tuple[int, Event]]:
        """Yield ``(depth, comment)`` pairs depth-first, top-level comments at depth 0.

        Top-level comments come newest first; replies under each comment
        oldest first. Each comment is yielded at most once.
        """
        visited: set[str] = set()
        stack: list[tuple[int, Event]] = [(0, event) for event in reversed(self._top_level)]
        while stack:
            depth, event = stack.pop()
            if event.id in visited:
                continue
            visited.add(event.id)
            yield depth, event
            replies = self._children.get(event.id, ())
            stack.extend((depth + 1, reply) for reply in reversed(replies))


def top_level(root: Root, events: Iterable[Event]) -> list[Event]:
    """Comments on *root* that address it as their parent, newest first."""
    return CommentThread(root, events).top_level


def direct_replies(events: Iterable[Event], parent_id: str) -> list[Event]:
    """Comments replying directly to *parent_id*, oldest first."""
    return ReplyIndex(events).direct_replies(parent_id)


def descendants(events: Iterable[Event], parent_id: str) -> list[Event]:
    """Every comment below *parent_id* at any depth, oldest first."""
    return ReplyIndex(events).descendants(parent_id)

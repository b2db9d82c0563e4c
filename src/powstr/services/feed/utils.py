"""Scoring, ranking and pagination helpers for the PoW feed.

Pure functions over [ScoredEvent][powstr.services.feed.utils.ScoredEvent]
lists, kept apart from the service so they can be reused on any event
set, not only relay results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from powstr.nips.nip13 import PowTier, color_tier, declared_target, format_strength, strength


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from powstr.models.event import Event


DEFAULT_PAGE_SIZE = 10


class SortOrder(StrEnum):
    """Strength ordering of the feed."""

    DESC = "desc"
    ASC = "asc"


@dataclass(frozen=True, slots=True)
class ScoredEvent:
    """An event with its proof-of-work strength and declared target.

    Attributes:
        event: The scored event.
        strength: Leading zero bits of ``event.id``.
        target: Target committed to in the ``nonce`` tag, if any.
    """

    event: Event
    strength: int
    target: int | None = None

    @classmethod
    def from_event(cls, event: Event) -> ScoredEvent:
        return cls(event=event, strength=strength(event.id), target=declared_target(event.tags))

    @property
    def label(self) -> str:
        """Display string, e.g. ``"21 bits (2.1M hashes)"``."""
        return format_strength(self.strength)

    @property
    def tier(self) -> PowTier:
        return color_tier(self.strength)

    @property
    def meets_target(self) -> bool:
        """Whether the actual strength reaches the declared target (True without a target)."""
        return self.target is None or self.strength >= self.target


@dataclass(frozen=True, slots=True)
class FeedPage:
    """One page of a ranked feed.

    Attributes:
        items: Entries on this page.
        page: 1-based page number, clamped to ``[1, total_pages]``.
        total_pages: Number of pages (at least 1, even for an empty feed).
        total_items: Number of entries across all pages.
    """

    items: tuple[ScoredEvent, ...]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def score(events: Iterable[Event], min_strength: int = 0) -> list[ScoredEvent]:
    """Score *events*, keeping those with strength of at least *min_strength*."""
    scored = (ScoredEvent.from_event(event) for event in events)
    return [item for item in scored if item.strength >= min_strength]


def rank(items: Iterable[ScoredEvent], order: SortOrder | str = SortOrder.DESC) -> list[ScoredEvent]:
    """Sort by strength; equal strengths keep their input order.

    Raises:
        ValueError: If *order* is not ``"desc"`` or ``"asc"``.
    """
    order = SortOrder(order)
    return sorted(items, key=lambda item: item.strength, reverse=order == SortOrder.DESC)


def paginate(
    items: Sequence[ScoredEvent], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
) -> FeedPage:
    """Slice *items* into the requested page.

    Raises:
        ValueError: If *page_size* is below 1.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return FeedPage(
        items=tuple(items[start : start + page_size]),
        page=page,
        total_pages=total_pages,
        total_items=len(items),
    )

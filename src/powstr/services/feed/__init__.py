"""PoW feed service package.

Re-exports all public symbols::

    from powstr.services.feed import PowFeed, FeedConfig
"""

from .configs import FeedConfig
from .service import PowFeed
from .utils import FeedPage, ScoredEvent, SortOrder, paginate, rank, score


__all__ = [
    "FeedConfig",
    "FeedPage",
    "PowFeed",
    "ScoredEvent",
    "SortOrder",
    "paginate",
    "rank",
    "score",
]

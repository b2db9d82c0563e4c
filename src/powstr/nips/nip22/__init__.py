"""NIP-22 comments: addressing codec and thread resolution.

Implements [NIP-22](https://github.com/nostr-protocol/nips/blob/master/22.md)
-- kind-1111 comments on events and external resources.

Attributes:
    comment_tags: Full tag set of a new comment (root + parent addresses).
    comment_filter: Relay filter for every comment on a root.
    matches_root: Whether a comment is a top-level comment on a root.
    CommentThread: Reply tree with top-level, direct-reply and descendant
        lookups.

See Also:
    [powstr.services.comments][powstr.services.comments]: Service that
        fetches, caches and posts comments.
"""

from .tags import (
    comment_filter,
    comment_tags,
    matches_root,
    reference_of,
    reference_tag_name,
    reply_tags,
    root_key,
    root_tags,
)
from .thread import CommentThread, ReplyIndex, descendants, direct_replies, top_level


__all__ = [
    "CommentThread",
    "ReplyIndex",
    "comment_filter",
    "comment_tags",
    "descendants",
    "direct_replies",
    "matches_root",
    "reference_of",
    "reference_tag_name",
    "reply_tags",
    "root_key",
    "root_tags",
    "top_level",
]

"""Comments service package.

Re-exports all public symbols::

    from powstr.services.comments import CommentsService, CommentsConfig
"""

from .configs import CommentsConfig
from .service import CommentsService


__all__ = [
    "CommentsConfig",
    "CommentsService",
]

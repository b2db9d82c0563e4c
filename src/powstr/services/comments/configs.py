"""Comments service configuration models.

See Also:
    [CommentsService][powstr.services.comments.CommentsService]: The
        service class that consumes this configuration.
"""

from __future__ import annotations

from pydantic import Field

from powstr.core.base_service import BaseServiceConfig


class CommentsConfig(BaseServiceConfig):
    """Comments service configuration.

    Attributes:
        limit: Maximum comments requested from relays per thread.
        fetch_timeout: Seconds allowed for one thread query.
    """

    limit: int = Field(default=500, ge=1, le=5000, description="Comments per thread query")
    fetch_timeout: float = Field(default=5.0, gt=0.0, le=60.0, description="Query timeout")

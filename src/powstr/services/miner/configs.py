"""PoW miner configuration models.

See Also:
    [PowMiner][powstr.services.miner.PowMiner]: The service class that
        consumes this configuration.
"""

from __future__ import annotations

from pydantic import Field

from powstr.core.base_service import BaseServiceConfig
from powstr.models.constants import EVENT_KIND_MAX, EventKind
from powstr.nips.nip13 import DEFAULT_MAX_ATTEMPTS


class MinerConfig(BaseServiceConfig):
    """PoW miner configuration.

    Attributes:
        max_attempts: Attempt ceiling of every mining run.
        batch_size: Attempts between two yields to the event loop; progress
            is reported once per batch.
        kind: Kind of the mined notes.
    """

    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1, description="Attempt ceiling")
    batch_size: int = Field(default=10_000, ge=1, le=1_000_000, description="Attempts per batch")
    kind: int = Field(default=EventKind.TEXT_NOTE, ge=0, le=EVENT_KIND_MAX)

"""Comment threads, the PoW feed and the PoW miner, plus shared utilities.

Services are the top layer of the diamond DAG, depending on
[powstr.core][powstr.core], [powstr.nips][powstr.nips],
[powstr.utils][powstr.utils], and [powstr.models][powstr.models].
Each service extends [BaseService][powstr.core.base_service.BaseService]
and receives its relay collaborators through the constructor.

Attributes:
    CommentsService: Fetch and cache NIP-22 threads, post comments.
    PowFeed: Rank recent notes by proof-of-work strength, paginated.
    PowMiner: Mine notes to a target strength and publish them.

See Also:
    [common][powstr.services.common]: Collaborator protocols, the relay
        gateway and the top-level configuration model.

Examples:
    ```python
    from powstr.services import PowFeed

    async with await RelayGateway.connect(config.client) as gateway:
        page = await PowFeed(relay=gateway).page(min_strength=8)
    ```
"""

from .comments import CommentsConfig, CommentsService
from .feed import FeedConfig, PowFeed
from .miner import MinedNote, MinerConfig, PowMiner


__all__ = [
    "CommentsConfig",
    "CommentsService",
    "FeedConfig",
    "MinedNote",
    "MinerConfig",
    "PowFeed",
    "PowMiner",
]

"""NIP-13 proof-of-work scoring and mining.

Implements [NIP-13](https://github.com/nostr-protocol/nips/blob/master/13.md)
-- measuring the work invested in an event id and searching for a nonce
that reaches a target strength.

```text
strength(id)          leading zero bits of the id
declared_target(tags) target committed to in ["nonce", n, target]
Miner                 IDLE -> MINING -> FOUND | EXHAUSTED | ABORTED
```

See Also:
    [powstr.services.miner][powstr.services.miner]: Async mining service that
        drives a [Miner][powstr.nips.nip13.miner.Miner] in batches.
    [powstr.services.feed][powstr.services.feed]: Ranks notes by strength.
"""

from .miner import DEFAULT_MAX_ATTEMPTS, Miner, MinerState, MiningProgress, MiningResult
from .pow import PowTier, color_tier, declared_target, format_strength, strength


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "Miner",
    "MinerState",
    "MiningProgress",
    "MiningResult",
    "PowTier",
    "color_tier",
    "declared_target",
    "format_strength",
    "strength",
]

"""PoW miner service package.

Re-exports all public symbols::

    from powstr.services.miner import PowMiner, MinerConfig
"""

from .configs import MinerConfig
from .service import MinedNote, PowMiner


__all__ = [
    "MinedNote",
    "MinerConfig",
    "PowMiner",
]

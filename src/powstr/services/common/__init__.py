"""Shared collaborator types and the relay gateway used by all services.

Configuration models live in [configs][powstr.services.common.configs],
which is imported explicitly because it aggregates every service config.
"""

from .gateway import RelayGateway
from .types import EventPublisher, RelayQuery


__all__ = [
    "EventPublisher",
    "RelayGateway",
    "RelayQuery",
]

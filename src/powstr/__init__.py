r"""powstr -- Nostr comment threads and proof-of-work notes.

Resolves NIP-22 comment threads from flat relay results, scores events by
NIP-13 proof-of-work, and mines notes to a target strength.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              services         Comments, PoW feed, PoW miner
             /   |   \
          core  nips  utils    Base service, protocol logic, nostr_sdk helpers
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Events, kind classification and comment references.
    core: Base service, exceptions, logging, metrics, YAML loading.
    nips: NIP-01 hashing, NIP-13 scoring and mining, NIP-22 threading.
    utils: Key loading and ``nostr_sdk`` client operations.
    services: Comments service, PoW feed and PoW miner.

Note:
    Top-level imports (``from powstr import CommentThread``) use lazy
    loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("powstr")

__all__ = [
    "BaseService",
    "CommentThread",
    "CommentsConfig",
    "CommentsService",
    "Event",
    "ExternalResource",
    "FeedConfig",
    "KindClass",
    "Logger",
    "Miner",
    "MinerConfig",
    "MinerState",
    "PowFeed",
    "PowMiner",
    "PowstrConfig",
    "PowstrError",
    "RelayGateway",
    "UnsignedEvent",
    "classify_kind",
    "strength",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BaseService": ("powstr.core", "BaseService"),
    "Logger": ("powstr.core", "Logger"),
    "PowstrError": ("powstr.core", "PowstrError"),
    "Event": ("powstr.models", "Event"),
    "ExternalResource": ("powstr.models", "ExternalResource"),
    "KindClass": ("powstr.models", "KindClass"),
    "UnsignedEvent": ("powstr.models", "UnsignedEvent"),
    "classify_kind": ("powstr.models", "classify_kind"),
    "CommentThread": ("powstr.nips", "CommentThread"),
    "Miner": ("powstr.nips", "Miner"),
    "MinerState": ("powstr.nips", "MinerState"),
    "strength": ("powstr.nips", "strength"),
    "CommentsConfig": ("powstr.services", "CommentsConfig"),
    "CommentsService": ("powstr.services", "CommentsService"),
    "FeedConfig": ("powstr.services", "FeedConfig"),
    "MinerConfig": ("powstr.services", "MinerConfig"),
    "PowFeed": ("powstr.services", "PowFeed"),
    "PowMiner": ("powstr.services", "PowMiner"),
    "PowstrConfig": ("powstr.services.common.configs", "PowstrConfig"),
    "RelayGateway": ("powstr.services.common", "RelayGateway"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'powstr' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__

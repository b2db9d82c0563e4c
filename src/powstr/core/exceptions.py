"""powstr exception hierarchy.

Typed exceptions for the failures that come from collaborators (relays,
signing keys, configuration files). The pure layers never raise these:
matching and scoring are total, and an exhausted miner is an outcome,
not an error.

Exception hierarchy:

```text
PowstrError (base -- never raised directly)
├── ConfigurationError      -- bad YAML, invalid values, missing private key
├── ConnectivityError        -- relay unreachable, network failures
│   └── RelayTimeoutError    -- query or connection timed out
└── PublishingError          -- event could not be signed or sent
```

See Also:
    [RelayGateway][powstr.services.common.gateway.RelayGateway]: Maps ``nostr_sdk``
        and network failures onto this hierarchy.
    [ClientConfig.load_keys()][powstr.services.common.configs.ClientConfig.load_keys]: Raises
        [ConfigurationError][powstr.core.exceptions.ConfigurationError]
        for a missing or malformed key.
"""

from __future__ import annotations


class PowstrError(Exception):
    """Base exception for all powstr errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(PowstrError):
    """Invalid or missing configuration (YAML, env vars, CLI flags)."""


# ---------------------------------------------------------------------------
# Connectivity
# ---------------------------------------------------------------------------


class ConnectivityError(PowstrError):
    """Base for all relay/network connectivity errors.

    See Also:
        [RelayTimeoutError][powstr.core.exceptions.RelayTimeoutError]:
            Connection or query timed out.
    """


class RelayTimeoutError(ConnectivityError):
    """Connection or query timed out."""


# ---------------------------------------------------------------------------
# Publishing
# ---------------------------------------------------------------------------


class PublishingError(PowstrError):
    """Failed to sign or send a Nostr event.

    See Also:
        [ConnectivityError][powstr.core.exceptions.ConnectivityError]:
            Lower-level connectivity errors that may cause publishing
            failures.
    """

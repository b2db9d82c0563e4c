"""Nostr key loading from the environment.

Private keys are read from an environment variable only, in nsec1
(bech32) or 64-char hex form.

Warning:
    Private keys must **never** be stored in configuration files, source
    code, or logged to any output.

Examples:
    ```python
    import os

    os.environ["PRIVATE_KEY"] = "nsec1..."  # pragma: allowlist secret
    keys = load_keys_from_env("PRIVATE_KEY")
    print(keys.public_key().to_hex())
    ```
"""

from __future__ import annotations

import os

from nostr_sdk import Keys


ENV_PRIVATE_KEY = "PRIVATE_KEY"  # pragma: allowlist secret  # Default env var name


def load_keys_from_env(env_var: str = ENV_PRIVATE_KEY) -> Keys:
    """Load Nostr keys from an environment variable.

    Args:
        env_var: Name of the environment variable containing the private key.

    Returns:
        A ``nostr_sdk.Keys`` instance ready for signing.

    Raises:
        ValueError: If the environment variable is not set or is empty.
        NostrSdkError: If the key value is malformed.
    """
    value = os.getenv(env_var)
    if not value:
        raise ValueError(
            f"{env_var} environment variable is required. Generate one with: openssl rand -hex 32"
        )
    return Keys.parse(value.strip())


def public_key_hex(keys: Keys) -> str:
    """Return the hex public key of *keys*."""
    return keys.public_key().to_hex()

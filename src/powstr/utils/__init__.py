"""Nostr key management and client operations.

The utils layer sits in the middle of the diamond DAG, depending only on
[powstr.models][powstr.models] and [powstr.nips][powstr.nips]. It wraps
``nostr_sdk`` for relay access and signing.

Attributes:
    keys: Nostr key loading from environment variables (nsec1 bech32 or
        hex format).
    protocol: Client construction, connection, filtered fetches and sends.

Note:
    The utils layer has **zero** imports from ``powstr.core`` or
    ``powstr.services``; it raises builtin exceptions only.

Examples:
    ```python
    from powstr.utils.keys import load_keys_from_env
    from powstr.utils.protocol import connect_client
    ```
"""

"""Shared configuration models for powstr.

[ClientConfig][powstr.services.common.configs.ClientConfig] describes how
to reach relays and where the signing key lives;
[PowstrConfig][powstr.services.common.configs.PowstrConfig] aggregates
every section of a ``--config`` YAML file.

Examples:
    ```yaml
    client:
      relays:
        - wss://relay.damus.io
        - wss://nos.lol
      keys_env: PRIVATE_KEY
      timeout: 10.0
    miner:
      max_attempts: 2000000
    metrics:
      enabled: true
      port: 8000
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from nostr_sdk import NostrSdkError
from pydantic import BaseModel, Field, field_validator
from rfc3986 import uri_reference

from powstr.core.exceptions import ConfigurationError
from powstr.core.metrics import MetricsConfig
from powstr.core.yaml import load_yaml
from powstr.services.comments.configs import CommentsConfig
from powstr.services.feed.configs import FeedConfig
from powstr.services.miner.configs import MinerConfig
from powstr.utils.keys import ENV_PRIVATE_KEY, load_keys_from_env


if TYPE_CHECKING:
    from nostr_sdk import Keys


_RELAY_SCHEMES = frozenset({"ws", "wss"})

DEFAULT_RELAYS = ("wss://relay.damus.io", "wss://nos.lol", "wss://relay.primal.net")


class ClientConfig(BaseModel):
    """Relay connection and signing-key settings.

    Attributes:
        relays: Relay URLs (``ws://`` or ``wss://``), normalized and deduplicated.
        keys_env: Environment variable holding the private key.
        timeout: Seconds allowed for connecting and for each query.
    """

    relays: list[str] = Field(default_factory=lambda: list(DEFAULT_RELAYS), min_length=1)
    keys_env: str = Field(
        default=ENV_PRIVATE_KEY,
        min_length=1,
        description="Environment variable name for private key",
    )
    timeout: float = Field(default=10.0, gt=0.0, le=120.0)

    @field_validator("relays")
    @classmethod
    def _validate_relays(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for url in value:
            uri = uri_reference(url.strip()).normalize()
            if uri.scheme not in _RELAY_SCHEMES or not uri.host:
                raise ValueError(f"relay URL must be ws:// or wss:// with a host: {url!r}")
            text = uri.unsplit()
            if text not in normalized:
                normalized.append(text)
        return normalized

    def load_keys(self) -> Keys:
        """Load the signing keys named by ``keys_env``.

        Raises:
            ConfigurationError: If the variable is unset or holds a malformed key.
        """
        try:
            return load_keys_from_env(self.keys_env)
        except (ValueError, NostrSdkError) as e:
            raise ConfigurationError(f"cannot load keys from {self.keys_env}: {e}") from e


class PowstrConfig(BaseModel):
    """Top-level configuration: one section per component."""

    client: ClientConfig = Field(default_factory=ClientConfig)
    comments: CommentsConfig = Field(default_factory=CommentsConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    miner: MinerConfig = Field(default_factory=MinerConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    def model_post_init(self, _context: Any) -> None:
        # A top-level metrics section applies to every service
        if "metrics" in self.model_fields_set:
            for section in (self.comments, self.feed, self.miner):
                section.metrics = self.metrics

    @classmethod
    def from_yaml(cls, config_path: str) -> Self:
        """Load and validate a YAML configuration file."""
        return cls.model_validate(load_yaml(config_path))

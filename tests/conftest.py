"""
Pytest configuration and shared fixtures for powstr tests.

Provides:
- An event factory producing valid Event models with readable labels
- In-memory relay and publisher collaborators for the services
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Sequence
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from powstr.models import Event, UnsignedEvent
from powstr.nips.nip01 import compute_event_id


# x-coordinates of 1G and 2G, valid secp256k1 public keys
PUBKEY = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
OTHER_PUBKEY = "c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
SIG = "0" * 128

# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Event Fixtures
# ============================================================================


def _hex_id(label: str) -> str:
    return hashlib.sha256(label.encode()).hexdigest()


@pytest.fixture
def hex_id() -> Callable[[str], str]:
    """Map a readable label to the 64-char hex id used by ``make_event``."""
    return _hex_id


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for valid events; the id is derived from *label* unless given."""

    def _make(
        label: str,
        *,
        created_at: int = 1_700_000_000,
        kind: int = 1111,
        tags: Sequence[Sequence[Any]] = (),
        content: str = "",
        pubkey: str = PUBKEY,
        event_id: str | None = None,
    ) -> Event:
        return Event(
            id=event_id if event_id is not None else _hex_id(label),
            pubkey=pubkey,
            created_at=created_at,
            kind=kind,
            tags=tags,
            content=content or label,
            sig=SIG,
        )

    return _make


# ============================================================================
# Collaborator Fixtures
# ============================================================================


def _sign(template: UnsignedEvent) -> Event:
    return Event(
        id=compute_event_id(template),
        pubkey=template.pubkey,
        created_at=template.created_at,
        kind=template.kind,
        tags=template.tags,
        content=template.content,
        sig=SIG,
    )


@pytest.fixture
def mock_relay() -> MagicMock:
    """Relay query collaborator answering every filter with no events."""
    relay = MagicMock()
    relay.query = AsyncMock(return_value=[])
    return relay


@pytest.fixture
def mock_publisher() -> MagicMock:
    """Publisher collaborator that 'signs' templates by hashing them."""
    publisher = MagicMock()
    publisher.public_key = PUBKEY
    publisher.publish = AsyncMock(side_effect=_sign)
    return publisher

"""NIP-13 proof-of-work scoring.

The strength of an event is the number of leading zero bits of its id. It
is the standard relays and clients use to compare the work invested in
events, so [strength()][powstr.nips.nip13.pow.strength] must count bits
exactly as the protocol reference does: nibble by nibble, four bits per
``0`` digit, and the leading zeros of the first non-zero digit.

The presentation helpers ([format_strength()][powstr.nips.nip13.pow.format_strength]
and [color_tier()][powstr.nips.nip13.pow.color_tier]) use fixed thresholds
so every front end renders the same labels.

Examples:
    ```python
    strength("0000000f")           # 28
    declared_target([["nonce", "123", "16"]])  # 16
    format_strength(21)            # "21 bits (2.1M hashes)"
    color_tier(12)                 # PowTier.MEDIUM
    ```
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import Any


NIBBLE_BITS = 4

_HEX_DIGITS = frozenset(string.hexdigits)

_MIN_NONCE_TAG_LEN = 3

# Leading base-10 integer, as read by a lenient parseInt
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")

# Work-factor suffixes for format_strength, largest first
_WORK_SUFFIXES: tuple[tuple[float, str], ...] = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
_WORK_DISPLAY_THRESHOLD = 20


class PowTier(StrEnum):
    """Display tier for a PoW strength.

    Attributes:
        NONE: No work (strength ``<= 0``).
        LOW: Below 10 bits.
        MEDIUM: 10 to 14 bits.
        HIGH: 15 to 19 bits.
        VERY_HIGH: 20 to 24 bits.
        EXTREME: 25 bits and above.
    """

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"
    EXTREME = "extreme"


# Upper bounds (exclusive) for each tier above NONE
_TIER_BOUNDS: tuple[tuple[int, PowTier], ...] = (
    (10, PowTier.LOW),
    (15, PowTier.MEDIUM),
    (20, PowTier.HIGH),
    (25, PowTier.VERY_HIGH),
)


def strength(hex_id: str) -> int:
    """Count the leading zero bits of a hex string read as big-endian bits.

    Args:
        hex_id: Hexadecimal string without ``0x`` prefix (case-insensitive).

    Returns:
        Number of leading zero bits. An all-zero string yields
        ``4 * len(hex_id)``; a non-hex character ends the count.
    """
    count = 0
    for char in hex_id:
        if char not in _HEX_DIGITS:
            break
        nibble = int(char, 16)
        if nibble == 0:
            count += NIBBLE_BITS
            continue
        count += NIBBLE_BITS - nibble.bit_length()
        break
    return count


def declared_target(tags: Iterable[Sequence[Any]]) -> int | None:
    """Extract the target strength committed to in a ``nonce`` tag.

    Looks for the first ``["nonce", <nonce>, <target>]`` tag with at least
    three elements and parses the leading ASCII base-10 integer of the
    target (``"16"`` and ``"16 bits"`` both yield 16). Entries that are not
    tag arrays are skipped.

    Returns:
        The declared target, or ``None`` if no such tag exists or the value
        is not an integer.
    """
    for tag in tags:
        if isinstance(tag, str) or not isinstance(tag, Sequence):
            continue
        if len(tag) >= _MIN_NONCE_TAG_LEN and tag[0] == "nonce":
            match = _LEADING_INT.match(str(tag[2]))
            return int(match.group(1)) if match else None
    return None


def format_strength(value: int) -> str:
    """Format a strength for display.

    Below 20 bits only the bit count is shown; from 20 bits on, the
    approximate number of hashes (``2 ** value``) is appended with a
    ``K``/``M``/``B``/``T`` suffix.
    """
    if value <= 0:
        return "No PoW"
    if value < _WORK_DISPLAY_THRESHOLD:
        return f"{value} bits"

    work = 2**value
    for threshold, suffix in _WORK_SUFFIXES:
        if work >= threshold:
            return f"{value} bits ({work / threshold:.1f}{suffix} hashes)"
    return f"{value} bits ({work} hashes)"


def color_tier(value: int) -> PowTier:
    """Map a strength to its display [PowTier][powstr.nips.nip13.pow.PowTier]."""
    if value <= 0:
        return PowTier.NONE
    for bound, tier in _TIER_BOUNDS:
        if value < bound:
            return tier
    return PowTier.EXTREME

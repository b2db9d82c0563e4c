"""Shared validation helpers for frozen dataclass models.

Private module -- not part of the public API. Used exclusively by
``__post_init__`` methods in sibling model modules to enforce runtime
type constraints and to freeze tag arrays into immutable tuples.
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from typing import Any


_HEX_DIGITS = frozenset(string.hexdigits)


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_non_negative_int(value: Any, name: str) -> None:
    """Raise if *value* is not a non-negative ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str``."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if not value:
        raise ValueError(f"{name} must not be empty")


def validate_hex(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty hexadecimal ``str``."""
    validate_str_not_empty(value, name)
    if not _HEX_DIGITS.issuperset(value):
        raise ValueError(f"{name} must be hexadecimal")


def freeze_tags(tags: Any, name: str = "tags") -> tuple[tuple[Any, ...], ...]:
    """Convert a sequence of tag arrays into a tuple of tuples.

    Individual entries are not validated: a tag that is not a sequence, or
    an empty one, is kept as an empty tuple so it never matches a lookup.

    Raises:
        TypeError: If *tags* itself is a ``str`` or not a sequence.
    """
    if isinstance(tags, str) or not isinstance(tags, Sequence):
        raise TypeError(f"{name} must be a sequence of tag arrays, got {type(tags).__name__}")
    frozen: list[tuple[Any, ...]] = []
    for tag in tags:
        if isinstance(tag, str) or not isinstance(tag, Sequence):
            frozen.append(())
        else:
            frozen.append(tuple(tag))
    return tuple(frozen)


def freeze_string_tags(tags: Any, name: str = "tags") -> tuple[tuple[str, ...], ...]:
    """Like [freeze_tags()][powstr.models._validation.freeze_tags], but strict.

    Every tag must be a non-empty sequence of ``str``, the only shape that
    can be signed and hashed.

    Raises:
        TypeError: If *tags* is not a sequence, or a tag or tag element has
            the wrong type.
        ValueError: If a tag is empty.
    """
    if isinstance(tags, str) or not isinstance(tags, Sequence):
        raise TypeError(f"{name} must be a sequence of tag arrays, got {type(tags).__name__}")
    frozen: list[tuple[str, ...]] = []
    for index, tag in enumerate(tags):
        if isinstance(tag, str) or not isinstance(tag, Sequence):
            raise TypeError(f"{name}[{index}] must be a sequence, got {type(tag).__name__}")
        if not tag:
            raise ValueError(f"{name}[{index}] must not be empty")
        for value in tag:
            if not isinstance(value, str):
                raise TypeError(
                    f"{name}[{index}] values must be str, got {type(value).__name__}"
                )
        frozen.append(tuple(tag))
    return tuple(frozen)


def validate_utf8(value: str, name: str) -> None:
    """Raise ``ValueError`` if *value* cannot be encoded as UTF-8 (lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"{name} must be encodable as UTF-8: {e.reason}") from e

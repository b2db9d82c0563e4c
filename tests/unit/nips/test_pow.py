"""Unit tests for nips.nip13.pow module."""

import pytest

from powstr.nips.nip13 import PowTier, color_tier, declared_target, format_strength, strength


class TestStrength:
    """Leading zero bit counting."""

    @pytest.mark.parametrize(
        ("hex_id", "expected"),
        [
            ("0" * 64, 256),
            ("00000000", 32),
            ("0000000f" + "f" * 56, 28),
            ("0000" + "f" * 60, 16),
            ("f" * 64, 0),
            ("8", 0),
            ("7", 1),
            ("3", 2),
            ("1", 3),
            ("08", 4),
            ("0001", 15),
            ("", 0),
        ],
    )
    def test_values(self, hex_id, expected):
        assert strength(hex_id) == expected

    def test_uppercase(self):
        assert strength("000F") == 12

    def test_non_hex_stops_count(self):
        assert strength("00g0") == 8
        assert strength("zz") == 0

    def test_non_ascii_digits_stop_count(self):
        assert strength("\u0660\u0660ff") == 0
        assert strength("0\u0660") == 4


class TestDeclaredTarget:
    """Target extraction from nonce tags."""

    def test_plain(self):
        assert declared_target([["nonce", "123", "16"]]) == 16

    def test_leading_integer(self):
        assert declared_target([["nonce", "1", "16 bits"]]) == 16
        assert declared_target([["nonce", "1", " 12"]]) == 12

    def test_not_an_integer(self):
        assert declared_target([["nonce", "1", "abc"]]) is None

    def test_non_ascii_digits_rejected(self):
        assert declared_target([["nonce", "1", "\u0661\u0666"]]) is None

    def test_malformed_entries_skipped(self):
        assert declared_target([5, None, {"nonce": 1}, "nonce", ["nonce", "1", "16"]]) == 16

    def test_short_tag_ignored(self):
        assert declared_target([["nonce", "1"]]) is None

    def test_no_nonce_tag(self):
        assert declared_target([["t", "pow"]]) is None
        assert declared_target([]) is None

    def test_first_nonce_tag_wins(self):
        assert declared_target([["nonce", "1", "8"], ["nonce", "2", "16"]]) == 8


class TestFormatStrength:
    """Display labels."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (-3, "No PoW"),
            (0, "No PoW"),
            (1, "1 bits"),
            (5, "5 bits"),
            (19, "19 bits"),
            (20, "20 bits (1.0M hashes)"),
            (21, "21 bits (2.1M hashes)"),
            (30, "30 bits (1.1B hashes)"),
            (40, "40 bits (1.1T hashes)"),
        ],
    )
    def test_labels(self, value, expected):
        assert format_strength(value) == expected


class TestColorTier:
    """Tier thresholds."""

    @pytest.mark.parametrize(
        ("value", "tier"),
        [
            (-1, PowTier.NONE),
            (0, PowTier.NONE),
            (1, PowTier.LOW),
            (9, PowTier.LOW),
            (10, PowTier.MEDIUM),
            (14, PowTier.MEDIUM),
            (15, PowTier.HIGH),
            (19, PowTier.HIGH),
            (20, PowTier.VERY_HIGH),
            (24, PowTier.VERY_HIGH),
            (25, PowTier.EXTREME),
            (256, PowTier.EXTREME),
        ],
    )
    def test_tiers(self, value, tier):
        assert color_tier(value) == tier

"""Unit tests for services.feed.utils module."""

import pytest

from powstr.nips.nip13 import PowTier
from powstr.services.feed import FeedPage, ScoredEvent, SortOrder, paginate, rank, score


def id_with_strength(bits: int, salt: str = "f") -> str:
    """A 64-char id with exactly *bits* leading zero bits (multiples of 4)."""
    zeros = bits // 4
    return "0" * zeros + salt * (64 - zeros)


@pytest.fixture
def scored_note(make_event):
    def _scored(label, bits, tags=()):
        event = make_event(label, kind=1, tags=tags, event_id=id_with_strength(bits))
        return ScoredEvent.from_event(event)

    return _scored


class TestScoredEvent:
    """Per-event scoring."""

    def test_from_event(self, scored_note):
        item = scored_note("n", 16, tags=[["nonce", "9", "16"]])
        assert item.strength == 16
        assert item.target == 16
        assert item.meets_target

    def test_below_target(self, scored_note):
        assert not scored_note("n", 8, tags=[["nonce", "9", "12"]]).meets_target

    def test_no_target(self, scored_note):
        item = scored_note("n", 4)
        assert item.target is None
        assert item.meets_target

    def test_display(self, scored_note):
        item = scored_note("n", 20)
        assert item.label == "20 bits (1.0M hashes)"
        assert item.tier == PowTier.VERY_HIGH


class TestScore:
    def test_filters_by_min_strength(self, make_event):
        events = [
            make_event("weak", kind=1, event_id=id_with_strength(0)),
            make_event("ok", kind=1, event_id=id_with_strength(8)),
            make_event("strong", kind=1, event_id=id_with_strength(16)),
        ]
        assert [item.event.content for item in score(events, 8)] == ["ok", "strong"]
        assert len(score(events)) == 3


class TestRank:
    """Strength ordering."""

    def test_desc_stable(self, scored_note):
        items = [scored_note("a", 8), scored_note("b", 16), scored_note("c", 8)]
        assert [i.event.content for i in rank(items)] == ["b", "a", "c"]

    def test_asc_stable(self, scored_note):
        items = [scored_note("a", 8), scored_note("b", 16), scored_note("c", 8)]
        assert [i.event.content for i in rank(items, "asc")] == ["a", "c", "b"]
        assert rank(items, SortOrder.ASC) == rank(items, "asc")

    def test_invalid_order(self, scored_note):
        with pytest.raises(ValueError):
            rank([scored_note("a", 8)], "sideways")


class TestPaginate:
    """Page slicing and clamping."""

    @pytest.fixture
    def items(self, scored_note):
        return [scored_note(f"n{i}", 4) for i in range(25)]

    def test_first_page(self, items):
        page = paginate(items, 1, 10)
        assert isinstance(page, FeedPage)
        assert len(page.items) == 10
        assert page.total_pages == 3
        assert page.total_items == 25
        assert not page.has_previous
        assert page.has_next

    def test_last_page(self, items):
        page = paginate(items, 3, 10)
        assert [i.event.content for i in page.items] == ["n20", "n21", "n22", "n23", "n24"]
        assert page.has_previous
        assert not page.has_next

    def test_clamped(self, items):
        assert paginate(items, 0, 10).page == 1
        assert paginate(items, -5, 10).page == 1
        assert paginate(items, 99, 10).page == 3

    def test_empty(self):
        page = paginate([], 4, 10)
        assert page.items == ()
        assert page.page == 1
        assert page.total_pages == 1
        assert page.total_items == 0

    def test_invalid_page_size(self, items):
        with pytest.raises(ValueError, match="page_size must be at least 1"):
            paginate(items, 1, 0)

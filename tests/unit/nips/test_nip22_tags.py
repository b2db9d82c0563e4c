"""Unit tests for nips.nip22.tags module."""

import pytest

from powstr.models import AddressableRef, ExternalRef, ExternalResource, RegularRef, ReplaceableRef
from powstr.nips.nip22 import (
    comment_filter,
    comment_tags,
    matches_root,
    reference_of,
    reference_tag_name,
    reply_tags,
    root_key,
    root_tags,
)


PK = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
URL = "https://example.com/article"


@pytest.fixture
def roots(make_event):
    """One root of every addressing class."""
    return {
        "external": ExternalResource(URL),
        "regular": make_event("note", kind=1),
        "replaceable": make_event("profile", kind=0),
        "addressable": make_event("article", kind=30023, tags=[["d", "slug"]]),
    }


# ============================================================================
# References
# ============================================================================


class TestReferenceOf:
    """Root to reference dispatch."""

    def test_variants(self, roots):
        assert reference_of(roots["external"]) == ExternalRef(URL)
        assert reference_of(roots["regular"]) == RegularRef(roots["regular"].id)
        assert reference_of(roots["replaceable"]) == ReplaceableRef(0, PK)
        assert reference_of(roots["addressable"]) == AddressableRef(30023, PK, "slug")

    def test_addressable_without_d(self, make_event):
        assert reference_of(make_event("a", kind=30023)) == AddressableRef(30023, PK, "")

    def test_unsupported_target(self):
        with pytest.raises(TypeError, match="Event or ExternalResource"):
            reference_of("https://example.com")  # type: ignore[arg-type]

    def test_tag_names(self):
        assert reference_tag_name(ExternalRef(URL)) == "i"
        assert reference_tag_name(ReplaceableRef(0, PK)) == "a"
        assert reference_tag_name(AddressableRef(30023, PK)) == "a"
        assert reference_tag_name(RegularRef("ab")) == "e"


# ============================================================================
# Tag Building
# ============================================================================


class TestRootTags:
    """Upper-case root address tags."""

    def test_external(self, roots):
        assert root_tags(roots["external"]) == [["I", URL], ["K", "example.com"]]

    def test_regular(self, roots):
        note = roots["regular"]
        assert root_tags(note) == [["E", note.id], ["K", "1"], ["P", PK]]

    def test_replaceable(self, roots):
        assert root_tags(roots["replaceable"]) == [["A", f"0:{PK}:"], ["K", "0"], ["P", PK]]

    def test_addressable(self, roots):
        assert root_tags(roots["addressable"]) == [
            ["A", f"30023:{PK}:slug"],
            ["K", "30023"],
            ["P", PK],
        ]


class TestCommentTags:
    """Full comment tag sets."""

    def test_top_level_addresses_root_twice(self, roots):
        tags = comment_tags(roots["external"])
        assert tags == [
            ["I", URL],
            ["K", "example.com"],
            ["i", URL],
            ["k", "example.com"],
        ]

    def test_reply_uses_parent_lowercase(self, roots, make_event):
        parent = make_event("parent", tags=comment_tags(roots["regular"]))
        tags = comment_tags(roots["regular"], parent)

        assert tags[:3] == root_tags(roots["regular"])
        assert tags[3:] == [["e", parent.id], ["k", "1111"], ["p", PK]]
        assert tags[3:] == reply_tags(parent)


# ============================================================================
# Matching
# ============================================================================


class TestMatchesRoot:
    """Top-level comment detection."""

    @pytest.mark.parametrize("name", ["external", "regular", "replaceable", "addressable"])
    def test_round_trip(self, roots, make_event, name):
        root = roots[name]
        comment = make_event("c", tags=comment_tags(root))
        assert matches_root(comment, root)

    @pytest.mark.parametrize("name", ["external", "regular", "replaceable", "addressable"])
    def test_reply_is_not_top_level(self, roots, make_event, name):
        root = roots[name]
        parent = make_event("parent", tags=comment_tags(root))
        reply = make_event("reply", tags=comment_tags(root, parent))
        assert not matches_root(reply, root)

    def test_other_root_does_not_match(self, make_event):
        comment = make_event("c", tags=comment_tags(ExternalResource(URL)))
        assert not matches_root(comment, ExternalResource("https://example.com/other"))

    def test_malformed_tags_never_match(self, roots, make_event):
        comment = make_event("c", tags=[["i"], ["e"], [], ["a", 5]])
        for root in roots.values():
            assert not matches_root(comment, root)

    def test_addressable_without_d_collapses(self, make_event):
        first = make_event("first", kind=30023)
        second = make_event("second", kind=30023)
        comment = make_event("c", tags=comment_tags(first))
        assert matches_root(comment, second)

    def test_normalized_url_matches(self, make_event):
        comment = make_event("c", tags=comment_tags(ExternalResource("https://Example.com")))
        assert matches_root(comment, ExternalResource("https://example.com/"))


# ============================================================================
# Filters and Keys
# ============================================================================


class TestCommentFilter:
    """Relay filter construction."""

    def test_external(self, roots):
        assert comment_filter(roots["external"]) == {"kinds": [1111], "#I": [URL]}

    def test_regular_with_limit(self, roots):
        note = roots["regular"]
        assert comment_filter(note, limit=500) == {"kinds": [1111], "#E": [note.id], "limit": 500}

    def test_addressable(self, roots):
        assert comment_filter(roots["addressable"]) == {
            "kinds": [1111],
            "#A": [f"30023:{PK}:slug"],
        }


class TestRootKey:
    """Cache keys."""

    def test_external(self, roots):
        assert root_key(roots["external"]) == URL

    def test_event(self, roots):
        assert root_key(roots["addressable"]) == roots["addressable"].id

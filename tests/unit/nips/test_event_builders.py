"""Unit tests for nips.event_builders module."""

from nostr_sdk import Keys

from powstr.models import Event, ExternalResource
from powstr.nips.event_builders import build_comment, build_text_note, to_event_builder
from powstr.nips.nip01 import compute_event_id
from powstr.nips.nip22 import comment_tags


PK = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


class TestBuildComment:
    """Kind 1111 templates."""

    def test_top_level(self):
        root = ExternalResource("https://example.com/a")
        template = build_comment(root, "nice", pubkey=PK, created_at=1_700_000_000)

        assert template.kind == 1111
        assert template.pubkey == PK
        assert template.created_at == 1_700_000_000
        assert template.content == "nice"
        assert template.tags_as_lists() == comment_tags(root)

    def test_reply(self, make_event):
        root = make_event("note", kind=1)
        parent = make_event("parent", tags=comment_tags(root))
        template = build_comment(root, "agreed", pubkey=PK, created_at=1, reply=parent)

        assert template.tags_as_lists() == comment_tags(root, parent)
        assert ("e", parent.id) in template.tags


class TestBuildTextNote:
    """Kind 1 templates."""

    def test_defaults(self):
        template = build_text_note("gm", pubkey=PK, created_at=5)
        assert template.kind == 1
        assert template.tags == ()
        assert template.content == "gm"

    def test_custom_kind(self):
        assert build_text_note("x", pubkey=PK, created_at=5, kind=42).kind == 42


class TestToEventBuilder:
    """EventBuilder conversion preserves the template id."""

    def test_signed_id_matches_template(self):
        keys = Keys.generate()
        template = build_text_note(
            "gm\nworld é", pubkey=keys.public_key().to_hex(), created_at=1_700_000_000
        ).with_tag(["nonce", "5", "8"])

        signed = Event.from_nostr(to_event_builder(template).finalize(keys))

        assert signed.id == compute_event_id(template)
        assert signed.tags == template.tags
        assert signed.created_at == template.created_at
        assert signed.content == template.content

    def test_comment_tags_preserved(self):
        keys = Keys.generate()
        root = ExternalResource("https://example.com/a")
        template = build_comment(
            root, "hi", pubkey=keys.public_key().to_hex(), created_at=1_700_000_000
        )

        signed = Event.from_nostr(to_event_builder(template).finalize(keys))

        assert signed.kind == 1111
        assert signed.id == compute_event_id(template)

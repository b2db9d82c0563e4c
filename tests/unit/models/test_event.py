"""Unit tests for models.event module."""

import json

import pytest

from powstr.models import Event, KindClass, UnsignedEvent, classify_kind


PK = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
ID = "c" * 64


def make(**overrides):
    data = {
        "id": ID,
        "pubkey": PK,
        "created_at": 1_700_000_000,
        "kind": 1,
        "tags": [],
        "content": "hello",
        "sig": "d" * 128,
    }
    data.update(overrides)
    return Event(**data)


# ============================================================================
# Kind Classification
# ============================================================================


class TestClassifyKind:
    """classify_kind() range boundaries."""

    @pytest.mark.parametrize("kind", [0, 3, 10_000, 10_002, 19_999])
    def test_replaceable(self, kind):
        assert classify_kind(kind) == KindClass.REPLACEABLE

    @pytest.mark.parametrize("kind", [30_000, 30_023, 39_999])
    def test_addressable(self, kind):
        assert classify_kind(kind) == KindClass.ADDRESSABLE

    @pytest.mark.parametrize("kind", [1, 2, 4, 1111, 9_999, 20_000, 29_999, 40_000, 65_535])
    def test_regular(self, kind):
        assert classify_kind(kind) == KindClass.REGULAR

    def test_event_property(self):
        assert make(kind=30_023).kind_class == KindClass.ADDRESSABLE


# ============================================================================
# Validation
# ============================================================================


class TestValidation:
    """Constructor validation."""

    def test_valid(self):
        event = make()
        assert event.id == ID
        assert event.content == "hello"

    def test_non_hex_id(self):
        with pytest.raises(ValueError, match="id must be hexadecimal"):
            make(id="xyz")

    def test_empty_id(self):
        with pytest.raises(ValueError, match="id must not be empty"):
            make(id="")

    def test_non_str_pubkey(self):
        with pytest.raises(TypeError, match="pubkey must be a str"):
            make(pubkey=123)

    def test_negative_created_at(self):
        with pytest.raises(ValueError, match="created_at must be non-negative"):
            make(created_at=-1)

    def test_bool_kind_rejected(self):
        with pytest.raises(TypeError, match="kind must be an int"):
            make(kind=True)

    def test_non_str_content(self):
        with pytest.raises(TypeError, match="content must be a str"):
            make(content=None)

    def test_string_tags_rejected(self):
        with pytest.raises(TypeError, match="tags must be a sequence"):
            make(tags="e")

    def test_frozen(self):
        event = make()
        with pytest.raises(AttributeError):
            event.content = "changed"  # type: ignore[misc]


# ============================================================================
# Tags
# ============================================================================


class TestTags:
    """Tag freezing and lookup helpers."""

    def test_tags_frozen_to_tuples(self):
        event = make(tags=[["e", "x"], ["p", "y", "relay"]])
        assert event.tags == (("e", "x"), ("p", "y", "relay"))

    def test_malformed_entries_kept_empty(self):
        event = make(tags=[["e"], "bad", 5, ["e", "x"]])
        assert event.tags == (("e",), (), (), ("e", "x"))
        assert event.tag_values("e") == ["x"]

    def test_tag_values_in_order(self):
        event = make(tags=[["e", "1"], ["p", "2"], ["e", "3"]])
        assert event.tag_values("e") == ["1", "3"]
        assert event.tag_values("q") == []

    def test_first_tag_value(self):
        event = make(tags=[["d", "first"], ["d", "second"]])
        assert event.first_tag_value("d") == "first"
        assert event.first_tag_value("e") is None

    def test_d_identifier(self):
        assert make(tags=[["d", "slug"]]).d_identifier == "slug"
        assert make().d_identifier == ""
        assert make(tags=[["d", 5]]).d_identifier == ""

    def test_has_tag_value(self):
        event = make(tags=[["e", "1"], ["e", "2"]])
        assert event.has_tag_value("e", "2")
        assert not event.has_tag_value("e", "3")
        assert not event.has_tag_value("E", "1")


# ============================================================================
# Conversion
# ============================================================================


class TestConversion:
    """Dict, JSON and unsigned conversions."""

    def test_to_dict_from_dict(self):
        event = make(tags=[["e", "x"]])
        data = event.to_dict()
        assert data["tags"] == [["e", "x"]]
        assert Event.from_dict(data) == event

    def test_from_dict_defaults(self):
        event = Event.from_dict({"id": ID, "pubkey": PK, "created_at": 1, "kind": 1})
        assert event.tags == ()
        assert event.content == ""
        assert event.sig == ""

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            Event.from_dict({"id": ID, "pubkey": PK, "kind": 1})

    def test_from_json(self):
        event = make()
        assert Event.from_json(json.dumps(event.to_dict())) == event

    def test_from_json_not_object(self):
        with pytest.raises(TypeError, match="must be an object"):
            Event.from_json("[1, 2]")

    def test_unsigned(self):
        event = make(tags=[["t", "pow"]])
        unsigned = event.unsigned()
        assert isinstance(unsigned, UnsignedEvent)
        assert unsigned.pubkey == PK
        assert unsigned.tags == (("t", "pow"),)
        assert unsigned.content == "hello"


# ============================================================================
# UnsignedEvent
# ============================================================================


class TestUnsignedEvent:
    """Template validation and tag replacement."""

    def test_with_tag_appends(self):
        template = UnsignedEvent(pubkey=PK, created_at=1, kind=1)
        assert template.with_tag(["nonce", "0", "8"]).tags == (("nonce", "0", "8"),)

    def test_with_tag_replaces_same_name(self):
        template = UnsignedEvent(
            pubkey=PK, created_at=1, kind=1, tags=[["nonce", "1", "8"], ["t", "pow"]]
        )
        updated = template.with_tag(["nonce", "2", "8"])
        assert updated.tags == (("t", "pow"), ("nonce", "2", "8"))
        assert template.tags == (("nonce", "1", "8"), ("t", "pow"))

    def test_tags_as_lists(self):
        template = UnsignedEvent(pubkey=PK, created_at=1, kind=1, tags=[["t", "a"]])
        assert template.tags_as_lists() == [["t", "a"]]

    def test_invalid_pubkey(self):
        with pytest.raises(ValueError, match="pubkey"):
            UnsignedEvent(pubkey="not-hex", created_at=1, kind=1)

    def test_non_string_tag_value_rejected(self):
        with pytest.raises(TypeError, match=r"tags\[0\] values must be str"):
            UnsignedEvent(pubkey=PK, created_at=1, kind=1, tags=[["nonce", 1, 8]])

    def test_with_tag_non_string_rejected(self):
        template = UnsignedEvent(pubkey=PK, created_at=1, kind=1)
        with pytest.raises(TypeError, match="must be str"):
            template.with_tag(["nonce", "1", 8])

    def test_empty_tag_rejected(self):
        with pytest.raises(ValueError, match=r"tags\[1\] must not be empty"):
            UnsignedEvent(pubkey=PK, created_at=1, kind=1, tags=[["t", "a"], []])

    def test_non_sequence_tag_rejected(self):
        with pytest.raises(TypeError, match=r"tags\[0\] must be a sequence"):
            UnsignedEvent(pubkey=PK, created_at=1, kind=1, tags=[5])

    def test_lone_surrogate_content_rejected(self):
        with pytest.raises(ValueError, match="content must be encodable as UTF-8"):
            UnsignedEvent(pubkey=PK, created_at=1, kind=1, content="\ud800")

    def test_unsigned_of_malformed_event_raises(self):
        event = make(tags=[[], ["t", "a"]])
        with pytest.raises(ValueError, match="must not be empty"):
            event.unsigned()

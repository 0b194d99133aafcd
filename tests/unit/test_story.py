"""Unit tests for Story domain entities."""

import pytest
from bson import ObjectId

from storyforge.domain.errors import InvalidIdentifierError
from storyforge.domain.story import (
    Audio,
    Script,
    Segment,
    StoryUpdate,
    ensure_segment_ids,
    is_blank_id,
    new_id,
    parse_id,
)


class TestIdentity:
    """Tests for identity generation and parsing."""

    def test_new_id_is_24_char_hex(self):
        value = new_id()
        assert len(value) == 24
        int(value, 16)

    def test_new_ids_are_unique(self):
        assert len({new_id() for _ in range(100)}) == 100

    def test_parse_id_round_trips(self):
        value = new_id()
        assert parse_id(value) == ObjectId(value)

    @pytest.mark.parametrize("value", ["", "abc", "zz" * 12, "0" * 25, None, 42])
    def test_parse_id_rejects_malformed(self, value):
        with pytest.raises(InvalidIdentifierError):
            parse_id(value)

    def test_invalid_identifier_is_value_error(self):
        with pytest.raises(ValueError):
            parse_id("nope")

    def test_blank_ids(self):
        assert is_blank_id(None)
        assert is_blank_id("")
        assert not is_blank_id(new_id())


class TestEnsureSegmentIds:
    """Tests for segment identity assignment."""

    def test_assigns_missing_ids(self):
        segments = ensure_segment_ids([Segment(), Segment(id="")])
        assert all(s.id for s in segments)
        assert segments[0].id != segments[1].id

    def test_preserves_existing_ids(self):
        existing = new_id()
        segments = ensure_segment_ids([Segment(id=existing, script=Script(text="hi"))])
        assert segments[0].id == existing
        assert segments[0].script == Script(text="hi")

    def test_preserves_order_and_content(self):
        kept = new_id()
        original = [
            Segment(script=Script(text="one")),
            Segment(id=kept, script=Script(text="two")),
            Segment(audio=Audio(url="http://a/x"), script=Script(text="three")),
        ]
        segments = ensure_segment_ids(original)
        assert [s.script.text for s in segments] == ["one", "two", "three"]
        assert segments[1].id == kept
        assert segments[2].audio == Audio(url="http://a/x")

    def test_does_not_mutate_input(self):
        original = [Segment()]
        ensure_segment_ids(original)
        assert original[0].id is None

    def test_empty_list(self):
        assert ensure_segment_ids([]) == []


class TestStoryUpdate:
    """Tests for the typed partial update."""

    def test_missing_segments_normalized_to_empty(self):
        update = StoryUpdate.create(title="T")
        assert update.segments == ()
        assert update.is_published is False

    def test_keeps_segment_order(self):
        segments = [Segment(script=Script(text=str(i))) for i in range(5)]
        update = StoryUpdate.create(title="T", segments=segments, is_published=True)
        assert [s.script.text for s in update.segments] == ["0", "1", "2", "3", "4"]
        assert update.is_published is True

    def test_absent_and_empty_asset_are_distinct(self):
        assert Segment(audio=None) != Segment(audio=Audio(url=""))

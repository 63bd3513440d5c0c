"""Tests for the segment data model."""

import pytest
from pydantic import ValidationError

from rlce.models.segment import LineRange, SegmentCommand


class TestLineRange:

    @pytest.mark.parametrize("start, end, expected", [
        (1, 1, True),
        (1, 10, True),
        (5, 7, True),
        (0, 5, False),
        (-3, 2, False),
        (5, 4, False),
        (0, 0, False),
    ])
    def test_is_valid(self, start, end, expected):
        line_range = LineRange(start_line=start, end_line=end)
        assert line_range.is_valid() is expected
        assert line_range.is_valid() == (start >= 1 and end >= start)

    def test_str(self):
        assert str(LineRange(start_line=2, end_line=4)) == "Lines 2-4"

    def test_line_count(self):
        assert LineRange(start_line=2, end_line=4).line_count == 3
        assert LineRange(start_line=7, end_line=7).line_count == 1
        assert LineRange(start_line=9, end_line=3).line_count == 0

    def test_accepts_interchange_names(self):
        assert LineRange.model_validate({"startLine": 3, "endLine": 8}) == LineRange(start_line=3, end_line=8)
        assert LineRange.model_validate({"StartLine": 3, "EndLine": 8}) == LineRange(start_line=3, end_line=8)

    def test_is_immutable(self):
        line_range = LineRange(start_line=1, end_line=2)
        with pytest.raises(ValidationError):
            line_range.start_line = 5

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError):
            LineRange.model_validate({"startLine": 1})


class TestSegmentCommand:

    def test_defaults(self):
        segment = SegmentCommand()
        assert segment.first_line is None
        assert segment.last_line is None
        assert segment.ranges == ()
        assert segment.nested_segments == ()
        assert segment.is_trivial

    def test_is_trivial_ignores_literal_lines(self):
        assert SegmentCommand(first_line="Header", last_line="Footer").is_trivial

    def test_non_trivial_with_range_or_child(self):
        with_range = SegmentCommand(ranges=[LineRange(start_line=1, end_line=1)])
        with_child = SegmentCommand(nested_segments=[with_range])
        assert not with_range.is_trivial
        assert not with_child.is_trivial
        assert with_child.children == (with_range,)

    def test_parses_interchange_shape(self):
        segment = SegmentCommand.model_validate({
            "firstLine": "=== Start ===",
            "ranges": [{"startLine": 1, "endLine": 3}],
            "lastLine": "=== End ===",
            "nestedSegments": [
                {"firstLine": "--Sub--", "ranges": [{"startLine": 5, "endLine": 7}]}
            ],
        })
        assert segment.first_line == "=== Start ==="
        assert segment.ranges == (LineRange(start_line=1, end_line=3),)
        assert segment.last_line == "=== End ==="
        assert segment.nested_segments[0].first_line == "--Sub--"
        assert segment.nested_segments[0].nested_segments == ()

    def test_parses_pascal_case(self):
        segment = SegmentCommand.model_validate({
            "FirstLine": "A",
            "Ranges": [{"StartLine": 1, "EndLine": 2}],
            "LastLine": "B",
            "NestedSegments": None,
        })
        assert segment.first_line == "A"
        assert segment.last_line == "B"
        assert segment.ranges[0].end_line == 2
        assert segment.nested_segments == ()

    def test_null_lists_read_as_empty(self):
        segment = SegmentCommand.model_validate({"ranges": None, "nestedSegments": None})
        assert segment.ranges == ()
        assert segment.nested_segments == ()

    def test_serializes_interchange_names(self):
        segment = SegmentCommand(first_line="A", ranges=[LineRange(start_line=1, end_line=2)])
        data = segment.model_dump(by_alias=True, mode="json")
        assert data == {
            "firstLine": "A",
            "ranges": [{"startLine": 1, "endLine": 2}],
            "lastLine": None,
            "nestedSegments": [],
        }

    def test_lists_cannot_be_mutated(self):
        child = SegmentCommand(ranges=[LineRange(start_line=1, end_line=1)])
        segment = SegmentCommand(ranges=[LineRange(start_line=2, end_line=3)], nested_segments=[child])
        with pytest.raises(AttributeError):
            segment.ranges.clear()
        with pytest.raises(AttributeError):
            segment.nested_segments.append(child)
        with pytest.raises(ValidationError):
            segment.ranges = ()
        assert segment.ranges == (LineRange(start_line=2, end_line=3),)
        assert segment.children == (child,)

    def test_depth(self):
        leaf = SegmentCommand(ranges=[LineRange(start_line=1, end_line=1)])
        assert leaf.depth() == 1
        tree = SegmentCommand(nested_segments=[leaf, SegmentCommand(nested_segments=[leaf])])
        assert tree.depth() == 3

"""Unit tests for character-level segment diffs."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from termdiff.segments import common_prefix_length, common_suffix_length, diff_segment, graphemes

_CLUSTER_CHARS = ["a", "e", "x", "\u0301", "\u0300"]


@pytest.mark.unit
class TestDiffSegment:
    """Test prefix/diff/suffix splitting of two lines."""

    def test_simple_replacement(self):
        """Test the split of a single differing argument."""
        segment = diff_segment("f(atom())", "f(binary())")
        assert segment.prefix == "f("
        assert segment.expected_diff == "atom"
        assert segment.actual_diff == "binary"
        assert segment.expected_suffix == "())"
        assert segment.actual_suffix == "())"

    def test_identical_lines(self):
        """Test that identical lines have empty diff regions."""
        segment = diff_segment("same", "same")
        assert segment.identical
        assert segment.prefix == "same"

    def test_owed_closers_move_out_of_suffix(self):
        """Test that closers owed by the diff region are taken from the suffix."""
        segment = diff_segment("[a(b)]", "[c]")
        assert segment.prefix == "["
        assert segment.expected_diff == "a(b)"
        assert segment.actual_diff == "c"
        assert segment.expected_suffix == "]"

    def test_shared_trailing_closers_stay_in_suffix(self):
        """Test that closers common to both diff tails go back to the suffix."""
        segment = diff_segment("(%Sample{:r => atom() | [any()]})", '(%Sample{:r => "title"})')
        assert segment.prefix == "(%Sample{:r => "
        assert segment.expected_diff == "atom() | [any()]"
        assert segment.actual_diff == '"title"'
        assert segment.expected_suffix == "})"

    def test_unbalanced_side_keeps_its_closer(self):
        """Test that a closer present on one side only stays in its diff region."""
        segment = diff_segment("g(a", "g(b)")
        assert segment.actual_diff == "b)"
        assert segment.actual_suffix == ""

    def test_empty_diff_does_not_pull_closers(self):
        """Test that an empty diff region stays empty."""
        segment = diff_segment("f(x)", "f(xy)")
        assert segment.expected_diff == ""
        assert segment.actual_diff == "y"
        assert segment.expected_suffix == ")"

    def test_highlighted_lines(self):
        """Test the line composition helpers."""
        segment = diff_segment("f(atom())", "f(binary())")
        assert segment.expected_line(lambda text: f"<{text}>") == "f(<atom>())"
        assert segment.actual_line(lambda text: f"<{text}>") == "f(<binary>())"

    def test_spans(self):
        """Test the diff region offsets."""
        segment = diff_segment("f(atom())", "f(binary())")
        assert segment.expected_span == (2, 6)
        assert segment.actual_span == (2, 8)

    def test_common_suffix_length_is_capped(self):
        """Test that the suffix never exceeds the shorter string."""
        assert common_suffix_length("abc", "bc") == 2
        assert common_suffix_length("", "abc") == 0

    def test_combining_mark_stays_with_its_base(self):
        """Test that the diff boundary never splits a grapheme cluster."""
        segment = diff_segment("e\u0301x", "e\u0300x")
        assert segment.prefix == ""
        assert segment.expected_diff == "e\u0301"
        assert segment.actual_diff == "e\u0300"
        assert segment.expected_suffix == "x"

    def test_shared_cluster_suffix(self):
        """Test suffix matching on whole clusters."""
        assert common_suffix_length("ae\u0301", "be\u0301") == 2
        assert common_suffix_length("a\u0301", "b\u0301") == 0
        assert common_prefix_length("e\u0301a", "e\u0301b") == 2

    def test_graphemes(self):
        """Test cluster splitting."""
        assert graphemes("e\u0301x") == ["e\u0301", "x"]


@pytest.mark.unit
@pytest.mark.fuzzing
class TestDiffSegmentFuzzing:
    """Property-based tests for the segment split."""

    @given(st.text(alphabet="ab(){}[], ", max_size=30), st.text(alphabet="ab(){}[], ", max_size=30))
    def test_parts_rebuild_both_lines(self, expected, actual):
        """Property: prefix + diff + suffix always rebuilds each line."""
        segment = diff_segment(expected, actual)
        assert segment.prefix + segment.expected_diff + segment.expected_suffix == expected
        assert segment.prefix + segment.actual_diff + segment.actual_suffix == actual

    @given(st.text(alphabet="ab(){}[], ", max_size=30))
    def test_equal_lines_have_no_diff(self, text):
        """Property: a line compared with itself has empty diff regions."""
        assert diff_segment(text, text).identical

    @given(st.text(alphabet=_CLUSTER_CHARS, max_size=12), st.text(alphabet=_CLUSTER_CHARS, max_size=12))
    def test_prefix_ends_on_cluster_boundary(self, expected, actual):
        """Property: the common prefix is a whole number of clusters of both lines."""
        prefix = diff_segment(expected, actual).prefix
        for line in (expected, actual):
            boundaries = {0}
            offset = 0
            for cluster in graphemes(line):
                offset += len(cluster)
                boundaries.add(offset)
            assert len(prefix) in boundaries

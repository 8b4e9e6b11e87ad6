"""Unit tests for collapsing unchanged struct and map context."""

import pytest

from termdiff.compactor import compact, shrink_segment, shrink_structs
from termdiff.segments import diff_segment


def mark(text):
    return f"<{text}>"


@pytest.mark.unit
class TestCompact:
    """Test the struct and map field compaction."""

    def test_struct_field(self):
        """Test that a differing struct field is shown alone."""
        segment = diff_segment("(%Sample{:required => atom() | [any()]})", '(%Sample{:required => "title"})')
        assert compact(segment) == (
            "(%Sample{..., :required => atom() | [any()]})",
            '(%Sample{..., :required => "title"})',
        )

    def test_nested_struct_uses_outer_name(self):
        """Test that the name comes from the first struct of the expected line."""
        segment = diff_segment(
            '(%Outer{:inner => %Inner{:foo => "title", :bar => integer()}})',
            "(%Outer{:inner => %Inner{:foo => atom(), :bar => integer()}})",
        )
        assert compact(segment) == ('(%Outer{..., :foo => "title"})', "(%Outer{..., :foo => atom()})")

    def test_map_field_shows_whole_value(self):
        """Test that the compacted value is closed over its own delimiters."""
        segment = diff_segment("%{:a => 1, :b => f(2), :c => 3}", "%{:a => 1, :b => f(5), :c => 3}")
        assert compact(segment, mark) == ("%{..., :b => f(<2>)}", "%{..., :b => f(<5>)}")

    def test_highlight_applies_to_diff_only(self):
        """Test that only the differing characters are highlighted."""
        segment = diff_segment("%Sample{:a => atom()}", "%Sample{:a => binary()}")
        assert compact(segment, mark) == ("%Sample{..., :a => <atom>()}", "%Sample{..., :a => <binary>()}")

    def test_no_context_gives_none(self):
        """Test that a diff outside any struct or map is not compacted."""
        assert compact(diff_segment("atom()", "binary()")) is None

    def test_diff_after_closed_struct_gives_none(self):
        """Test that a struct closed before the diff is not a context."""
        segment = diff_segment('(%Sample{:value => atom()}, "title")', "(%Sample{:value => atom()}, atom())")
        assert compact(segment) is None

    def test_diff_in_key_position_gives_none(self):
        """Test that a diff that is not inside an entry value is not compacted."""
        segment = diff_segment("%{:a => 1}", "%{:b => 1}")
        assert compact(segment) is None


@pytest.mark.unit
class TestShrinkStructs:
    """Test shrinking of structs that do not hold the diff."""

    def test_struct_before_diff_is_shrunk(self):
        """Test that an unrelated struct becomes Name{...}."""
        assert shrink_structs("(%Sample{:value => atom()}, atom())", (28, 34)) == ("(%Sample{...}, atom())", (15, 21))

    def test_struct_holding_diff_is_kept(self):
        """Test that structs overlapping the diff stay expanded."""
        text = "%A{:x => %B{:y => 1}}"
        assert shrink_structs(text, (18, 19)) == (text, (18, 19))

    def test_only_unrelated_struct_is_shrunk(self):
        """Test a mix of unrelated and enclosing structs."""
        assert shrink_structs("%A{:x => 1}, %B{:y => 2}", (22, 23)) == ("%A{...}, %B{:y => 2}", (18, 19))

    def test_insertion_point_inside_struct(self):
        """Test that an empty span protects its enclosing struct."""
        assert shrink_structs("%A{:x => 1}", (5, 5)) == ("%A{:x => 1}", (5, 5))

    def test_shrink_segment(self):
        """Test both sides of a segment with highlighted diffs."""
        segment = diff_segment('(%Sample{:value => atom()}, "title")', "(%Sample{:value => atom()}, atom())")
        assert shrink_segment(segment, mark) == ('(%Sample{...}, <"title">)', "(%Sample{...}, <atom()>)")

    def test_closing_brace_inside_string(self):
        """Test that a quoted closing brace does not end the struct."""
        assert shrink_structs('(%S{:a => "}"}, atom())', (16, 22)) == ("(%S{...}, atom())", (10, 16))

    def test_struct_marker_inside_string_is_kept(self):
        """Test that struct syntax inside a string is left alone."""
        text = '("%S{:a => 1}", atom())'
        assert shrink_structs(text, (16, 22)) == (text, (16, 22))

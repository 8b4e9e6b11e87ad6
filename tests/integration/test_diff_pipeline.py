"""Integration tests for the raw-value to report pipeline."""

import pytest

from termdiff import (
    DiffOptions,
    diff_lines,
    diff_section,
    diff_terms,
    flatten_lines,
    load_options,
    value_block,
)
from termdiff.ansi import strip_ansi


def report(expected_raw, actual_raw, options=None):
    """Build the labeled report a test failure message would show."""
    options = options or DiffOptions()
    expected_lines = flatten_lines(diff_terms(expected_raw, None, options))
    actual_lines = flatten_lines(diff_terms(None, actual_raw, options))
    rendered = diff_terms(expected_raw, actual_raw, options)
    return [
        *value_block("Expected", [line[2:] for line in expected_lines], color=options.color),
        *value_block("Actual", [line[2:] for line in actual_lines], color=options.color),
        *diff_section(rendered, color=options.color, color_name=options.highlight_color),
    ]


@pytest.mark.integration
class TestStructuredTerms:
    """End-to-end diffs of realistic term renderings."""

    def test_struct_field_with_binary(self):
        """Test that a binary field is decoded and the struct compacted."""
        lines = flatten_lines(
            diff_terms("(%Sample{:required => atom() | [any()]})", "(%Sample{:required => <<116,105,116,108,101>>})")
        )
        assert lines == [
            "- (%Sample{..., :required => atom() | [any()]})",
            '+ (%Sample{..., :required => "title"})',
        ]

    def test_nested_struct_field(self):
        """Test compaction down to the innermost differing field."""
        lines = flatten_lines(
            diff_terms(
                "(%Outer{:inner => %Inner{:foo => <<116,105,116,108,101>>}})",
                "(%Outer{:inner => %Inner{:foo => atom()}})",
            )
        )
        assert lines == ['- (%Outer{..., :foo => "title"})', "+ (%Outer{..., :foo => atom()})"]

    def test_tuple_with_unchanged_struct(self):
        """Test that a struct outside the change is shrunk to its name."""
        lines = flatten_lines(
            diff_terms("(%Sample{:value => atom()}, <<116,105,116,108,101>>)", "(%Sample{:value => atom()}, atom())")
        )
        assert lines == ['- (%Sample{...}, "title")', "+ (%Sample{...}, atom())"]

    def test_non_printable_binary_kept(self):
        """Test that non-printable byte lists stay as literals."""
        assert flatten_lines(diff_terms("(<<0,255>>)", "(<<116,105,116,108,101>>)")) == [
            "- (<<0,255>>)",
            '+ ("title")',
        ]

    def test_chunked_raw_value(self):
        """Test that list chunks are joined before diffing."""
        assert flatten_lines(diff_terms(["(at", b"om())"], "(binary())")) == ["- (atom())", "+ (binary())"]

    def test_map_line_reflowed_in_line_diff(self):
        """Test that a deleted map line is laid out one entry per line."""
        lines = flatten_lines(diff_lines(["x", "%{:a => 1, :b => 2}"], ["x"]))
        assert lines == ["- %{", "    :a => 1,", "    :b => 2", "  }"]

    def test_colored_signature_strips_to_plain(self):
        """Test color stripping on a signature diff."""
        expected = "([integer()]) :: integer() | nil"
        actual = "(maybe_improper_list()) :: any()"
        plain = flatten_lines(diff_terms(expected, actual))
        colored = flatten_lines(diff_terms(expected, actual, color=True))
        assert colored != plain
        assert [strip_ansi(line) for line in colored] == plain


@pytest.mark.integration
class TestReport:
    """Test composing a full failure report."""

    def test_plain_report(self):
        """Test the report layout without color."""
        assert report("(atom())", "(binary())") == [
            "Expected:",
            "  (atom())",
            "Actual:",
            "  (binary())",
            "",
            "Diff (expected -, actual +):",
            "    - (atom())",
            "    + (binary())",
        ]

    def test_identical_values_have_no_diff_section(self):
        """Test that equal values only produce the value blocks."""
        lines = report("atom()", "atom()")
        assert "Diff (expected -, actual +):" not in lines
        assert lines == ["Expected:", "  atom()", "Actual:", "  atom()"]


@pytest.mark.integration
class TestConfiguredDiff:
    """Test options discovered from configuration files."""

    def test_config_enables_color(self, project_dir):
        """Test that a discovered config file switches color on."""
        (project_dir / ".termdiff.toml").write_text('color = true\ndel_color = "magenta"\n')
        options = load_options()
        rendered = diff_terms("atom()", "binary()", options)
        assert rendered[0].physical_lines[0].startswith("\x1b[35m- ")
        assert [strip_ansi(line) for line in flatten_lines(rendered)] == ["- atom()", "+ binary()"]

    def test_pyproject_pretty_printer(self, project_dir):
        """Test a pretty-printer configured in pyproject.toml."""
        (project_dir / "pyproject.toml").write_text('[tool.termdiff]\npretty-printer = "builtins:str.upper"\n')
        options = load_options()
        assert flatten_lines(diff_terms("atom()", "binary()", options)) == ["- ATOM()", "+ BINARY()"]

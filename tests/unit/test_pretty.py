"""Unit tests for pretty-printer loading and application."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from termdiff.pretty import apply_pretty_printer, identity, load_pretty_printer


def upper(text):
    return text.upper()


@pytest.mark.unit
class TestApplyPrettyPrinter:
    """Test running a pretty-printer over term text."""

    def test_none_is_identity(self):
        """Test that no printer leaves the text unchanged."""
        assert apply_pretty_printer("atom()", None) == "atom()"

    def test_printer_result_used(self):
        """Test that a working printer's output is returned."""
        assert apply_pretty_printer("atom()", upper) == "ATOM()"

    def test_exception_falls_back(self, caplog):
        """Test that a raising printer is logged and ignored."""

        def broken(text):
            raise ValueError("bad term")

        with caplog.at_level(logging.DEBUG, logger="termdiff.pretty"):
            assert apply_pretty_printer("atom()", broken) == "atom()"
        assert "bad term" in caplog.text

    def test_bytes_result_decoded(self):
        """Test that a bytes result is decoded."""
        assert apply_pretty_printer("x", lambda text: b"y") == "y"

    def test_non_string_result_falls_back(self):
        """Test that a non-string result is ignored."""
        assert apply_pretty_printer("x", lambda text: 42) == "x"


@pytest.mark.unit
class TestLoadPrettyPrinter:
    """Test resolving pretty-printers by name."""

    def test_empty_spec_is_identity(self):
        """Test that no spec selects the identity printer."""
        assert load_pretty_printer(None) is identity
        assert load_pretty_printer("") is identity

    def test_module_path(self):
        """Test loading a callable from module:attr."""
        assert load_pretty_printer("textwrap:dedent")("  x") == "x"

    def test_dotted_attribute(self):
        """Test loading a nested attribute."""
        printer = load_pretty_printer("os:path.basename")
        assert printer("a/b") == "b"

    def test_missing_module_falls_back(self, caplog):
        """Test that an unimportable module yields identity with a warning."""
        with caplog.at_level(logging.WARNING, logger="termdiff.pretty"):
            assert load_pretty_printer("no_such_module_xyz:fmt") is identity
        assert "Could not load pretty-printer" in caplog.text

    def test_not_callable_falls_back(self):
        """Test that a non-callable attribute yields identity."""
        assert load_pretty_printer("os:sep") is identity

    def test_entry_point(self):
        """Test loading a printer registered as an entry point."""
        entry_point = MagicMock()
        entry_point.name = "upper"
        entry_point.load.return_value = upper
        entry_points = MagicMock()
        entry_points.select.return_value = [entry_point]

        with patch("importlib.metadata.entry_points", return_value=entry_points):
            printer = load_pretty_printer("upper")

        assert printer is upper
        entry_points.select.assert_called_once_with(group="termdiff.pretty_printers", name="upper")

    def test_unknown_entry_point_falls_back(self):
        """Test that an unregistered name yields identity."""
        entry_points = MagicMock()
        entry_points.select.return_value = []

        with patch("importlib.metadata.entry_points", return_value=entry_points):
            assert load_pretty_printer("nothing") is identity

    def test_empty_module_path_falls_back(self, caplog):
        """Test that a path without a module name yields identity with a warning."""
        with caplog.at_level(logging.WARNING, logger="termdiff.pretty"):
            assert load_pretty_printer(":upper") is identity
        assert "Could not load pretty-printer" in caplog.text

    def test_module_raising_on_import_falls_back(self):
        """Test that any error raised while importing the module yields identity."""
        with patch("importlib.import_module", side_effect=RuntimeError("import-time failure")):
            assert load_pretty_printer("broken_module:fmt") is identity

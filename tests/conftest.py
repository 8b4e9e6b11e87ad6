"""Pytest configuration and shared fixtures for the termdiff test suite."""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest

from termdiff.ansi import strip_ansi
from termdiff.options import DiffOptions

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def plain_options() -> DiffOptions:
    """Options with coloring disabled."""
    return DiffOptions(color=False)


@pytest.fixture
def color_options() -> DiffOptions:
    """Options with coloring enabled and default colors."""
    return DiffOptions(color=True)


@pytest.fixture
def strip():
    """Strip ANSI escapes from a string or a list of strings."""

    def _strip(value):
        if isinstance(value, str):
            return strip_ansi(value)
        return [strip_ansi(line) for line in value]

    return _strip


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Temporary working directory with an empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    yield work


@pytest.fixture
def restore_termdiff_logger() -> Generator[logging.Logger, None, None]:
    """Restore the package logger after tests that reconfigure it."""
    package_logger = logging.getLogger("termdiff")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

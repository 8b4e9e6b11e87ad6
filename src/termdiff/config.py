#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/config.py
"""Configuration file discovery and loading.

Diff options can be stored in ``.termdiff.toml``, ``.termdiff.yaml``,
``.termdiff.yml``, ``.termdiff.json`` or a ``[tool.termdiff]`` table of
``pyproject.toml``. Discovery walks from the working directory up to the
filesystem root, then falls back to the home directory.

Examples
--------
    >>> options = load_options()  # doctest: +SKIP
    >>> options.color  # doctest: +SKIP
    False

"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from termdiff.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from termdiff.exceptions import ConfigError
from termdiff.options import DiffOptions

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.termdiff]`` table of a pyproject file.

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the table is not a table

    """
    data = _load_toml_config(pyproject_path)

    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(
            f"[tool] in {pyproject_path} must be a table, got {type(tool).__name__}",
            path=pyproject_path,
        )

    section = tool.get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}",
            path=pyproject_path,
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    In each directory the dedicated files are checked in ``CONFIG_FILENAMES``
    order, then ``pyproject.toml`` if it has a ``[tool.termdiff]`` table.
    An unreadable ``pyproject.toml`` is skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; defaults to the working directory

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Parent directories are searched first (see :func:`find_config_in_parents`),
    then the dedicated files in the user's home directory.

    Returns
    -------
    Path or None
        Path to the discovered file

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a file.

    The format follows the file name: ``pyproject.toml`` yields its
    ``[tool.termdiff]`` table, other ``.toml`` files are TOML, ``.yaml`` and
    ``.yml`` are YAML and ``.json`` is JSON.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file is missing, has an unsupported extension, or does not
        parse to a mapping

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", path=config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", path=config_path)

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == PYPROJECT_FILENAME:
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)

    raise ConfigError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", path=config_path)


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", path=config_path, original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", path=config_path, original_error=e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", path=config_path, original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", path=config_path, original_error=e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}",
            path=config_path,
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", path=config_path, original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", path=config_path, original_error=e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}",
            path=config_path,
        )
    return config


def options_from_config(config: Mapping[str, Any], base: Optional[DiffOptions] = None) -> DiffOptions:
    """Build :class:`DiffOptions` from a configuration mapping.

    Keys may use dashes or underscores (``highlight-color`` or
    ``highlight_color``).

    Parameters
    ----------
    config : Mapping
        Loaded configuration
    base : DiffOptions, optional
        Options to update; defaults to ``DiffOptions()``

    Returns
    -------
    DiffOptions
        Options with the configured fields applied

    Raises
    ------
    ConfigError
        If the mapping has unknown keys or invalid values

    """
    base = base or DiffOptions()
    known = set(DiffOptions.field_names())

    updates: Dict[str, Any] = {}
    for key, value in config.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(f"Unknown option {key!r}; expected one of {sorted(known)}")
        updates[name] = value

    if "color" in updates and not isinstance(updates["color"], bool):
        raise ConfigError(f"Option 'color' must be a boolean, got {updates['color']!r}")

    try:
        return base.create_updated(**updates)
    except ValueError as e:
        raise ConfigError(f"Invalid option value: {e}", original_error=e) from e


def load_options(config_path: Path | str | None = None, base: Optional[DiffOptions] = None) -> DiffOptions:
    """Load diff options from an explicit or discovered configuration file.

    Parameters
    ----------
    config_path : Path or str, optional
        Explicit configuration file; when omitted the standard locations are
        searched
    base : DiffOptions, optional
        Options to start from

    Returns
    -------
    DiffOptions
        ``base`` (or the defaults) when no file is found

    Raises
    ------
    ConfigError
        If the file cannot be loaded or holds invalid options

    """
    path = Path(config_path) if config_path is not None else discover_config_file()
    if path is None:
        logger.debug("No termdiff configuration file found")
        return base or DiffOptions()

    logger.debug(f"Loading termdiff configuration from {path}")
    try:
        return options_from_config(load_config_file(path), base)
    except ConfigError as e:
        if e.path is None:
            e.path = path
        raise

#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdterm CLI.

Configuration files hold defaults for the rendering and parsing options.
Keys are option names, either at the top level or grouped in ``terminal``
and ``markdown`` tables::

    # .mdterm.toml
    backend = "ansi"

    [markdown]
    parse_tables = true

Supported files, in discovery order: ``.mdterm.toml``, ``.mdterm.yaml``,
``.mdterm.yml``, ``.mdterm.json`` and ``pyproject.toml`` with a
``[tool.mdterm]`` table.
"""

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from mdterm.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from mdterm.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_SECTIONS = ("terminal", "markdown")


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.mdterm] section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.mdterm], or empty dict if not found

    Raises
    ------
    ConfigurationError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", str(pyproject_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading pyproject.toml {pyproject_path}: {e}", str(pyproject_path), original_error=e
        ) from e

    tool = data.get("tool", {})
    if not isinstance(tool, dict) or PYPROJECT_TOOL_SECTION not in tool:
        return {}
    config = tool[PYPROJECT_TOOL_SECTION]
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory the
    dedicated config files are checked first, then ``pyproject.toml``, which
    only counts when it has a ``[tool.mdterm]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e.message)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The working directory and its parents are searched first, then the
    user's home directory (dedicated config files only).

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start the parent search from; defaults to the cwd
    home : Path, optional
        Home directory; defaults to ``Path.home()``

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = home or Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in config file {config_path}: {e}", str(config_path), original_error=e
        ) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file {config_path}: {e}", str(config_path), original_error=e
        ) from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"JSON config file must contain an object, got {type(config).__name__}", str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {config_path}: {e}", str(config_path), original_error=e
        ) from e

    # an empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".mdterm.toml")
    >>> print(config.get("backend"))
    ansi

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    try:
        if filename == "pyproject.toml":
            return _load_pyproject_section(config_path)
        elif ext == ".toml":
            return _load_toml_config(config_path)
        elif ext in (".yaml", ".yml"):
            return _load_yaml_config(config_path)
        elif ext == ".json":
            return _load_json_config(config_path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Error reading config file {config_path}: {e}", str(config_path), original_error=e
        ) from e

    raise ConfigurationError(
        f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
    )


def flatten_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge the ``terminal`` and ``markdown`` tables into the top level.

    Top-level keys win over keys from a section.

    Examples
    --------
    >>> flatten_config({"backend": "ansi", "markdown": {"parse_tables": True}})
    {'parse_tables': True, 'backend': 'ansi'}

    """
    result: Dict[str, Any] = {}
    for section in CONFIG_SECTIONS:
        value = config.get(section)
        if isinstance(value, dict):
            result.update(value)
        elif value is not None:
            raise ConfigurationError(f"[{section}] must be a table, got {type(value).__name__}")
    for key, value in config.items():
        if key not in CONFIG_SECTIONS:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MDTERM_CONFIG)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from MDTERM_CONFIG environment variable

    Returns
    -------
    dict
        Flattened configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigurationError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        path: Optional[Path] = Path(explicit_path)
    elif env_var_path:
        path = Path(env_var_path)
    else:
        path = discover_config_file()

    if path is None:
        logger.debug("No configuration file found")
        return {}

    logger.debug("Loading configuration from %s", path)
    return flatten_config(load_config_file(path))


__all__ = [
    "discover_config_file",
    "find_config_in_parents",
    "flatten_config",
    "load_config_file",
    "load_config_with_priority",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdterm/cli/builder.py
"""Argument parser construction and option mapping for the mdterm CLI.

Option arguments are generated from the fields of the options dataclasses
(their ``help``, ``choices`` and ``cli_name`` metadata), so every option
can be set from the command line, an ``MDTERM_<DEST>`` environment variable
or a configuration file. Option arguments default to None, which lets the
caller tell "not given" apart from an explicit value when layering the
sources.

"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import MISSING, fields
from typing import Any, Dict, Optional, Type

from mdterm.constants import ENV_PREFIX
from mdterm.exceptions import ConfigurationError
from mdterm.options import MarkdownParserOptions, TerminalRendererOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FILE_ERROR = 1
EXIT_VALIDATION_ERROR = 1

OPTIONS_CLASSES: tuple[Type[Any], ...] = (TerminalRendererOptions, MarkdownParserOptions)

_TRUE_VALUES = ("true", "1", "yes", "on")
# Dests that never take environment defaults
_NO_ENV_DESTS = ("help", "version", "input")


def non_negative_int(value: str) -> int:
    """Argparse type accepting integers >= 0."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with MDTERM_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'backend', 'baud_rate')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    CLI arguments still take precedence over environment variables. For
    boolean options the variable names the option itself, so
    ``MDTERM_SETAF_FALLBACK=false`` turns the fallback off just like
    ``--no-setaf-fallback``. Invalid values are logged and ignored.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        The argument parser to modify

    """
    for action in parser._actions:
        if not action.dest or action.dest in _NO_ENV_DESTS:
            continue
        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if isinstance(action, (argparse._StoreTrueAction, argparse._StoreFalseAction)):
            action.default = env_value.lower() in _TRUE_VALUES
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning("Invalid choice for %s: %s. Choices: %s", env_name, env_value, list(action.choices))
        elif action.type is not None and callable(action.type):
            try:
                action.default = action.type(env_value)
            except (ValueError, argparse.ArgumentTypeError):
                logger.warning("Invalid value for %s: %s", env_name, env_value)
        else:
            action.default = env_value


def _add_options_arguments(parser: argparse.ArgumentParser, options_class: Type[Any], title: str) -> None:
    group = parser.add_argument_group(title)
    for field in fields(options_class):
        if field.name == "encoding":
            continue
        metadata = field.metadata
        cli_name = metadata.get("cli_name", field.name.replace("_", "-"))
        kwargs: Dict[str, Any] = {"dest": field.name, "default": None, "help": metadata.get("help")}

        if field.type in (bool, "bool"):
            # a field defaulting to True is exposed as its --no- flag
            kwargs["action"] = "store_false" if field.default is True else "store_true"
        else:
            if "choices" in metadata:
                kwargs["choices"] = metadata["choices"]
            if metadata.get("type") is int:
                kwargs["type"] = non_negative_int
                kwargs["metavar"] = "N"
            elif metadata.get("type") is str:
                kwargs["type"] = str
        group.add_argument(f"--{cli_name}", **kwargs)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    from mdterm import __version__

    parser = argparse.ArgumentParser(
        prog="mdterm",
        description="Render markdown as styled, indented text for a terminal.",
        epilog="Every option can also be set with an MDTERM_<OPTION> environment variable.",
    )
    parser.add_argument("input", nargs="?", help="Markdown file to render (default: standard input, or '-')")
    parser.add_argument("--version", action="version", version=f"mdterm {__version__}")

    _add_options_arguments(parser, TerminalRendererOptions, "terminal options")
    _add_options_arguments(parser, MarkdownParserOptions, "markdown options")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help="Configuration file (default: discovered, or $MDTERM_CONFIG)")
    config_group.add_argument(
        "--no-config", action="store_true", help="Do not load any configuration file"
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Diagnostic verbosity (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write diagnostics to this file")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    apply_env_vars_to_parser(parser)
    return parser


def _options_from_sources(
    options_class: Type[Any], parsed_args: argparse.Namespace, config: Dict[str, Any]
) -> Any:
    kwargs: Dict[str, Any] = {}
    for field in fields(options_class):
        if field.name in config:
            kwargs[field.name] = config[field.name]
        value = getattr(parsed_args, field.name, None)
        if value is not None:
            kwargs[field.name] = value
    try:
        return options_class(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {options_class.__name__}: {e}", original_error=e) from e


def map_args_to_options(
    parsed_args: argparse.Namespace, config: Optional[Dict[str, Any]] = None
) -> tuple[TerminalRendererOptions, MarkdownParserOptions]:
    """Build the options objects from parsed arguments and a config dict.

    Values given on the command line or through the environment override
    the config file, which overrides the dataclass defaults.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed CLI arguments (environment defaults already applied)
    config : dict, optional
        Flattened configuration file contents

    Returns
    -------
    tuple of (TerminalRendererOptions, MarkdownParserOptions)
        Options for the renderer and the parser

    Raises
    ------
    ConfigurationError
        If a value is invalid or a config key is not a known option

    """
    config = dict(config or {})
    known = {field.name for options_class in OPTIONS_CLASSES for field in fields(options_class)}
    unknown = sorted(set(config) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    for options_class in OPTIONS_CLASSES:
        for field in fields(options_class):
            value = config.get(field.name)
            if value is None:
                continue
            expected = bool if field.type in (bool, "bool") else None
            if expected is bool and not isinstance(value, bool):
                raise ConfigurationError(f"Configuration key {field.name!r} must be true or false, got {value!r}")
            if field.default is not MISSING and isinstance(field.default, int) and not isinstance(field.default, bool):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigurationError(f"Configuration key {field.name!r} must be an integer, got {value!r}")

    renderer_options = _options_from_sources(TerminalRendererOptions, parsed_args, config)
    parser_options = _options_from_sources(MarkdownParserOptions, parsed_args, config)
    return renderer_options, parser_options


__all__ = [
    "EXIT_FILE_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "apply_env_vars_to_parser",
    "create_parser",
    "get_env_var_value",
    "map_args_to_options",
]

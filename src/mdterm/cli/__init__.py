"""Command-line interface for mdterm.

Renders a markdown file (or standard input) as styled, indented text on
standard output.

Environment Variable Support
----------------------------
All options support environment variable defaults using the pattern
MDTERM_<OPTION_NAME>, with the option's destination name in uppercase.
CLI arguments always override environment variables, and both override
configuration files. ``NO_COLOR`` selects the ``none`` backend unless a
backend is chosen explicitly.

Examples
--------
Render a file with the terminal's own capabilities::

    $ mdterm README.md

Render standard input with plain ANSI sequences::

    $ cat notes.md | mdterm --backend ansi

Use environment variables for defaults::

    $ export MDTERM_BACKEND=ansi
    $ mdterm README.md

"""

import argparse
import logging
import os
import sys

from mdterm.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    map_args_to_options,
)
from mdterm.cli.config import load_config_with_priority
from mdterm.cli.processors import process_input
from mdterm.constants import CONFIG_ENV_VAR, NO_COLOR_ENV_VAR
from mdterm.exceptions import ConfigurationError, FileAccessError, OutputWriteError
from mdterm.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["create_parser", "main"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def main(args: list[str] | None = None) -> int:
    """Run the mdterm command and return its exit status."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    config: dict = {}
    if not parsed_args.no_config:
        try:
            config = load_config_with_priority(
                explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR)
            )
        except ConfigurationError as e:
            print(f"Error loading configuration file: {e}", file=sys.stderr)
            return EXIT_VALIDATION_ERROR

    if parsed_args.backend is None and os.environ.get(NO_COLOR_ENV_VAR):
        logger.debug("%s is set, disabling terminal styling", NO_COLOR_ENV_VAR)
        parsed_args.backend = "none"

    try:
        renderer_options, parser_options = map_args_to_options(parsed_args, config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        process_input(parsed_args.input, renderer_options, parser_options)
    except FileAccessError as e:
        print(e, file=sys.stderr)
        return EXIT_FILE_ERROR
    except OutputWriteError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for the eml2pdf email conversion tool.

The ``eml2pdf`` command converts one ``.eml`` file per run. It unwraps
forwarded messages down to the innermost one and renders that message's body
to PDF next to the source file, or, with attachment extraction enabled, writes
the most deeply nested PDF attachment instead. After a successful run it prints
``RET-OUTPUT: <path>`` and deletes or archives the source file.

Examples
--------
Convert a message::

    $ eml2pdf inbox/mail.eml
    RET-OUTPUT: inbox/mail.eml.pdf

Prefer the innermost PDF attachment and delete the source afterwards::

    $ eml2pdf inbox/mail.eml --extract-attachments --delete

Use a configuration file with daily rotated logs::

    $ eml2pdf inbox/mail.eml --config appsettings.json --log-dir logs

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import os
import sys
from pathlib import Path

from eml2pdf.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from eml2pdf.cli.config import CONFIG_ENV_VAR, AppConfig, load_app_config
from eml2pdf.cli.processors import process_message, read_input_path
from eml2pdf.exceptions import ConfigError
from eml2pdf.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "get_exit_code_for_exception"]


def _setup_logging(parsed_args, app_config: AppConfig) -> None:
    """Set up logging from command-line arguments and configuration.

    --trace takes highest precedence, then --verbose, then --log-level, then
    the configured level.
    """
    if parsed_args.trace or parsed_args.verbose:
        log_level = logging.DEBUG
    elif parsed_args.log_level:
        log_level = getattr(logging, parsed_args.log_level.upper())
    else:
        log_level = app_config.log_level

    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        log_dir=parsed_args.log_dir or app_config.log_dir,
        app_name=app_config.app_name,
    )


def main(args: list[str] | None = None) -> int:
    """Execute the eml2pdf command and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        app_config = load_app_config(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    _setup_logging(parsed_args, app_config)
    logger.debug(f"Loaded configuration: {app_config}")

    input_path = read_input_path(parsed_args.input)
    if not input_path or not Path(input_path).is_file():
        logger.error(f"Invalid file path: {input_path!r}")
        print(f'Invalid file path: "{input_path}"')
        return EXIT_ERROR

    exit_code = process_message(Path(input_path), parsed_args, app_config)
    if exit_code == EXIT_SUCCESS:
        logger.info("Conversion completed")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

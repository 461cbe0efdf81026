#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/cli/builder.py
"""Argument parser and exit codes for the eml2pdf CLI."""

import argparse

from eml2pdf.exceptions import ConfigError, DependencyError, FileError, ValidationError

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, (ValidationError, ConfigError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the eml2pdf command.

    Returns
    -------
    argparse.ArgumentParser
        Parser with every eml2pdf option

    """
    from eml2pdf import __version__

    parser = argparse.ArgumentParser(
        prog="eml2pdf",
        description=(
            "Convert an email message (.eml) to PDF. Forwarded messages are unwrapped to the innermost one, "
            "and optionally the most deeply nested PDF attachment is written out as-is."
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the .eml file. Prompted for on stdin when omitted.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Configuration file (JSON, TOML or YAML). Defaults to $EML2PDF_CONFIG or a discovered .eml2pdf.* file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        metavar="PATH",
        help="Output file path (default: input path with its extension replaced by .eml.pdf)",
    )

    conversion_group = parser.add_argument_group("conversion options")
    conversion_group.add_argument(
        "--extract-attachments",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write the most deeply nested matching attachment instead of rendering the message",
    )
    conversion_group.add_argument(
        "--attachment-suffix",
        action="append",
        dest="attachment_suffixes",
        metavar="SUFFIX",
        help="Filename suffix of attachments to extract (repeatable, default: .pdf)",
    )
    conversion_group.add_argument(
        "--max-depth",
        type=_positive_int,
        metavar="N",
        help="Deepest level of nested messages to search (default: 50)",
    )
    conversion_group.add_argument(
        "--html-only",
        action="store_true",
        help="Write the selected HTML (.eml.html) instead of rendering a PDF",
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--delete",
        action="store_const",
        const=True,
        dest="delete_after_processing",
        help="Delete the source file after a successful conversion",
    )
    source_group.add_argument(
        "--backup",
        action="store_const",
        const=False,
        dest="delete_after_processing",
        help="Rename the source file to '<UTC timestamp>_<name>.bak' after a successful conversion",
    )

    logging_group = parser.add_argument_group("logging and output")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: from configuration, else INFO)",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument(
        "--log-dir",
        type=str,
        metavar="DIR",
        help="Directory for daily rotated log files",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps, logger names and stage timing",
    )
    logging_group.add_argument(
        "--rich",
        action="store_true",
        help="Print the conversion summary with rich formatting",
    )

    return parser


__all__ = [
    "EXIT_DEPENDENCY_ERROR",
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
]

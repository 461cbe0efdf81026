#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/cli/processors.py
"""Processing of a single message for the eml2pdf CLI.

The CLI handles one message per run:

1. convert the message (deepest matching attachment, or the HTML of the
   innermost forwarded message)
2. write the attachment bytes, or render the HTML to PDF
3. print ``RET-OUTPUT: <path>`` for calling scripts
4. delete the source or rename it to a timestamped ``.bak`` file

"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from eml2pdf.api import ConversionResult, convert
from eml2pdf.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    get_exit_code_for_exception,
)
from eml2pdf.cli.config import AppConfig
from eml2pdf.cli.output import print_summary, should_use_rich_output
from eml2pdf.constants import HTML_OUTPUT_SUFFIX, MESSAGE_FILE_SUFFIX, PDF_OUTPUT_SUFFIX, RET_OUTPUT_PREFIX
from eml2pdf.exceptions import DependencyError, Eml2PdfError, RenderingError
from eml2pdf.options.eml import EmlOptions
from eml2pdf.renderers import HtmlFileRenderer, HtmlPdfRenderer
from eml2pdf.utils.decorators import debug_timer
from eml2pdf.utils.files import archive_source, derive_output_path, write_bytes_output

logger = logging.getLogger(__name__)

INPUT_PROMPT = "Enter the path to the .eml file: "


def read_input_path(raw: Optional[str], prompt: Optional[Callable[[str], str]] = None) -> str:
    """Return the input path from the command line or an interactive prompt.

    Surrounding whitespace and double quotes (as added by "Copy as path" on
    Windows) are removed.

    Examples
    --------
    >>> read_input_path(' "D:/mail/inbox.eml" ')
    'D:/mail/inbox.eml'

    """
    if raw is None:
        try:
            raw = (prompt or input)(INPUT_PROMPT)
        except EOFError:
            raw = ""
    return raw.strip().strip('"').strip()


def build_eml_options(parsed_args: argparse.Namespace, app_config: AppConfig) -> EmlOptions:
    """Combine configuration values and command line overrides."""
    overrides = {}
    if parsed_args.extract_attachments is not None:
        overrides["extract_attachments"] = parsed_args.extract_attachments
    if parsed_args.attachment_suffixes:
        overrides["attachment_suffixes"] = tuple(parsed_args.attachment_suffixes)
    if parsed_args.max_depth is not None:
        overrides["max_nesting_depth"] = parsed_args.max_depth
    return app_config.to_eml_options(**overrides)


def resolve_output_path(source: Path, result: ConversionResult, parsed_args: argparse.Namespace) -> Path:
    """Choose where the converted output goes.

    Extracted attachments keep their own extension (``mail.eml.pdf`` for a
    PDF); rendered messages become ``.eml.pdf``, or ``.eml.html`` with
    ``--html-only``.
    """
    if parsed_args.output:
        return Path(parsed_args.output)
    if result.is_attachment:
        attachment_suffix = Path(result.filename or "").suffix.lower() or ".bin"
        return derive_output_path(source, f"{MESSAGE_FILE_SUFFIX}{attachment_suffix}")
    if parsed_args.html_only:
        return derive_output_path(source, HTML_OUTPUT_SUFFIX)
    return derive_output_path(source, PDF_OUTPUT_SUFFIX)


def _write_output(result: ConversionResult, output_path: Path, parsed_args: argparse.Namespace, app_config: AppConfig):
    if result.is_attachment:
        assert isinstance(result.payload, bytes)
        write_bytes_output(result.payload, output_path)
        logger.info(f"Wrote attachment {result.filename!r} to {output_path}")
        return

    assert isinstance(result.payload, str)
    renderer = HtmlFileRenderer() if parsed_args.html_only else HtmlPdfRenderer(app_config.pdf)
    with debug_timer(logger, f"Writing {output_path.name}"):
        renderer.render(result.payload, output_path)
    logger.info(f"Saved output to {output_path}")


def process_message(source: Path, parsed_args: argparse.Namespace, app_config: AppConfig) -> int:
    """Convert one message file and archive it.

    Parameters
    ----------
    source : Path
        Existing message file
    parsed_args : argparse.Namespace
        Parsed command line arguments
    app_config : AppConfig
        Loaded configuration

    Returns
    -------
    int
        Process exit code

    """
    try:
        options = build_eml_options(parsed_args, app_config)
    except ValueError as e:
        print(f"Error: Invalid options: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    logger.info(f"Processing {source}")
    try:
        result = convert(source, options)
    except Eml2PdfError as e:
        logger.error(f"Failed to convert {source}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    output_path = resolve_output_path(source, result, parsed_args)
    if output_path.exists():
        logger.warning(f"Output file already exists: {output_path}")
        print(f"File {output_path} already exists.")
        return EXIT_SUCCESS

    if not result.is_attachment and not str(result.payload).strip():
        logger.error(f"No HTML content found in {source}")
        print("Failed to parse .eml file.")
        return EXIT_ERROR

    try:
        _write_output(result, output_path, parsed_args, app_config)
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except RenderingError as e:
        message = f"Error: {e}" if result.is_attachment else f"Error while saving HTML to PDF: {e}"
        logger.error(message)
        print(message, file=sys.stderr)
        return EXIT_ERROR
    except Eml2PdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    print(f"{RET_OUTPUT_PREFIX}{output_path}")

    delete = app_config.delete_after_processing
    if parsed_args.delete_after_processing is not None:
        delete = parsed_args.delete_after_processing

    try:
        archived = archive_source(source, delete=delete)
    except Eml2PdfError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    print_summary(source, output_path, result, archived, delete, use_rich=should_use_rich_output(parsed_args))
    return EXIT_SUCCESS

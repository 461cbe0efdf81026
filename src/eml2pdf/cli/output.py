"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/eml2pdf/cli/output.py
import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from eml2pdf.api import ConversionResult
from eml2pdf.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[TextIO] = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True if the --rich flag is set, Rich is installed and the stream is a TTY

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                converter_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the optional 'rich' dependency. Install with: pip install eml2pdf[rich]",
            )
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except (OSError, ValueError):
            return False

    return False


def print_summary(
    source: Path,
    output: Path,
    result: ConversionResult,
    archived: Optional[Path],
    deleted: bool,
    use_rich: bool = False,
) -> None:
    """Print a one-conversion summary to stdout."""
    if result.is_attachment:
        produced = f"attachment {result.filename!r} (depth {result.depth})"
    elif result.depth:
        produced = f"nested message (depth {result.depth})"
    else:
        produced = "message body"

    if deleted:
        source_status = "deleted"
    elif archived is not None:
        source_status = f"renamed to {archived.name}"
    else:
        source_status = "kept"

    if use_rich:
        from rich.console import Console
        from rich.table import Table

        table = Table(title="Conversion Summary", show_header=False)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")
        table.add_row("Source", str(source))
        table.add_row("Output", str(output))
        table.add_row("Content", produced)
        table.add_row("Source file", source_status)
        Console().print(table)
    else:
        print(f"Conversion completed: {produced} written to {output} (source {source_status})")

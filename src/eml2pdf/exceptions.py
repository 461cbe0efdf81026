#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by eml2pdf.

Only structural and environmental problems raise. A message that cannot be
fully decoded still converts: unknown charsets fall back to ISO-8859-1, a
missing inline image leaves its ``cid:`` reference in place, and a message
without nested content is rendered itself.

Exception Hierarchy
-------------------
- Eml2PdfError

  - ValidationError: a caller passed an unusable argument or option
  - ConfigError: a configuration file is unreadable or holds bad values

  - FileError: the message file itself is the problem
    - FileNotFoundError: no file at the given path
    - FileAccessError: the file cannot be read, renamed or deleted
    - MalformedFileError: the bytes do not form a message, including
      ``.eml`` attachments met while unwrapping forwards

  - RenderingError: HTML could not be turned into the output document
    - OutputWriteError: the output could not be stored

  - DependencyError: an optional package (the PDF engine) is missing

"""

from __future__ import annotations

from typing import Any


class Eml2PdfError(Exception):
    """Root of every eml2pdf exception.

    Parameters
    ----------
    message : str
        Human-readable description
    original_error : Exception, optional
        Lower-level exception this error wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Eml2PdfError):
    """An argument or option value was rejected.

    ``parameter_name`` and ``parameter_value`` identify the offending input
    when known, e.g. an empty HTML string handed to a renderer.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigError(Eml2PdfError):
    """A configuration file could not be loaded.

    Parameters
    ----------
    message : str
        What is wrong with the file
    config_path : str, optional
        The file that was being read
    original_error : Exception, optional
        Parser or validation error behind this one

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(Eml2PdfError):
    """Base class for problems with a message file on disk."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """No message file exists at the given path."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or f"Message file not found: {file_path}", file_path, original_error)


class FileAccessError(FileError):
    """A message file exists but cannot be read, renamed or deleted."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or f"Cannot access message file: {file_path}", file_path, original_error)


class MalformedFileError(FileError):
    """Bytes that were expected to hold a message could not be parsed.

    Raised for the source passed to :func:`eml2pdf.parsers.eml.load_message`
    and for serialized ``.eml`` attachments opened while resolving nested
    messages. ``file_path`` names the source file or the attachment.
    """


class RenderingError(Eml2PdfError):
    """Producing the output document failed.

    Parameters
    ----------
    message : str
        Description of the failure
    rendering_stage : str, optional
        Where it failed: ``"pdf"`` for the layout engine, ``"file_write"``
        for storing the result
    original_error : Exception, optional
        Engine or I/O exception behind this one

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """The rendered PDF, HTML or extracted attachment could not be written."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Failed to write output file: {file_path}",
            rendering_stage="file_write",
            original_error=original_error,
        )
        self.file_path = file_path


def _format_requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


def _dependency_message(
    component: str,
    missing_packages: list[tuple[str, str]],
    version_mismatches: list[tuple[str, str, str]],
    install_command: str,
) -> str:
    lines = []
    if missing_packages:
        names = ", ".join(f"'{_format_requirement(name, spec)}'" for name, spec in missing_packages)
        lines.append(f"{component.upper()} requires the following packages: {names}")
    for name, required, installed in version_mismatches:
        lines.append(f"{component.upper()} needs '{name}{required}', but {installed} is installed")

    if not install_command:
        requirements = [(name, spec) for name, spec in missing_packages]
        requirements += [(name, required) for name, required, _ in version_mismatches]
        install_command = "pip install --upgrade " + " ".join(
            f'"{_format_requirement(name, spec)}"' for name, spec in requirements
        )
    lines.append(f"Install with: {install_command}")
    return "\n".join(lines)


class DependencyError(Eml2PdfError):
    """An optional package needed for the requested output is unavailable.

    Parameters
    ----------
    converter_name : str
        Component that needs the packages, e.g. ``"pdf"``
    missing_packages : list[tuple[str, str]]
        ``(package, version_spec)`` pairs that could not be imported
    version_mismatches : list[tuple[str, str, str]], optional
        ``(package, required, installed)`` triples
    install_command : str, optional
        Install hint; defaults to a ``pip install --upgrade`` line
    message : str, optional
        Replaces the generated message
    original_import_error : ImportError, optional
        First ImportError seen while checking

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        version_mismatches = version_mismatches or []
        if message is None:
            message = _dependency_message(converter_name, missing_packages, version_mismatches, install_command)
        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
        self.original_import_error = original_import_error


__all__ = [
    "Eml2PdfError",
    "ValidationError",
    "ConfigError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "MalformedFileError",
    "RenderingError",
    "OutputWriteError",
    "DependencyError",
]

"""eml2pdf - Convert email messages to PDF.

eml2pdf turns an RFC 822 message (``.eml``) into a printable document. Mail
that arrives as a chain of forwards is unwrapped first: the most deeply
nested attached message is the one rendered. Alternatively, the most deeply
nested attachment of a given kind (PDF by default) can be extracted as-is.

Key Features
------------
- Depth-first search for the innermost forwarded message or attachment,
  including ``.eml`` files attached as plain binary parts
- HTML body selection with ``cid:`` inline images embedded as data URIs or
  saved next to the output
- Plain-text fallback for messages without an HTML body
- Charset decoding that never fails on unknown or broken declarations
- HTML-to-PDF rendering with WeasyPrint (optional dependency)

Requirements
------------
- Python 3.10+
- WeasyPrint for PDF output (``pip install eml2pdf[pdf]``)

Examples
--------
Render a message to HTML:

    >>> from eml2pdf import to_html
    >>> html = to_html("mail.eml")

Extract the innermost PDF attachment, falling back to the message body:

    >>> from eml2pdf import convert
    >>> result = convert("mail.eml", extract_attachments=True)
    >>> result.kind
    'attachment'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "eml2pdf requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from eml2pdf.api import (  # noqa: E402
    ConversionResult,
    ConversionState,
    convert,
    extract_deepest_attachment,
    render_message_html,
    to_html,
)
from eml2pdf.exceptions import (  # noqa: E402
    ConfigError,
    DependencyError,
    Eml2PdfError,
    FileError,
    MalformedFileError,
    RenderingError,
    ValidationError,
)
from eml2pdf.options import EmlOptions, PdfRendererOptions  # noqa: E402
from eml2pdf.parsers.eml import load_message, select_html_body  # noqa: E402
from eml2pdf.resolver import (  # noqa: E402
    ResolvedArtifact,
    find_deepest_attachment,
    find_deepest_message,
)

__all__ = [
    "ConfigError",
    "ConversionResult",
    "ConversionState",
    "DependencyError",
    "Eml2PdfError",
    "EmlOptions",
    "FileError",
    "MalformedFileError",
    "PdfRendererOptions",
    "RenderingError",
    "ResolvedArtifact",
    "ValidationError",
    "__version__",
    "convert",
    "extract_deepest_attachment",
    "find_deepest_attachment",
    "find_deepest_message",
    "load_message",
    "render_message_html",
    "select_html_body",
    "to_html",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/renderers/pdf.py
"""HTML to PDF rendering.

This module provides the HtmlPdfRenderer class, which lays message HTML out
into a paged PDF document using WeasyPrint. WeasyPrint is an optional
dependency; it is imported only when rendering.

"""

from __future__ import annotations

import logging

from eml2pdf.constants import DEPS_PDF_RENDER
from eml2pdf.exceptions import RenderingError
from eml2pdf.options.pdf import PdfRendererOptions
from eml2pdf.renderers.base import BaseRenderer, RenderOutput
from eml2pdf.utils.decorators import debug_timer, requires_dependencies
from eml2pdf.utils.files import write_bytes_output

logger = logging.getLogger(__name__)


class HtmlPdfRenderer(BaseRenderer):
    """Render message HTML to PDF.

    Parameters
    ----------
    options : PdfRendererOptions or None, default = None
        Page geometry and stylesheet options

    Examples
    --------
        >>> from eml2pdf.options.pdf import PdfRendererOptions
        >>> from eml2pdf.renderers.pdf import HtmlPdfRenderer
        >>> renderer = HtmlPdfRenderer(PdfRendererOptions(margin="1cm"))
        >>> renderer.render("<p>Hello</p>", "output.pdf")

    """

    def __init__(self, options: PdfRendererOptions | None = None):
        """Initialize the PDF renderer with options."""
        options = options or PdfRendererOptions()
        if not isinstance(options, PdfRendererOptions):
            raise TypeError(f"Expected PdfRendererOptions, got {type(options).__name__}")
        super().__init__(options)
        self.options: PdfRendererOptions = options

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render(self, html: str, output: RenderOutput) -> None:
        """Render HTML to a PDF file.

        Parameters
        ----------
        html : str
            HTML document or fragment
        output : str, Path, or IO[bytes]
            Output destination (file path or binary file-like object)

        Raises
        ------
        ValidationError
            If ``html`` or ``output`` is empty
        RenderingError
            If PDF generation fails
        OutputWriteError
            If the PDF cannot be written to ``output``
        DependencyError
            If WeasyPrint is not installed

        """
        from weasyprint import CSS, HTML

        self._validate_input(html, output)

        try:
            with debug_timer(logger, "Rendering PDF"):
                stylesheets = [CSS(string=self.options.page_css())]
                stylesheets.extend(CSS(string=sheet) for sheet in self.options.stylesheets)
                pdf_bytes = HTML(string=html, base_url=self.options.base_url).write_pdf(
                    stylesheets=stylesheets,
                    presentational_hints=self.options.presentational_hints,
                )
        except Exception as e:
            raise RenderingError(f"Failed to render PDF: {e!r}", rendering_stage="pdf", original_error=e) from e

        write_bytes_output(pdf_bytes, output)

        logger.debug(f"Rendered {len(pdf_bytes)} bytes of PDF")

    @requires_dependencies("pdf", DEPS_PDF_RENDER)
    def render_to_bytes(self, html: str) -> bytes:
        """Render HTML to PDF bytes.

        Raises
        ------
        RenderingError
            If PDF generation fails

        """
        return super().render_to_bytes(html)


__all__ = ["HtmlPdfRenderer"]

#  Copyright (c) 2025 Tom Villani, Ph.D.

# eml2pdf/options/pdf.py
"""Configuration options for HTML-to-PDF rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from eml2pdf.constants import DEFAULT_PDF_MARGIN, DEFAULT_PDF_PAGE_HEIGHT, DEFAULT_PDF_PAGE_WIDTH
from eml2pdf.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class PdfRendererOptions(CloneFrozenMixin):
    """Configuration options for rendering message HTML to PDF.

    Parameters
    ----------
    page_width : str, default "8.5in"
        CSS length used as the page width.
    page_height : str, default "11in"
        CSS length used as the page height.
    margin : str, default "0"
        CSS margin shorthand applied to every page.
    base_url : str or None, default None
        Base URL for resolving relative references in the HTML, such as
        images written by the "save" inline image mode.
    stylesheets : tuple[str, ...], default ()
        Additional CSS sources applied after the page geometry.
    presentational_hints : bool, default True
        Honour legacy HTML attributes (``bgcolor``, ``width``, ``align``)
        that email clients still rely on.

    """

    page_width: str = field(default=DEFAULT_PDF_PAGE_WIDTH, metadata={"help": "Page width as a CSS length"})
    page_height: str = field(default=DEFAULT_PDF_PAGE_HEIGHT, metadata={"help": "Page height as a CSS length"})
    margin: str = field(default=DEFAULT_PDF_MARGIN, metadata={"help": "Page margin as CSS shorthand"})
    base_url: str | None = field(default=None, metadata={"help": "Base URL for relative references"})
    stylesheets: tuple[str, ...] = field(default=(), metadata={"help": "Extra CSS applied to the document"})
    presentational_hints: bool = field(default=True, metadata={"help": "Honour legacy HTML styling attributes"})

    def __post_init__(self) -> None:
        """Validate page geometry values.

        Raises
        ------
        ValueError
            If a page dimension is empty.

        """
        if not self.page_width.strip() or not self.page_height.strip():
            raise ValueError("page_width and page_height must be non-empty CSS lengths")
        object.__setattr__(self, "stylesheets", tuple(self.stylesheets))

    def page_css(self) -> str:
        """Return the ``@page`` rule implementing the configured geometry."""
        return f"@page {{ size: {self.page_width} {self.page_height}; margin: {self.margin}; }}"

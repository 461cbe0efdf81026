#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for eml2pdf.

Options are frozen dataclasses: build a new instance with
``create_updated`` instead of mutating an existing one.
"""

from eml2pdf.options.base import CloneFrozenMixin
from eml2pdf.options.eml import EmlOptions
from eml2pdf.options.pdf import PdfRendererOptions

__all__ = ["CloneFrozenMixin", "EmlOptions", "PdfRendererOptions"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/renderers/__init__.py
"""Renderers turning message HTML into output files."""

from eml2pdf.renderers.base import BaseRenderer
from eml2pdf.renderers.html import HtmlFileRenderer
from eml2pdf.renderers.pdf import HtmlPdfRenderer

__all__ = ["BaseRenderer", "HtmlFileRenderer", "HtmlPdfRenderer"]

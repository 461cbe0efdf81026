#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/renderers/html.py
"""Write message HTML unchanged, for ``--html-only`` output."""

from __future__ import annotations

import logging

from eml2pdf.renderers.base import BaseRenderer, RenderOutput
from eml2pdf.utils.files import write_bytes_output

logger = logging.getLogger(__name__)


class HtmlFileRenderer(BaseRenderer):
    """Write HTML as UTF-8 to a file or binary stream."""

    def render(self, html: str, output: RenderOutput) -> None:
        self._validate_input(html, output)
        data = html.encode("utf-8")
        write_bytes_output(data, output)
        logger.debug(f"Wrote {len(data)} bytes of HTML")


__all__ = ["HtmlFileRenderer"]

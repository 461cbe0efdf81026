#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/renderers/base.py
"""Base class for message HTML renderers.

Renderers take the HTML produced by :func:`eml2pdf.api.convert` and write it
somewhere in a final format: a PDF document, or the HTML file itself.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Union

from eml2pdf.exceptions import ValidationError

RenderOutput = Union[str, Path, IO[bytes]]


class BaseRenderer(ABC):
    """Abstract base class for HTML renderers.

    Parameters
    ----------
    options : Any, optional
        Renderer-specific options

    """

    def __init__(self, options: Any = None):
        self.options = options

    @abstractmethod
    def render(self, html: str, output: RenderOutput) -> None:
        """Render ``html`` to a file path or binary stream.

        Raises
        ------
        ValidationError
            If the HTML or the output destination is empty
        RenderingError
            If rendering fails

        """

    def render_to_bytes(self, html: str) -> bytes:
        """Render ``html`` and return the produced bytes."""
        buffer = BytesIO()
        self.render(html, buffer)
        return buffer.getvalue()

    @staticmethod
    def _validate_input(html: str, output: RenderOutput | None) -> None:
        if not html or not html.strip():
            raise ValidationError("No HTML content to render", parameter_name="html", parameter_value=html)
        if output is None or (isinstance(output, (str, Path)) and not str(output).strip()):
            raise ValidationError("Output destination must not be empty", parameter_name="output", parameter_value=output)

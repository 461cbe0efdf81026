#  Copyright (c) 2025 Tom Villani, Ph.D.

# eml2pdf/options/eml.py
"""Configuration options for email message conversion.

This module defines the options that steer nested-message resolution,
attachment extraction and inline image handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eml2pdf.constants import (
    DEFAULT_ATTACHMENT_SUFFIXES,
    DEFAULT_INLINE_IMAGE_MODE,
    DEFAULT_INLINE_IMAGE_OUTPUT_DIR,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_TREAT_INLINE_MESSAGES_AS_ATTACHMENTS,
    InlineImageMode,
)
from eml2pdf.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class EmlOptions(CloneFrozenMixin):
    """Configuration options for EML-to-HTML conversion.

    Parameters
    ----------
    extract_attachments : bool, default False
        Look for the deepest attachment matching ``attachment_suffixes`` first
        and return its bytes instead of rendering the message body. Messages
        without a matching attachment fall through to HTML conversion.
    attachment_suffixes : tuple[str, ...], default (".pdf",)
        Filename suffixes (case-insensitive) that identify the attachment kind
        to extract.
    max_nesting_depth : int or None, default 50
        Deepest level of embedded messages that is searched. Levels beyond it
        are treated as containing no match. None removes the limit.
    inline_image_mode : {"base64", "save"}, default "base64"
        How ``cid:`` image references are rewritten:
        - "base64": embed the image as a ``data:`` URI
        - "save": write the image to ``inline_image_output_dir`` and reference it
    inline_image_output_dir : str or None, default "attachments"
        Directory receiving images in "save" mode.
    inline_image_base_url : str or None, default None
        Base URL prepended to saved image names in "save" mode.
    treat_inline_messages_as_attachments : bool, default True
        Whether ``message/rfc822`` parts without an ``attachment``
        disposition (common for forwarded mail) are considered attachments.

    Examples
    --------
    Extract the deepest nested PDF, falling back to the message body:
        >>> options = EmlOptions(extract_attachments=True)

    Write inline images next to the HTML instead of embedding them:
        >>> options = EmlOptions(inline_image_mode="save", inline_image_output_dir="out/images")

    """

    extract_attachments: bool = field(
        default=False,
        metadata={"help": "Extract the deepest matching attachment instead of rendering the body"},
    )
    attachment_suffixes: tuple[str, ...] = field(
        default=DEFAULT_ATTACHMENT_SUFFIXES,
        metadata={"help": "Filename suffixes identifying the attachment kind to extract"},
    )
    max_nesting_depth: int | None = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Deepest level of embedded messages to search (None for unlimited)"},
    )
    inline_image_mode: InlineImageMode = field(
        default=DEFAULT_INLINE_IMAGE_MODE,
        metadata={"help": "How to rewrite cid: image references", "choices": ["base64", "save"]},
    )
    inline_image_output_dir: str | None = field(
        default=DEFAULT_INLINE_IMAGE_OUTPUT_DIR,
        metadata={"help": "Directory for inline images in save mode"},
    )
    inline_image_base_url: str | None = field(
        default=None,
        metadata={"help": "Base URL for saved inline images"},
    )
    treat_inline_messages_as_attachments: bool = field(
        default=DEFAULT_TREAT_INLINE_MESSAGES_AS_ATTACHMENTS,
        metadata={"help": "Consider inline message/rfc822 parts as attached messages"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_nesting_depth is not None and self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.inline_image_mode not in ("base64", "save"):
            raise ValueError(f"inline_image_mode must be 'base64' or 'save', got {self.inline_image_mode!r}")
        if isinstance(self.attachment_suffixes, str):
            object.__setattr__(self, "attachment_suffixes", (self.attachment_suffixes,))
        else:
            object.__setattr__(self, "attachment_suffixes", tuple(self.attachment_suffixes))
        if not self.attachment_suffixes:
            raise ValueError("attachment_suffixes must contain at least one suffix")

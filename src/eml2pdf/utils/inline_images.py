#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/inline_images.py
"""Rewrite ``cid:`` image references in message HTML.

HTML bodies reference their inline images through ``cid:<content-id>`` URIs
that only make sense inside the original message. Once the HTML leaves the
message, every such reference must point at something a renderer can load:

- "base64" mode embeds the image bytes as a ``data:`` URI, keeping the HTML
  self-contained.
- "save" mode writes each image into a directory and substitutes its
  relative name (optionally joined onto a base URL).

Substitution is a plain string replacement of every ``cid:<id>`` occurrence,
one identifier at a time in part order. When two parts share a content
identifier, the later part supplies the substitute.
"""

from __future__ import annotations

import base64
import logging
import os
from pathlib import Path
from typing import Iterable
from urllib.parse import quote as url_quote
from urllib.parse import urljoin

from eml2pdf.constants import DEFAULT_INLINE_IMAGE_OUTPUT_DIR, InlineImageMode
from eml2pdf.exceptions import ValidationError
from eml2pdf.parsers.parts import MessageLike, get_content_id, get_filename, get_part_bytes
from eml2pdf.utils.attachments import ensure_unique_attachment_path, inline_image_filename

logger = logging.getLogger(__name__)


def build_data_uri(data: bytes, mime_type: str) -> str:
    """Return ``data:<mime_type>;base64,<data>``.

    Examples
    --------
    >>> build_data_uri(b"abc", "image/png")
    'data:image/png;base64,YWJj'

    """
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def save_inline_image(
    data: bytes,
    filename: str,
    output_dir: str | Path,
    base_url: str | None = None,
) -> str:
    """Write image bytes to ``output_dir`` and return the reference to substitute.

    Parameters
    ----------
    data : bytes
        Decoded image content
    filename : str
        Sanitized file name to use (made unique on collision)
    output_dir : str or Path
        Destination directory, created if missing
    base_url : str, optional
        When given, the returned reference is the URL-quoted file name joined
        onto this base; otherwise it is the POSIX path of the written file.

    Returns
    -------
    str
        Reference to the written file

    Raises
    ------
    OSError
        If the directory or file cannot be written

    """
    os.makedirs(output_dir, exist_ok=True)
    unique_path = ensure_unique_attachment_path(Path(output_dir) / filename)
    try:
        unique_path.write_bytes(data)
    except OSError:
        unique_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote inline image to: {unique_path}")

    if base_url:
        return urljoin(base_url.rstrip("/") + "/", url_quote(unique_path.name, safe=""))
    return unique_path.as_posix()


def embed_inline_images(
    html: str,
    body_parts: Iterable[MessageLike],
    mode: InlineImageMode = "base64",
    output_dir: str | Path | None = None,
    base_url: str | None = None,
) -> str:
    """Replace ``cid:`` references in ``html`` with resolvable URIs.

    Parameters
    ----------
    html : str
        Decoded HTML body
    body_parts : iterable of Message
        Flat list of the message's body parts; only ``image/*`` parts with a
        non-empty Content-ID are used
    mode : {"base64", "save"}, default "base64"
        Substitution strategy, see the module docstring
    output_dir : str or Path, optional
        Directory for "save" mode (default ``"attachments"``)
    base_url : str, optional
        Base URL for "save" mode references

    Returns
    -------
    str
        HTML with every resolvable ``cid:`` reference rewritten. Parts that are
        not images or lack a Content-ID are ignored. A failed write in "save"
        mode embeds that image as a data URI instead.

    Raises
    ------
    ValidationError
        If ``mode`` is not a supported mode

    Examples
    --------
    >>> html = '<img src="cid:logo1">'
    >>> embed_inline_images(html, [image_part])  # doctest: +SKIP
    '<img src="data:image/png;base64,...">'

    """
    if mode not in ("base64", "save"):
        raise ValidationError(
            f"Unsupported inline image mode: {mode!r}", parameter_name="mode", parameter_value=mode
        )

    substitutions: dict[str, str] = {}
    for part in body_parts:
        if part.get_content_maintype() != "image":
            continue

        content_id = get_content_id(part)
        if not content_id:
            logger.debug("Skipping image with empty Content-ID")
            continue

        data = get_part_bytes(part)
        mime_type = part.get_content_type()

        if mode == "save":
            filename = inline_image_filename(get_filename(part), content_id, mime_type)
            try:
                reference = save_inline_image(
                    data, filename, output_dir or DEFAULT_INLINE_IMAGE_OUTPUT_DIR, base_url=base_url
                )
            except (OSError, RuntimeError) as e:
                logger.warning(f"Failed to save inline image {filename}: {e}. Embedding as data URI instead.")
                reference = build_data_uri(data, mime_type)
        else:
            reference = build_data_uri(data, mime_type)

        if content_id in substitutions:
            logger.debug(f"Duplicate Content-ID {content_id}, later part replaces earlier one")
        substitutions[content_id] = reference

    for content_id, reference in substitutions.items():
        html = html.replace(f"cid:{content_id}", reference)
        logger.debug(f"Replaced inline image with CID: {content_id}")

    return html


__all__ = ["build_data_uri", "embed_inline_images", "save_inline_image"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/parsers/eml.py
"""Email (EML) loading and HTML body selection.

This module turns message bytes into a message tree and picks the part of
that tree that should be rendered: the first HTML body part, with its inline
images made resolvable, or the plain-text body wrapped in ``<pre>``.

"""

from __future__ import annotations

import logging
from email import message_from_binary_file, message_from_bytes, policy
from email.message import EmailMessage
from pathlib import Path
from typing import IO, Union

from eml2pdf.constants import DEFAULT_CHARSET
from eml2pdf.exceptions import FileNotFoundError, MalformedFileError, ValidationError
from eml2pdf.options.eml import EmlOptions
from eml2pdf.parsers.parts import (
    MessageLike,
    get_embedded_message,
    get_filename,
    get_part_bytes,
    is_message_file,
    iter_body_parts,
)
from eml2pdf.utils.encoding import decode_bytes, decode_text
from eml2pdf.utils.inline_images import embed_inline_images

logger = logging.getLogger(__name__)

MessageSource = Union[str, Path, bytes, IO[bytes]]


def load_message(input_data: MessageSource) -> EmailMessage:
    """Load a message tree from a file path, raw bytes or a binary stream.

    Parameters
    ----------
    input_data : str, Path, bytes, or IO[bytes]
        The message to load. Strings are treated as file paths.

    Returns
    -------
    EmailMessage
        Root of the parsed message tree

    Raises
    ------
    ValidationError
        If the input type is not supported
    FileNotFoundError
        If a file path does not exist
    MalformedFileError
        If the message cannot be parsed

    """
    file_path = str(input_data) if isinstance(input_data, (str, Path)) else None

    if file_path is not None and not Path(file_path).is_file():
        raise FileNotFoundError(file_path)

    try:
        if file_path is not None:
            with open(file_path, "rb") as f:
                message = message_from_binary_file(f, policy=policy.default)
        elif isinstance(input_data, (bytes, bytearray)):
            message = message_from_bytes(bytes(input_data), policy=policy.default)
        elif hasattr(input_data, "read"):
            if hasattr(input_data, "seek"):
                input_data.seek(0)
            content = input_data.read()
            if not isinstance(content, bytes):
                raise ValidationError(
                    "Message streams must be opened in binary mode",
                    parameter_name="input_data",
                    parameter_value=type(content).__name__,
                )
            message = message_from_bytes(content, policy=policy.default)
        else:
            raise ValidationError(
                f"Unsupported input type: {type(input_data).__name__}. Expected str, Path, bytes or binary file object",
                parameter_name="input_data",
                parameter_value=input_data,
            )
    except ValidationError:
        raise
    except Exception as e:
        raise MalformedFileError(
            f"Failed to parse email data: {e!r}",
            file_path=file_path,
            original_error=e,
        ) from e

    logger.debug(f"Loaded message with content type {message.get_content_type()}")
    return message


def open_embedded_message(part: MessageLike) -> MessageLike | None:
    """Return the nested message carried by a part, parsing it if needed.

    Native ``message/*`` parts already hold a parsed message. Binary
    attachments named ``*.eml`` are decoded and parsed on demand.

    Returns
    -------
    Message or None
        The nested message, or None when the part does not embed one

    Raises
    ------
    MalformedFileError
        If a serialized message attachment cannot be parsed

    """
    nested = get_embedded_message(part)
    if nested is not None:
        return nested

    if is_message_file(part):
        logger.debug(f"Parsing attached message file {get_filename(part)!r}")
        try:
            return load_message(get_part_bytes(part))
        except MalformedFileError as e:
            raise MalformedFileError(
                f"Failed to parse attached message {get_filename(part)!r}: {e.message}",
                file_path=get_filename(part),
                original_error=e.original_error,
            ) from e

    return None


def decode_part_text(part: MessageLike) -> str:
    """Decode a text part with its declared charset (UTF-8 when undeclared)."""
    charset = part.get_content_charset()
    logger.debug(f"Decoding text part with charset: {charset}")
    return decode_bytes(get_part_bytes(part), charset)


def find_html_part(body_parts: list[MessageLike]) -> MessageLike | None:
    """Return the first ``text/html`` part among ``body_parts``."""
    for part in body_parts:
        if part.get_content_maintype() == "text" and part.get_content_subtype().lower() == "html":
            return part
    return None


def get_text_body(message: MessageLike) -> str:
    """Return the decoded plain-text body of a message, or an empty string."""
    for part in iter_body_parts(message):
        if part.get_content_type() == "text/plain":
            return decode_part_text(part)
    return ""


def select_html_body(message: MessageLike, options: EmlOptions | None = None) -> str:
    """Return the HTML to render for a message.

    The first HTML body part is decoded and its ``cid:`` image references are
    rewritten using the same body parts. Without an HTML part, the plain-text
    body is wrapped in ``<pre>`` verbatim; it is not HTML-escaped.

    Parameters
    ----------
    message : Message
        Message whose body should be rendered
    options : EmlOptions, optional
        Inline image handling options

    Returns
    -------
    str
        HTML text; ``"<pre></pre>"`` when the message has no text body at all

    """
    options = options or EmlOptions()
    body_parts = list(iter_body_parts(message))

    html_part = find_html_part(body_parts)
    if html_part is not None:
        logger.debug("Found HTML part in message")
        html = decode_part_text(html_part)
        return embed_inline_images(
            html,
            body_parts,
            mode=options.inline_image_mode,
            output_dir=options.inline_image_output_dir,
            base_url=options.inline_image_base_url,
        )

    logger.debug("No HTML part found in message, returning text body wrapped in <pre>")
    return f"<pre>{decode_text(get_text_body(message), DEFAULT_CHARSET)}</pre>"


__all__ = [
    "MessageSource",
    "decode_part_text",
    "find_html_part",
    "get_text_body",
    "load_message",
    "open_embedded_message",
    "select_html_body",
]

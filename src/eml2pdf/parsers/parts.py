#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/parsers/parts.py
"""Read-only accessors over a parsed message tree.

Messages are loaded with the standard library :mod:`email` package, so every
node of the tree is a :class:`email.message.Message`. These helpers answer the
questions the conversion pipeline asks of a node (content type, raw bytes,
filename, content identifier, disposition) and enumerate the two flat views
of a message it works with:

- attachments: nodes with an ``attachment`` disposition, plus embedded
  ``message/*`` parts
- body parts: every other leaf

Both views walk ``multipart/*`` containers depth-first in child order and
never descend into an embedded message; embedded messages are opened
separately, and only when a caller asks for them.
"""

from __future__ import annotations

from email.message import EmailMessage, Message
from typing import Iterator, Union

from eml2pdf.constants import MESSAGE_FILE_SUFFIX

MessageLike = Union[EmailMessage, Message]

# message/* subtypes whose payload is a list of header blocks, not a message
_NON_MESSAGE_SUBTYPES = frozenset({"delivery-status", "disposition-notification"})


def is_container(part: MessageLike) -> bool:
    """Return True for ``multipart/*`` nodes that hold child parts."""
    return part.get_content_maintype() == "multipart" and isinstance(part.get_payload(), list)


def is_attachment(part: MessageLike) -> bool:
    """Return True when the part is dispositioned as an attachment."""
    return part.get_content_disposition() == "attachment"


def is_native_message(part: MessageLike) -> bool:
    """Return True for ``message/*`` parts carrying a parsed nested message."""
    if part.get_content_maintype() != "message" or part.get_content_subtype() in _NON_MESSAGE_SUBTYPES:
        return False
    payload = part.get_payload()
    return isinstance(payload, list) and len(payload) > 0 and isinstance(payload[0], Message)


def has_suffix(part: MessageLike, suffixes: tuple[str, ...] | str) -> bool:
    """Return True when the part's filename ends with one of ``suffixes``.

    The comparison is case-insensitive; parts without a filename never match.
    """
    filename = get_filename(part)
    if not filename:
        return False
    if isinstance(suffixes, str):
        suffixes = (suffixes,)
    lowered = filename.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in suffixes)


def is_message_file(part: MessageLike) -> bool:
    """Return True for binary leaves holding a serialized message (``*.eml``)."""
    return not is_container(part) and not is_native_message(part) and has_suffix(part, MESSAGE_FILE_SUFFIX)


def get_filename(part: MessageLike) -> str | None:
    """Return the decoded filename of a part, or None."""
    filename = part.get_filename()
    if not filename:
        return None
    return str(filename).strip() or None


def get_content_id(part: MessageLike) -> str:
    """Return the part's Content-ID without angle brackets, or an empty string."""
    value = part.get("Content-ID")
    if value is None:
        return ""
    return str(value).strip().strip("<>").strip()


def get_part_bytes(part: MessageLike) -> bytes:
    """Return the transfer-decoded content of a leaf part.

    Containers and embedded messages have no content of their own and yield
    empty bytes.
    """
    if part.is_multipart():
        return b""
    payload = part.get_payload(decode=True)
    if isinstance(payload, bytes):
        return payload
    return b""


def get_embedded_message(part: MessageLike) -> MessageLike | None:
    """Return the message carried by a native ``message/*`` part, or None."""
    if not is_native_message(part):
        return None
    return part.get_payload()[0]


def iter_leaves(message: MessageLike) -> Iterator[MessageLike]:
    """Yield every non-container node of a message, depth-first in child order.

    Embedded ``message/*`` parts are yielded as leaves; their contents are not
    visited.
    """
    if is_container(message):
        for child in message.get_payload():
            yield from iter_leaves(child)
    else:
        yield message


def iter_attachments(message: MessageLike, include_inline_messages: bool = True) -> Iterator[MessageLike]:
    """Yield the attachment parts of a message in document order.

    Parameters
    ----------
    message : Message
        Root of the tree to enumerate
    include_inline_messages : bool, default True
        Also yield embedded ``message/*`` parts that are not dispositioned
        as attachments (forwarded messages are often marked inline).

    """
    for part in iter_leaves(message):
        if is_attachment(part) or (include_inline_messages and is_native_message(part)):
            yield part


def iter_body_parts(message: MessageLike) -> Iterator[MessageLike]:
    """Yield the body parts of a message: leaves that are neither attachments nor embedded messages."""
    for part in iter_leaves(message):
        if not is_attachment(part) and not is_native_message(part):
            yield part


__all__ = [
    "MessageLike",
    "get_content_id",
    "get_embedded_message",
    "get_filename",
    "get_part_bytes",
    "has_suffix",
    "is_attachment",
    "is_container",
    "is_message_file",
    "is_native_message",
    "iter_attachments",
    "iter_body_parts",
    "iter_leaves",
]

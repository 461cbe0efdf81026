#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/resolver.py
"""Locate the most deeply nested artifact inside a message.

Forwarded mail tends to arrive wrapped: a message carries the message that
was forwarded as an attachment, which may in turn carry another one. The
resolver walks a message's attachments depth-first and returns the deepest
occurrence of a target, together with its nesting depth:

- depth 0: nothing matched anywhere (callers then use the root message)
- depth 1: a direct attachment of the root message
- depth n + 1: a match at depth n inside an embedded message

Embedded messages are either native ``message/*`` parts or binary
attachments named ``*.eml``; the latter are parsed only when reached. A
candidate replaces the current best only when it is strictly deeper, so among
equally deep candidates the first one in attachment order wins.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from eml2pdf.constants import DEFAULT_ATTACHMENT_SUFFIXES, DEFAULT_MAX_NESTING_DEPTH
from eml2pdf.parsers.eml import open_embedded_message
from eml2pdf.parsers.parts import (
    MessageLike,
    get_filename,
    has_suffix,
    is_message_file,
    is_native_message,
    iter_attachments,
)

logger = logging.getLogger(__name__)


class ResolvedArtifact(NamedTuple):
    """Best match found by the resolver and its nesting depth."""

    match: Optional[MessageLike]
    depth: int

    @property
    def found(self) -> bool:
        """Whether anything matched."""
        return self.depth > 0 and self.match is not None


NOT_FOUND = ResolvedArtifact(None, 0)


class ArtifactTarget(ABC):
    """What the resolver is looking for."""

    name: str = "artifact"

    @abstractmethod
    def matches(self, part: MessageLike) -> bool:
        """Return True when an attachment leaf is itself a match."""

    @abstractmethod
    def from_embedded(self, nested: MessageLike, inner: ResolvedArtifact) -> ResolvedArtifact:
        """Return the candidate an embedded message contributes to its parent.

        Parameters
        ----------
        nested : Message
            The embedded message
        inner : ResolvedArtifact
            Result of resolving ``nested`` itself

        """


class MessageTarget(ArtifactTarget):
    """Target nested messages.

    An embedded message is a match by itself; if it carries deeper messages,
    the deepest of those is reported instead.
    """

    name = "message"

    def matches(self, part: MessageLike) -> bool:
        return False

    def from_embedded(self, nested: MessageLike, inner: ResolvedArtifact) -> ResolvedArtifact:
        if inner.found:
            return ResolvedArtifact(inner.match, inner.depth + 1)
        return ResolvedArtifact(nested, 1)


class AttachmentTarget(ArtifactTarget):
    """Target attachments whose filename ends with one of ``suffixes``."""

    name = "attachment"

    def __init__(self, suffixes: tuple[str, ...] | str = DEFAULT_ATTACHMENT_SUFFIXES):
        self.suffixes = (suffixes,) if isinstance(suffixes, str) else tuple(suffixes)

    def __repr__(self) -> str:
        return f"AttachmentTarget(suffixes={self.suffixes!r})"

    def matches(self, part: MessageLike) -> bool:
        return has_suffix(part, self.suffixes)

    def from_embedded(self, nested: MessageLike, inner: ResolvedArtifact) -> ResolvedArtifact:
        if not inner.found:
            return NOT_FOUND
        return ResolvedArtifact(inner.match, inner.depth + 1)


def resolve_deepest(
    message: MessageLike,
    target: ArtifactTarget,
    max_depth: int | None = DEFAULT_MAX_NESTING_DEPTH,
    include_inline_messages: bool = True,
) -> ResolvedArtifact:
    """Find the deepest occurrence of ``target`` in a message's attachment tree.

    Parameters
    ----------
    message : Message
        Root message to search
    target : ArtifactTarget
        What to look for
    max_depth : int or None, default 50
        Embedded messages nested deeper than this are not opened and count as
        containing no match. None removes the limit.
    include_inline_messages : bool, default True
        Treat ``message/*`` parts without an attachment disposition as
        attachments

    Returns
    -------
    ResolvedArtifact
        ``(match, depth)``; ``(None, 0)`` when nothing matched

    Raises
    ------
    MalformedFileError
        If an attached ``*.eml`` file cannot be parsed

    """
    return _resolve(message, target, 0, max_depth, include_inline_messages)


def _resolve(
    message: MessageLike,
    target: ArtifactTarget,
    level: int,
    max_depth: int | None,
    include_inline_messages: bool,
) -> ResolvedArtifact:
    best = NOT_FOUND

    for part in iter_attachments(message, include_inline_messages=include_inline_messages):
        if is_native_message(part) or is_message_file(part):
            if max_depth is not None and level >= max_depth:
                logger.warning(f"Not descending into nested message beyond depth {max_depth}")
                continue
            nested = open_embedded_message(part)
            if nested is None:
                continue
            candidate = target.from_embedded(
                nested, _resolve(nested, target, level + 1, max_depth, include_inline_messages)
            )
        elif target.matches(part):
            logger.debug(f"Found matching {target.name} {get_filename(part)!r} at level {level}")
            candidate = ResolvedArtifact(part, 1)
        else:
            continue

        if candidate.found and candidate.depth > best.depth:
            best = candidate

    return best


def find_deepest_message(
    message: MessageLike,
    max_depth: int | None = DEFAULT_MAX_NESTING_DEPTH,
    include_inline_messages: bool = True,
) -> ResolvedArtifact:
    """Return the most deeply nested message attached to ``message``."""
    return resolve_deepest(message, MessageTarget(), max_depth, include_inline_messages)


def find_deepest_attachment(
    message: MessageLike,
    suffixes: tuple[str, ...] | str = DEFAULT_ATTACHMENT_SUFFIXES,
    max_depth: int | None = DEFAULT_MAX_NESTING_DEPTH,
    include_inline_messages: bool = True,
) -> ResolvedArtifact:
    """Return the most deeply nested attachment whose filename ends with one of ``suffixes``."""
    return resolve_deepest(message, AttachmentTarget(suffixes), max_depth, include_inline_messages)


__all__ = [
    "ArtifactTarget",
    "AttachmentTarget",
    "MessageTarget",
    "NOT_FOUND",
    "ResolvedArtifact",
    "find_deepest_attachment",
    "find_deepest_message",
    "resolve_deepest",
]

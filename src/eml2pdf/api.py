"""The major exported API functions for email conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/eml2pdf/api.py
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, List, Optional, Union

from eml2pdf.constants import DEFAULT_ATTACHMENT_SUFFIXES, DEFAULT_MAX_NESTING_DEPTH, OutputKind
from eml2pdf.exceptions import ValidationError
from eml2pdf.options.eml import EmlOptions
from eml2pdf.parsers.eml import MessageSource, load_message, select_html_body
from eml2pdf.parsers.parts import MessageLike, get_filename, get_part_bytes
from eml2pdf.resolver import ResolvedArtifact, find_deepest_attachment, find_deepest_message
from eml2pdf.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


class ConversionState(Enum):
    """Stages a conversion passes through."""

    START = "start"
    RESOLVE_ATTACHMENT = "resolve_attachment"
    RESOLVE_NESTED = "resolve_nested"
    SELECT_BODY = "select_body"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ConversionResult:
    """Outcome of converting one message.

    Parameters
    ----------
    kind : {"attachment", "html"}
        Whether ``payload`` holds extracted attachment bytes or rendered HTML
    payload : bytes or str
        The attachment content or the HTML text
    depth : int
        Nesting depth of the artifact the payload came from; 0 means the root
        message itself was rendered
    filename : str or None
        Filename of the extracted attachment
    states : list of ConversionState
        Stages visited, in order

    """

    kind: OutputKind
    payload: Union[bytes, str]
    depth: int = 0
    filename: Optional[str] = None
    states: List[ConversionState] = field(default_factory=list)

    @property
    def is_attachment(self) -> bool:
        return self.kind == "attachment"


def _prepare_options(options: Optional[EmlOptions], kwargs: dict) -> EmlOptions:
    """Merge keyword overrides into ``options``."""
    option_names = {f.name for f in fields(EmlOptions)}
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    unknown = [k for k in kwargs if k not in valid_kwargs]
    if unknown:
        logger.debug(f"Skipping unknown eml options: {unknown}")

    try:
        if options is None:
            return EmlOptions(**valid_kwargs)
        if valid_kwargs:
            return options.create_updated(**valid_kwargs)
    except ValueError as e:
        raise ValidationError(f"Invalid conversion options: {e}", original_error=e) from e
    return options


def extract_deepest_attachment(
    message: MessageLike,
    suffixes: tuple[str, ...] | str = DEFAULT_ATTACHMENT_SUFFIXES,
    max_depth: int | None = DEFAULT_MAX_NESTING_DEPTH,
    include_inline_messages: bool = True,
) -> ResolvedArtifact:
    """Find the most deeply nested attachment of a given kind.

    Thin wrapper over :func:`eml2pdf.resolver.find_deepest_attachment` that
    logs what was found.
    """
    with debug_timer(logger, "Resolving nested attachments"):
        artifact = find_deepest_attachment(message, suffixes, max_depth, include_inline_messages)
    if artifact.found:
        logger.info(f"Found attachment {get_filename(artifact.match)!r} at depth {artifact.depth}")
    else:
        logger.debug(f"No attachment matching {suffixes!r} found")
    return artifact


def render_message_html(
    message: MessageLike,
    options: Optional[EmlOptions] = None,
    states: Optional[List[ConversionState]] = None,
) -> ConversionResult:
    """Render the innermost forwarded message (or the message itself) to HTML.

    Parameters
    ----------
    message : Message
        Root message
    options : EmlOptions, optional
        Traversal and inline image options
    states : list of ConversionState, optional
        State trail to extend; a new one is started when omitted

    Returns
    -------
    ConversionResult
        Result of kind "html"; ``depth`` is the depth of the rendered message

    """
    options = options or EmlOptions()
    states = states if states is not None else [ConversionState.START]

    states.append(ConversionState.RESOLVE_NESTED)
    with debug_timer(logger, "Resolving nested messages"):
        nested = find_deepest_message(
            message,
            max_depth=options.max_nesting_depth,
            include_inline_messages=options.treat_inline_messages_as_attachments,
        )

    target = message
    if nested.found:
        logger.info(f"Rendering nested message at depth {nested.depth}")
        target = nested.match
    else:
        logger.debug("No nested message found, rendering root message")

    states.append(ConversionState.SELECT_BODY)
    html = select_html_body(target, options)
    states.append(ConversionState.DONE)

    return ConversionResult(kind="html", payload=html, depth=nested.depth, states=states)


def convert(source: MessageSource, options: Optional[EmlOptions] = None, **kwargs: Any) -> ConversionResult:
    """Convert an email message to its renderable content.

    When attachment extraction is enabled the deepest matching attachment is
    looked up first and, if found, returned as-is. Otherwise (or when nothing
    matches) the HTML body of the innermost forwarded message is produced.

    Parameters
    ----------
    source : str, Path, bytes, or IO[bytes]
        Message file path, raw message bytes or a binary stream
    options : EmlOptions, optional
        Conversion options
    kwargs : Any
        Individual option overrides applied on top of ``options``
        (e.g., ``extract_attachments=True``)

    Returns
    -------
    ConversionResult
        Attachment bytes (kind "attachment") or HTML text (kind "html")

    Raises
    ------
    ValidationError
        If the source type or an option value is invalid
    FileNotFoundError
        If a source path does not exist
    MalformedFileError
        If the message or an attached message cannot be parsed

    Examples
    --------
    Render a message:
        >>> result = convert("mail.eml")
        >>> html = result.payload

    Prefer the innermost PDF attachment:
        >>> result = convert("mail.eml", extract_attachments=True)
        >>> if result.is_attachment:
        ...     Path("out.pdf").write_bytes(result.payload)

    """
    options = _prepare_options(options, kwargs)
    states = [ConversionState.START]

    try:
        with debug_timer(logger, "Loading message"):
            message = load_message(source)

        if options.extract_attachments:
            states.append(ConversionState.RESOLVE_ATTACHMENT)
            artifact = extract_deepest_attachment(
                message,
                options.attachment_suffixes,
                options.max_nesting_depth,
                options.treat_inline_messages_as_attachments,
            )
            if artifact.found:
                states.append(ConversionState.DONE)
                return ConversionResult(
                    kind="attachment",
                    payload=get_part_bytes(artifact.match),
                    depth=artifact.depth,
                    filename=get_filename(artifact.match),
                    states=states,
                )

        return render_message_html(message, options, states)
    except Exception:
        states.append(ConversionState.FAILED)
        logger.debug(f"Conversion failed after states: {[s.value for s in states]}")
        raise


def to_html(source: MessageSource, options: Optional[EmlOptions] = None, **kwargs: Any) -> str:
    """Return the HTML to render for a message, ignoring attachment extraction.

    Examples
    --------
        >>> html = to_html("mail.eml", inline_image_mode="save")

    """
    options = _prepare_options(options, kwargs)
    if options.extract_attachments:
        options = options.create_updated(extract_attachments=False)
    result = convert(source, options)
    assert isinstance(result.payload, str)
    return result.payload


__all__ = [
    "ConversionResult",
    "ConversionState",
    "convert",
    "extract_deepest_attachment",
    "render_message_html",
    "to_html",
]

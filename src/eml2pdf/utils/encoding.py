#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/encoding.py
"""Character encoding handling for message text.

Message parts declare their charset in the Content-Type header, and the
declaration is frequently missing, misspelled or names a codec that Python
does not ship. The helpers here decode with the declared charset when it is
usable and fall back to ISO-8859-1 otherwise, so decoding never fails.

No content sniffing is performed: the only inputs are the bytes and the
declared name.
"""

from __future__ import annotations

import codecs
import locale
import logging

from eml2pdf.constants import DEFAULT_CHARSET, FALLBACK_CHARSET

logger = logging.getLogger(__name__)


def normalize_charset(charset: str | None) -> str | None:
    """Strip whitespace and quotes from a declared charset name.

    Parameters
    ----------
    charset : str | None
        Charset parameter as found in a Content-Type header

    Returns
    -------
    str | None
        The cleaned name, or None when nothing usable was declared

    Examples
    --------
    >>> normalize_charset(' "UTF-8" ')
    'UTF-8'
    >>> normalize_charset("") is None
    True

    """
    if charset is None:
        return None
    cleaned = charset.strip().strip("\"'").strip()
    return cleaned or None


def is_known_charset(charset: str | None) -> bool:
    """Return True when Python has a text codec registered under this name.

    Binary-to-binary codecs such as ``base64`` or ``hex`` are registered with
    :mod:`codecs` but cannot decode bytes to text, so they are reported as
    unknown.

    """
    name = normalize_charset(charset)
    if name is None:
        return False
    try:
        info = codecs.lookup(name)
    except (LookupError, ValueError):
        return False
    return getattr(info, "_is_text_encoding", True)


def decode_bytes(data: bytes, charset: str | None = None) -> str:
    """Decode raw part bytes using a declared charset.

    Parameters
    ----------
    data : bytes
        Transfer-decoded part content
    charset : str | None, default None
        Declared charset. None or empty means UTF-8.

    Returns
    -------
    str
        Decoded text. Byte sequences that are invalid for a known charset are
        replaced with U+FFFD; an unknown charset makes the whole buffer decode
        as ISO-8859-1. This function never raises.

    Examples
    --------
    >>> decode_bytes("café".encode("utf-8"))
    'café'
    >>> decode_bytes(b"caf\\xe9", "no-such-charset")
    'café'

    """
    name = normalize_charset(charset) or DEFAULT_CHARSET

    if is_known_charset(name):
        logger.debug(f"Decoding {len(data)} bytes using {name}")
        try:
            return data.decode(name, errors="replace")
        except (UnicodeError, LookupError, ValueError) as e:
            # idna, punycode and undefined are registered but reject this input
            logger.warning(f"Decoding with {name!r} failed: {e}")

    logger.warning(f"Unsupported charset {name!r}, falling back to {FALLBACK_CHARSET}")
    return data.decode(FALLBACK_CHARSET)


def platform_encoding() -> str:
    """Return the platform's preferred byte encoding."""
    return locale.getpreferredencoding(False) or DEFAULT_CHARSET


def decode_text(text: str, charset: str | None) -> str:
    """Re-decode already decoded text with a named charset.

    The text is encoded with the platform's preferred encoding and the
    resulting bytes are decoded with ``charset``. When platform and target
    charsets differ this round trip can alter non-ASCII characters; callers
    rely on the exact output, so it is kept as is.

    Parameters
    ----------
    text : str
        Text as exposed by the message object
    charset : str | None
        Charset to decode the re-encoded bytes with

    Returns
    -------
    str
        The round-tripped text, or ``text`` unchanged when ``charset`` is not
        a known codec. This function never raises.

    """
    name = normalize_charset(charset)
    if name is None or not is_known_charset(name):
        logger.warning(f"Cannot decode raw body with charset {charset!r}, returning it unchanged")
        return text

    try:
        raw = text.encode(platform_encoding(), errors="replace")
        return raw.decode(name, errors="replace")
    except (UnicodeError, LookupError, ValueError) as e:
        logger.warning(f"Round trip through {name!r} failed, returning text unchanged: {e}")
        return text


__all__ = ["decode_bytes", "decode_text", "is_known_charset", "normalize_charset", "platform_encoding"]

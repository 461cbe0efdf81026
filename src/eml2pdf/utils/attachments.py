"""Filename helpers for writing message parts to disk.

Inline images written in "save" mode take their names from untrusted message
headers. The helpers here turn such names into safe, collision-free paths.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/attachments.py

import logging
import mimetypes
import os
import re
import sys
import unicodedata
from pathlib import Path

logger = logging.getLogger(__name__)

_WINDOWS_RESERVED = frozenset(
    {"con", "prn", "aux", "nul"} | {f"com{i}" for i in range(1, 10)} | {f"lpt{i}" for i in range(1, 10)}
)


def sanitize_attachment_filename(filename: str, max_length: int = 255) -> str:
    """Sanitize a part filename for file system storage.

    Normalizes Unicode, drops any directory components, keeps only ASCII
    alphanumerics, dots, hyphens and underscores, and avoids Windows reserved
    device names. Case is preserved so that names stay recognizable next to
    the rendered message.

    Parameters
    ----------
    filename : str
        Original filename, typically from a Content-Disposition header
    max_length : int, default 255
        Maximum length for the sanitized filename

    Returns
    -------
    str
        Sanitized filename safe for file system use

    Examples
    --------
    >>> sanitize_attachment_filename("../../../etc/passwd")
    'passwd'
    >>> sanitize_attachment_filename("logo image.png")
    'logo_image.png'
    >>> sanitize_attachment_filename("CON.png")
    'file_CON.png'

    """
    if not filename or not filename.strip():
        return "attachment"

    normalized = unicodedata.normalize("NFKC", filename)

    # Only the last path component survives
    safe_chars = re.split(r"[/\\]", normalized)[-1]

    safe_chars = re.sub(r"\s+", "_", safe_chars.strip())
    safe_chars = re.sub(r"[^a-zA-Z0-9_.\-]", "", safe_chars)
    safe_chars = re.sub(r"\.+", ".", safe_chars)

    is_extension_only = bool(re.match(r"^\.[a-zA-Z0-9]{2,5}$", safe_chars))
    safe_chars = safe_chars.strip(". ")
    if is_extension_only:
        safe_chars = f"attachment.{safe_chars}"

    name_parts = safe_chars.split(".")
    if name_parts[0].lower() in _WINDOWS_RESERVED:
        name_parts[0] = f"file_{name_parts[0]}"
        safe_chars = ".".join(name_parts)

    if not safe_chars or re.match(r"^[._]*$", safe_chars):
        safe_chars = "attachment"

    if len(safe_chars) > max_length:
        if "." in safe_chars:
            name, ext = safe_chars.rsplit(".", 1)
            max_name_length = max_length - len(ext) - 1
            safe_chars = f"{name[:max_name_length]}.{ext}" if max_name_length > 0 else f"file.{ext}"
        else:
            safe_chars = safe_chars[:max_length]

    if safe_chars != filename:
        logger.debug(f"Sanitized filename: '{filename}' -> '{safe_chars}'")

    return safe_chars


def inline_image_filename(filename: str | None, content_id: str, mime_type: str) -> str:
    """Choose a file name for an inline image.

    The part's own filename wins; otherwise the content identifier is used
    with an extension guessed from the MIME type.

    Examples
    --------
    >>> inline_image_filename(None, "logo1@example.com", "image/png")
    'logo1example.com.png'

    """
    if filename:
        return sanitize_attachment_filename(filename)
    extension = mimetypes.guess_extension(mime_type) or ".bin"
    return sanitize_attachment_filename(f"{content_id}{extension}")


def _atomic_create_file(path: Path) -> bool:
    """Atomically create an empty file, returning False if it already exists.

    Raises
    ------
    OSError
        If creation fails for reasons other than the file existing

    """
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL
    if sys.platform == "win32" and hasattr(os, "O_BINARY"):
        flags |= os.O_BINARY

    try:
        fd = os.open(str(path), flags, 0o644)
        os.close(fd)
        return True
    except FileExistsError:
        return False


def ensure_unique_attachment_path(base_path: Path, max_attempts: int = 1000) -> Path:
    """Claim a unique file path by adding numeric suffixes on collisions.

    A 0-byte placeholder is created atomically at the returned path; the
    caller must overwrite it with the real content.

    Parameters
    ----------
    base_path : Path
        The desired path
    max_attempts : int, default 1000
        Maximum number of collision resolution attempts

    Returns
    -------
    Path
        ``base_path`` or ``<stem>-<n><suffix>`` in the same directory

    Raises
    ------
    RuntimeError
        If unable to find a unique path after max_attempts
    OSError
        If creation fails for reasons other than a collision

    Examples
    --------
    >>> # If image.png exists, returns image-1.png
    >>> ensure_unique_attachment_path(Path("./attachments/image.png"))
    PosixPath('attachments/image-1.png')

    """
    if _atomic_create_file(base_path):
        return base_path

    stem, suffix, parent = base_path.stem, base_path.suffix, base_path.parent
    for i in range(1, max_attempts + 1):
        new_path = parent / f"{stem}-{i}{suffix}"
        if _atomic_create_file(new_path):
            return new_path

    raise RuntimeError(f"Unable to find unique path after {max_attempts} attempts for {base_path}")


__all__ = ["ensure_unique_attachment_path", "inline_image_filename", "sanitize_attachment_filename"]

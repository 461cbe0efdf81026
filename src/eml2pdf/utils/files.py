#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/files.py
"""File housekeeping around a conversion.

Output files are placed next to the source message, and once a conversion
has succeeded the source is either deleted or renamed out of the way with a
UTC timestamp so that a watched inbox folder does not pick it up again.

"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Optional, Union

from eml2pdf.constants import BACKUP_SUFFIX, BACKUP_TIMESTAMP_FORMAT, PDF_OUTPUT_SUFFIX
from eml2pdf.exceptions import FileAccessError, OutputWriteError

logger = logging.getLogger(__name__)


def derive_output_path(source: Union[str, Path], suffix: str = PDF_OUTPUT_SUFFIX) -> Path:
    """Return ``source`` with its last suffix replaced by ``suffix``.

    Examples
    --------
    >>> derive_output_path("inbox/mail.eml")
    PosixPath('inbox/mail.eml.pdf')
    >>> derive_output_path("inbox/mail.msg", ".eml.html")
    PosixPath('inbox/mail.eml.html')

    """
    return Path(source).with_suffix(suffix)


def backup_path_for(source: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """Return the archive name for a processed source file.

    The name is ``<UTC %Y%m%d %H%M>_<original name>.bak`` in the source's
    directory.

    Examples
    --------
    >>> backup_path_for("in/mail.eml", datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc))
    PosixPath('in/20240305 1407_mail.eml.bak')

    """
    source = Path(source)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    stamp = now.strftime(BACKUP_TIMESTAMP_FORMAT)
    return source.with_name(f"{stamp}_{source.name}{BACKUP_SUFFIX}")


def archive_source(source: Union[str, Path], delete: bool = False, now: Optional[datetime] = None) -> Path | None:
    """Delete a processed source file or rename it to its backup name.

    Parameters
    ----------
    source : str or Path
        Processed message file
    delete : bool, default False
        Delete instead of renaming
    now : datetime, optional
        Timestamp for the backup name (defaults to the current UTC time)

    Returns
    -------
    Path or None
        The backup path, or None when the file was deleted

    Raises
    ------
    FileAccessError
        If the file cannot be deleted or renamed

    """
    source = Path(source)
    try:
        if delete:
            source.unlink()
            logger.info(f"Deleted source file: {source}")
            return None

        target = backup_path_for(source, now)
        source.rename(target)
        logger.info(f"Renamed source file to: {target}")
        return target
    except OSError as e:
        raise FileAccessError(str(source), f"Could not archive source file {source}: {e}", original_error=e) from e


def write_bytes_output(content: bytes, output: Union[str, Path, IO[bytes]]) -> None:
    """Write bytes to a path or binary stream.

    Raises
    ------
    OutputWriteError
        If writing to a path fails

    """
    if isinstance(output, (str, Path)):
        try:
            Path(output).write_bytes(content)
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e
    elif hasattr(output, "write"):
        output.write(content)
    else:
        raise TypeError(f"Unsupported output type: {type(output)}")
    logger.debug(f"Wrote {len(content)} bytes to {output}")


__all__ = ["archive_source", "backup_path_for", "derive_output_path", "write_bytes_output"]

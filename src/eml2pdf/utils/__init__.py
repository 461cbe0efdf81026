#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/eml2pdf/utils/__init__.py
"""Utility modules for eml2pdf package.

This package contains helpers for charset decoding, inline image handling,
file housekeeping and optional dependency checks.
"""

from eml2pdf.utils.encoding import decode_bytes, decode_text
from eml2pdf.utils.files import archive_source, backup_path_for, derive_output_path

__all__ = [
    "archive_source",
    "backup_path_for",
    "decode_bytes",
    "decode_text",
    "derive_output_path",
]

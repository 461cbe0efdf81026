#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for eml2pdf library.

This module centralizes hardcoded values and default configuration constants
used across the eml2pdf library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Message Traversal - nesting and attachment matching
3. Text Decoding - charset defaults
4. Output - file suffixes, backups and PDF page geometry
5. Dependencies - optional package requirements
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

InlineImageMode = Literal["base64", "save"]
OutputKind = Literal["attachment", "html"]

# =============================================================================
# Message Traversal
# =============================================================================

# Filename suffix marking a binary attachment as a serialized message
MESSAGE_FILE_SUFFIX = ".eml"

# Attachment kinds searched for when attachment extraction is enabled
DEFAULT_ATTACHMENT_SUFFIXES: tuple[str, ...] = (".pdf",)

# Recursion cutoff for nested messages; deeper levels count as "no match"
DEFAULT_MAX_NESTING_DEPTH = 50

DEFAULT_TREAT_INLINE_MESSAGES_AS_ATTACHMENTS = True

# =============================================================================
# Text Decoding
# =============================================================================

DEFAULT_CHARSET = "utf-8"
# Single-byte fallback that maps every byte value to a code point
FALLBACK_CHARSET = "iso-8859-1"

# =============================================================================
# Output
# =============================================================================

DEFAULT_INLINE_IMAGE_MODE: InlineImageMode = "base64"
DEFAULT_INLINE_IMAGE_OUTPUT_DIR = "attachments"

PDF_OUTPUT_SUFFIX = ".eml.pdf"
HTML_OUTPUT_SUFFIX = ".eml.html"
BACKUP_SUFFIX = ".bak"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d %H%M"

# Marker line consumed by calling scripts to find the produced file
RET_OUTPUT_PREFIX = "RET-OUTPUT: "

DEFAULT_PDF_PAGE_WIDTH = "8.5in"
DEFAULT_PDF_PAGE_HEIGHT = "11in"
DEFAULT_PDF_MARGIN = "0"

DEFAULT_LOG_RETENTION_DAYS = 7
DEFAULT_LOG_FILENAME = "eml2pdf.log"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_PDF_RENDER = [("weasyprint", "weasyprint", ">=60.0")]

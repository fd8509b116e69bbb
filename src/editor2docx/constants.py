#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for editor2docx.

This module centralizes the hardcoded values used across the converter:
the editor's markup vocabulary, the document-wide style configuration and
the defaults for image materialization.

Constants are organized by category:
1. Type Definitions
2. Editor Markup Vocabulary
3. Document Style Configuration
4. Image Materialization and Network
5. Dependency Specifications
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

NodeType = Literal["tag", "text", "root"]
DecorationKind = Literal["bullet", "numbering", "indent"]

# =============================================================================
# Editor Markup Vocabulary
# =============================================================================

INLINE_FORMAT_TAGS = frozenset({"s", "u", "em", "strong"})
LIST_TAGS = frozenset({"ul", "ol", "li"})
ALIGNMENT_TAGS = ("center", "justify", "left", "right")
HEADING_TAG_PATTERN = r"h[0-6]"
COLOR_CLASS_PATTERN = r"color:([a-z]*)"
FONT_SIZE_CLASS_PATTERN = r"font-size:([0-9]*)"

BULLET_LIST_CLASS = "bullet"
INDENT_LIST_CLASS = "indent"
CODE_TAG = "code"
IMAGE_TAG = "img"
BODY_TAG = "body"

# Named colors understood by the editor's color classes
EDITOR_COLORS: dict[str, str] = {
    "black": "000000",
    "red": "FF0000",
    "green": "008000",
    "blue": "0000FF",
    "yellow": "FFFF00",
    "orange": "FFA500",
}

# Pixel to point factor used by the editor's font-size classes
PX_TO_PT = 0.75

# Larger sizes are clamped; 2184px is Word's 1638pt maximum
MAX_FONT_SIZE_PX = 2184

# Parsed trees deeper than this are rejected before any traversal happens
MAX_TREE_DEPTH = 400

# =============================================================================
# Document Style Configuration
# =============================================================================

CODE_STYLE_ID = "code"
NUMBERING_REFERENCE = "numberLi"
NUMBERING_LEVEL_COUNT = 3
NUMBERING_LEVEL_TEXT = "%1."
BULLET_LEVEL_COUNT = 9
BULLET_SYMBOLS = ("•", "◦", "▪")

# Indentation in twentieths of a point (720 twips = 0.5 inch)
LIST_INDENT_STEP_TWIPS = 720
LIST_HANGING_TWIPS = 360
INDENT_STEP_INCHES = 0.5

DEFAULT_CREATOR = "editor2docx"
DEFAULT_HTML_PARSER = "html.parser"
DEFAULT_CODE_FONT = "Courier New"
DEFAULT_CODE_FONT_SIZE = 12
DEFAULT_MAX_IMAGE_WIDTH_INCHES = 6.0

# =============================================================================
# Image Materialization and Network
# =============================================================================

DEFAULT_FILES_DIR = "files"
FILES_DIR_MODE = 0o760
DATA_URI_PREFIX = "data"
BASE64_MARKER = ";base64,"
DATA_URI_NAME_LENGTH = 7
DEFAULT_NETWORK_TIMEOUT = 30.0
DEFAULT_VERIFY_TLS = False
DEFAULT_USER_AGENT = "editor2docx-fetcher/1.0"
STREAM_CHUNK_SIZE = 8192

ENV_DISABLE_NETWORK = "EDITOR2DOCX_DISABLE_NETWORK"
ENV_USER_AGENT = "EDITOR2DOCX_USER_AGENT"

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
DEPS_DOCX_RENDER = [("python-docx", "docx", ">=1.1.0")]
DEPS_NETWORK = [("httpx", "httpx", ">=0.27.0")]

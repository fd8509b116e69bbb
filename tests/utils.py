"""Test utilities for the editor2docx test suite.

Helpers for building editor markup, inline images and for reading back the
documents the converter produces.
"""

import base64
from io import BytesIO

import docx

# Base64 encoded 1x1 pixel PNG for testing
MINIMAL_PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8B9FpQHLwAAAAASUVORK5CYII="
MINIMAL_PNG_BYTES = base64.b64decode(MINIMAL_PNG_B64)
MINIMAL_PNG_DATA_URI = f"data:image/png;base64,{MINIMAL_PNG_B64}"

# File name the converter derives for MINIMAL_PNG_DATA_URI
MINIMAL_PNG_FILENAME = "iVBORw0.png"


def wrap_body(inner: str) -> str:
    """Wrap editor markup the way the editor exports a full document."""
    return f"<html><head><title>t</title></head><body>{inner}</body></html>"


def read_docx(data: bytes):
    """Open DOCX bytes with python-docx."""
    return docx.Document(BytesIO(data))


def numbering_of(paragraph) -> tuple:
    """Return ``(numId, ilvl)`` of a python-docx paragraph, or ``(None, None)``."""
    p_pr = paragraph._p.pPr
    if p_pr is None or p_pr.numPr is None:
        return None, None
    num_pr = p_pr.numPr
    num_id = num_pr.numId.val if num_pr.numId is not None else None
    ilvl = num_pr.ilvl.val if num_pr.ilvl is not None else None
    return num_id, ilvl

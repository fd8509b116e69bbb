#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/html/classify.py
"""Predicates that categorize nodes of the editor markup.

All predicates are pure and tolerate nodes without a tag name or without an
attribute map; such nodes simply do not match.
"""

from __future__ import annotations

import re

from editor2docx.constants import (
    ALIGNMENT_TAGS,
    BODY_TAG,
    BULLET_LIST_CLASS,
    COLOR_CLASS_PATTERN,
    HEADING_TAG_PATTERN,
    IMAGE_TAG,
    INDENT_LIST_CLASS,
    INLINE_FORMAT_TAGS,
    LIST_TAGS,
)
from editor2docx.html.tree import HtmlNode

_HEADING_RE = re.compile(HEADING_TAG_PATTERN, re.IGNORECASE)
_COLOR_RE = re.compile(COLOR_CLASS_PATTERN, re.IGNORECASE)


def is_element(node: HtmlNode, name: str) -> bool:
    """Return True if ``node`` is a tag named ``name``."""
    return node.type == "tag" and node.name is not None and node.name == name


def is_body(node: HtmlNode) -> bool:
    """Return True for the document body, or for the root of a body-less fragment."""
    return node.type == "root" or is_element(node, BODY_TAG)


def is_heading_element(node: HtmlNode) -> bool:
    if not node.name:
        return False
    return _HEADING_RE.fullmatch(node.name) is not None


def is_alignment_element(node: HtmlNode) -> bool:
    if not node.name:
        return False
    return node.name in ALIGNMENT_TAGS


def is_color_element(node: HtmlNode) -> bool:
    class_name = node.get_attribute("class")
    if not class_name:
        return False
    return _COLOR_RE.search(class_name) is not None


def is_font_size_element(node: HtmlNode) -> bool:
    class_name = node.get_attribute("class")
    if not class_name:
        return False
    return "font-size" in class_name


def is_list_element(node: HtmlNode) -> bool:
    """Return True for ``ul``, ``ol`` and ``li`` tags."""
    return node.type == "tag" and node.name in LIST_TAGS


def is_bullet_list_element(node: HtmlNode) -> bool:
    return is_element(node, "ul") and node.get_attribute("class") == BULLET_LIST_CLASS


def is_indent_list_element(node: HtmlNode) -> bool:
    """Return True if ``node`` or any descendant carries the ``indent`` class."""
    return node.find_first(lambda item: item.get_attribute("class") == INDENT_LIST_CLASS) is not None


def is_image_element(node: HtmlNode) -> bool:
    return is_element(node, IMAGE_TAG)


def is_text_element(node: HtmlNode) -> bool:
    """Return True for nodes that only contribute inline, formatted text.

    Text nodes, the inline format tags (``s``, ``u``, ``em``, ``strong``) and
    any element carrying a color or font-size class qualify.
    """
    if node.type == "text":
        return True
    if node.type == "tag" and node.name in INLINE_FORMAT_TAGS:
        return True
    return is_color_element(node) or is_font_size_element(node)


def is_paragraph_element(node: HtmlNode) -> bool:
    return not is_text_element(node)


__all__ = [
    "is_alignment_element",
    "is_body",
    "is_bullet_list_element",
    "is_color_element",
    "is_element",
    "is_font_size_element",
    "is_heading_element",
    "is_image_element",
    "is_indent_list_element",
    "is_list_element",
    "is_paragraph_element",
    "is_text_element",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/styles.py
"""Paragraph- and run-level formatting resolution.

Paragraph attributes are collected by walking from a node up to the document
body: headings, the ``code`` style, alignment tags and list decorations found
on the way are merged into one ``ParagraphAttributes`` record, the nearest
node winning for every field.

Run formatting flows the other way: starting at an inline node, formatting
markers are accumulated downwards and every text node met becomes a ``Run``
carrying the markers of its own ancestor path.

"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from editor2docx.constants import (
    CODE_STYLE_ID,
    CODE_TAG,
    COLOR_CLASS_PATTERN,
    EDITOR_COLORS,
    FONT_SIZE_CLASS_PATTERN,
    MAX_FONT_SIZE_PX,
    NUMBERING_REFERENCE,
    PX_TO_PT,
)
from editor2docx.html.classify import (
    is_alignment_element,
    is_body,
    is_bullet_list_element,
    is_color_element,
    is_element,
    is_font_size_element,
    is_heading_element,
    is_image_element,
    is_indent_list_element,
    is_list_element,
)
from editor2docx.html.tree import HtmlNode
from editor2docx.model import Alignment, HeadingLevel, ListDecoration, ParagraphAttributes, Run, RunFormat

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(COLOR_CLASS_PATTERN, re.IGNORECASE)
_FONT_SIZE_RE = re.compile(FONT_SIZE_CLASS_PATTERN, re.IGNORECASE)


@dataclass(frozen=True)
class ImageReference:
    """Returned instead of attributes when the ancestor walk meets an image.

    Parameters
    ----------
    node : HtmlNode
        The ``img`` element.
    source : str or None
        Its ``src`` attribute.

    """

    node: HtmlNode
    source: Optional[str]


def compute_depth(node: HtmlNode, list_only: bool = False) -> Optional[int]:
    """Count the ancestors of ``node`` below the document body.

    Parameters
    ----------
    node : HtmlNode
        Node to measure.
    list_only : bool, default False
        Only count ``ul``/``ol`` parents. ``li`` parents are skipped so that an
        item and its list are not counted twice.

    Returns
    -------
    int or None
        The depth. In ``list_only`` mode, None when no list container was
        found on the way up; callers treat that as depth 0.

    """
    depth = 0
    found = False
    for parent in node.iter_ancestors():
        if is_body(parent):
            break
        if not list_only or _is_list_container(parent):
            depth += 1
            found = True

    if list_only and not found:
        return None
    return depth


def _is_list_container(node: HtmlNode) -> bool:
    return is_list_element(node) and node.name != "li"


def _list_decoration(node: HtmlNode) -> Optional[ListDecoration]:
    # Only ul/ol decorate, never an li holding a sublist
    if not _is_list_container(node):
        return None
    level = compute_depth(node, list_only=True) or 0
    if is_bullet_list_element(node):
        return ListDecoration("bullet", level=level)
    if is_element(node, "ol"):
        return ListDecoration("numbering", level=level, reference=NUMBERING_REFERENCE)
    if is_indent_list_element(node):
        return ListDecoration("indent", level=level)
    return None


def _own_paragraph_attributes(node: HtmlNode, with_decoration: bool) -> ParagraphAttributes:
    heading = HeadingLevel.from_tag(node.name) if is_heading_element(node) else None
    style = CODE_STYLE_ID if is_element(node, CODE_TAG) else None
    alignment = Alignment(node.name) if is_alignment_element(node) else None
    decoration = _list_decoration(node) if with_decoration else None
    return ParagraphAttributes(heading=heading, alignment=alignment, style=style, decoration=decoration)


def resolve_paragraph_attributes(
    node: HtmlNode, attributes: Optional[ParagraphAttributes] = None
) -> Union[ParagraphAttributes, ImageReference]:
    """Accumulate paragraph attributes from ``node`` up to the document body.

    For every node on the chain, heading, code style, alignment and list
    decoration are detected in that order. A field already set, either by
    ``attributes`` or by a nearer node, is kept.

    Parameters
    ----------
    node : HtmlNode
        Node to start from; normally a body child or one of its children.
    attributes : ParagraphAttributes, optional
        Attributes resolved so far. Not modified.

    Returns
    -------
    ParagraphAttributes or ImageReference
        The merged attributes, or an ``ImageReference`` when an ``img`` was
        met on the chain. Images carry no paragraph attributes.

    """
    resolved = attributes or ParagraphAttributes()
    current: Optional[HtmlNode] = node
    while current is not None and not is_body(current):
        own = _own_paragraph_attributes(current, with_decoration=resolved.decoration is None)
        resolved = resolved.fill_missing(own)
        if is_image_element(current):
            return ImageReference(current, current.get_attribute("src"))
        current = current.parent

    return resolved


def font_size_to_half_points(px: float) -> int:
    """Convert a pixel font size to Word half-points.

    Pixels become points rounded half-up to the nearest half point, which
    are then doubled, so 16px gives 12pt, i.e. 24 half-points.
    """
    points = math.floor(px * PX_TO_PT * 2 + 0.5) / 2
    return int(round(points * 2))


def font_size_from_class(class_name: str) -> Optional[int]:
    """Return the half-point size encoded in a ``font-size:<px>`` class, if any."""
    match = _FONT_SIZE_RE.search(class_name)
    if not match or not match.group(1):
        return None
    return font_size_to_half_points(min(int(match.group(1)), MAX_FONT_SIZE_PX))


def color_from_class(class_name: str) -> Optional[str]:
    """Return the hex color for a ``color:<name>`` class; unknown names give None."""
    match = _COLOR_RE.search(class_name)
    if not match:
        return None
    return EDITOR_COLORS.get(match.group(1).lower())


def _own_run_format(node: HtmlNode, inherited: RunFormat) -> RunFormat:
    updates: dict[str, Any] = {}
    class_name = node.get_attribute("class") or ""

    if is_color_element(node):
        color = color_from_class(class_name)
        if color:
            updates["color"] = color
    if is_element(node, "strong"):
        updates["bold"] = True
    if is_element(node, "em"):
        updates["italic"] = True
    if is_element(node, "u"):
        updates["underline"] = True
    if is_element(node, "s"):
        updates["strike"] = True
    if is_font_size_element(node):
        size = font_size_from_class(class_name)
        if size is not None:
            updates["size"] = size

    return replace(inherited, **updates) if updates else inherited


def resolve_run_attributes(
    node: HtmlNode, runs_out: list[Run], inherited: Optional[RunFormat] = None
) -> RunFormat:
    """Collect the formatted runs of ``node`` into ``runs_out``.

    Parameters
    ----------
    node : HtmlNode
        Inline subtree to collect.
    runs_out : list[Run]
        Receives one ``Run`` per text node, in document order.
    inherited : RunFormat, optional
        Formatting accumulated by the enclosing nodes.

    Returns
    -------
    RunFormat
        The formatting in effect at ``node``.

    Notes
    -----
    List elements below ``node`` are skipped; their text belongs to the list
    paragraphs produced by ``editor2docx.lists``.

    """
    run_format = _own_run_format(node, inherited or RunFormat())

    if node.type == "text":
        runs_out.append(Run(text=node.data or "", format=run_format))

    for child in node.children:
        if not is_list_element(child):
            resolve_run_attributes(child, runs_out, run_format)

    return run_format


__all__ = [
    "ImageReference",
    "color_from_class",
    "compute_depth",
    "font_size_from_class",
    "font_size_to_half_points",
    "resolve_paragraph_attributes",
    "resolve_run_attributes",
]

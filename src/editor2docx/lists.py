#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/lists.py
"""Flattening of nested editor lists into decorated paragraphs.

Word has no nested list blocks: every list item becomes one paragraph whose
bullet, numbering or indentation level is derived from how many list
containers enclose it. Items are emitted in document order, each followed by
the items of the lists nested inside it.

"""

from __future__ import annotations

import logging
from typing import Optional

from editor2docx.html.classify import is_element, is_heading_element, is_text_element
from editor2docx.html.tree import HtmlNode
from editor2docx.model import DocumentBuild, Paragraph, Run
from editor2docx.styles import resolve_paragraph_attributes, resolve_run_attributes

logger = logging.getLogger(__name__)


def collect_list_items(node: HtmlNode, items: Optional[list[HtmlNode]] = None) -> list[HtmlNode]:
    """Find the list items below ``node``, in document order.

    An ``li`` with a text child is an item itself; an ``li`` with a heading
    child contributes that heading. Once an ``li`` has matched, the rest of
    its subtree is left for a later pass (see ``walk_list``).

    Parameters
    ----------
    node : HtmlNode
        Node to scan.
    items : list[HtmlNode], optional
        Accumulator; a new list is created when omitted.

    Returns
    -------
    list[HtmlNode]
        The matched item nodes.

    """
    items = [] if items is None else items
    is_item = is_element(node, "li")
    for child in node.children:
        if is_item and is_text_element(child):
            items.append(node)
            return items
        if is_item and is_heading_element(child):
            items.append(child)
            return items
        collect_list_items(child, items)
    return items


def walk_list(node: HtmlNode, build: DocumentBuild) -> int:
    """Append one paragraph per list item below ``node`` to ``build``.

    Each item paragraph is followed by the paragraphs of the lists nested in
    the item, so deeper levels appear right after their parent item.

    Returns
    -------
    int
        Number of paragraphs appended.

    """
    appended = 0
    for item in collect_list_items(node):
        runs: list[Run] = []
        resolve_run_attributes(item, runs)
        build.append(Paragraph(attributes=resolve_paragraph_attributes(item), children=runs))
        appended += 1

        for child in item.children:
            appended += walk_list(child, build)

    return appended


__all__ = ["collect_list_items", "walk_list"]

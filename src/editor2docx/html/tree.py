#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/html/tree.py
"""HTML parsing adapter.

BeautifulSoup tokenizes the editor markup; this module copies the result into
a small, read-only node tree (``HtmlNode``) with exactly the surface the
converter relies on: node type, tag name, attribute map, decoded text,
ordered children and a weak back-reference to the parent.

Comments, doctypes, CDATA sections and processing instructions are dropped
while copying, so every node is either a tag, a text node or the root.

"""

from __future__ import annotations

import logging
import weakref
from typing import Callable, Iterator, Optional

from editor2docx.constants import BODY_TAG, DEFAULT_HTML_PARSER, DEPS_HTML, MAX_TREE_DEPTH, NodeType
from editor2docx.exceptions import ParseError
from editor2docx.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


class HtmlNode:
    """One node of the parsed editor markup.

    Parameters
    ----------
    type : {"tag", "text", "root"}
        Node kind. ``root`` is the parse result itself.
    name : str or None
        Lower-case tag name, only for ``tag`` nodes.
    attribs : dict[str, str] or None
        Attribute map, only for ``tag`` nodes. The ``class`` attribute is
        kept as the raw string the editor wrote.
    data : str or None
        Decoded text (entities resolved), only for ``text`` nodes.

    """

    __slots__ = ("type", "name", "attribs", "data", "children", "_parent", "__weakref__")

    def __init__(
        self,
        type: NodeType,
        name: str | None = None,
        attribs: dict[str, str] | None = None,
        data: str | None = None,
    ):
        self.type = type
        self.name = name
        self.attribs = attribs
        self.data = data
        self.children: list[HtmlNode] = []
        self._parent: Optional[weakref.ReferenceType[HtmlNode]] = None

    @property
    def parent(self) -> HtmlNode | None:
        """The enclosing node, or None for the root."""
        return self._parent() if self._parent is not None else None

    def append(self, child: HtmlNode) -> HtmlNode:
        """Attach ``child`` as the last child of this node and return it."""
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def iter_ancestors(self) -> Iterator[HtmlNode]:
        """Yield the parent, grandparent, ... up to and including the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter_subtree(self) -> Iterator[HtmlNode]:
        """Yield this node and all descendants in document (pre-)order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_first(self, predicate: Callable[[HtmlNode], bool]) -> HtmlNode | None:
        """Return the first node of the subtree, in document order, matching ``predicate``."""
        for node in self.iter_subtree():
            if predicate(node):
                return node
        return None

    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value, or None when the node has no such attribute."""
        if not self.attribs:
            return None
        return self.attribs.get(name)

    def __repr__(self) -> str:
        if self.type == "text":
            return f"HtmlNode(text={self.data!r})"
        if self.type == "root":
            return f"HtmlNode(root, children={len(self.children)})"
        return f"HtmlNode(<{self.name}>, attribs={self.attribs!r}, children={len(self.children)})"


def _normalize_attribs(attrs: dict) -> dict[str, str]:
    # Builders other than html.parser may still hand back list values
    return {key: " ".join(value) if isinstance(value, list) else str(value) for key, value in attrs.items()}


@requires_dependencies("html", DEPS_HTML)
def parse_html(html: str, parser: str = DEFAULT_HTML_PARSER) -> HtmlNode:
    """Parse editor HTML into an ``HtmlNode`` tree.

    Parameters
    ----------
    html : str
        The markup to parse.
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use.

    Returns
    -------
    HtmlNode
        The ``root`` node of the tree.

    Raises
    ------
    ParseError
        If the input is not a string, the builder is unavailable or fails, or
        the markup nests deeper than ``MAX_TREE_DEPTH``.

    """
    from bs4 import BeautifulSoup, FeatureNotFound
    from bs4.element import NavigableString, PreformattedString, Tag

    if not isinstance(html, str):
        raise ParseError(f"HTML input must be a string, got {type(html).__name__}", parsing_stage="input")

    try:
        soup = BeautifulSoup(html, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise ParseError(
            f"HTML tree builder not available: {parser}", parsing_stage="tree_building", original_error=e
        ) from e
    except Exception as e:
        raise ParseError(f"Failed to parse HTML: {e!r}", parsing_stage="tokenizing", original_error=e) from e

    root = HtmlNode("root")
    stack = [(soup, root, 0)]
    while stack:
        source, target, depth = stack.pop()
        if depth > MAX_TREE_DEPTH:
            raise ParseError(f"HTML nesting exceeds {MAX_TREE_DEPTH} levels", parsing_stage="tree_building")
        for child in source.children:
            if isinstance(child, PreformattedString):
                continue
            if isinstance(child, NavigableString):
                target.append(HtmlNode("text", data=str(child)))
            elif isinstance(child, Tag):
                node = target.append(HtmlNode("tag", name=child.name, attribs=_normalize_attribs(child.attrs)))
                stack.append((child, node, depth + 1))

    logger.debug("Parsed HTML into %d top-level nodes", len(root.children))
    return root


def find_body(root: HtmlNode) -> HtmlNode:
    """Return the ``body`` element, or ``root`` itself for body-less fragments."""
    body = root.find_first(lambda node: node.type == "tag" and node.name == BODY_TAG)
    return body if body is not None else root

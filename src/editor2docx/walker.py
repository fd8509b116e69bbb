#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/walker.py
"""Top-level traversal of the document body.

Each direct child of ``<body>`` is dispatched, in document order, to one of
three builders:

- list containers go to the list flattener;
- paragraph-level elements become one paragraph (images met on the way are
  materialized and emitted as image blocks first);
- bare inline content becomes a paragraph without block attributes.

"""

from __future__ import annotations

import logging

from editor2docx.html.classify import is_list_element, is_paragraph_element
from editor2docx.html.tree import HtmlNode
from editor2docx.images import materialize_image
from editor2docx.lists import walk_list
from editor2docx.model import DocumentBuild, ImageBlock, Paragraph, ParagraphAttributes, Run
from editor2docx.options import ConverterOptions
from editor2docx.styles import ImageReference, resolve_paragraph_attributes, resolve_run_attributes

logger = logging.getLogger(__name__)


class DocumentTreeWalker:
    """Turn the children of a document body into blocks of a ``DocumentBuild``.

    Parameters
    ----------
    build : DocumentBuild
        Receives the blocks.
    options : ConverterOptions, optional
        Image destination and network settings.

    """

    def __init__(self, build: DocumentBuild, options: ConverterOptions | None = None):
        self.build = build
        self.options = options or ConverterOptions()

    def walk(self, body: HtmlNode) -> DocumentBuild:
        for child in body.children:
            if is_list_element(child):
                walk_list(child, self.build)
            elif is_paragraph_element(child):
                self._paragraph_element(child)
            else:
                self._text_element(child)
        logger.debug(f"Walked {len(body.children)} body children into {len(self.build)} blocks")
        return self.build

    def _emit_image(self, reference: ImageReference) -> None:
        path = materialize_image(reference.source, self.options.output_dir, self.options)
        self.build.append(ImageBlock(path=path, source=reference.source or ""))

    def _resolve(self, node: HtmlNode, attributes: ParagraphAttributes) -> tuple[ParagraphAttributes, bool]:
        resolved = resolve_paragraph_attributes(node, attributes)
        if isinstance(resolved, ImageReference):
            self._emit_image(resolved)
            return attributes, True
        return resolved, False

    def _paragraph_element(self, node: HtmlNode) -> None:
        # The chain of every grandchild passes through ``node`` again; fields
        # set on the first pass are kept, so the repeat only adds what the
        # grandchild itself carries.
        attributes, found_image = self._resolve(node, ParagraphAttributes())
        runs: list[Run] = []
        for child in node.children:
            attributes, child_is_image = self._resolve(child, attributes)
            found_image = found_image or child_is_image
            resolve_run_attributes(child, runs)

        if found_image and not runs:
            return
        self.build.append(Paragraph(attributes=attributes, children=runs))

    def _text_element(self, node: HtmlNode) -> None:
        runs: list[Run] = []
        resolve_run_attributes(node, runs)
        self.build.append(Paragraph(children=runs))


__all__ = ["DocumentTreeWalker"]

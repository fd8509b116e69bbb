#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/renderer.py
"""DOCX assembly of a finished block sequence.

This module provides the DocxAssembler class which writes the blocks of a
``DocumentBuild`` into a Word document with python-docx and returns the
``.docx`` bytes.

Every document carries the same global configuration:

- a paragraph style ``code`` (based on Normal, fixed-width font, 12pt);
- a numbering definition ``numberLi`` with three decimal levels, each
  rendered as ``%1.`` and left aligned, used by ``<ol>`` items;
- a bullet numbering definition used by ``<ul class="bullet">`` items.

Indent decorations are rendered as plain left indentation.

"""

from __future__ import annotations

import logging
import re
from io import BytesIO
from typing import Any

from editor2docx.constants import (
    BULLET_LEVEL_COUNT,
    BULLET_SYMBOLS,
    CODE_STYLE_ID,
    DEPS_DOCX_RENDER,
    INDENT_STEP_INCHES,
    LIST_HANGING_TWIPS,
    LIST_INDENT_STEP_TWIPS,
    NUMBERING_LEVEL_COUNT,
    NUMBERING_LEVEL_TEXT,
)
from editor2docx.exceptions import Editor2DocxError, SerializationError
from editor2docx.model import DocumentBuild, ImageBlock, ListDecoration, Paragraph, Run
from editor2docx.options import ConverterOptions
from editor2docx.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_LINE_BREAKS_RE = re.compile(r"[\r\n]+")


class DocxAssembler:
    """Write a block sequence into a Word document.

    Parameters
    ----------
    options : ConverterOptions or None, default = None
        Code style font and image sizing options

    Examples
    --------
        >>> build = DocumentBuild(title="Minutes")
        >>> build.append(Paragraph(children=[Run("Hello")]))
        >>> data = build.finalize(DocxAssembler())

    """

    def __init__(self, options: ConverterOptions | None = None):
        """Initialize the assembler with options."""
        self.options = options or ConverterOptions()
        self.document: Any = None  # python-docx Document
        self._bullet_num_id: int | None = None
        self._number_num_id: int | None = None

    @requires_dependencies("docx", DEPS_DOCX_RENDER)
    def assemble(self, build: DocumentBuild) -> bytes:
        """Serialize ``build`` to DOCX bytes.

        Parameters
        ----------
        build : DocumentBuild
            Blocks and metadata of one conversion

        Returns
        -------
        bytes
            The ``.docx`` file content

        Raises
        ------
        SerializationError
            If python-docx rejects any part of the document

        """
        from docx import Document
        from docx.enum.style import WD_STYLE_TYPE
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.oxml import parse_xml
        from docx.oxml.ns import nsdecls, qn
        from docx.shared import Emu, Inches, Pt, RGBColor

        self._WD_STYLE_TYPE = WD_STYLE_TYPE
        self._WD_ALIGN_PARAGRAPH = WD_ALIGN_PARAGRAPH
        self._parse_xml = parse_xml
        self._nsdecls = nsdecls
        self._qn = qn
        self._Emu = Emu
        self._Inches = Inches
        self._Pt = Pt
        self._RGBColor = RGBColor

        try:
            self.document = Document()
            self._set_document_properties(build)
            self._add_code_style()
            self._number_num_id = self._add_numbering_definition(
                [("decimal", NUMBERING_LEVEL_TEXT)] * NUMBERING_LEVEL_COUNT
            )
            self._bullet_num_id = self._add_numbering_definition(
                [("bullet", BULLET_SYMBOLS[i % len(BULLET_SYMBOLS)]) for i in range(BULLET_LEVEL_COUNT)]
            )

            for block in build.blocks:
                if isinstance(block, ImageBlock):
                    self._add_image(block)
                else:
                    self._add_paragraph(block)

            buffer = BytesIO()
            self.document.save(buffer)
        except Editor2DocxError:
            raise
        except Exception as e:
            raise SerializationError(
                f"Failed to assemble DOCX: {e!r}", rendering_stage="assembly", original_error=e
            ) from e
        finally:
            self.document = None

        return buffer.getvalue()

    def _set_document_properties(self, build: DocumentBuild) -> None:
        core_props = self.document.core_properties
        if build.title:
            core_props.title = build.title
        if build.creator:
            core_props.author = build.creator
            core_props.last_modified_by = build.creator

    def _add_code_style(self) -> None:
        """Add the ``code`` paragraph style used by ``<code>`` paragraphs."""
        styles = self.document.styles
        style = styles.add_style(CODE_STYLE_ID, self._WD_STYLE_TYPE.PARAGRAPH)
        style.base_style = styles["Normal"]
        style.next_paragraph_style = styles["Normal"]
        style.font.name = self.options.code_font
        style.font.size = self._Pt(self.options.code_font_size)

    def _add_numbering_definition(self, levels: list[tuple[str, str]]) -> int:
        """Register an abstract numbering with one ``(format, text)`` per level.

        Returns
        -------
        int
            The ``numId`` paragraphs reference to use this numbering.

        """
        numbering = self.document.part.numbering_part.element
        existing = numbering.findall(self._qn("w:abstractNum"))
        abstract_id = max((int(item.get(self._qn("w:abstractNumId"))) for item in existing), default=-1) + 1

        level_xml = "".join(
            f'<w:lvl w:ilvl="{ilvl}">'
            f'<w:start w:val="1"/>'
            f'<w:numFmt w:val="{num_format}"/>'
            f'<w:lvlText w:val="{text}"/>'
            f'<w:lvlJc w:val="left"/>'
            f'<w:pPr><w:ind w:left="{LIST_INDENT_STEP_TWIPS * (ilvl + 1)}" w:hanging="{LIST_HANGING_TWIPS}"/></w:pPr>'
            f"</w:lvl>"
            for ilvl, (num_format, text) in enumerate(levels)
        )
        abstract = self._parse_xml(
            f'<w:abstractNum {self._nsdecls("w")} w:abstractNumId="{abstract_id}">'
            f'<w:multiLevelType w:val="hybridMultilevel"/>{level_xml}</w:abstractNum>'
        )

        # Schema order: every abstractNum precedes the first num
        if existing:
            existing[-1].addnext(abstract)
        else:
            numbering.insert(0, abstract)

        return numbering.add_num(abstract_id).numId

    def _apply_numbering(self, paragraph: Any, num_id: int, level: int) -> None:
        num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
        num_pr.get_or_add_ilvl().val = level
        num_pr.get_or_add_numId().val = num_id

    def _apply_decoration(self, paragraph: Any, decoration: ListDecoration) -> None:
        if decoration.kind == "bullet":
            self._apply_numbering(paragraph, self._bullet_num_id, min(decoration.level, BULLET_LEVEL_COUNT - 1))
        elif decoration.kind == "numbering":
            self._apply_numbering(paragraph, self._number_num_id, min(decoration.level, NUMBERING_LEVEL_COUNT - 1))
        else:
            paragraph.paragraph_format.left_indent = self._Inches(INDENT_STEP_INCHES * (decoration.level + 1))

    def _add_paragraph(self, block: Paragraph) -> None:
        attributes = block.attributes
        paragraph = self.document.add_paragraph()

        # A heading inside <code> keeps the heading style
        if attributes.heading is not None:
            paragraph.style = self.document.styles[f"Heading {attributes.heading.value}"]
        elif attributes.style is not None:
            paragraph.style = self.document.styles[attributes.style]

        if attributes.alignment is not None:
            paragraph.alignment = getattr(self._WD_ALIGN_PARAGRAPH, attributes.alignment.name)

        if attributes.decoration is not None:
            self._apply_decoration(paragraph, attributes.decoration)

        for run in block.children:
            self._add_run(paragraph, run)

    def _add_run(self, paragraph: Any, run: Run) -> None:
        docx_run = paragraph.add_run(_LINE_BREAKS_RE.sub(" ", run.text))
        run_format = run.format
        if run_format.bold:
            docx_run.bold = True
        if run_format.italic:
            docx_run.italic = True
        if run_format.underline:
            docx_run.underline = True
        if run_format.strike:
            docx_run.font.strike = True
        if run_format.color:
            docx_run.font.color.rgb = self._RGBColor.from_string(run_format.color)
        if run_format.size:
            docx_run.font.size = self._Pt(run_format.size / 2)

    def _add_image(self, block: ImageBlock) -> None:
        paragraph = self.document.add_paragraph()
        shape = paragraph.add_run().add_picture(block.path)

        if self.options.max_image_width_inches is not None:
            max_width = self._Inches(self.options.max_image_width_inches)
            if shape.width > max_width:
                shape.height = self._Emu(int(shape.height * max_width / shape.width))
                shape.width = max_width


__all__ = ["DocxAssembler"]

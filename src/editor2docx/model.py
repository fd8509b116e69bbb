#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/model.py
"""Block model produced by the tree walker and consumed by the DOCX assembler.

A conversion appends ``Paragraph`` and ``ImageBlock`` instances, in document
order, to a single ``DocumentBuild``. Formatting records (``RunFormat``,
``ParagraphAttributes``, ``ListDecoration``) are immutable; accumulating
formatting always produces a new record.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from editor2docx.constants import DecorationKind
from editor2docx.exceptions import SerializationError

if TYPE_CHECKING:
    from editor2docx.renderer import DocxAssembler

logger = logging.getLogger(__name__)


class HeadingLevel(Enum):
    """Word heading level of a paragraph."""

    HEADING_1 = 1
    HEADING_2 = 2
    HEADING_3 = 3
    HEADING_4 = 4
    HEADING_5 = 5
    HEADING_6 = 6

    @classmethod
    def from_tag(cls, tag_name: str) -> Optional[HeadingLevel]:
        """Map ``h1``..``h6`` to a level; anything else (including ``h0``) maps to None."""
        try:
            return cls[f"HEADING_{tag_name[1:]}"]
        except KeyError:
            return None


class Alignment(Enum):
    """Paragraph alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class ListDecoration:
    """Bullet, numbering or plain indentation of a paragraph.

    Parameters
    ----------
    kind : {"bullet", "numbering", "indent"}
        Decoration type.
    level : int
        Zero-based nesting depth.
    reference : str or None
        Numbering definition name, only for ``numbering``.

    """

    kind: DecorationKind
    level: int = 0
    reference: Optional[str] = None


@dataclass(frozen=True)
class ParagraphAttributes:
    """Block-level formatting accumulated for one paragraph.

    Each field stays ``None`` until some node on the ancestor chain sets it.
    """

    heading: Optional[HeadingLevel] = None
    alignment: Optional[Alignment] = None
    style: Optional[str] = None
    decoration: Optional[ListDecoration] = None

    def fill_missing(self, other: ParagraphAttributes) -> ParagraphAttributes:
        """Return a copy where fields unset here are taken from ``other``."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None and getattr(other, f.name) is not None
        }
        return replace(self, **updates) if updates else self


@dataclass(frozen=True)
class RunFormat:
    """Inline formatting of a run. Sizes are in half-points."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    color: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class Run:
    """A formatted fragment of text inside a paragraph."""

    text: str
    format: RunFormat = field(default_factory=RunFormat)


@dataclass
class Paragraph:
    """Paragraph block: block-level attributes plus its runs."""

    attributes: ParagraphAttributes = field(default_factory=ParagraphAttributes)
    children: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.children)


@dataclass(frozen=True)
class ImageBlock:
    """Image block referencing a materialized file.

    Parameters
    ----------
    path : str
        Absolute path of the image on disk.
    source : str
        The ``src`` the image was resolved from.

    """

    path: str
    source: str


Block = Union[Paragraph, ImageBlock]


class DocumentBuild:
    """Build state of one conversion.

    Holds the document metadata and the ordered block sequence. Blocks can
    only be appended, and the build can be finalized into DOCX bytes exactly
    once; afterwards it rejects any further change.

    Parameters
    ----------
    title : str or None
        Document title.
    creator : str or None
        Creator written to the document properties.

    """

    def __init__(self, title: str | None = None, creator: str | None = None):
        self.title = title
        self.creator = creator
        self._blocks: list[Block] = []
        self._finalized = False

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def paragraphs(self) -> list[Paragraph]:
        return [block for block in self._blocks if isinstance(block, Paragraph)]

    @property
    def images(self) -> list[ImageBlock]:
        return [block for block in self._blocks if isinstance(block, ImageBlock)]

    @property
    def finalized(self) -> bool:
        return self._finalized

    def append(self, block: Block) -> None:
        if self._finalized:
            raise SerializationError("Cannot append to a finalized document", rendering_stage="blocks")
        self._blocks.append(block)

    def finalize(self, assembler: DocxAssembler) -> bytes:
        """Serialize the blocks with ``assembler`` and close the build."""
        if self._finalized:
            raise SerializationError("Document has already been finalized", rendering_stage="save")
        self._finalized = True
        logger.debug("Finalizing document with %d blocks", len(self._blocks))
        return assembler.assemble(self)

    def __len__(self) -> int:
        return len(self._blocks)


__all__ = [
    "Alignment",
    "Block",
    "DocumentBuild",
    "HeadingLevel",
    "ImageBlock",
    "ListDecoration",
    "Paragraph",
    "ParagraphAttributes",
    "Run",
    "RunFormat",
]

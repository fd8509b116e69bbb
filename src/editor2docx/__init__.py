"""editor2docx - convert rich-text editor HTML into Word documents.

The converter walks the HTML exported by a collaborative rich-text editor
(headings, paragraphs, code blocks, alignment tags, bullet/numbered/indented
lists, inline bold/italic/underline/strike, named colors, pixel font sizes and
images) and produces a ``.docx`` document with python-docx.

Requirements
------------
- Python 3.10+
- beautifulsoup4, python-docx, httpx

Examples
--------
Convert a string of HTML:

    >>> from editor2docx import convert
    >>> data = convert("<html><body><h1>Minutes</h1><p>Opened at 10:00</p></body></html>", title="Minutes")
    >>> with open("minutes.docx", "wb") as fh:
    ...     fh.write(data)

Inspect the blocks without writing a document:

    >>> from editor2docx import HtmlToDocxConverter
    >>> build = HtmlToDocxConverter().build('<ul class="bullet"><li>A</li></ul>')
    >>> build.blocks[0].attributes.decoration
    ListDecoration(kind='bullet', level=0, reference=None)

"""

from editor2docx.converter import HtmlToDocxConverter, convert
from editor2docx.exceptions import (
    DependencyError,
    Editor2DocxError,
    ImageResolutionError,
    ParseError,
    SerializationError,
    ValidationError,
)
from editor2docx.model import (
    Alignment,
    DocumentBuild,
    HeadingLevel,
    ImageBlock,
    ListDecoration,
    Paragraph,
    ParagraphAttributes,
    Run,
    RunFormat,
)
from editor2docx.options import ConverterOptions

__all__ = [
    "Alignment",
    "ConverterOptions",
    "DependencyError",
    "DocumentBuild",
    "Editor2DocxError",
    "HeadingLevel",
    "HtmlToDocxConverter",
    "ImageBlock",
    "ImageResolutionError",
    "ListDecoration",
    "Paragraph",
    "ParagraphAttributes",
    "ParseError",
    "Run",
    "RunFormat",
    "SerializationError",
    "ValidationError",
    "convert",
]

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/editor2docx/converter.py
"""Conversion entry points.

A conversion parses the HTML, walks the body into a fresh ``DocumentBuild``
and finalizes that build into DOCX bytes. Build state is never shared between
conversions, and any failure aborts the whole conversion: there is no
partial document.

"""

from __future__ import annotations

import logging
import os

from editor2docx.exceptions import ValidationError
from editor2docx.html.tree import find_body, parse_html
from editor2docx.model import DocumentBuild
from editor2docx.options import ConverterOptions
from editor2docx.renderer import DocxAssembler
from editor2docx.utils.decorators import debug_timer
from editor2docx.walker import DocumentTreeWalker

logger = logging.getLogger(__name__)


class HtmlToDocxConverter:
    """Convert editor HTML to DOCX.

    Parameters
    ----------
    options : ConverterOptions or None, default = None
        Conversion options. ``title`` and ``output_dir`` on the options
        apply to every conversion run by this instance.

    Examples
    --------
        >>> converter = HtmlToDocxConverter(ConverterOptions(title="Minutes", output_dir="out"))
        >>> data = converter.convert("<html><body><h1>Minutes</h1></body></html>")

    """

    def __init__(self, options: ConverterOptions | None = None):
        if options is not None and not isinstance(options, ConverterOptions):
            raise ValidationError(
                f"options must be ConverterOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options = options or ConverterOptions()

    def build(self, html: str) -> DocumentBuild:
        """Parse ``html`` and collect its blocks without serializing them.

        Raises
        ------
        ParseError
            If the HTML cannot be parsed
        ImageResolutionError
            If an image cannot be materialized

        """
        with debug_timer(logger, "Parsing HTML"):
            root = parse_html(html, self.options.html_parser)

        document = DocumentBuild(title=self.options.title, creator=self.options.creator)
        with debug_timer(logger, "Walking document tree"):
            DocumentTreeWalker(document, self.options).walk(find_body(root))
        return document

    def convert(self, html: str) -> bytes:
        """Convert ``html`` to the bytes of a ``.docx`` file.

        Raises
        ------
        ParseError
            If the HTML cannot be parsed
        ImageResolutionError
            If an image cannot be materialized
        SerializationError
            If the document cannot be assembled

        """
        document = self.build(html)
        with debug_timer(logger, "Assembling DOCX"):
            data = document.finalize(DocxAssembler(self.options))
        logger.debug(f"Converted {len(html)} characters of HTML into {len(data)} bytes of DOCX")
        return data


def convert(
    html: str,
    title: str | None = None,
    output_dir: str | os.PathLike[str] | None = None,
    options: ConverterOptions | None = None,
) -> bytes:
    """Convert editor HTML to the bytes of a ``.docx`` file.

    Parameters
    ----------
    html : str
        HTML produced by the rich-text editor.
    title : str, optional
        Document title. Overrides ``options.title``.
    output_dir : str or PathLike, optional
        Where images are materialized (``files`` when unset). A path to a
        file places images in that file's directory. Overrides
        ``options.output_dir``.
    options : ConverterOptions, optional
        Further conversion options.

    Returns
    -------
    bytes
        The DOCX document.

    Raises
    ------
    ParseError
        If the HTML cannot be parsed
    ImageResolutionError
        If an image cannot be downloaded or written
    SerializationError
        If the document cannot be assembled

    Examples
    --------
        >>> data = convert("<html><body><p>Hello</p></body></html>", title="Greeting")
        >>> Path("greeting.docx").write_bytes(data)

    """
    options = options or ConverterOptions()
    overrides = {}
    if title is not None:
        overrides["title"] = title
    if output_dir is not None:
        overrides["output_dir"] = os.fspath(output_dir)
    if overrides:
        options = options.create_updated(**overrides)
    return HtmlToDocxConverter(options).convert(html)


__all__ = ["HtmlToDocxConverter", "convert"]

#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML-to-DOCX conversion.

Options are frozen dataclasses; derive a modified copy with
``create_updated`` instead of mutating an instance.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from editor2docx.constants import (
    DEFAULT_CODE_FONT,
    DEFAULT_CODE_FONT_SIZE,
    DEFAULT_CREATOR,
    DEFAULT_HTML_PARSER,
    DEFAULT_MAX_IMAGE_WIDTH_INCHES,
    DEFAULT_NETWORK_TIMEOUT,
    DEFAULT_VERIFY_TLS,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConverterOptions(CloneFrozenMixin):
    """Configuration options for converting editor HTML to DOCX.

    Parameters
    ----------
    title : str or None, default None
        Document title written to the core properties.
    output_dir : str or None, default None
        Where materialized images are stored. A path whose last component
        contains a dot is treated as a file path and its directory is used.
        ``None`` stores images under ``files/``.
    creator : str or None, default "editor2docx"
        Creator written to the core properties. ``None`` leaves it unset.
    html_parser : str, default "html.parser"
        BeautifulSoup tree builder ("html.parser", "lxml", "html5lib").
    code_font : str, default "Courier New"
        Font of the ``code`` paragraph style.
    code_font_size : int, default 12
        Font size in points of the ``code`` paragraph style.
    verify_tls : bool, default False
        Verify TLS certificates when downloading remote images. Off by default
        to match the editor backend this converter serves; enable it whenever
        image hosts have valid certificates.
    network_timeout : float, default 30.0
        Timeout in seconds for a single image download.
    user_agent : str or None, default None
        User-Agent header for image downloads. Falls back to the
        ``EDITOR2DOCX_USER_AGENT`` environment variable, then to a built-in
        value.
    max_image_width_inches : float or None, default 6.0
        Images wider than this are scaled down proportionally. ``None`` keeps
        the native size.

    """

    title: str | None = field(default=None, metadata={"help": "Document title"})
    output_dir: str | None = field(
        default=None, metadata={"help": "Directory (or file path inside it) where images are stored"}
    )
    creator: str | None = field(
        default=DEFAULT_CREATOR, metadata={"help": "Creator for document metadata (None = unset)"}
    )
    html_parser: str = field(default=DEFAULT_HTML_PARSER, metadata={"help": "BeautifulSoup tree builder"})
    code_font: str = field(default=DEFAULT_CODE_FONT, metadata={"help": "Font of the code paragraph style"})
    code_font_size: int = field(
        default=DEFAULT_CODE_FONT_SIZE, metadata={"help": "Font size (pt) of the code paragraph style", "type": int}
    )
    verify_tls: bool = field(
        default=DEFAULT_VERIFY_TLS, metadata={"help": "Verify TLS certificates of image hosts"}
    )
    network_timeout: float = field(
        default=DEFAULT_NETWORK_TIMEOUT, metadata={"help": "Image download timeout in seconds", "type": float}
    )
    user_agent: str | None = field(default=None, metadata={"help": "User-Agent for image downloads"})
    max_image_width_inches: float | None = field(
        default=DEFAULT_MAX_IMAGE_WIDTH_INCHES,
        metadata={"help": "Scale images down to this width in inches (None = native size)", "type": float},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.code_font_size <= 0:
            raise ValueError(f"code_font_size must be positive, got {self.code_font_size}")

        if self.network_timeout <= 0:
            raise ValueError(f"network_timeout must be positive, got {self.network_timeout}")

        if self.max_image_width_inches is not None and self.max_image_width_inches <= 0:
            raise ValueError(f"max_image_width_inches must be positive, got {self.max_image_width_inches}")


__all__ = ["CloneFrozenMixin", "ConverterOptions"]

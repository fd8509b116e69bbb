#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML tree adapter and node classification for editor markup."""

from editor2docx.html.tree import HtmlNode, find_body, parse_html

__all__ = ["HtmlNode", "find_body", "parse_html"]

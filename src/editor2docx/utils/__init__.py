#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers shared by the editor2docx conversion stages."""

from editor2docx.utils.decorators import debug_timer, requires_dependencies

__all__ = ["debug_timer", "requires_dependencies"]

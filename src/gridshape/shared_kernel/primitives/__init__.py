"""
Shared Kernel primitives.

This package re-exports the grid shape value type and its helpers so that other
modules can import them from one place:

    from gridshape.shared_kernel.primitives import DONTCARE, GridShape, ShapeState
"""

from .grid_shape import DONTCARE, GridShape, GridShapeParseResult
from .grid_shape_text import MAX_AXIS_EXTENT, format_axes_text, parse_axes_text
from .shape_state import ShapeState

__all__ = [
    "DONTCARE",
    "MAX_AXIS_EXTENT",
    "GridShape",
    "GridShapeParseResult",
    "ShapeState",
    "format_axes_text",
    "parse_axes_text",
]

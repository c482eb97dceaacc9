from .grid_shape_errors import (
    GridShapeAxisIndexError,
    GridShapeError,
    GridShapeParseError,
    GridShapeValidationError,
)

__all__ = [
    "GridShapeAxisIndexError",
    "GridShapeError",
    "GridShapeParseError",
    "GridShapeValidationError",
]

from gridshape.shared_kernel.primitives import DONTCARE, GridShape, ShapeState

__all__ = [
    "DONTCARE",
    "GridShape",
    "ShapeState",
]

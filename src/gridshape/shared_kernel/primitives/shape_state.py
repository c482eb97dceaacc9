from __future__ import annotations

from enum import Enum


class ShapeState(str, Enum):
    """
    Negotiation state of a grid shape.

    - UNSPECIFIED: `[]`; every shape starts out here.
    - DONTCARE: `[0]`; dimensions are being resolved, not known yet.
      For example, an input without explicit dimensions can be marked DONTCARE
      so that it later takes the dimensions of the output it is linked to.
    - SPECIFIED: at least one axis, every extent > 0.
    - INVALID: some extent is 0 (and the shape is not `[0]`).
    """

    UNSPECIFIED = "unspecified"
    DONTCARE = "dontcare"
    SPECIFIED = "specified"
    INVALID = "invalid"

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, TextIO

import numpy as np

from gridshape.platform.config import DEFAULT_GRID_SHAPE_CODEC_CONFIG, GridShapeCodecConfig
from gridshape.platform.errors import (
    GridShapeAxisIndexError,
    GridShapeParseError,
    GridShapeValidationError,
)

from .grid_shape_text import MAX_AXIS_EXTENT, format_axes_text, parse_axes_text
from .shape_state import ShapeState

# Extent of the single axis in a don't-care shape: GridShape([DONTCARE]).
DONTCARE = 0


class GridShape:
    """
    GridShape — ordered per-axis extents of a multi-dimensional grid.

    Axis 0 is the one that moves fastest while iterating: in 2D coordinates x, y
    the x extent is `shape[0]` and the y extent is `shape[1]`.

    Invariants:
    - extents are ints in [0, 2**32 - 1] (unsigned 32-bit), order is kept as given;
    - zero extents are kept as given, they mark the shape invalid;
    - `state` is recomputed on every mutation and never stale.

    Special values:
    - `[]` is UNSPECIFIED, the default;
    - `[0]` is DONTCARE, "in process of being specified but not yet resolved".

    `is_specified()` is not the opposite of `is_unspecified()`: it is the opposite
    of `is_invalid()`, which is true whenever the cell count is 0. That includes
    both `[]` and `[0]`.
    """

    __slots__ = ("_axes", "_state")

    DONTCARE = DONTCARE

    def __init__(self, *values: Any) -> None:
        """
        Build a shape from explicit extents or from one iterable of extents.

        Args:
            *values: Either extents given positionally (`GridShape(3, 4)`) or a single
                iterable (`GridShape([3, 4])`, `GridShape(other_shape)`).
        Returns:
            None.
        Assumptions:
            No arguments produce an UNSPECIFIED shape.
        Raises:
            GridShapeValidationError: If any extent is not an unsigned 32-bit int.
        Side Effects:
            None.
        """
        if len(values) == 1 and isinstance(values[0], np.ndarray) and values[0].ndim == 0:
            # 0-d ndarray is iterable by type but holds one scalar.
            extents: Iterable[Any] = (values[0][()],)
        elif len(values) == 1 and not _is_integer_like(values[0]) and isinstance(values[0], Iterable):
            extents = values[0]
        else:
            extents = values
        self._axes: tuple[int, ...] = ()
        self._state = ShapeState.UNSPECIFIED
        self._assign(_normalize_extents(extents))

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> GridShape:
        """Build a shape by copying an iterable of extents verbatim."""
        return cls(tuple(values))

    @classmethod
    def dontcare(cls) -> GridShape:
        return cls((DONTCARE,))

    @classmethod
    def from_numpy_shape(cls, shape: Iterable[int]) -> GridShape:
        """
        Build from a numpy `ndarray.shape`.

        numpy C order moves the last axis fastest, so the axes are reversed.
        """
        return cls(tuple(shape)[::-1])

    @classmethod
    def from_array(cls, values: np.ndarray) -> GridShape:
        try:
            numpy_shape = values.shape
        except AttributeError as error:
            raise GridShapeValidationError(
                f"expected numpy ndarray, got {type(values).__name__}"
            ) from error
        return cls.from_numpy_shape(numpy_shape)

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        config: GridShapeCodecConfig = DEFAULT_GRID_SHAPE_CODEC_CONFIG,
    ) -> GridShape:
        """
        Parse the text form produced by `to_text()`.

        Raises:
            GridShapeParseError: If text is not an unsigned integer list.
        """
        return cls(parse_axes_text(text, config=config))

    @classmethod
    def try_parse(
        cls,
        text: str,
        *,
        config: GridShapeCodecConfig = DEFAULT_GRID_SHAPE_CODEC_CONFIG,
    ) -> GridShapeParseResult:
        """Parse text form into an explicit result instead of raising."""
        try:
            shape = cls.parse(text, config=config)
        except GridShapeParseError as error:
            return GridShapeParseResult(shape=None, error=error)
        return GridShapeParseResult(shape=shape, error=None)

    @property
    def axes(self) -> tuple[int, ...]:
        return self._axes

    @property
    def state(self) -> ShapeState:
        return self._state

    def size(self) -> int:
        """Number of axes."""
        return len(self._axes)

    def axis(self, index: int) -> int:
        """
        Return extent of one axis.

        Args:
            index: Axis index, `0 <= index < size()`.
        Returns:
            int: Axis extent.
        Assumptions:
            Negative indices are not counted from the end.
        Raises:
            GridShapeAxisIndexError: If index is out of range.
            TypeError: If index is a bool or not an integer.
        Side Effects:
            None.
        """
        if isinstance(index, (bool, np.bool_)):
            raise TypeError("axis index must be an int, not bool")
        position = operator.index(index)
        if position < 0 or position >= len(self._axes):
            raise GridShapeAxisIndexError(index=position, size=len(self._axes))
        return self._axes[position]

    def get_count(self) -> int:
        """
        Count of cells in the grid: product of the extents, 0 when there are no axes.

        Python ints are unbounded, so the product is exact and never wraps.
        """
        if not self._axes:
            return 0
        count = 1
        for extent in self._axes:
            count *= extent
        return count

    def is_unspecified(self) -> bool:
        return self._state is ShapeState.UNSPECIFIED

    def is_dontcare(self) -> bool:
        return self._state is ShapeState.DONTCARE

    def is_invalid(self) -> bool:
        # Every state except SPECIFIED has a cell count of 0.
        return self._state is not ShapeState.SPECIFIED

    def is_specified(self) -> bool:
        return not self.is_invalid()

    def set_axes(self, values: Iterable[Any]) -> None:
        """Replace all extents; on validation failure the shape is left unchanged."""
        self._assign(_normalize_extents(values))

    def mark_dontcare(self) -> None:
        self._assign((DONTCARE,))

    def mark_unspecified(self) -> None:
        self._assign(())

    def copy(self) -> GridShape:
        return GridShape(self._axes)

    def to_text(self) -> str:
        """Text form, e.g. `[3, 4, 5]`."""
        return format_axes_text(self._axes)

    def serialize(self, sink: TextIO) -> None:
        """Write the text form followed by a newline to a text sink."""
        sink.write(self.to_text() + "\n")

    def read_from(
        self,
        source: TextIO,
        *,
        config: GridShapeCodecConfig = DEFAULT_GRID_SHAPE_CODEC_CONFIG,
    ) -> None:
        """
        Replace extents with one shape read from a text source.

        Args:
            source: Text source positioned at a line written by `serialize()`.
            config: Codec limits.
        Returns:
            None.
        Assumptions:
            One shape per line.
        Raises:
            GridShapeParseError: If the line is malformed or the source is exhausted.
        Side Effects:
            Consumes one line from `source`. The shape is unchanged on failure.
        """
        line = source.readline()
        if not line:
            raise GridShapeParseError(reason="end of input", text="")
        self._assign(parse_axes_text(line, config=config))

    def to_numpy_shape(self) -> tuple[int, ...]:
        """
        Return extents in numpy C order (slowest axis first) for `np.empty(...)`.

        Raises:
            GridShapeValidationError: If shape is not SPECIFIED.
        """
        if not self.is_specified():
            raise GridShapeValidationError(
                f"cannot convert {self._state.value} shape {self.to_text()} to numpy shape"
            )
        return self._axes[::-1]

    def as_array(self) -> np.ndarray:
        return np.array(self._axes, dtype=np.uint32)

    def _assign(self, extents: tuple[int, ...]) -> None:
        self._axes = extents
        self._state = _classify(extents)

    def __len__(self) -> int:
        return len(self._axes)

    def __getitem__(self, index: int) -> int:
        return self.axis(index)

    def __iter__(self) -> Iterator[int]:
        return iter(self._axes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridShape):
            return NotImplemented
        return self._axes == other._axes

    # Mutable value: not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> GridShape:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> GridShape:
        return self.copy()

    def __repr__(self) -> str:
        return f"GridShape({list(self._axes)!r})"

    def __str__(self) -> str:
        return self.to_text()


@dataclass(frozen=True, slots=True)
class GridShapeParseResult:
    """
    Outcome of `GridShape.try_parse`: exactly one of `shape` and `error` is set.
    """

    shape: GridShape | None
    error: GridShapeParseError | None

    def __post_init__(self) -> None:
        if (self.shape is None) == (self.error is None):
            raise ValueError("GridShapeParseResult requires exactly one of shape or error")

    @property
    def ok(self) -> bool:
        return self.shape is not None


def _classify(extents: tuple[int, ...]) -> ShapeState:
    if not extents:
        return ShapeState.UNSPECIFIED
    if extents == (DONTCARE,):
        return ShapeState.DONTCARE
    if 0 in extents:
        return ShapeState.INVALID
    return ShapeState.SPECIFIED


def _is_integer_like(value: Any) -> bool:
    return isinstance(value, (int, np.integer))


def _normalize_extents(values: Iterable[Any]) -> tuple[int, ...]:
    """
    Validate extents and freeze them into a tuple of plain ints.

    Args:
        values: Candidate extents.
    Returns:
        tuple[int, ...]: Extents in input order.
    Assumptions:
        numpy integer scalars are accepted and converted to `int`.
    Raises:
        GridShapeValidationError: If any extent is bool, non-integer or outside
            [0, 2**32 - 1].
    Side Effects:
        None.
    """
    if isinstance(values, (str, bytes)) or getattr(values, "ndim", None) == 0:
        raise GridShapeValidationError(
            f"extents must be an iterable of ints, got {type(values).__name__}"
        )
    normalized: list[int] = []
    for position, value in enumerate(values):
        # bool is a subclass of int, but True/False are never extents.
        if isinstance(value, (bool, np.bool_)) or not _is_integer_like(value):
            raise GridShapeValidationError(
                f"extent {position} must be an int, got {value!r}"
            )
        extent = int(value)
        if extent < 0 or extent > MAX_AXIS_EXTENT:
            raise GridShapeValidationError(
                f"extent {position} must fit UInt32 [0, {MAX_AXIS_EXTENT}], got {extent}"
            )
        normalized.append(extent)
    return tuple(normalized)

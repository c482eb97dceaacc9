from __future__ import annotations

from typing import Any, Mapping

_TEXT_PREVIEW_LIMIT = 64


class GridShapeError(Exception):
    """
    GridShapeError — canonical error contract for grid shape failures.

    Carries a stable machine-readable `code` so that collaborators which persist
    or transport shapes can map failures without parsing messages.
    """

    code: str = "grid_shape_error"

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        """
        Build error with normalized message and optional details payload.

        Args:
            message: Human-readable failure description.
            details: Optional JSON-like diagnostic payload.
        Returns:
            None.
        Assumptions:
            Subclasses override `code` as a class attribute.
        Raises:
            ValueError: If `message` is blank.
            TypeError: If `details` is not mapping-compatible when provided.
        Side Effects:
            Stores a deterministic plain copy of `details`.
        """
        normalized_message = message.strip()
        if not normalized_message:
            raise ValueError(f"{type(self).__name__}.message must be non-empty")
        super().__init__(normalized_message)
        self.message = normalized_message

        if details is None:
            self.details: Mapping[str, Any] | None = None
            return
        if not isinstance(details, Mapping):
            raise TypeError(f"{type(self).__name__}.details must be a mapping when provided")
        self.details = _to_plain(dict(details))

    def to_payload(self) -> dict[str, Any]:
        """
        Build deterministic payload representation.

        Args:
            None.
        Returns:
            dict[str, Any]: `{"error": {"code", "message", "details"}}` payload.
        Assumptions:
            `details` payload is already normalized during initialization.
        Raises:
            None.
        Side Effects:
            None.
        """
        details_payload: Mapping[str, Any] = self.details if self.details is not None else {}
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(details_payload),
            }
        }


class GridShapeAxisIndexError(GridShapeError, IndexError):
    """Raised when an axis index is outside `0 <= index < size()`."""

    code = "axis_index_out_of_range"

    def __init__(self, *, index: int, size: int) -> None:
        super().__init__(
            f"axis index {index} out of range for shape with {size} axes",
            details={"index": index, "size": size},
        )
        self.index = index
        self.size = size


class GridShapeParseError(GridShapeError, ValueError):
    """
    Raised when text does not match the ordered unsigned integer list grammar.

    The offending text is kept in `details` as a truncated preview only.
    """

    code = "grid_shape_parse_error"

    def __init__(self, *, reason: str, text: str) -> None:
        super().__init__(
            f"cannot parse grid shape: {reason}",
            details={"reason": reason, "text": _preview(text)},
        )
        self.reason = reason


class GridShapeValidationError(GridShapeError, ValueError):
    """Raised when an extent is not an unsigned integer of the supported width."""

    code = "grid_shape_invalid_extent"


def _preview(text: str) -> str:
    if len(text) <= _TEXT_PREVIEW_LIMIT:
        return text
    return text[:_TEXT_PREVIEW_LIMIT] + "..."


def _to_plain(value: Any) -> Any:
    """Copy details into key-sorted dicts, lists and JSON scalars; other values become `str`."""
    if isinstance(value, Mapping):
        return {str(key): _to_plain(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if value is None or isinstance(value, (str, int, float)):
        return value
    return str(value)

from __future__ import annotations

import pytest

from gridshape.platform.errors import (
    GridShapeAxisIndexError,
    GridShapeError,
    GridShapeParseError,
    GridShapeValidationError,
)


def test_grid_shape_errors_keep_builtin_exception_families() -> None:
    assert issubclass(GridShapeAxisIndexError, IndexError)
    assert issubclass(GridShapeParseError, ValueError)
    assert issubclass(GridShapeValidationError, ValueError)
    for error_type in (GridShapeAxisIndexError, GridShapeParseError, GridShapeValidationError):
        assert issubclass(error_type, GridShapeError)


def test_axis_index_error_payload_has_index_and_size() -> None:
    error = GridShapeAxisIndexError(index=3, size=2)

    assert error.to_payload() == {
        "error": {
            "code": "axis_index_out_of_range",
            "message": "axis index 3 out of range for shape with 2 axes",
            "details": {"index": 3, "size": 2},
        }
    }


def test_parse_error_truncates_long_text_preview() -> None:
    error = GridShapeParseError(reason="malformed sequence", text="[" + "1, " * 100)

    preview = error.details["text"]  # type: ignore[index]

    assert preview.endswith("...")
    assert len(preview) == 64 + 3
    assert str(error) == "cannot parse grid shape: malformed sequence"


def test_grid_shape_error_normalizes_details_and_rejects_blank_message() -> None:
    error = GridShapeValidationError(" bad extent ", details={"b": (1, 2), "a": object})

    assert error.message == "bad extent"
    assert list(error.details) == ["a", "b"]  # type: ignore[arg-type]
    assert error.details["b"] == [1, 2]  # type: ignore[index]
    assert error.to_payload()["error"]["code"] == "grid_shape_invalid_extent"

    with pytest.raises(ValueError):
        GridShapeError("   ")
    with pytest.raises(TypeError):
        GridShapeError("boom", details=[("a", 1)])  # type: ignore[arg-type]

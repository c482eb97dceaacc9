"""
Text form of grid shape axes.

The text form is a YAML sequence of unsigned integers as emitted by the generic
PyYAML flow-style sequence emitter, e.g. `[3, 4, 5]` or `[]`.
"""

from __future__ import annotations

from typing import Sequence

import yaml
from yaml.resolver import BaseResolver

from gridshape.platform.config import DEFAULT_GRID_SHAPE_CODEC_CONFIG, GridShapeCodecConfig
from gridshape.platform.errors import GridShapeParseError

# Extent width: unsigned 32-bit.
MAX_AXIS_EXTENT = 2**32 - 1


def format_axes_text(axes: Sequence[int]) -> str:
    """
    Render axis extents as a single-line flow-style YAML sequence.

    Args:
        axes: Axis extents, axis 0 first.
    Returns:
        str: Text form without trailing newline.
    Assumptions:
        Extents were validated by the caller.
    Raises:
        None.
    Side Effects:
        None.
    """
    rendered = yaml.safe_dump(
        [int(extent) for extent in axes],
        default_flow_style=True,
        width=float("inf"),
    )
    return rendered.strip()


def parse_axes_text(
    text: str,
    *,
    config: GridShapeCodecConfig = DEFAULT_GRID_SHAPE_CODEC_CONFIG,
) -> tuple[int, ...]:
    """
    Parse text form into a tuple of axis extents.

    Args:
        text: Text form, e.g. `[3, 4, 5]`.
        config: Codec limits.
    Returns:
        tuple[int, ...]: Parsed extents in text order.
    Assumptions:
        Any YAML sequence syntax is accepted, not only the flow style we emit;
            items must be plain decimal digits.
    Raises:
        GridShapeParseError: If text violates the unsigned integer list grammar
            or the configured limits.
    Side Effects:
        None.
    """
    if not isinstance(text, str):
        raise GridShapeParseError(reason="input must be str", text=repr(text))
    if len(text) > config.max_text_chars:
        raise GridShapeParseError(
            reason=f"text longer than {config.max_text_chars} chars",
            text=text,
        )
    if not text.strip():
        raise GridShapeParseError(reason="empty input", text=text)

    # BaseLoader composes nodes without running any type constructor.
    try:
        document = yaml.compose(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as error:
        raise GridShapeParseError(reason="malformed sequence", text=text) from error

    if not isinstance(document, yaml.SequenceNode):
        raise GridShapeParseError(reason="expected a sequence of integers", text=text)
    if len(document.value) > config.max_axes:
        raise GridShapeParseError(
            reason=f"more than {config.max_axes} axes",
            text=text,
        )

    return tuple(
        _decimal_extent(node, position=position, text=text)
        for position, node in enumerate(document.value)
    )


def _decimal_extent(node: yaml.Node, *, position: int, text: str) -> int:
    """
    Convert one sequence item into an extent.

    Only plain, untagged, base-10 digit scalars are extents: `017` reads as 17,
    while `0x10`, `1_000`, `1:30`, quoted or tagged scalars are rejected.
    """
    if (
        not isinstance(node, yaml.ScalarNode)
        or node.style is not None
        or node.tag != BaseResolver.DEFAULT_SCALAR_TAG
    ):
        raise GridShapeParseError(
            reason=f"item {position} is not a plain integer",
            text=text,
        )
    raw = node.value
    if not (raw.isascii() and raw.isdigit()):
        raise GridShapeParseError(
            reason=f"item {position} is not a decimal integer: {raw!r}",
            text=text,
        )
    extent = int(raw, 10)
    if extent > MAX_AXIS_EXTENT:
        raise GridShapeParseError(
            reason=f"item {position} outside [0, {MAX_AXIS_EXTENT}]: {extent}",
            text=text,
        )
    return extent

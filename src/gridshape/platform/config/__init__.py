from .grid_shape_codec import (
    DEFAULT_GRID_SHAPE_CODEC_CONFIG,
    GridShapeCodecConfig,
    load_grid_shape_codec_config,
)

__all__ = [
    "DEFAULT_GRID_SHAPE_CODEC_CONFIG",
    "GridShapeCodecConfig",
    "load_grid_shape_codec_config",
]

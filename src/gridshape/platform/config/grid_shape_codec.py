"""
Runtime config loader for the grid shape text codec.

Related: gridshape.shared_kernel.primitives.grid_shape_text,
  gridshape.shared_kernel.primitives.grid_shape
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

log = logging.getLogger(__name__)

_ENV_PREFIX = "GRIDSHAPE_"
_ENV_NAME_KEY = "GRIDSHAPE_ENV"
_CONFIG_PATH_KEY = "GRIDSHAPE_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")

_DEFAULT_MAX_AXES = 32
_DEFAULT_MAX_TEXT_CHARS = 4096


@dataclass(frozen=True, slots=True)
class GridShapeCodecConfig:
    """
    Immutable limits applied when parsing grid shapes from text.

    Related: gridshape.shared_kernel.primitives.grid_shape_text
    """

    max_axes: int = _DEFAULT_MAX_AXES
    max_text_chars: int = _DEFAULT_MAX_TEXT_CHARS

    def __post_init__(self) -> None:
        """
        Validate codec limit invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Both limits are positive integers.
        Raises:
            ValueError: If any value violates required bounds.
        Side Effects:
            None.
        """
        if type(self.max_axes) is not int or self.max_axes <= 0:  # noqa: E721
            raise ValueError(f"max_axes must be > 0, got {self.max_axes!r}")
        if type(self.max_text_chars) is not int or self.max_text_chars <= 0:  # noqa: E721
            raise ValueError(f"max_text_chars must be > 0, got {self.max_text_chars!r}")


DEFAULT_GRID_SHAPE_CODEC_CONFIG = GridShapeCodecConfig()


def load_grid_shape_codec_config(
    *,
    environ: Mapping[str, str] | None = None,
) -> GridShapeCodecConfig:
    """
    Load grid shape codec config from YAML and env overrides.

    Args:
        environ: Environment mapping used to resolve env and override values.
            Defaults to `os.environ`.
    Returns:
        GridShapeCodecConfig: Validated codec settings.
    Assumptions:
        Each limit resolves as `GRIDSHAPE_<LIMIT>` env value, then YAML
        `codec.<limit>`, then the dataclass default.
    Raises:
        FileNotFoundError: If YAML path does not exist.
        ValueError: If YAML or environment values are invalid.
    Side Effects:
        Reads one YAML file from disk and emits one log record.
    """
    if environ is None:
        environ = os.environ
    config_path = _resolve_config_path(environ=environ)
    codec_section = _read_codec_section(config_path)

    config = GridShapeCodecConfig(
        max_axes=_resolve_limit(
            "max_axes", environ=environ, section=codec_section, default=_DEFAULT_MAX_AXES
        ),
        max_text_chars=_resolve_limit(
            "max_text_chars",
            environ=environ,
            section=codec_section,
            default=_DEFAULT_MAX_TEXT_CHARS,
        ),
    )
    log.info(
        "grid_shape codec config loaded",
        extra={
            "config_path": str(config_path),
            "max_axes": config.max_axes,
            "max_text_chars": config.max_text_chars,
        },
    )
    return config


def _resolve_config_path(*, environ: Mapping[str, str]) -> Path:
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override)

    env_name = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if env_name not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {env_name!r}"
        )
    return Path("configs") / env_name / "grid_shape.yaml"


def _read_codec_section(path: Path) -> Mapping[str, Any]:
    """
    Read the optional `codec` mapping of a grid shape YAML file.

    A missing document or a missing `codec` key yields an empty mapping; any other
    non-mapping value at either level is a config error.
    """
    if not path.exists():
        raise FileNotFoundError(f"grid shape config not found: {path}")
    document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(document, dict):
        raise ValueError(f"grid shape config {path} must be a mapping at top-level")
    section = document.get("codec") or {}
    if not isinstance(section, dict):
        raise ValueError(f"codec section of {path} must be a mapping")
    return section


def _resolve_limit(
    name: str,
    *,
    environ: Mapping[str, str],
    section: Mapping[str, Any],
    default: int,
) -> int:
    env_key = _ENV_PREFIX + name.upper()
    raw_env = environ.get(env_key, "").strip()
    if raw_env:
        if not raw_env.isdigit():
            raise ValueError(f"{env_key} must be a positive int, got {raw_env!r}")
        value = int(raw_env, 10)
        source = env_key
    elif name in section:
        value = section[name]
        source = f"codec.{name}"
        # YAML true/false load as bool, which is an int subclass.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{source} must be an int, got {type(value).__name__}")
    else:
        return default

    if value <= 0:
        raise ValueError(f"{source} must be > 0, got {value}")
    return value


__all__ = [
    "DEFAULT_GRID_SHAPE_CODEC_CONFIG",
    "GridShapeCodecConfig",
    "load_grid_shape_codec_config",
]

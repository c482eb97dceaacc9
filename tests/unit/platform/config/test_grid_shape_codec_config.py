from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gridshape.platform.config import (
    DEFAULT_GRID_SHAPE_CODEC_CONFIG,
    GridShapeCodecConfig,
    load_grid_shape_codec_config,
)


def _write_grid_shape_config(tmp_path: Path, *, body: str) -> Path:
    """
    Write temporary grid shape YAML used by config-loader tests.

    Args:
        tmp_path: pytest temporary path fixture.
        body: Full YAML content.
    Returns:
        Path: Written config path.
    Assumptions:
        Input text is valid UTF-8.
    Raises:
        OSError: If write fails.
    Side Effects:
        Creates one temp file.
    """
    config_path = tmp_path / "grid_shape.yaml"
    config_path.write_text(body, encoding="utf-8")
    return config_path


def test_load_grid_shape_codec_config_reads_yaml_codec_section(tmp_path: Path) -> None:
    config_path = _write_grid_shape_config(
        tmp_path,
        body="""
schema_version: 1
codec:
  max_axes: 4
  max_text_chars: 128
""".strip(),
    )
    environ = {
        "GRIDSHAPE_CONFIG": str(config_path),
        "GRIDSHAPE_ENV": "dev",
    }

    config = load_grid_shape_codec_config(environ=environ)

    assert config.max_axes == 4
    assert config.max_text_chars == 128


def test_load_grid_shape_codec_config_env_overrides_have_priority(tmp_path: Path) -> None:
    """
    Verify env overrides take priority over YAML and defaults.

    Args:
        tmp_path: pytest temporary path fixture.
    Returns:
        None.
    Assumptions:
        `GRIDSHAPE_MAX_AXES` overrides YAML, missing keys fall back to defaults.
    Raises:
        AssertionError: If loader does not prioritize env values.
    Side Effects:
        None.
    """
    config_path = _write_grid_shape_config(
        tmp_path,
        body="""
schema_version: 1
codec:
  max_axes: 4
""".strip(),
    )
    environ = {
        "GRIDSHAPE_CONFIG": str(config_path),
        "GRIDSHAPE_MAX_AXES": "9",
    }

    config = load_grid_shape_codec_config(environ=environ)

    assert config.max_axes == 9
    assert config.max_text_chars == DEFAULT_GRID_SHAPE_CODEC_CONFIG.max_text_chars


def test_load_grid_shape_codec_config_without_codec_section_uses_defaults(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    config_path = _write_grid_shape_config(tmp_path, body="schema_version: 1\n")

    with caplog.at_level(logging.INFO, logger="gridshape.platform.config.grid_shape_codec"):
        config = load_grid_shape_codec_config(environ={"GRIDSHAPE_CONFIG": str(config_path)})

    assert config == GridShapeCodecConfig()
    assert "grid_shape codec config loaded" in caplog.text


def test_load_grid_shape_codec_config_rejects_invalid_env_name() -> None:
    with pytest.raises(ValueError):
        load_grid_shape_codec_config(environ={"GRIDSHAPE_ENV": "staging"})


def test_load_grid_shape_codec_config_missing_file_fails_fast(tmp_path: Path) -> None:
    environ = {"GRIDSHAPE_CONFIG": str(tmp_path / "missing.yaml")}

    with pytest.raises(FileNotFoundError):
        load_grid_shape_codec_config(environ=environ)


@pytest.mark.parametrize(
    ("body", "environ_extra"),
    [
        ("codec:\n  max_axes: 0\n", {}),
        ("codec:\n  max_axes: true\n", {}),
        ("codec:\n  max_text_chars: '64'\n", {}),
        ("codec: [1, 2]\n", {}),
        ("- not a mapping\n", {}),
        ("schema_version: 1\n", {"GRIDSHAPE_MAX_TEXT_CHARS": "abc"}),
        ("schema_version: 1\n", {"GRIDSHAPE_MAX_AXES": "-3"}),
    ],
)
def test_load_grid_shape_codec_config_rejects_invalid_values(
    tmp_path: Path,
    body: str,
    environ_extra: dict[str, str],
) -> None:
    config_path = _write_grid_shape_config(tmp_path, body=body)
    environ = {"GRIDSHAPE_CONFIG": str(config_path), **environ_extra}

    with pytest.raises(ValueError):
        load_grid_shape_codec_config(environ=environ)


def test_grid_shape_codec_config_rejects_non_positive_limits() -> None:
    with pytest.raises(ValueError):
        GridShapeCodecConfig(max_axes=0)
    with pytest.raises(ValueError):
        GridShapeCodecConfig(max_text_chars=-1)


def test_repository_configs_load_for_every_env() -> None:
    repo_root = Path(__file__).resolve().parents[4]

    for env_name in ("dev", "prod", "test"):
        config_path = repo_root / "configs" / env_name / "grid_shape.yaml"
        config = load_grid_shape_codec_config(environ={"GRIDSHAPE_CONFIG": str(config_path)})
        assert config.max_axes > 0
        assert config.max_text_chars > 0

"""
Configuration for the beats server.

Settings live in a small YAML file; anything not set falls back to the
defaults on BeatsConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from chuk_mcp_beats.constants import DEFAULT_BPM, DEFAULT_OCTAVE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "beats.yaml"


class BeatsConfig(BaseModel):
    """Server-wide defaults."""

    default_bpm: int = Field(DEFAULT_BPM, gt=0, description="Tempo for new sequences")
    default_octave: int = Field(DEFAULT_OCTAVE, description="Octave used when a note has none")
    prefer_flats: bool = Field(False, description="Spell transposed notes with flats")
    presets_dir: Path | None = Field(None, description="Project presets directory")


def load_config(path: Path | None = None) -> BeatsConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file (default: ./beats.yaml)

    Returns:
        BeatsConfig, with defaults if the file does not exist

    Raises:
        ValueError: If the file is not a YAML mapping
        pydantic.ValidationError: If a value is out of range
    """
    path = path or Path.cwd() / DEFAULT_CONFIG_NAME
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return BeatsConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    config = BeatsConfig.model_validate(data)
    if config.presets_dir is not None and not config.presets_dir.is_absolute():
        config = config.model_copy(update={"presets_dir": path.parent / config.presets_dir})

    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: BeatsConfig, path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json", exclude_none=True), f, sort_keys=False)

"""
Preset loader - discovers and loads beat presets.

Presets can come from:
1. Built-in library (shipped with package)
2. Project presets (user's project/presets directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_beats.models.preset import BeatPreset, PresetMetadata

logger = logging.getLogger(__name__)


class PresetLoader:
    """
    Discovers and loads beat presets.

    Presets are loaded from YAML files in the library and project directories.
    Project presets override library presets with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the preset loader.

        Args:
            library_path: Path to built-in preset library
            project_path: Path to project presets directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, BeatPreset] = {}

    def list_presets(self) -> list[PresetMetadata]:
        """
        List all available presets.

        Returns presets from both library and project, with project
        presets taking precedence.
        """
        presets: dict[str, PresetMetadata] = {}

        if self.library_path.exists():
            for path in sorted(self.library_path.glob("*.yaml")):
                preset = self._load_preset_file(path)
                if preset:
                    presets[preset.name] = PresetMetadata.from_preset(preset, "library")

        if self.project_path and self.project_path.exists():
            for path in sorted(self.project_path.glob("*.yaml")):
                preset = self._load_preset_file(path)
                if preset:
                    presets[preset.name] = PresetMetadata.from_preset(preset, "project")

        return sorted(presets.values(), key=lambda m: m.name)

    def get_preset(self, name: str) -> BeatPreset | None:
        """
        Get a preset by name.

        Project presets take precedence over library presets.

        Args:
            name: Preset name

        Returns:
            BeatPreset if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        candidates = []
        if self.project_path:
            candidates.append(self.project_path / f"{name}.yaml")
        candidates.append(self.library_path / f"{name}.yaml")

        for path in candidates:
            if path.exists():
                preset = self._load_preset_file(path)
                if preset:
                    self._cache[name] = preset
                    return preset

        return None

    def _load_preset_file(self, path: Path) -> BeatPreset | None:
        """Load a preset from a YAML file, None if it is unreadable."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return self._parse_preset(data, default_name=path.stem)
        except (OSError, yaml.YAMLError, ValidationError, ValueError):
            logger.warning("Skipping unreadable preset file %s", path, exc_info=True)
            return None

    def _parse_preset(self, data: dict[str, Any] | None, default_name: str) -> BeatPreset:
        """Parse a preset from YAML data."""
        if not isinstance(data, dict):
            raise ValueError("Preset file must contain a mapping")

        preset = BeatPreset(
            name=data.get("name", default_name),
            description=data.get("description", ""),
            tags=data.get("tags", []),
            steps=data.get("steps", []),
        )
        # Reject presets whose steps cannot be placed
        preset.build()
        return preset

    def clear_cache(self) -> None:
        """Clear the preset cache."""
        self._cache.clear()

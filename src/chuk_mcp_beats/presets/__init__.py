"""
Beat preset library.

Presets are YAML files describing placement steps on an empty beat.
"""

from chuk_mcp_beats.presets.loader import PresetLoader

__all__ = ["PresetLoader"]

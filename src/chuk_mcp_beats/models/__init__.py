"""
Pydantic models for the beats system.

This module provides:
- NoteSpec: Serialisable note
- BeatSpec: Serialisable 8-slot beat
- TimedNoteSpec / SequenceSpec: Serialisable sequence
- BeatPreset / PresetStep: Reusable beat patterns
"""

from chuk_mcp_beats.models.note import BeatSpec, NoteSpec, SequenceSpec, TimedNoteSpec
from chuk_mcp_beats.models.preset import BeatPreset, PresetMetadata, PresetStep

__all__ = [
    "BeatPreset",
    "BeatSpec",
    "NoteSpec",
    "PresetMetadata",
    "PresetStep",
    "SequenceSpec",
    "TimedNoteSpec",
]

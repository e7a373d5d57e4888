"""
Core beat primitives - the layer everything else builds on.

These are the invariants everything else composes on:
- Spelling: The 21 recognised note names
- Quality: Harmonic quality of an interval
- Note: Spelling + octave, with frequency and relationships
- Beat: One beat subdivided into 8 slots of 1/32 note
- Sequence: Ordered timed notes with BPM-based timing
"""

from chuk_mcp_beats.constants import Division, NoteDuration
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.core.note import Note
from chuk_mcp_beats.core.pitch import (
    C5_FREQUENCY,
    HALF_STEP_RATIO,
    INVALID_INDEX,
    Quality,
    Spelling,
    classify_interval,
    frequency,
    frequency_from_offset,
    is_valid_spelling,
    spell_index,
    spelling_to_index,
)
from chuk_mcp_beats.core.sequence import Sequence, TimedNote

__all__ = [
    # Pitch
    "Spelling",
    "Quality",
    "INVALID_INDEX",
    "HALF_STEP_RATIO",
    "C5_FREQUENCY",
    "spelling_to_index",
    "is_valid_spelling",
    "spell_index",
    "frequency",
    "frequency_from_offset",
    "classify_interval",
    # Note
    "Note",
    # Beat
    "Beat",
    "Division",
    # Sequence
    "Sequence",
    "TimedNote",
    "NoteDuration",
]

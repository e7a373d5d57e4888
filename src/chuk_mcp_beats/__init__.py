"""
chuk-mcp-beats - pitches and beat subdivisions for procedural composition.
"""

from chuk_mcp_beats.core import (
    Beat,
    Division,
    Note,
    NoteDuration,
    Quality,
    Sequence,
    Spelling,
    TimedNote,
    classify_interval,
    frequency,
    frequency_from_offset,
    spelling_to_index,
)

__version__ = "0.1.0"

__all__ = [
    "Beat",
    "Division",
    "Note",
    "NoteDuration",
    "Quality",
    "Sequence",
    "Spelling",
    "TimedNote",
    "classify_interval",
    "frequency",
    "frequency_from_offset",
    "spelling_to_index",
]

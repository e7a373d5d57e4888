"""
Constants and enums for the beats system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum, IntEnum
from typing import Literal

# One beat at 1/32-note resolution
BEAT_SLOTS = 8

# Reference pitch (A4) in Hz
A4_FREQUENCY = 440.0

DEFAULT_BPM = 120
DEFAULT_OCTAVE = 5


class Division(str, Enum):
    """Named coarse subdivisions of a beat."""

    QUARTER = "quarter"
    EIGHTH = "eighth"
    SIXTEENTH = "sixteenth"
    THIRTY_SECOND = "thirty_second"


class NoteDuration(IntEnum):
    """
    Note durations in units of 1/32 note.

    One unit is one Beat slot, so Beat runs and Sequence durations
    share the same resolution.
    """

    WHOLE = 32
    HALF = 16
    QUARTER = 8
    EIGHTH = 4
    SIXTEENTH = 2
    THIRTY_SECOND = 1


# Slots covered by each division
DIVISION_SLOTS: dict[Division, int] = {
    Division.QUARTER: BEAT_SLOTS,
    Division.EIGHTH: BEAT_SLOTS // 2,
    Division.SIXTEENTH: BEAT_SLOTS // 4,
    Division.THIRTY_SECOND: 1,
}

Transport = Literal["stdio", "http"]


class ErrorMessages:
    """Standardized error messages."""

    INVALID_SPELLING = "Invalid note spelling: '{spelling}'."
    INVALID_NOTE = "Invalid note: '{note}'. Expected format like 'C5', 'F#4' or 'Bb3'."
    BEAT_NOT_FOUND = "Beat '{name}' not found."
    BEAT_EXISTS = "Beat '{name}' already exists."
    SEQUENCE_NOT_FOUND = "Sequence '{name}' not found."
    SEQUENCE_EXISTS = "Sequence '{name}' already exists."
    PRESET_NOT_FOUND = "Preset '{name}' not found."
    INVALID_PLACEMENT = "Cannot place note at position {position} ({division})."
    INVALID_RANGE = "Cannot fill {length} slot(s) from position {start}."
    INVALID_ARRAY = "Expected {expected} slots, got {actual}."
    INVALID_BPM = "Invalid tempo: {bpm}. BPM must be non-zero."
    FREQUENCY_OUT_OF_RANGE = "Frequency {half_steps} half steps from C5 is out of range."


class SuccessMessages:
    """Standardized success messages."""

    BEAT_CREATED = "Created beat '{name}'."
    BEAT_DUPLICATED = "Duplicated beat '{name}' as '{new_name}'."
    SEQUENCE_CREATED = "Created sequence '{name}'."
    PRESET_APPLIED = "Applied preset '{preset}' to beat '{name}'."

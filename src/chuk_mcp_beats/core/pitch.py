"""
Pitch primitives - Spelling, Quality and frequency arithmetic.

These are the foundational functions for all pitch-related operations.
Spelling is the closed set of recognised note names.
Quality classifies the harmonic distance between two pitches.

Nothing in this module raises on bad input: unknown spellings resolve to
INVALID_INDEX and propagate as sentinels (INVALID quality, NaN frequency).
"""

from __future__ import annotations

import math
from enum import Enum

from chuk_mcp_beats.constants import A4_FREQUENCY

# Sentinel for unknown spellings, outside every valid index [-1, 12]
INVALID_INDEX = 2**31 - 1

# 12-tone equal temperament
HALF_STEP_RATIO = 2 ** (1 / 12)

# C5 sits three half steps above A4
C5_FREQUENCY = A4_FREQUENCY * HALF_STEP_RATIO**3


class Spelling(str, Enum):
    """
    The 21 recognised note spellings.

    Enharmonic spellings share an index (C# == Db == 1), with two
    exceptions at the octave boundary: Cb is -1 and B# is 12.
    """

    C = "C"
    C_SHARP = "C#"
    D_FLAT = "Db"
    D = "D"
    D_SHARP = "D#"
    E_FLAT = "Eb"
    E = "E"
    E_SHARP = "E#"
    F_FLAT = "Fb"
    F = "F"
    F_SHARP = "F#"
    G_FLAT = "Gb"
    G = "G"
    G_SHARP = "G#"
    A_FLAT = "Ab"
    A = "A"
    A_SHARP = "A#"
    B_FLAT = "Bb"
    B = "B"
    B_SHARP = "B#"
    C_FLAT = "Cb"


# Keyed by plain string (str-mixin Enum members hash by name, not value)
_SPELLING_INDEX: dict[str, int] = {
    Spelling.C.value: 0,
    Spelling.C_SHARP.value: 1,
    Spelling.D_FLAT.value: 1,
    Spelling.D.value: 2,
    Spelling.D_SHARP.value: 3,
    Spelling.E_FLAT.value: 3,
    Spelling.E.value: 4,
    Spelling.E_SHARP.value: 5,
    Spelling.F_FLAT.value: 4,
    Spelling.F.value: 5,
    Spelling.F_SHARP.value: 6,
    Spelling.G_FLAT.value: 6,
    Spelling.G.value: 7,
    Spelling.G_SHARP.value: 8,
    Spelling.A_FLAT.value: 8,
    Spelling.A.value: 9,
    Spelling.A_SHARP.value: 10,
    Spelling.B_FLAT.value: 10,
    Spelling.B.value: 11,
    Spelling.B_SHARP.value: 12,
    Spelling.C_FLAT.value: -1,
}

# Display name mappings for index -> spelling
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]


class Quality(str, Enum):
    """Harmonic quality of the distance between two pitches."""

    MAJOR = "major"
    MINOR = "minor"
    PERFECT = "perfect"
    AUGMENTED = "augmented"  # never produced by classify_interval
    DIMINISHED = "diminished"
    INVALID = "invalid"


# Keyed on absolute semitone distance
_QUALITY_BY_DISTANCE: dict[int, Quality] = {
    0: Quality.PERFECT,
    1: Quality.MINOR,
    2: Quality.MAJOR,
    3: Quality.MINOR,
    4: Quality.MAJOR,
    5: Quality.PERFECT,
    6: Quality.DIMINISHED,
    7: Quality.PERFECT,
    8: Quality.MINOR,
    9: Quality.MAJOR,
    10: Quality.MINOR,
    11: Quality.MAJOR,
    12: Quality.PERFECT,
}


def spelling_to_index(spelling: str | Spelling) -> int:
    """
    Look up the semitone index of a spelling, relative to C.

    Args:
        spelling: Note name such as 'C', 'F#' or 'Bb' (exact match)

    Returns:
        Index in [-1, 12], or INVALID_INDEX for an unknown spelling
    """
    if isinstance(spelling, Spelling):
        return _SPELLING_INDEX[spelling.value]
    if not isinstance(spelling, str):
        return INVALID_INDEX
    return _SPELLING_INDEX.get(spelling, INVALID_INDEX)


def is_valid_spelling(spelling: str | Spelling) -> bool:
    """Check whether a spelling is one of the recognised names."""
    return spelling_to_index(spelling) != INVALID_INDEX


def spell_index(index: int, prefer_flats: bool = False) -> str:
    """Get the canonical spelling of an index (wrapped into one octave)."""
    names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
    return names[index % 12]


def _resolve(index_or_spelling: int | str | Spelling) -> int:
    if isinstance(index_or_spelling, str):
        return spelling_to_index(index_or_spelling)
    if isinstance(index_or_spelling, bool) or not isinstance(index_or_spelling, int):
        return INVALID_INDEX
    return index_or_spelling


def frequency_from_offset(half_steps_from_c5: int) -> float:
    """
    Frequency of the pitch a number of half steps away from C5.

    Args:
        half_steps_from_c5: Signed semitone offset (octaves folded in)

    Returns:
        Frequency in Hz; inf (or 0.0 far below C5) if the result does
        not fit a float
    """
    try:
        return C5_FREQUENCY * 2.0 ** (half_steps_from_c5 / 12)
    except OverflowError:
        return 0.0 if half_steps_from_c5 < 0 else math.inf


def frequency(index_or_spelling: int | str | Spelling, octave: int) -> float:
    """
    Frequency of a pitch in the given octave.

    The integer and spelling forms share one formula, so
    frequency('C#', 4) == frequency(1, 4) exactly.

    Args:
        index_or_spelling: Semitone index or note spelling
        octave: Octave number (C5 is C in octave 5)

    Returns:
        Frequency in Hz, or NaN for an invalid spelling/index
    """
    index = _resolve(index_or_spelling)
    if index == INVALID_INDEX:
        return math.nan
    return frequency_from_offset((octave - 5) * 12 + index)


def classify_interval(
    base: int | str | Spelling,
    compare: int | str | Spelling,
) -> Quality:
    """
    Classify the interval between two pitches.

    Only the absolute distance matters, so the result is symmetric.
    Distances beyond an octave are INVALID.

    Args:
        base: Base index or spelling
        compare: Compared index or spelling

    Returns:
        The interval Quality
    """
    base_index = _resolve(base)
    compare_index = _resolve(compare)
    if base_index == INVALID_INDEX or compare_index == INVALID_INDEX:
        return Quality.INVALID

    distance = abs(compare_index - base_index)
    return _QUALITY_BY_DISTANCE.get(distance, Quality.INVALID)

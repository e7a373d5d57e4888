"""
Note - a pitch spelling plus an octave.

Notes are mutable: spelling and octave can be changed independently.
The semitone index is cached and re-derived whenever the spelling changes.
"""

from __future__ import annotations

import logging
import re

from chuk_mcp_beats.core.pitch import (
    INVALID_INDEX,
    Quality,
    Spelling,
    classify_interval,
    frequency,
    spell_index,
    spelling_to_index,
)

logger = logging.getLogger(__name__)

# Spelling followed by a (possibly negative) octave, e.g. 'C#5', 'Bb-1'
_NOTE_PATTERN = re.compile(r"^([A-G][#b]?)(-?\d+)$")


class Note:
    """
    A musical note: spelling + octave.

    C5 is C in octave 5. Octaves are not range-checked.

    Construction rejects unknown spellings with ValueError, so a Note
    never carries the INVALID_INDEX sentinel. Later spelling changes
    go through set_spelling(), which reports failure instead of raising.
    """

    __slots__ = ("_spelling", "_note_number", "_octave")

    def __init__(self, spelling: str | Spelling, octave: int) -> None:
        note_number = spelling_to_index(spelling)
        if note_number == INVALID_INDEX:
            raise ValueError(f"Unknown note spelling: {spelling!r}")
        self._spelling = str(Spelling(spelling).value)
        self._note_number = note_number
        self._octave = octave

    @property
    def spelling(self) -> str:
        """The note name, e.g. 'C#'."""
        return self._spelling

    @property
    def note_number(self) -> int:
        """Semitone index relative to C, in [-1, 12]."""
        return self._note_number

    @property
    def octave(self) -> int:
        """The octave the note is in."""
        return self._octave

    def set_spelling(self, spelling: str | Spelling) -> bool:
        """
        Change the note to a different spelling.

        Returns:
            True if applied, False (note unchanged) for an unknown spelling
        """
        note_number = spelling_to_index(spelling)
        if note_number == INVALID_INDEX:
            logger.debug("Rejected spelling %r for %s", spelling, self)
            return False

        self._spelling = str(Spelling(spelling).value)
        self._note_number = note_number
        return True

    def set_octave(self, octave: int) -> None:
        """Set the octave. Any integer is accepted."""
        self._octave = octave

    def frequency(self) -> float:
        """Frequency of the note in Hz."""
        return frequency(self._note_number, self._octave)

    def relationship(self, other: Note) -> Quality:
        """Harmonic quality of the interval between this note and another."""
        return classify_interval(self._spelling, other._spelling)

    def transpose(self, semitones: int, prefer_flats: bool = False) -> Note:
        """
        Return a new note shifted by a number of semitones.

        The octave carries across C; the result uses canonical spelling
        (Cb and B# normalise to B and C of the neighbouring octave).
        """
        absolute = self._octave * 12 + self._note_number + semitones
        octave, index = divmod(absolute, 12)
        return Note(spell_index(index, prefer_flats), octave)

    @classmethod
    def parse(cls, text: str, default_octave: int | None = None) -> Note:
        """
        Parse a note from a string like 'C5', 'F#4' or 'Bb-1'.

        Args:
            text: Spelling followed by an octave number
            default_octave: Octave to use when text is a bare spelling

        Raises:
            ValueError: If the text is not a recognised note
        """
        text = text.strip()
        if default_octave is not None and spelling_to_index(text) != INVALID_INDEX:
            return cls(text, default_octave)

        match = _NOTE_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid note: {text}")
        return cls(match.group(1), int(match.group(2)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self._spelling == other._spelling and self._octave == other._octave

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self._spelling}{self._octave}"

    def __repr__(self) -> str:
        return f"Note({self._spelling!r}, {self._octave})"

"""
Serialisable views of notes, beats and sequences.

The core types are plain mutable objects; these pydantic models are the
JSON/YAML shape used by the tools and the preset library.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_beats.constants import BEAT_SLOTS, DEFAULT_BPM
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.core.note import Note
from chuk_mcp_beats.core.pitch import is_valid_spelling
from chuk_mcp_beats.core.sequence import Sequence


class NoteSpec(BaseModel):
    """A note as data: spelling + octave."""

    spelling: str = Field(..., description="Note name, e.g. 'C#'")
    octave: int = Field(..., description="Octave number (C5 is C in octave 5)")

    model_config = {"frozen": True}

    @field_validator("spelling")
    @classmethod
    def _check_spelling(cls, value: str) -> str:
        if not is_valid_spelling(value):
            raise ValueError(f"Unknown note spelling: {value!r}")
        return value

    @classmethod
    def from_note(cls, note: Note) -> NoteSpec:
        return cls(spelling=note.spelling, octave=note.octave)

    def to_note(self) -> Note:
        return Note(self.spelling, self.octave)

    def describe(self) -> dict[str, object]:
        """
        Spelling, octave and derived pitch data.

        The frequency is None when it does not fit a float (extreme octaves).
        """
        note = self.to_note()
        freq = note.frequency()
        return {
            "name": str(note),
            "spelling": note.spelling,
            "octave": note.octave,
            "note_number": note.note_number,
            "frequency": freq if math.isfinite(freq) else None,
        }


class BeatSpec(BaseModel):
    """
    A beat as data: exactly 8 slots, None for a rest.
    """

    slots: list[NoteSpec | None] = Field(
        default_factory=lambda: [None] * BEAT_SLOTS,
        description="Slot contents in order",
    )

    @field_validator("slots")
    @classmethod
    def _check_length(cls, value: list[NoteSpec | None]) -> list[NoteSpec | None]:
        if len(value) != BEAT_SLOTS:
            raise ValueError(f"A beat has {BEAT_SLOTS} slots, got {len(value)}")
        return value

    @classmethod
    def from_beat(cls, beat: Beat) -> BeatSpec:
        return cls(slots=[None if note is None else NoteSpec.from_note(note) for note in beat])

    def to_beat(self) -> Beat:
        """
        Build a Beat from the slots.

        Adjacent equal slots share one Note object so that they flatten
        into a single sustained run.
        """
        notes: list[Note | None] = []
        for spec in self.slots:
            if spec is None:
                notes.append(None)
            elif notes and notes[-1] is not None and NoteSpec.from_note(notes[-1]) == spec:
                notes.append(notes[-1])
            else:
                notes.append(spec.to_note())

        beat = Beat()
        beat.from_array(notes)
        return beat

    def labels(self) -> list[str]:
        """Compact slot labels, '-' for rests."""
        return ["-" if spec is None else f"{spec.spelling}{spec.octave}" for spec in self.slots]


class TimedNoteSpec(BaseModel):
    """A sequence entry: optional note plus duration units."""

    note: NoteSpec | None = Field(None, description="Note, or None for a rest")
    duration: int = Field(..., gt=0, description="Duration in 1/32 note units")


class SequenceSpec(BaseModel):
    """A sequence as data."""

    bpm: int = Field(DEFAULT_BPM, gt=0, description="Tempo in BPM")
    events: list[TimedNoteSpec] = Field(default_factory=list, description="Timed notes in order")

    @classmethod
    def from_sequence(cls, sequence: Sequence) -> SequenceSpec:
        return cls(
            bpm=sequence.bpm,
            events=[
                TimedNoteSpec(
                    note=None if timed.note is None else NoteSpec.from_note(timed.note),
                    duration=timed.duration,
                )
                for timed in sequence
            ],
        )

    def to_sequence(self) -> Sequence:
        sequence = Sequence(self.bpm)
        for event in self.events:
            sequence.add(None if event.note is None else event.note.to_note(), event.duration)
        return sequence

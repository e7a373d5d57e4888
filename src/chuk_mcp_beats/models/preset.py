"""
Preset model - reusable beat patterns.

A preset is an ordered list of placement steps applied to an empty beat.
Steps use the same addressing as Beat.add_at(): a slot position and an
optional division.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_mcp_beats.constants import BEAT_SLOTS, Division, ErrorMessages
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.core.note import Note


class PresetStep(BaseModel):
    """One placement: note (None for a rest) at a position."""

    note: str | None = Field(None, description="Note like 'C5', or None for a rest")
    position: int = Field(0, ge=0, lt=BEAT_SLOTS, description="Slot position")
    division: Division | None = Field(None, description="Division spanned by the note")

    model_config = {"frozen": True}


class BeatPreset(BaseModel):
    """
    A named beat pattern.

    Later steps overwrite earlier ones where they overlap, exactly as
    repeated add_at() calls would.
    """

    name: str = Field(..., description="Preset name")
    description: str = Field("", description="Human-readable description")
    tags: list[str] = Field(default_factory=list, description="Search tags")
    steps: list[PresetStep] = Field(default_factory=list, description="Placement steps")

    def build(self, transpose: int = 0) -> Beat:
        """
        Apply the steps to a fresh beat.

        Args:
            transpose: Semitones to shift every note by

        Returns:
            The resulting Beat

        Raises:
            ValueError: If a note cannot be parsed or a step does not fit
        """
        beat = Beat()
        notes: dict[str, Note] = {}
        for step in self.steps:
            note: Note | None = None
            if step.note is not None:
                # One Note object per distinct name keeps repeated steps sustained
                if step.note not in notes:
                    parsed = Note.parse(step.note)
                    notes[step.note] = parsed.transpose(transpose) if transpose else parsed
                note = notes[step.note]

            if not beat.add_at(note, step.position, step.division):
                raise ValueError(
                    ErrorMessages.INVALID_PLACEMENT.format(
                        position=step.position,
                        division=step.division.value if step.division else "single slot",
                    )
                )
        return beat


class PresetMetadata(BaseModel):
    """Lightweight preset info for listing."""

    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    step_count: int = 0
    source: str = "library"

    @classmethod
    def from_preset(cls, preset: BeatPreset, source: str = "library") -> PresetMetadata:
        return cls(
            name=preset.name,
            description=preset.description,
            tags=preset.tags,
            step_count=len(preset.steps),
            source=source,
        )

"""
Pitch tools - MCP tools for note names, frequencies and intervals.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

from chuk_mcp_beats.config import BeatsConfig
from chuk_mcp_beats.constants import ErrorMessages
from chuk_mcp_beats.core.pitch import (
    INVALID_INDEX,
    classify_interval,
    frequency_from_offset,
    spelling_to_index,
)
from chuk_mcp_beats.models.note import NoteSpec
from chuk_mcp_beats.tools.arguments import parse_note_arg

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_pitch_tools(
    mcp: ChukMCPServer,
    config: BeatsConfig,
) -> dict[str, Any]:
    """
    Register pitch tools with the MCP server.

    Args:
        mcp: The MCP server instance
        config: Server defaults (octave, spelling preference)

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def beats_note_info(note: str) -> str:
        """
        Describe a note: semitone index and frequency.

        Args:
            note: Note like 'C5', 'F#4' or a bare spelling like 'Bb'
                (uses the default octave)

        Returns:
            JSON string with spelling, octave, note number and frequency in Hz

        Example:
            beats_note_info(note="A4")
        """
        try:
            parsed = parse_note_arg(note, config.default_octave)
            if parsed is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_NOTE.format(note=note)}
                )

            return json.dumps(
                {
                    "status": "success",
                    "note": NoteSpec.from_note(parsed).describe(),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to describe note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_note_info"] = beats_note_info

    @mcp.tool  # type: ignore[arg-type]
    async def beats_classify_interval(base: str, compare: str) -> str:
        """
        Classify the interval between two note spellings.

        Only the distance matters, so the result is the same in either
        direction. Distances beyond an octave are 'invalid'.

        Args:
            base: Base spelling (e.g., 'C')
            compare: Compared spelling (e.g., 'G')

        Returns:
            JSON string with the interval quality and semitone distance

        Example:
            beats_classify_interval(base="C", compare="E")
        """
        try:
            for spelling in (base, compare):
                if spelling_to_index(spelling) == INVALID_INDEX:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.INVALID_SPELLING.format(spelling=spelling),
                        }
                    )

            quality = classify_interval(base, compare)
            return json.dumps(
                {
                    "status": "success",
                    "base": base,
                    "compare": compare,
                    "semitones": spelling_to_index(compare) - spelling_to_index(base),
                    "quality": quality.value,
                }
            )
        except Exception as e:
            logger.exception("Failed to classify interval")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_classify_interval"] = beats_classify_interval

    @mcp.tool  # type: ignore[arg-type]
    async def beats_transpose_note(
        note: str,
        semitones: int,
        prefer_flats: bool | None = None,
    ) -> str:
        """
        Transpose a note by a number of semitones.

        Args:
            note: Note like 'C5'
            semitones: Shift, positive for up and negative for down
            prefer_flats: Spell the result with flats (default from config)

        Returns:
            JSON string with the original and transposed notes

        Example:
            beats_transpose_note(note="C5", semitones=7)
        """
        try:
            parsed = parse_note_arg(note, config.default_octave)
            if parsed is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_NOTE.format(note=note)}
                )

            flats = config.prefer_flats if prefer_flats is None else prefer_flats
            result = parsed.transpose(semitones, prefer_flats=flats)
            return json.dumps(
                {
                    "status": "success",
                    "original": NoteSpec.from_note(parsed).describe(),
                    "transposed": NoteSpec.from_note(result).describe(),
                    "quality": parsed.relationship(result).value,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to transpose note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_transpose_note"] = beats_transpose_note

    @mcp.tool  # type: ignore[arg-type]
    async def beats_frequency_from_offset(half_steps: int) -> str:
        """
        Frequency of the pitch a number of half steps from C5.

        Args:
            half_steps: Signed semitone offset from C5

        Returns:
            JSON string with the frequency in Hz

        Example:
            beats_frequency_from_offset(half_steps=-3)  # A4, 440 Hz
        """
        try:
            freq = frequency_from_offset(half_steps)
            if not math.isfinite(freq):
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.FREQUENCY_OUT_OF_RANGE.format(
                            half_steps=half_steps
                        ),
                    }
                )
            return json.dumps(
                {"status": "success", "half_steps": half_steps, "frequency": freq}
            )
        except Exception as e:
            logger.exception("Failed to compute frequency")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_frequency_from_offset"] = beats_frequency_from_offset

    return tools

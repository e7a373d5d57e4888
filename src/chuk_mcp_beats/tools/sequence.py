"""
Sequence tools - MCP tools for timed note streams.

Tools for building sequences from notes and beats and computing their
playback schedule.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

from chuk_mcp_beats.constants import ErrorMessages, SuccessMessages
from chuk_mcp_beats.core.sequence import Sequence
from chuk_mcp_beats.models.note import SequenceSpec
from chuk_mcp_beats.tools.arguments import parse_duration_arg, parse_note_arg
from chuk_mcp_beats.workspace import WorkspaceManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _json_frequency(value: float | None) -> float | None:
    """None for rests and for frequencies that do not fit a float."""
    if value is None or not math.isfinite(value):
        return None
    return value


def _sequence_payload(name: str, sequence: Sequence) -> dict[str, Any]:
    spec = SequenceSpec.from_sequence(sequence)
    return {
        "name": name,
        "bpm": spec.bpm,
        "total_units": sequence.total_units(),
        "events": [
            {
                "note": None if e.note is None else f"{e.note.spelling}{e.note.octave}",
                "duration": e.duration,
            }
            for e in spec.events
        ],
    }


def register_sequence_tools(
    mcp: ChukMCPServer,
    manager: WorkspaceManager,
) -> dict[str, Any]:
    """
    Register sequence tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The workspace manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    default_octave = manager.config.default_octave

    @mcp.tool  # type: ignore[arg-type]
    async def beats_create_sequence(name: str, bpm: int | None = None) -> str:
        """
        Create a new empty sequence.

        Args:
            name: Unique name for the sequence
            bpm: Tempo in BPM (default from config, usually 120)

        Returns:
            JSON string with the sequence details

        Example:
            beats_create_sequence(name="melody", bpm=96)
        """
        try:
            sequence = await manager.create_sequence(name, bpm)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SEQUENCE_CREATED.format(name=name),
                    "sequence": _sequence_payload(name, sequence),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to create sequence")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_create_sequence"] = beats_create_sequence

    @mcp.tool  # type: ignore[arg-type]
    async def beats_get_sequence(name: str) -> str:
        """
        Get a sequence's notes and durations.

        Args:
            name: Sequence name

        Returns:
            JSON string with events in 1/32 note units
        """
        try:
            sequence = await manager.get_sequence(name)
            if sequence is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.SEQUENCE_NOT_FOUND.format(name=name),
                    }
                )
            return json.dumps(
                {"status": "success", "sequence": _sequence_payload(name, sequence)}
            )
        except Exception as e:
            logger.exception("Failed to get sequence")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_get_sequence"] = beats_get_sequence

    @mcp.tool  # type: ignore[arg-type]
    async def beats_add_to_sequence(
        name: str,
        note: str | None,
        duration: str | int = "quarter",
    ) -> str:
        """
        Append a note to a sequence.

        Args:
            name: Sequence name
            note: Note like 'C5' ('-' for a rest)
            duration: 'whole', 'half', 'quarter', 'eighth', 'sixteenth',
                'thirty_second', or a number of 1/32 units

        Returns:
            JSON string with the updated sequence

        Example:
            beats_add_to_sequence(name="melody", note="E5", duration="eighth")
        """
        try:
            sequence = await manager.require_sequence(name)
            sequence.add(parse_note_arg(note, default_octave), parse_duration_arg(duration))
            return json.dumps(
                {"status": "success", "sequence": _sequence_payload(name, sequence)}
            )
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to add to sequence")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_add_to_sequence"] = beats_add_to_sequence

    @mcp.tool  # type: ignore[arg-type]
    async def beats_append_beat(name: str, beat: str) -> str:
        """
        Append a beat's contents to a sequence.

        Adjacent slots holding the same note become one sustained event,
        so every beat appends a quarter note (8 units) in total.

        Args:
            name: Sequence name
            beat: Beat name

        Returns:
            JSON string with the updated sequence

        Example:
            beats_append_beat(name="melody", beat="intro-1")
        """
        try:
            sequence = await manager.require_sequence(name)
            source = await manager.require_beat(beat)
            sequence.extend_beat(source)
            return json.dumps(
                {"status": "success", "sequence": _sequence_payload(name, sequence)}
            )
        except LookupError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to append beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_append_beat"] = beats_append_beat

    @mcp.tool  # type: ignore[arg-type]
    async def beats_set_bpm(name: str, bpm: int) -> str:
        """
        Change a sequence's tempo.

        Negative values are taken as their magnitude; zero is rejected.

        Args:
            name: Sequence name
            bpm: New tempo

        Returns:
            JSON string with the updated sequence
        """
        try:
            sequence = await manager.require_sequence(name)
            if bpm == 0:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.INVALID_BPM.format(bpm=bpm)}
                )
            sequence.bpm = bpm
            return json.dumps(
                {"status": "success", "sequence": _sequence_payload(name, sequence)}
            )
        except LookupError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to set BPM")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_set_bpm"] = beats_set_bpm

    @mcp.tool  # type: ignore[arg-type]
    async def beats_schedule(name: str) -> str:
        """
        Compute the playback schedule of a sequence.

        Args:
            name: Sequence name

        Returns:
            JSON string with start time, duration (nanoseconds) and frequency
            for every event

        Example:
            beats_schedule(name="melody")
        """
        try:
            sequence = await manager.require_sequence(name)
            events = [
                {
                    "start_ns": start,
                    "duration_ns": sequence.nanoseconds(timed),
                    "note": None if timed.note is None else str(timed.note),
                    "frequency": _json_frequency(timed.frequency()),
                }
                for start, timed in sequence.schedule()
            ]
            return json.dumps(
                {"status": "success", "bpm": sequence.bpm, "events": events}
            )
        except LookupError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to schedule sequence")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_schedule"] = beats_schedule

    return tools

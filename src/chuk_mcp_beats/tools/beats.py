"""
Beat tools - MCP tools for building 8-slot beats.

Tools for creating beats, placing notes by division or slot range,
and applying presets from the library.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_beats.constants import BEAT_SLOTS, ErrorMessages, SuccessMessages
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.models.note import BeatSpec
from chuk_mcp_beats.presets import PresetLoader
from chuk_mcp_beats.tools.arguments import parse_division_arg, parse_note_arg
from chuk_mcp_beats.workspace import WorkspaceManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _beat_payload(name: str, beat: Beat) -> dict[str, Any]:
    """Summary of a beat for tool responses."""
    return {
        "name": name,
        "slots": BeatSpec.from_beat(beat).labels(),
        "runs": [
            {"note": None if note is None else str(note), "units": units}
            for note, units in beat.runs()
        ],
    }


def register_beat_tools(
    mcp: ChukMCPServer,
    manager: WorkspaceManager,
    presets: PresetLoader,
) -> dict[str, Any]:
    """
    Register beat tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The workspace manager
        presets: The preset loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    default_octave = manager.config.default_octave

    @mcp.tool  # type: ignore[arg-type]
    async def beats_create_beat(
        name: str,
        preset: str | None = None,
        transpose: int = 0,
    ) -> str:
        """
        Create a new beat.

        The beat starts as 8 rests, or from a preset when one is given.

        Args:
            name: Unique name for the beat
            preset: Optional preset name (see beats_list_presets)
            transpose: Semitones to shift the preset's notes by

        Returns:
            JSON string with the beat's slots

        Example:
            beats_create_beat(name="intro-1", preset="straight-eighths")
        """
        try:
            beat = None
            if preset is not None:
                found = presets.get_preset(preset)
                if found is None:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.PRESET_NOT_FOUND.format(name=preset),
                        }
                    )
                beat = found.build(transpose)

            beat = await manager.create_beat(name, beat)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.BEAT_CREATED.format(name=name),
                    "beat": _beat_payload(name, beat),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to create beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_create_beat"] = beats_create_beat

    @mcp.tool  # type: ignore[arg-type]
    async def beats_get_beat(name: str) -> str:
        """
        Get a beat's slots and note runs.

        Args:
            name: Beat name

        Returns:
            JSON string with slot labels ('-' for rests) and runs in 1/32 units

        Example:
            beats_get_beat(name="intro-1")
        """
        try:
            beat = await manager.get_beat(name)
            if beat is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.BEAT_NOT_FOUND.format(name=name)}
                )
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except Exception as e:
            logger.exception("Failed to get beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_get_beat"] = beats_get_beat

    @mcp.tool  # type: ignore[arg-type]
    async def beats_list_beats() -> str:
        """
        List all beats in the workspace.

        Returns:
            JSON string with beat names

        Example:
            beats_list_beats()
        """
        try:
            return json.dumps({"status": "success", "beats": await manager.list_beats()})
        except Exception as e:
            logger.exception("Failed to list beats")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_list_beats"] = beats_list_beats

    @mcp.tool  # type: ignore[arg-type]
    async def beats_delete_beat(name: str) -> str:
        """
        Delete a beat.

        Args:
            name: Beat name

        Returns:
            JSON string with delete result
        """
        try:
            if await manager.delete_beat(name):
                return json.dumps({"status": "success", "message": f"Beat '{name}' deleted"})
            return json.dumps(
                {"status": "error", "message": ErrorMessages.BEAT_NOT_FOUND.format(name=name)}
            )
        except Exception as e:
            logger.exception("Failed to delete beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_delete_beat"] = beats_delete_beat

    @mcp.tool  # type: ignore[arg-type]
    async def beats_duplicate_beat(name: str, new_name: str) -> str:
        """
        Duplicate a beat under a new name.

        The copy has its own notes, so editing one beat never changes
        the other.

        Args:
            name: Original beat name
            new_name: Name for the duplicate

        Returns:
            JSON string with the new beat's slots

        Example:
            beats_duplicate_beat(name="intro-1", new_name="intro-2")
        """
        try:
            beat = await manager.duplicate_beat(name, new_name)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.BEAT_DUPLICATED.format(
                        name=name, new_name=new_name
                    ),
                    "beat": _beat_payload(new_name, beat),
                }
            )
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to duplicate beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_duplicate_beat"] = beats_duplicate_beat

    @mcp.tool  # type: ignore[arg-type]
    async def beats_fill(name: str, note: str | None = None) -> str:
        """
        Fill every slot of a beat with one note.

        Args:
            name: Beat name
            note: Note like 'C5' (omit or '-' for rests)

        Returns:
            JSON string with the updated beat

        Example:
            beats_fill(name="intro-1", note="C5")
        """
        try:
            beat = await manager.require_beat(name)
            beat.fill(parse_note_arg(note, default_octave))
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to fill beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_fill"] = beats_fill

    @mcp.tool  # type: ignore[arg-type]
    async def beats_clear(name: str) -> str:
        """
        Reset every slot of a beat to a rest.

        Args:
            name: Beat name

        Returns:
            JSON string with the cleared beat
        """
        try:
            beat = await manager.require_beat(name)
            beat.clear()
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except LookupError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to clear beat")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_clear"] = beats_clear

    @mcp.tool  # type: ignore[arg-type]
    async def beats_add_at(
        name: str,
        note: str | None,
        position: int,
        division: str | None = None,
    ) -> str:
        """
        Place a note at a slot position, optionally spanning a division.

        Slots are 1/32 notes, 0-7. Divisions:
        - quarter: position 0 only, fills the whole beat
        - eighth: 4 slots from position (0-4)
        - sixteenth: 2 slots from position (0-6)
        - thirty_second (or omitted): the single slot at position

        Args:
            name: Beat name
            note: Note like 'E5' ('-' for a rest)
            position: Starting slot
            division: Optional division name

        Returns:
            JSON string with the updated beat, or an error if the note does not fit

        Example:
            beats_add_at(name="intro-1", note="E5", position=4, division="eighth")
        """
        try:
            beat = await manager.require_beat(name)
            parsed_division = parse_division_arg(division)
            if not beat.add_at(parse_note_arg(note, default_octave), position, parsed_division):
                label = parsed_division.value if parsed_division else "single slot"
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.INVALID_PLACEMENT.format(
                            position=position, division=label
                        ),
                    }
                )
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to add note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_add_at"] = beats_add_at

    @mcp.tool  # type: ignore[arg-type]
    async def beats_add_range(
        name: str,
        note: str | None,
        start: int,
        length: int,
    ) -> str:
        """
        Write a note to a range of slots.

        Args:
            name: Beat name
            note: Note like 'G5' ('-' for rests)
            start: First slot (0-7)
            length: Number of slots; start + length must not exceed 8

        Returns:
            JSON string with the updated beat

        Example:
            beats_add_range(name="intro-1", note="G5", start=2, length=3)
        """
        try:
            beat = await manager.require_beat(name)
            if not beat.add_range(parse_note_arg(note, default_octave), start, length):
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.INVALID_RANGE.format(start=start, length=length),
                    }
                )
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to add range")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_add_range"] = beats_add_range

    @mcp.tool  # type: ignore[arg-type]
    async def beats_from_array(
        name: str,
        notes: list[str | None],
        stretch: bool = False,
    ) -> str:
        """
        Set a beat's slots from a list of notes.

        Without stretch, exactly 8 values are copied slot-for-slot.
        With stretch, 1-8 values are spread evenly (on 16th-note
        boundaries) over a cleared beat.

        Args:
            name: Beat name
            notes: Notes like ['C5', '-', 'E5', ...]
            stretch: Spread up to 8 notes on an even stride (extras past slot 6 are dropped)

        Returns:
            JSON string with the updated beat

        Example:
            beats_from_array(name="intro-1", notes=["C5", "G5"], stretch=True)
        """
        try:
            beat = await manager.require_beat(name)
            parsed = [parse_note_arg(n, default_octave) for n in notes]

            if stretch:
                staged = Beat()
                ok = staged.from_array_stretched(parsed)
            else:
                staged = beat
                ok = staged.from_array(parsed)

            if not ok:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.INVALID_ARRAY.format(
                            expected=f"1-{BEAT_SLOTS}" if stretch else BEAT_SLOTS, actual=len(notes)
                        ),
                    }
                )

            if stretch:
                beat.from_array(staged.slots)
            return json.dumps({"status": "success", "beat": _beat_payload(name, beat)})
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to set beat from array")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_from_array"] = beats_from_array

    @mcp.tool  # type: ignore[arg-type]
    async def beats_list_presets() -> str:
        """
        List available beat presets.

        Returns:
            JSON string with preset names, descriptions and tags

        Example:
            beats_list_presets()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "presets": [meta.model_dump() for meta in presets.list_presets()],
                }
            )
        except Exception as e:
            logger.exception("Failed to list presets")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_list_presets"] = beats_list_presets

    @mcp.tool  # type: ignore[arg-type]
    async def beats_apply_preset(name: str, preset: str, transpose: int = 0) -> str:
        """
        Replace a beat's slots with a preset.

        Args:
            name: Beat name
            preset: Preset name
            transpose: Semitones to shift the preset's notes by

        Returns:
            JSON string with the updated beat

        Example:
            beats_apply_preset(name="intro-1", preset="gallop", transpose=-5)
        """
        try:
            beat = await manager.require_beat(name)
            found = presets.get_preset(preset)
            if found is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.PRESET_NOT_FOUND.format(name=preset),
                    }
                )

            beat.from_array(found.build(transpose).slots)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.PRESET_APPLIED.format(preset=preset, name=name),
                    "beat": _beat_payload(name, beat),
                }
            )
        except (LookupError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to apply preset")
            return json.dumps({"status": "error", "message": str(e)})

    tools["beats_apply_preset"] = beats_apply_preset

    return tools

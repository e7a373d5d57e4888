"""
Argument parsing shared by the MCP tools.
"""

from __future__ import annotations

from chuk_mcp_beats.constants import Division, ErrorMessages, NoteDuration
from chuk_mcp_beats.core.note import Note

_REST_TOKENS = {"", "-", "rest", "r"}


def parse_note_arg(text: str | None, default_octave: int) -> Note | None:
    """
    Parse a tool note argument.

    'C5' and 'F#' (default octave) are notes; None, '', '-' and 'rest'
    mean a rest.

    Raises:
        ValueError: If the text is neither a note nor a rest token
    """
    if text is None or text.strip().lower() in _REST_TOKENS:
        return None
    try:
        return Note.parse(text, default_octave=default_octave)
    except ValueError:
        raise ValueError(ErrorMessages.INVALID_NOTE.format(note=text)) from None


def parse_division_arg(text: str | None) -> Division | None:
    """Parse a division name ('eighth', '16th', ...); None for a single slot."""
    if text is None or text == "":
        return None
    aliases = {
        "4th": Division.QUARTER,
        "8th": Division.EIGHTH,
        "16th": Division.SIXTEENTH,
        "32nd": Division.THIRTY_SECOND,
    }
    key = text.strip().lower().replace("-", "_")
    if key in aliases:
        return aliases[key]
    try:
        return Division(key)
    except ValueError:
        valid = ", ".join(d.value for d in Division)
        raise ValueError(f"Unknown division: {text}. Expected one of: {valid}") from None


def parse_duration_arg(value: str | int) -> int:
    """Parse a duration given as units (8) or a name ('quarter')."""
    if isinstance(value, int):
        return value
    key = value.strip().upper().replace("-", "_").replace(" ", "_")
    if key.isdigit():
        return int(key)
    try:
        return int(NoteDuration[key])
    except KeyError:
        valid = ", ".join(d.name.lower() for d in NoteDuration)
        raise ValueError(f"Unknown duration: {value}. Expected units or one of: {valid}") from None

"""
MCP tool implementations.

Tools are organized by domain:
- pitch - Note names, frequencies, intervals
- beats - 8-slot beats and presets
- sequence - Timed note streams and playback schedule
"""

from chuk_mcp_beats.tools.beats import register_beat_tools
from chuk_mcp_beats.tools.pitch import register_pitch_tools
from chuk_mcp_beats.tools.sequence import register_sequence_tools

__all__ = [
    "register_beat_tools",
    "register_pitch_tools",
    "register_sequence_tools",
]

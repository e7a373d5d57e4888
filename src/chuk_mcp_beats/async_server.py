#!/usr/bin/env python3
"""
Async Beats MCP Server using chuk-mcp-server

This server provides MCP tools for procedural composition with pitches
and beat subdivisions.

The server provides tools for:
- Note names, semitone indices, frequencies and interval quality
- Building 8-slot beats by division, section or slot range
- Applying beat presets from the library or project
- Building sequences and computing their playback schedule
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_beats.config import BeatsConfig
from chuk_mcp_beats.presets import PresetLoader
from chuk_mcp_beats.tools import (
    register_beat_tools,
    register_pitch_tools,
    register_sequence_tools,
)
from chuk_mcp_beats.workspace import WorkspaceManager

logger = logging.getLogger(__name__)

PRESETS_LIBRARY_PATH = Path(__file__).parent / "presets" / "library"


def build_server(config: BeatsConfig | None = None) -> ChukMCPServer:
    """
    Create the MCP server and register all tools.

    Args:
        config: Server configuration (defaults if omitted)

    Returns:
        The configured server
    """
    config = config or BeatsConfig()

    mcp = ChukMCPServer("chuk-mcp-beats")

    manager = WorkspaceManager(config)
    preset_loader = PresetLoader(
        library_path=PRESETS_LIBRARY_PATH,
        project_path=config.presets_dir,
    )

    register_pitch_tools(mcp, config)
    register_beat_tools(mcp, manager, preset_loader)
    register_sequence_tools(mcp, manager)

    logger.info("CHUK Beats MCP Server initialized")
    logger.info(f"  Presets library: {PRESETS_LIBRARY_PATH}")
    logger.info(f"  Project presets: {config.presets_dir}")
    logger.info(f"  Default tempo: {config.default_bpm} BPM")

    return mcp

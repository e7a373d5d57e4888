"""
Workspace management - the composer's scratch space.

This module provides:
- WorkspaceManager: Named beats and sequences held in memory
"""

from chuk_mcp_beats.workspace.manager import WorkspaceManager

__all__ = ["WorkspaceManager"]

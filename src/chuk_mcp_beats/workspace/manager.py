"""
Workspace Manager - holds the beats and sequences being composed.

Provides async operations for creating, looking up and removing named
beats and sequences. State is kept in memory for the lifetime of the
server.
"""

from __future__ import annotations

import copy

from chuk_mcp_beats.config import BeatsConfig
from chuk_mcp_beats.constants import ErrorMessages
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.core.sequence import Sequence


class WorkspaceManager:
    """
    Manages named beats and sequences.

    Beats and sequences live in separate namespaces, so a beat and a
    sequence may share a name.
    """

    def __init__(self, config: BeatsConfig | None = None):
        """
        Initialize the manager.

        Args:
            config: Defaults for new sequences and notes
        """
        self.config = config or BeatsConfig()
        self._beats: dict[str, Beat] = {}
        self._sequences: dict[str, Sequence] = {}

    # ------------------------------------------------------------------
    # Beats
    # ------------------------------------------------------------------

    async def create_beat(self, name: str, beat: Beat | None = None) -> Beat:
        """
        Create a new beat (all rests unless one is given).

        Raises:
            ValueError: If a beat with this name exists
        """
        if name in self._beats:
            raise ValueError(ErrorMessages.BEAT_EXISTS.format(name=name))
        beat = beat if beat is not None else Beat()
        self._beats[name] = beat
        return beat

    async def get_beat(self, name: str) -> Beat | None:
        """Get a beat by name."""
        return self._beats.get(name)

    async def require_beat(self, name: str) -> Beat:
        """Get a beat by name, raising LookupError if missing."""
        beat = self._beats.get(name)
        if beat is None:
            raise LookupError(ErrorMessages.BEAT_NOT_FOUND.format(name=name))
        return beat

    async def list_beats(self) -> list[str]:
        return sorted(self._beats)

    async def delete_beat(self, name: str) -> bool:
        return self._beats.pop(name, None) is not None

    async def duplicate_beat(self, name: str, new_name: str) -> Beat:
        """Copy a beat under a new name. Notes are copied too."""
        original = await self.require_beat(name)
        return await self.create_beat(new_name, copy.deepcopy(original))

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    async def create_sequence(self, name: str, bpm: int | None = None) -> Sequence:
        """
        Create a new empty sequence.

        Args:
            name: Sequence name
            bpm: Tempo (default from config)

        Raises:
            ValueError: If a sequence with this name exists or bpm is zero
        """
        if name in self._sequences:
            raise ValueError(ErrorMessages.SEQUENCE_EXISTS.format(name=name))
        sequence = Sequence(bpm if bpm is not None else self.config.default_bpm)
        self._sequences[name] = sequence
        return sequence

    async def get_sequence(self, name: str) -> Sequence | None:
        """Get a sequence by name."""
        return self._sequences.get(name)

    async def require_sequence(self, name: str) -> Sequence:
        """Get a sequence by name, raising LookupError if missing."""
        sequence = self._sequences.get(name)
        if sequence is None:
            raise LookupError(ErrorMessages.SEQUENCE_NOT_FOUND.format(name=name))
        return sequence

    async def list_sequences(self) -> list[str]:
        return sorted(self._sequences)

    async def delete_sequence(self, name: str) -> bool:
        return self._sequences.pop(name, None) is not None

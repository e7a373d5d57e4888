"""
Sequence primitives - TimedNote and Sequence.

A Sequence is an ordered stream of notes tagged with durations, plus the
tempo used to turn those durations into playback times. Durations are
integer units of 1/32 note (see NoteDuration), the same resolution as a
Beat slot.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from chuk_mcp_beats.constants import DEFAULT_BPM, NoteDuration
from chuk_mcp_beats.core.beat import Beat
from chuk_mcp_beats.core.note import Note

_NS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class TimedNote:
    """A note (or rest, when note is None) with a duration in 1/32 units."""

    note: Note | None
    duration: int

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration}")

    @property
    def is_rest(self) -> bool:
        return self.note is None

    def frequency(self) -> float | None:
        """Frequency of the note in Hz, None for a rest."""
        if self.note is None:
            return None
        return self.note.frequency()

    def to_nanoseconds(self, bpm: int) -> int:
        """
        Convert the duration to nanoseconds at a tempo.

        Args:
            bpm: Tempo in beats per minute

        Returns:
            Duration in whole nanoseconds (truncated)
        """
        return int((bpm / 60.0) * _NS_PER_SECOND * (self.duration / 32.0))


class Sequence:
    """
    Ordered stream of timed notes at a fixed tempo.

    Tempo changes apply to the whole sequence; there are no
    mid-sequence tempo events.
    """

    def __init__(self, bpm: int = DEFAULT_BPM) -> None:
        self._notes: deque[TimedNote] = deque()
        self._bpm = DEFAULT_BPM
        self.bpm = bpm

    @property
    def bpm(self) -> int:
        """Tempo in beats per minute."""
        return self._bpm

    @bpm.setter
    def bpm(self, value: int) -> None:
        if value == 0:
            raise ValueError("BPM must be non-zero")
        self._bpm = abs(value)

    def add(self, note: Note | None, duration: NoteDuration | int) -> TimedNote:
        """
        Append a note with a duration.

        Args:
            note: Note to append (None appends a rest)
            duration: A NoteDuration or a raw number of 1/32 units

        Returns:
            The appended TimedNote
        """
        timed = TimedNote(note, int(duration))
        self._notes.append(timed)
        return timed

    def extend_beat(self, beat: Beat) -> list[TimedNote]:
        """
        Append the contents of a beat.

        Each run of identical slots becomes one timed note, so a beat
        always appends exactly NoteDuration.QUARTER units.
        """
        return [self.add(note, units) for note, units in beat.runs()]

    def clear(self) -> None:
        """Remove all notes."""
        self._notes.clear()

    def pop_front(self) -> TimedNote | None:
        """Remove and return the first note, or None when empty."""
        if not self._notes:
            return None
        return self._notes.popleft()

    def nanoseconds(self, timed: TimedNote) -> int:
        """Duration of a timed note at this sequence's tempo."""
        return timed.to_nanoseconds(self._bpm)

    def total_units(self) -> int:
        """Total length in 1/32 units."""
        return sum(timed.duration for timed in self._notes)

    def schedule(self) -> Iterator[tuple[int, TimedNote]]:
        """
        Yield (start_ns, timed_note) pairs in playback order.

        Start offsets are the running sum of the preceding durations.
        """
        start = 0
        for timed in self._notes:
            yield start, timed
            start += self.nanoseconds(timed)

    def __iter__(self) -> Iterator[TimedNote]:
        return iter(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __repr__(self) -> str:
        return f"Sequence({len(self._notes)} notes, {self._bpm}bpm)"

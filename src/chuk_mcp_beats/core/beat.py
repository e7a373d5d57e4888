"""
Beat - one metrical beat subdivided into 8 slots.

Each slot is 1/32 note long and holds either a Note or None (a rest).
The slot count never changes; every way of addressing the beat (division
name, section number, start + length) resolves to a slot range and goes
through add_range().

Mutators report failure by returning False and leave the beat untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from chuk_mcp_beats.constants import BEAT_SLOTS, DIVISION_SLOTS, Division
from chuk_mcp_beats.core.note import Note

logger = logging.getLogger(__name__)


class Beat:
    """
    Fixed 8-slot subdivision buffer.

    A slot's content is the last write to cover it. Notes are stored by
    reference; writing the same Note to several slots makes it sound
    for their combined length (see runs()).

    Examples:
        beat = Beat()
        beat.add_eighth(Note("C", 5), 0)        # slots 0-3
        beat.add_at(Note("E", 5), 6, Division.SIXTEENTH)  # slots 6-7
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: list[Note | None] = [None] * BEAT_SLOTS

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def slots(self) -> tuple[Note | None, ...]:
        """Snapshot of the slot contents."""
        return tuple(self._slots)

    def __len__(self) -> int:
        return BEAT_SLOTS

    def __iter__(self) -> Iterator[Note | None]:
        return iter(self._slots)

    def __getitem__(self, position: int) -> Note | None:
        return self._slots[position]

    def is_rest(self) -> bool:
        """True if every slot is a rest."""
        return all(slot is None for slot in self._slots)

    def runs(self) -> list[tuple[Note | None, int]]:
        """
        Flatten the beat into (note, units) pairs.

        Adjacent slots holding the same Note object (or adjacent rests)
        merge into one run. Units are 1/32 notes, matching NoteDuration.
        """
        result: list[tuple[Note | None, int]] = []
        for slot in self._slots:
            if result and result[-1][0] is slot:
                result[-1] = (slot, result[-1][1] + 1)
            else:
                result.append((slot, 1))
        return result

    # ------------------------------------------------------------------
    # Whole-beat writes
    # ------------------------------------------------------------------

    def fill(self, note: Note | None) -> None:
        """Set every slot to the note (None fills with rests)."""
        self._slots = [note] * BEAT_SLOTS

    def clear(self) -> None:
        """Remove all notes from the beat."""
        self.fill(None)

    def from_array(self, notes: Sequence[Note | None]) -> bool:
        """
        Copy notes slot-for-slot.

        Returns:
            False (no change) unless exactly 8 values are given
        """
        if len(notes) != BEAT_SLOTS:
            logger.debug("from_array rejected %d values", len(notes))
            return False

        self._slots = list(notes)
        return True

    def from_array_stretched(self, notes: Sequence[Note | None]) -> bool:
        """
        Spread up to 8 notes evenly over the beat.

        The stride is 8 // len(notes), rounded up to an even number so
        notes land on 16th-note boundaries. Note j is written to slot
        j * stride; slots in between keep their previous content, so
        clear() first for a clean fill.

        {A, B} -> slots 0 and 4
        {A, B, C} -> slots 0, 2 and 4

        From five notes on the stride is 2, so only the first four are
        placed (slots 0, 2, 4 and 6) and the rest are dropped.

        Returns:
            False (no change) for an empty list or more than 8 notes
        """
        count = len(notes)
        if count == 0 or count > BEAT_SLOTS:
            logger.debug("from_array_stretched rejected %d values", count)
            return False

        stride = BEAT_SLOTS // count
        if stride % 2:
            stride += 1

        placed = min(count, len(range(0, BEAT_SLOTS, stride)))
        if placed < count:
            logger.debug(
                "from_array_stretched dropped %d of %d notes (stride %d)",
                count - placed,
                count,
                stride,
            )

        for j in range(placed):
            self._slots[j * stride] = notes[j]
        return True

    # ------------------------------------------------------------------
    # Ranged writes
    # ------------------------------------------------------------------

    def add_range(self, note: Note | None, start: int, length: int) -> bool:
        """
        Write a note to slots [start, start + length).

        This is the primitive every other placement delegates to.

        Args:
            note: Note to write (None writes rests)
            start: First slot, in [0, 8)
            length: Number of slots, at least 1

        Returns:
            False (no change) if the range does not fit in the beat
        """
        if start < 0 or start >= BEAT_SLOTS or length < 1 or start + length > BEAT_SLOTS:
            logger.debug("add_range rejected start=%d length=%d", start, length)
            return False

        for i in range(start, start + length):
            self._slots[i] = note
        return True

    def add_eighth(self, note: Note | None, section: int) -> bool:
        """Fill the first (0) or second (1) half of the beat."""
        width = DIVISION_SLOTS[Division.EIGHTH]
        if section not in (0, 1):
            return False
        return self.add_range(note, section * width, width)

    def add_sixteenth(self, note: Note | None, section: int) -> bool:
        """Fill one quarter of the beat, section in [0, 3]."""
        width = DIVISION_SLOTS[Division.SIXTEENTH]
        if section not in (0, 1, 2, 3):
            return False
        return self.add_range(note, section * width, width)

    def add_at(
        self,
        note: Note | None,
        position: int,
        division: Division | None = None,
    ) -> bool:
        """
        Add a note at a slot position, optionally spanning a division.

        Without a division, exactly one slot is written. With one:
        - QUARTER: position must be 0; fills the whole beat
        - EIGHTH: 4 slots from position (0 <= position <= 4)
        - SIXTEENTH: 2 slots from position (0 <= position <= 6)
        - THIRTY_SECOND: the single slot at position

        Returns:
            Whether the note was placed
        """
        if division is None:
            return self.add_range(note, position, 1)

        try:
            division = Division(division)
        except ValueError:
            logger.debug("Unsupported division %r", division)
            return False

        if division == Division.QUARTER:
            if position != 0:
                logger.debug("Quarter placement needs position 0, got %d; use fill()", position)
                return False
            self.fill(note)
            return True

        return self.add_range(note, position, DIVISION_SLOTS[division])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Beat):
            return NotImplemented
        return self._slots == other._slots

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        cells = ", ".join("-" if slot is None else str(slot) for slot in self._slots)
        return f"Beat([{cells}])"

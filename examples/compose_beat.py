#!/usr/bin/env python3
"""
Example: Composing beats and scheduling a sequence.

This demonstrates the core building blocks: notes with frequencies,
8-slot beats filled by division or from presets, and a sequence that
turns beats into a timed playback schedule.

Usage:
    python examples/compose_beat.py
"""

from pathlib import Path

from chuk_mcp_beats.core import Beat, Division, Note, NoteDuration, Sequence, classify_interval
from chuk_mcp_beats.models import BeatSpec
from chuk_mcp_beats.presets import PresetLoader


def main() -> None:
    """Build two beats and print their schedule."""
    print("CHUK Beats Demo")
    print("=" * 40)
    print()

    # Notes and intervals
    root = Note.parse("C5")
    fifth = root.transpose(7)
    print(f"{root}: {root.frequency():.2f} Hz")
    print(f"{fifth}: {fifth.frequency():.2f} Hz")
    print(f"C -> G is {classify_interval('C', 'G').value}")
    print(f"C -> Eb is {classify_interval('C', 'Eb').value}")
    print()

    # A hand-built beat: eighth, sixteenth, sixteenth
    beat = Beat()
    beat.add_at(root, 0, Division.EIGHTH)
    beat.add_at(Note("E", 5), 4, Division.SIXTEENTH)
    beat.add_at(fifth, 6, Division.SIXTEENTH)
    print("Hand-built beat:")
    print(f"  Slots: {BeatSpec.from_beat(beat).labels()}")
    print(f"  Runs:  {[(str(n) if n else '-', u) for n, u in beat.runs()]}")
    print()

    # A placement that does not fit is rejected and leaves the beat alone
    placed = beat.add_at(root, 6, Division.EIGHTH)
    print(f"Eighth at slot 6 placed: {placed}")
    print()

    # A beat from the preset library
    library_path = Path(__file__).parent.parent / "src/chuk_mcp_beats/presets/library"
    loader = PresetLoader(library_path=library_path)

    print("Available presets:")
    for meta in loader.list_presets():
        print(f"  {meta.name}: {meta.description}")
    print()

    preset = loader.get_preset("gallop")
    if not preset:
        print("Failed to load preset")
        return
    gallop = preset.build(transpose=-4)
    print(f"Gallop (down 4): {BeatSpec.from_beat(gallop).labels()}")
    print()

    # Sequence the beats and schedule them
    sequence = Sequence(bpm=120)
    sequence.extend_beat(beat)
    sequence.extend_beat(gallop)
    sequence.add(None, NoteDuration.EIGHTH)
    sequence.add(root, NoteDuration.HALF)

    print(f"Schedule at {sequence.bpm} BPM ({sequence.total_units()} units):")
    for start, timed in sequence.schedule():
        name = "rest" if timed.is_rest else str(timed.note)
        print(f"  {start / 1e6:8.1f} ms  {name:5s}  {sequence.nanoseconds(timed) / 1e6:7.1f} ms")


if __name__ == "__main__":
    main()

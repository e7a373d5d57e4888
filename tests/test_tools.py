"""
Tests for MCP tools.

Tests the MCP tool implementations for pitch, beats and sequences.
"""

import json
from pathlib import Path

import pytest

from chuk_mcp_beats.config import BeatsConfig
from chuk_mcp_beats.presets import PresetLoader
from chuk_mcp_beats.tools.beats import register_beat_tools
from chuk_mcp_beats.tools.pitch import register_pitch_tools
from chuk_mcp_beats.tools.sequence import register_sequence_tools
from chuk_mcp_beats.workspace import WorkspaceManager


def _strict_loads(text: str) -> dict:
    """Parse JSON, failing on the non-standard NaN / Infinity tokens."""

    def reject(token: str) -> None:
        raise ValueError(f"Non-standard JSON token: {token}")

    return json.loads(text, parse_constant=reject)


# Mock MCP server for testing tools
class MockMCPServer:
    """Mock MCP server that just stores registered tools."""

    def __init__(self, name: str):
        self.name = name
        self.tools: dict = {}

    def tool(self, func):
        """Decorator to register a tool."""
        self.tools[func.__name__] = func
        return func


@pytest.fixture
def manager() -> WorkspaceManager:
    return WorkspaceManager(BeatsConfig())


@pytest.fixture
def beat_tools(manager: WorkspaceManager, library_path: Path) -> dict:
    mcp = MockMCPServer("test")
    return register_beat_tools(mcp, manager, PresetLoader(library_path=library_path))


@pytest.fixture
def sequence_tools(manager: WorkspaceManager) -> dict:
    return register_sequence_tools(MockMCPServer("test"), manager)


class TestRegistration:
    """Tools are registered on the server under their function names."""

    def test_registers_all(self, manager: WorkspaceManager, library_path: Path) -> None:
        mcp = MockMCPServer("test")
        pitch = register_pitch_tools(mcp, BeatsConfig())
        beats = register_beat_tools(mcp, manager, PresetLoader(library_path=library_path))
        sequence = register_sequence_tools(mcp, manager)
        assert set(mcp.tools) == set(pitch) | set(beats) | set(sequence)
        assert "beats_add_at" in mcp.tools
        assert "beats_schedule" in mcp.tools


class TestPitchTools:
    """Tests for pitch tools."""

    @pytest.mark.asyncio
    async def test_note_info(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = json.loads(await tools["beats_note_info"](note="A4"))
        assert data["status"] == "success"
        assert data["note"]["note_number"] == 9
        assert data["note"]["frequency"] == pytest.approx(440.0)

    @pytest.mark.asyncio
    async def test_note_info_default_octave(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig(default_octave=3))
        data = json.loads(await tools["beats_note_info"](note="C"))
        assert data["note"]["name"] == "C3"

    @pytest.mark.asyncio
    async def test_note_info_invalid(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        for bad in ("H4", "-"):
            data = json.loads(await tools["beats_note_info"](note=bad))
            assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_classify_interval(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = json.loads(await tools["beats_classify_interval"](base="C", compare="G"))
        assert data["status"] == "success"
        assert data["quality"] == "perfect"
        assert data["semitones"] == 7

        data = json.loads(await tools["beats_classify_interval"](base="G", compare="C"))
        assert data["quality"] == "perfect"
        assert data["semitones"] == -7

    @pytest.mark.asyncio
    async def test_classify_interval_beyond_octave(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = json.loads(await tools["beats_classify_interval"](base="Cb", compare="B#"))
        assert data["status"] == "success"
        assert data["quality"] == "invalid"

    @pytest.mark.asyncio
    async def test_classify_interval_bad_spelling(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = json.loads(await tools["beats_classify_interval"](base="C", compare="Q"))
        assert data["status"] == "error"
        assert "Q" in data["message"]

    @pytest.mark.asyncio
    async def test_transpose(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig(prefer_flats=True))
        data = json.loads(await tools["beats_transpose_note"](note="C5", semitones=10))
        assert data["status"] == "success"
        assert data["transposed"]["name"] == "Bb5"
        assert data["quality"] == "minor"

        data = json.loads(
            await tools["beats_transpose_note"](note="C5", semitones=10, prefer_flats=False)
        )
        assert data["transposed"]["name"] == "A#5"

    @pytest.mark.asyncio
    async def test_frequency_from_offset(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = json.loads(await tools["beats_frequency_from_offset"](half_steps=-3))
        assert data["frequency"] == pytest.approx(440.0)

    @pytest.mark.asyncio
    async def test_frequency_out_of_range(self) -> None:
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = _strict_loads(await tools["beats_frequency_from_offset"](half_steps=100_000))
        assert data["status"] == "error"
        assert "100000" in data["message"]

        data = _strict_loads(await tools["beats_frequency_from_offset"](half_steps=-100_000))
        assert data["status"] == "success"
        assert data["frequency"] == 0.0

    @pytest.mark.asyncio
    async def test_note_info_extreme_octave(self) -> None:
        """A frequency too large for a float is reported as null."""
        tools = register_pitch_tools(MockMCPServer("test"), BeatsConfig())
        data = _strict_loads(await tools["beats_note_info"](note="C99999"))
        assert data["status"] == "success"
        assert data["note"]["frequency"] is None

        data = _strict_loads(await tools["beats_transpose_note"](note="C99999", semitones=1))
        assert data["transposed"]["frequency"] is None


class TestBeatTools:
    """Tests for beat tools."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, beat_tools: dict) -> None:
        data = json.loads(await beat_tools["beats_create_beat"](name="b1"))
        assert data["status"] == "success"
        assert data["beat"]["slots"] == ["-"] * 8

        data = json.loads(await beat_tools["beats_get_beat"](name="b1"))
        assert data["status"] == "success"
        assert data["beat"]["runs"] == [{"note": None, "units": 8}]

    @pytest.mark.asyncio
    async def test_create_duplicate(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(await beat_tools["beats_create_beat"](name="b1"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_create_from_preset(self, beat_tools: dict) -> None:
        data = json.loads(
            await beat_tools["beats_create_beat"](name="b1", preset="straight-eighths", transpose=2)
        )
        assert data["status"] == "success"
        assert data["beat"]["slots"] == ["D5"] * 4 + ["A5"] * 4

    @pytest.mark.asyncio
    async def test_create_unknown_preset(self, beat_tools: dict) -> None:
        data = json.loads(await beat_tools["beats_create_beat"](name="b1", preset="nope"))
        assert data["status"] == "error"
        assert json.loads(await beat_tools["beats_list_beats"]())["beats"] == []

    @pytest.mark.asyncio
    async def test_get_missing(self, beat_tools: dict) -> None:
        data = json.loads(await beat_tools["beats_get_beat"](name="missing"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_fill_and_clear(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(await beat_tools["beats_fill"](name="b1", note="E4"))
        assert data["beat"]["slots"] == ["E4"] * 8
        assert data["beat"]["runs"] == [{"note": "E4", "units": 8}]

        data = json.loads(await beat_tools["beats_clear"](name="b1"))
        assert data["beat"]["slots"] == ["-"] * 8

    @pytest.mark.asyncio
    async def test_add_at_divisions(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        await beat_tools["beats_add_at"](name="b1", note="C5", position=0, division="eighth")
        data = json.loads(
            await beat_tools["beats_add_at"](name="b1", note="G5", position=6, division="16th")
        )
        assert data["status"] == "success"
        assert data["beat"]["slots"] == ["C5"] * 4 + ["-", "-", "G5", "G5"]

    @pytest.mark.asyncio
    async def test_add_at_out_of_range(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(
            await beat_tools["beats_add_at"](name="b1", note="C5", position=5, division="eighth")
        )
        assert data["status"] == "error"

        data = json.loads(await beat_tools["beats_get_beat"](name="b1"))
        assert data["beat"]["slots"] == ["-"] * 8

    @pytest.mark.asyncio
    async def test_add_at_bad_division(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(
            await beat_tools["beats_add_at"](name="b1", note="C5", position=0, division="triplet")
        )
        assert data["status"] == "error"
        assert "triplet" in data["message"]

    @pytest.mark.asyncio
    async def test_add_at_bad_note(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(await beat_tools["beats_add_at"](name="b1", note="X9", position=0))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_add_range(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(
            await beat_tools["beats_add_range"](name="b1", note="F5", start=2, length=3)
        )
        assert data["beat"]["slots"] == ["-", "-", "F5", "F5", "F5", "-", "-", "-"]

        data = json.loads(
            await beat_tools["beats_add_range"](name="b1", note="F5", start=6, length=3)
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_from_array(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        notes = ["C5", "-", "E5", None, "G5", "rest", "C6", "-"]
        data = json.loads(await beat_tools["beats_from_array"](name="b1", notes=notes))
        assert data["beat"]["slots"] == ["C5", "-", "E5", "-", "G5", "-", "C6", "-"]

        data = json.loads(await beat_tools["beats_from_array"](name="b1", notes=["C5"] * 3))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_from_array_stretched_replaces_contents(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        await beat_tools["beats_fill"](name="b1", note="A4")
        data = json.loads(
            await beat_tools["beats_from_array"](name="b1", notes=["C5", "G5"], stretch=True)
        )
        assert data["beat"]["slots"] == ["C5", "-", "-", "-", "G5", "-", "-", "-"]

    @pytest.mark.asyncio
    async def test_from_array_stretched_six_keeps_four(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        await beat_tools["beats_fill"](name="b1", note="A4")
        notes = ["C5", "D5", "E5", "F5", "G5", "A5"]
        data = json.loads(
            await beat_tools["beats_from_array"](name="b1", notes=notes, stretch=True)
        )
        assert data["status"] == "success"
        assert data["beat"]["slots"] == ["C5", "-", "D5", "-", "E5", "-", "F5", "-"]

    @pytest.mark.asyncio
    async def test_from_array_stretched_rejects_nine(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        await beat_tools["beats_fill"](name="b1", note="A4")
        data = json.loads(
            await beat_tools["beats_from_array"](name="b1", notes=["C5"] * 9, stretch=True)
        )
        assert data["status"] == "error"
        assert "1-8" in data["message"]
        data = json.loads(await beat_tools["beats_get_beat"](name="b1"))
        assert data["beat"]["slots"] == ["A4"] * 8

    @pytest.mark.asyncio
    async def test_presets(self, beat_tools: dict) -> None:
        data = json.loads(await beat_tools["beats_list_presets"]())
        assert data["status"] == "success"
        assert any(p["name"] == "gallop" for p in data["presets"])

        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(await beat_tools["beats_apply_preset"](name="b1", preset="gallop"))
        assert data["status"] == "success"
        assert data["beat"]["slots"] == ["E5"] * 4 + ["B4", "B4", "E5", "E5"]

        data = json.loads(await beat_tools["beats_apply_preset"](name="b1", preset="nope"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_delete(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1")
        data = json.loads(await beat_tools["beats_delete_beat"](name="b1"))
        assert data["status"] == "success"
        data = json.loads(await beat_tools["beats_delete_beat"](name="b1"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_duplicate(self, beat_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1", preset="straight-eighths")
        data = json.loads(await beat_tools["beats_duplicate_beat"](name="b1", new_name="b2"))
        assert data["status"] == "success"
        assert data["beat"]["name"] == "b2"
        assert data["beat"]["runs"] == [{"note": "C5", "units": 4}, {"note": "G5", "units": 4}]

        await beat_tools["beats_clear"](name="b2")
        data = json.loads(await beat_tools["beats_get_beat"](name="b1"))
        assert data["beat"]["slots"] == ["C5"] * 4 + ["G5"] * 4

    @pytest.mark.asyncio
    async def test_duplicate_errors(self, beat_tools: dict) -> None:
        data = json.loads(await beat_tools["beats_duplicate_beat"](name="nope", new_name="b2"))
        assert data["status"] == "error"

        await beat_tools["beats_create_beat"](name="b1")
        await beat_tools["beats_create_beat"](name="b2")
        data = json.loads(await beat_tools["beats_duplicate_beat"](name="b1", new_name="b2"))
        assert data["status"] == "error"
        assert "already exists" in data["message"]


class TestSequenceTools:
    """Tests for sequence tools."""

    @pytest.mark.asyncio
    async def test_create_default_bpm(self, sequence_tools: dict) -> None:
        data = json.loads(await sequence_tools["beats_create_sequence"](name="s1"))
        assert data["status"] == "success"
        assert data["sequence"]["bpm"] == 120

    @pytest.mark.asyncio
    async def test_create_zero_bpm(self, sequence_tools: dict) -> None:
        data = json.loads(await sequence_tools["beats_create_sequence"](name="s1", bpm=0))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_add_notes(self, sequence_tools: dict) -> None:
        await sequence_tools["beats_create_sequence"](name="s1")
        await sequence_tools["beats_add_to_sequence"](name="s1", note="C5", duration="half")
        data = json.loads(
            await sequence_tools["beats_add_to_sequence"](name="s1", note="-", duration=2)
        )
        assert data["sequence"]["events"] == [
            {"note": "C5", "duration": 16},
            {"note": None, "duration": 2},
        ]
        assert data["sequence"]["total_units"] == 18

    @pytest.mark.asyncio
    async def test_add_bad_duration(self, sequence_tools: dict) -> None:
        await sequence_tools["beats_create_sequence"](name="s1")
        data = json.loads(
            await sequence_tools["beats_add_to_sequence"](name="s1", note="C5", duration="long")
        )
        assert data["status"] == "error"

        data = json.loads(
            await sequence_tools["beats_add_to_sequence"](name="s1", note="C5", duration=0)
        )
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_append_beat(self, beat_tools: dict, sequence_tools: dict) -> None:
        await beat_tools["beats_create_beat"](name="b1", preset="dotted-eighth-sixteenth")
        await sequence_tools["beats_create_sequence"](name="s1")
        data = json.loads(await sequence_tools["beats_append_beat"](name="s1", beat="b1"))
        assert data["status"] == "success"
        assert data["sequence"]["events"] == [
            {"note": "C5", "duration": 6},
            {"note": "E5", "duration": 2},
        ]

    @pytest.mark.asyncio
    async def test_append_missing_beat(self, sequence_tools: dict) -> None:
        await sequence_tools["beats_create_sequence"](name="s1")
        data = json.loads(await sequence_tools["beats_append_beat"](name="s1", beat="nope"))
        assert data["status"] == "error"

    @pytest.mark.asyncio
    async def test_set_bpm_and_schedule(self, sequence_tools: dict) -> None:
        await sequence_tools["beats_create_sequence"](name="s1")
        await sequence_tools["beats_add_to_sequence"](name="s1", note="A4", duration="quarter")
        await sequence_tools["beats_add_to_sequence"](name="s1", note="C5", duration="eighth")

        data = json.loads(await sequence_tools["beats_set_bpm"](name="s1", bpm=-60))
        assert data["sequence"]["bpm"] == 60

        data = json.loads(await sequence_tools["beats_set_bpm"](name="s1", bpm=0))
        assert data["status"] == "error"

        data = json.loads(await sequence_tools["beats_schedule"](name="s1"))
        assert data["status"] == "success"
        events = data["events"]
        assert [e["start_ns"] for e in events] == [0, 250_000_000]
        assert [e["duration_ns"] for e in events] == [250_000_000, 125_000_000]
        assert events[0]["frequency"] == pytest.approx(440.0)

    @pytest.mark.asyncio
    async def test_schedule_extreme_octave(self, sequence_tools: dict) -> None:
        await sequence_tools["beats_create_sequence"](name="s1")
        await sequence_tools["beats_add_to_sequence"](name="s1", note="C99999")
        await sequence_tools["beats_add_to_sequence"](name="s1", note="-")
        data = _strict_loads(await sequence_tools["beats_schedule"](name="s1"))
        assert data["status"] == "success"
        assert [e["frequency"] for e in data["events"]] == [None, None]

    @pytest.mark.asyncio
    async def test_schedule_missing(self, sequence_tools: dict) -> None:
        data = json.loads(await sequence_tools["beats_schedule"](name="nope"))
        assert data["status"] == "error"

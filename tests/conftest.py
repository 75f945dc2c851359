"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from lmms2midi.models.project import (
    InstrumentSettings,
    Note,
    Pattern,
    Project,
    ProjectHead,
    Sf2Player,
    Timeline,
    Track,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def make_track(
    name: str = "Track",
    bank: int = 0,
    patch: int = 0,
    notes=(),
    pattern_position: int = 0,
    base_note: int = 69,
    use_master_pitch: bool = True,
    volume: float = 100.0,
    panning: float = 0.0,
    sf2: bool = True,
) -> Track:
    """Build an SF2 track with a single pattern."""
    return Track(
        name=name,
        instrument=InstrumentSettings(
            volume=volume,
            panning=panning,
            base_note=base_note,
            use_master_pitch=use_master_pitch,
            instrument_name="sf2player" if sf2 else "tripleoscillator",
            sf2_player=Sf2Player(bank=bank, patch=patch) if sf2 else None,
        ),
        patterns=[Pattern(position=pattern_position, notes=list(notes))],
    )


def make_project(tracks, bpm: int = 120, master_pitch: int = 0, timeline=None) -> Project:
    """Build a project around the given tracks."""
    return Project(
        head=ProjectHead(bpm=bpm, master_pitch=master_pitch),
        tracks=list(tracks),
        timeline=timeline,
    )


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def mmp_file(fixtures_dir):
    """Return path to the plain XML test project."""
    return fixtures_dir / "simple.mmp"


@pytest.fixture
def mmp_data(mmp_file):
    """Return raw bytes of the test project."""
    with open(mmp_file, "rb") as f:
        return f.read()


@pytest.fixture
def simple_project():
    """A melodic track and a drum track with a loop range."""
    piano = make_track(
        "Piano",
        notes=[Note(0, 48, 60, 100), Note(48, 48, 62, 100), Note(96, 96, 64, 200)],
    )
    drums = make_track("Drums", bank=128, notes=[Note(0, 12, 36, 100)], pattern_position=192)
    return make_project([piano, drums], timeline=Timeline(loop_start=192, loop_end=384))

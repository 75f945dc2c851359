"""Tests for the command line interface."""

import sys
from pathlib import Path

import mido
from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.app import app

runner = CliRunner()


class TestConvertCommand:
    """Test cases for lmms2midi convert."""

    def test_convert(self, mmp_file, tmp_path):
        output = tmp_path / "song.mid"
        result = runner.invoke(
            app, ["convert", str(mmp_file), "-o", str(output), "-l", "marker", "-l", "cc111"]
        )

        assert result.exit_code == 0, result.output
        assert "Converted" in result.output

        track = mido.MidiFile(str(output)).tracks[0]
        assert [m.text for m in track if m.type == "marker"] == ["loopStart", "loopEnd"]
        assert [m.value for m in track if m.type == "control_change" and m.control == 111] == [0]

    def test_missing_source(self, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "missing.mmp")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_loop_style(self, mmp_file, tmp_path):
        result = runner.invoke(
            app, ["convert", str(mmp_file), "-o", str(tmp_path / "x.mid"), "-l", "bogus"]
        )
        assert result.exit_code != 0

    def test_unreadable_project(self, tmp_path):
        source = tmp_path / "broken.mmp"
        source.write_text("<lmms-project>")

        result = runner.invoke(app, ["convert", str(source)])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestInfoAndCheck:
    """Test cases for lmms2midi info and check."""

    def test_info(self, mmp_file):
        result = runner.invoke(app, ["info", str(mmp_file), "--channels"])

        assert result.exit_code == 0, result.output
        assert "Piano" in result.output
        assert "120 BPM" in result.output

    def test_check_clean(self, mmp_file):
        result = runner.invoke(app, ["check", str(mmp_file), "--strict"])

        assert result.exit_code == 0, result.output
        assert "No issues found" in result.output

    def test_check_strict_fails_on_warnings(self, mmp_data, tmp_path):
        # Same key retriggered while still held
        source = tmp_path / "overlap.mmp"
        source.write_bytes(
            mmp_data.replace(b'key="59" vol="200" pos="48"', b'key="57" vol="200" pos="24"')
        )

        result = runner.invoke(app, ["check", str(source), "--strict"])
        assert result.exit_code == 1
        assert "note-overlap" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "lmms2midi" in result.output

    def test_info_reports_bad_number(self, mmp_data, tmp_path):
        source = tmp_path / "huge.mmp"
        source.write_bytes(mmp_data.replace(b'masterpitch="0"', b'masterpitch="1e400"'))

        result = runner.invoke(app, ["info", str(source)])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

"""
LMMS project file reader.

Reads .mmp (plain XML) and .mmpz (Qt qCompress: 4-byte big-endian length
followed by a zlib stream) project files into the Project model.

Only tracks that carry an <instrumenttrack> element are read; automation,
sample and beat/bassline tracks are skipped.
"""

import struct
import zlib
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

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

T = TypeVar("T")


class ProjectLoadError(Exception):
    """Raised when a project file cannot be read or decoded."""

    pass


def _to_int(value: str) -> int:
    # LMMS writes some integer settings as floats ("100.0")
    return int(float(value))


def _to_bool(value: str) -> bool:
    return _to_int(value) != 0


class LmmsReader:
    """
    Reader for LMMS project files.

    Example:
        project = LmmsReader.read("song.mmpz")
        print(f"{len(project.tracks)} tracks at {project.head.bpm} BPM")
    """

    ROOT_TAG = "lmms-project"
    QCOMPRESS_HEADER_SIZE = 4

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> Project:
        """
        Read an LMMS project file and return a Project.

        Args:
            filepath: Path to .mmp or .mmpz file

        Returns:
            Parsed Project object
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Project:
        """
        Parse a project file, choosing the decoding by file extension.

        Raises:
            FileNotFoundError: If the file does not exist
            ProjectLoadError: If the file is not a readable LMMS project
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        suffix = filepath.suffix.lower()
        if suffix not in (".mmp", ".mmpz"):
            raise ProjectLoadError(f"Not an LMMS project file: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        if suffix == ".mmpz":
            data = self.decompress(data)

        return self.parse_bytes(data)

    def decompress(self, data: bytes) -> bytes:
        """
        Decompress .mmpz contents.

        Raises:
            ProjectLoadError: If the data is not a valid qCompress stream
        """
        if len(data) < self.QCOMPRESS_HEADER_SIZE:
            raise ProjectLoadError(f"Compressed project too short: {len(data)} bytes")

        (expected_size,) = struct.unpack(">I", data[: self.QCOMPRESS_HEADER_SIZE])
        try:
            xml_data = zlib.decompress(data[self.QCOMPRESS_HEADER_SIZE :])
        except zlib.error as e:
            raise ProjectLoadError(f"Cannot decompress project: {e}") from e

        if expected_size and len(xml_data) != expected_size:
            raise ProjectLoadError(
                f"Decompressed size {len(xml_data)} does not match header ({expected_size})"
            )
        return xml_data

    def parse_bytes(self, data: bytes) -> Project:
        """
        Parse project XML.

        Args:
            data: XML document bytes

        Returns:
            Parsed Project object
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise ProjectLoadError(f"Invalid project XML: {e}") from e

        if root.tag != self.ROOT_TAG:
            raise ProjectLoadError(f"Unexpected root element <{root.tag}>")

        head = self._child(root, "head")
        song = self._child(root, "song")
        container = self._child(song, "trackcontainer")

        project = Project(
            head=self._parse_head(head),
            creator=root.get("creator", "LMMS"),
            creator_version=root.get("creatorversion", ""),
        )

        for track_elem in container.findall("track"):
            if track_elem.find("instrumenttrack") is not None:
                project.tracks.append(self._parse_track(track_elem))

        timeline = song.find("timeline")
        if timeline is not None:
            project.timeline = self._parse_timeline(timeline)

        return project

    # Element helpers

    def _child(self, elem: ET.Element, tag: str) -> ET.Element:
        child = elem.find(tag)
        if child is None:
            raise ProjectLoadError(f"Missing <{tag}> element in <{elem.tag}>")
        return child

    def _value(
        self,
        elem: ET.Element,
        name: str,
        convert: Callable[[str], T],
        default: Optional[T] = None,
    ) -> T:
        """
        Read a setting stored as an attribute or, for automated settings,
        as a child element with a value attribute.
        """
        raw = elem.get(name)
        if raw is None:
            child = elem.find(name)
            if child is not None:
                raw = child.get("value")

        if raw is None:
            if default is None:
                raise ProjectLoadError(f"Missing attribute '{name}' in <{elem.tag}>")
            return default

        try:
            return convert(raw)
        except (ValueError, OverflowError) as e:
            raise ProjectLoadError(
                f"Invalid value {raw!r} for '{name}' in <{elem.tag}>"
            ) from e

    # Section parsers

    def _parse_head(self, elem: ET.Element) -> ProjectHead:
        return ProjectHead(
            bpm=self._value(elem, "bpm", _to_int),
            time_signature_numerator=self._value(elem, "timesig_numerator", _to_int, 4),
            time_signature_denominator=self._value(elem, "timesig_denominator", _to_int, 4),
            master_pitch=self._value(elem, "masterpitch", _to_int, 0),
            master_volume=self._value(elem, "mastervol", _to_int, 100),
        )

    def _parse_track(self, elem: ET.Element) -> Track:
        instrument_elem = self._child(elem, "instrumenttrack")

        track = Track(
            name=elem.get("name", ""),
            muted=self._value(elem, "muted", _to_bool, False),
            solo=self._value(elem, "solo", _to_bool, False),
            track_type=self._value(elem, "type", _to_int, 0),
            instrument=self._parse_instrument(instrument_elem),
        )

        for pattern_elem in elem.findall("pattern"):
            track.patterns.append(self._parse_pattern(pattern_elem))

        return track

    def _parse_instrument(self, elem: ET.Element) -> InstrumentSettings:
        settings = InstrumentSettings(
            volume=self._value(elem, "vol", float, 100.0),
            panning=self._value(elem, "pan", float, 0.0),
            pitch_range=self._value(elem, "pitchrange", _to_int, 1),
            base_note=self._value(elem, "basenote", _to_int, 57),
            use_master_pitch=self._value(elem, "usemasterpitch", _to_bool, True),
            pitch=self._value(elem, "pitch", float, 0.0),
        )

        instrument = elem.find("instrument")
        if instrument is not None:
            settings.instrument_name = instrument.get("name", "")
            sf2 = instrument.find("sf2player")
            if sf2 is not None:
                settings.sf2_player = Sf2Player(
                    src=sf2.get("src", ""),
                    bank=self._value(sf2, "bank", _to_int),
                    patch=self._value(sf2, "patch", _to_int),
                    gain=self._value(sf2, "gain", float, 1.0),
                )

        return settings

    def _parse_pattern(self, elem: ET.Element) -> Pattern:
        pattern = Pattern(
            name=elem.get("name", ""),
            position=self._value(elem, "pos", _to_int),
            muted=self._value(elem, "muted", _to_bool, False),
            steps=self._value(elem, "steps", _to_int, 16),
        )
        if pattern.position < 0:
            raise ProjectLoadError(
                f"Pattern {pattern.name!r} starts before the song at pos {pattern.position}"
            )

        for note_elem in elem.findall("note"):
            note = Note(
                position=self._value(note_elem, "pos", _to_int),
                length=self._value(note_elem, "len", _to_int),
                key=self._value(note_elem, "key", _to_int),
                volume=self._value(note_elem, "vol", _to_int, 100),
                panning=self._value(note_elem, "pan", _to_int, 0),
            )
            # Step notes of beat patterns carry negative lengths
            if note.position < 0 or note.length < 0:
                raise ProjectLoadError(
                    f"Note at pos {note.position} with length {note.length} in pattern "
                    f"{pattern.name!r} cannot be placed on the timeline"
                )
            pattern.notes.append(note)

        return pattern

    def _parse_timeline(self, elem: ET.Element) -> Timeline:
        return Timeline(
            loop_enabled=self._value(elem, "lpstate", _to_bool, False),
            loop_start=self._value(elem, "lp0pos", _to_int, 0),
            loop_end=self._value(elem, "lp1pos", _to_int, 192),
        )

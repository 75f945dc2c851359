"""LMMS project format handlers."""

from lmms2midi.formats.lmms.reader import LmmsReader, ProjectLoadError

__all__ = ["LmmsReader", "ProjectLoadError"]

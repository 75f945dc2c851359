"""Command line interface for lmms2midi."""

"""Exception types raised during Loudbars setup and rendering."""

from __future__ import annotations


class LoudbarsError(Exception):
    """Base class for fatal visualizer errors."""


class AudioDecodeError(LoudbarsError):
    """The audio file is missing, unsupported, or corrupt."""


class PlaybackError(LoudbarsError):
    """The audio output device could not be opened or driven."""


class TerminalError(LoudbarsError):
    """Terminal setup or I/O failed."""

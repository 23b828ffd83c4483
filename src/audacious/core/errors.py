"""Exception types raised by the sample store, the WAVE codec and settings."""

from __future__ import annotations


class WavError(ValueError):
    """Base class for everything the WAVE codec can reject."""


class BadHeaderError(WavError):
    """The RIFF/WAVE preamble is missing or inconsistent."""


class MissingChunkError(WavError):
    """A required chunk (``fmt `` or ``data``) is absent."""

    def __init__(self, chunk_id: str, found: list[str] | None = None) -> None:
        self.chunk_id = chunk_id
        self.found = list(found or [])
        listing = ", ".join(repr(name) for name in self.found) or "none"
        super().__init__(f"'{chunk_id}' chunk not found (chunks: {listing})")


class TruncatedChunkError(WavError):
    """A chunk declares more bytes than the stream holds."""


class UnsupportedCompressionError(WavError):
    """Only linear PCM (format tag 1) is handled."""


class UnsupportedChannelCountError(WavError):
    """Only mono and stereo are handled."""


class UnsupportedBitDepthError(WavError):
    """Only 8, 16, 24 and 32 bits per sample are handled."""


class InvalidSampleRateError(WavError):
    """Sample rate must be a positive integer."""


class IndexOutOfRangeError(IndexError):
    """Raised by range operations on a :class:`~audacious.core.wave.Wave`."""


class ConfigValidationError(ValueError):
    """Raised when render configuration values are invalid."""

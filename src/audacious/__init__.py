"""Audacious - sample buffers, generators and a RIFF/WAVE codec."""

from .codec.riff import WavFormat
from .codec.wav import decode, decode_with_format, encode, read_format
from .core.config import RenderConfig, RenderSettings, load_config
from .core.engine import AudioEngine
from .core.errors import (
    BadHeaderError,
    ConfigValidationError,
    IndexOutOfRangeError,
    InvalidSampleRateError,
    MissingChunkError,
    TruncatedChunkError,
    UnsupportedBitDepthError,
    UnsupportedChannelCountError,
    UnsupportedCompressionError,
    WavError,
)
from .core.registry import registry
from .core.wave import Wave
from .effects.mod import VolumeEffect, mix, volume
from .sources.basic import NoiseSource, SilenceSource, ToneSource, WaveForm, noise, silence, tone
from .utils.audio import read_wav, write_wav

__all__ = [
    "AudioEngine",
    "BadHeaderError",
    "ConfigValidationError",
    "IndexOutOfRangeError",
    "InvalidSampleRateError",
    "MissingChunkError",
    "NoiseSource",
    "RenderConfig",
    "RenderSettings",
    "SilenceSource",
    "ToneSource",
    "TruncatedChunkError",
    "UnsupportedBitDepthError",
    "UnsupportedChannelCountError",
    "UnsupportedCompressionError",
    "VolumeEffect",
    "WavError",
    "WavFormat",
    "Wave",
    "WaveForm",
    "decode",
    "decode_with_format",
    "encode",
    "load_config",
    "mix",
    "noise",
    "read_format",
    "read_wav",
    "registry",
    "silence",
    "tone",
    "volume",
    "write_wav",
]

"""File helpers around the WAVE codec plus small numeric utilities."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from ..codec.wav import decode, encode
from ..core.wave import Samples, Wave

logger = logging.getLogger(__name__)

FLOAT32_MAX = float(np.finfo(np.float32).max)


def wav_path(path: Path | str) -> Path:
    """Return ``path`` with a ``.wav`` suffix appended unless it already has one."""
    path = Path(path)
    if path.suffix == ".wav":
        return path
    return path.with_name(path.name + ".wav")


def write_wav(
    path: Path | str,
    wave: Wave,
    channels: int = 2,
    bit_depth: int = 16,
    sample_rate: int = 44100,
) -> Path:
    """Encode ``wave`` and (over)write it to ``path``; returns the path written."""
    data = encode(wave, channels, bit_depth, sample_rate)
    path = wav_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info("Wrote %d bytes to %s", len(data), path)
    return path


def read_wav(path: Path | str) -> Wave:
    """Read and decode a WAVE file."""
    path = wav_path(path)
    data = path.read_bytes()
    logger.info("Read %d bytes from %s", len(data), path)
    return decode(data)


def time_by_samples(sample_num: int, sample_rate: int, channels: int) -> float:
    """Milliseconds spanned by ``sample_num`` interleaved samples."""
    return sample_num / ((sample_rate / 1000.0) * channels)


def clamp(values: Samples) -> np.ndarray:
    """Clip values into the finite float32 range and return them as float32."""
    if not isinstance(values, np.ndarray):
        values = list(values)
    clipped = np.clip(np.asarray(values, dtype=np.float64), -FLOAT32_MAX, FLOAT32_MAX)
    return clipped.astype(np.float32)

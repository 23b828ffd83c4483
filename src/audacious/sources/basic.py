"""Built-in sample generators: tones, white noise and silence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

from ..core.base import AudioSource
from ..core.registry import registry
from ..utils.audio import FLOAT32_MAX


class WaveForm(Enum):
    """Basic periodic waveforms."""

    COSINE = "cosine"
    SAWTOOTH = "sawtooth"
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"


# Each shape maps a phase in [0, 1) onto [-1, 1].
_SHAPES: Dict[WaveForm, Callable[[np.ndarray], np.ndarray]] = {
    WaveForm.COSINE: lambda phase: np.cos(2 * math.pi * phase),
    WaveForm.SAWTOOTH: lambda phase: 2.0 * phase - 1.0,
    WaveForm.SINE: lambda phase: np.sin(2 * math.pi * phase),
    WaveForm.SQUARE: lambda phase: np.where(phase < 0.5, 1.0, -1.0),
    WaveForm.TRIANGLE: lambda phase: 1.0 - 4.0 * np.abs(phase - 0.5),
}


def sample_count(duration_ms: float, sample_rate: int) -> int:
    """Number of samples covering ``duration_ms``, rounded down."""
    if duration_ms < 0:
        raise ValueError(f"duration_ms must be non-negative, got {duration_ms}")
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    return int(duration_ms * sample_rate // 1000)


def tone(
    waveform: Union[WaveForm, str],
    frequency: float,
    duration_ms: float,
    sample_rate: int,
    amplitude: float = 1.0,
) -> np.ndarray:
    """Generate a pure tone of ``frequency`` hertz lasting ``duration_ms``.

    Samples are ``amplitude`` times a unit-range waveform; no other scaling is
    applied, so pick an amplitude suited to the bit depth you will encode at.
    """
    if isinstance(waveform, str):
        waveform = waveform.lower()
    waveform = WaveForm(waveform)
    if frequency <= 0:
        raise ValueError(f"frequency must be positive, got {frequency}")
    count = sample_count(duration_ms, sample_rate)
    t = np.arange(count, dtype=np.float64) / sample_rate
    phase = np.mod(frequency * t, 1.0)
    return (amplitude * _SHAPES[waveform](phase)).astype(np.float32)


def noise(count: int, amplitude: float = FLOAT32_MAX, seed: Optional[int] = None) -> np.ndarray:
    """Uniform white noise spanning ``[-amplitude / 2, amplitude / 2)``."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = np.random.default_rng(seed)
    return ((rng.random(count) - 0.5) * amplitude).astype(np.float32)


def silence(count: int) -> np.ndarray:
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return np.zeros(count, dtype=np.float32)


@dataclass
@registry.register_source
class ToneSource(AudioSource):
    """Periodic waveform at a fixed frequency."""

    name: str = "tone"
    waveform: str = WaveForm.SINE.value
    frequency: float = 440.0
    amplitude: float = 1.0

    def __post_init__(self) -> None:
        waveform = self.waveform
        if isinstance(waveform, str):
            waveform = waveform.lower()
        self.waveform = WaveForm(waveform).value

    def generate(self, duration_ms: float, sample_rate: int) -> np.ndarray:
        return tone(self.waveform, self.frequency, duration_ms, sample_rate, self.amplitude)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({
            "waveform": self.waveform,
            "frequency": self.frequency,
            "amplitude": self.amplitude,
        })
        return data


@dataclass
@registry.register_source
class NoiseSource(AudioSource):
    """White noise generator."""

    name: str = "noise"
    amplitude: float = FLOAT32_MAX
    seed: Optional[int] = None

    def generate(self, duration_ms: float, sample_rate: int) -> np.ndarray:
        return noise(sample_count(duration_ms, sample_rate), self.amplitude, self.seed)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"amplitude": self.amplitude, "seed": self.seed})
        return data


@dataclass
@registry.register_source
class SilenceSource(AudioSource):
    name: str = "silence"

    def generate(self, duration_ms: float, sample_rate: int) -> np.ndarray:
        return silence(sample_count(duration_ms, sample_rate))

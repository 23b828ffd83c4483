"""Interfaces for sample generators and per-buffer effects."""

from __future__ import annotations

import abc
from typing import Any

import numpy as np

from .wave import Wave


class AudioSource(abc.ABC):
    """Something that produces a mono float32 buffer for a given duration."""

    name: str = "audio_source"

    @abc.abstractmethod
    def generate(self, duration_ms: float, sample_rate: int) -> np.ndarray:
        """Produce ``duration_ms`` milliseconds of samples."""

    def render(self, duration_ms: float, sample_rate: int) -> Wave:
        """Generate into a mono Wave; both channels share the samples."""
        samples = self.generate(duration_ms, sample_rate)
        return Wave.adopt(samples, samples)

    def to_dict(self) -> dict[str, Any]:
        """Options that :meth:`registry.create_source` accepts to rebuild this source."""
        return {"name": self.name}


class AudioEffect(abc.ABC):
    """A transformation applied to one channel at a time."""

    name: str = "audio_effect"

    @abc.abstractmethod
    def apply(self, buffer: np.ndarray, sample_rate: int) -> np.ndarray:
        """Return a new buffer; ``buffer`` may be read-only."""

    def process(self, wave: Wave, sample_rate: int) -> Wave:
        """Apply the effect to each channel of ``wave``, returning a new Wave.

        A mono Wave whose channels share one array is processed once.
        """
        left = self.apply(wave.left, sample_rate)
        right = left if wave.right is wave.left else self.apply(wave.right, sample_rate)
        return Wave.adopt(left, right)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}

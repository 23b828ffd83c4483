"""Audio engine that combines sources and effects into a Wave."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

import numpy as np

from ..utils.audio import clamp
from .base import AudioEffect, AudioSource
from .wave import Wave

logger = logging.getLogger(__name__)


def mix(buffers: Iterable[np.ndarray]) -> np.ndarray:
    """Sum any number of buffers, padding with zeros and clamping to the float32 range."""
    buffers = list(buffers)
    if not buffers:
        return np.zeros(0, dtype=np.float32)
    max_len = max(len(buffer) for buffer in buffers)
    total = np.zeros(max_len, dtype=np.float64)
    for buffer in buffers:
        total[: len(buffer)] += np.asarray(buffer, dtype=np.float64)
    return clamp(total)


@dataclass
class AudioEngine:
    """Coordinate synthesis by invoking registered sources and effects."""

    sample_rate: int = 44100
    sources: List[AudioSource] = field(default_factory=list)
    effects: List[AudioEffect] = field(default_factory=list)

    def add_source(self, source: AudioSource) -> None:
        self.sources.append(source)

    def add_effect(self, effect: AudioEffect) -> None:
        self.effects.append(effect)

    def render(self, duration_ms: float) -> Wave:
        """Render every source, run the effect chain and return a mono Wave."""
        waves = [source.render(duration_ms, self.sample_rate) for source in self.sources]
        combined = mix(wave.left for wave in waves)
        wave = Wave.adopt(combined, combined)
        for effect in self.effects:
            wave = effect.process(wave, self.sample_rate)
        logger.debug(
            "Rendered %d samples from %d sources through %d effects",
            wave.length(),
            len(self.sources),
            len(self.effects),
        )
        return wave

    def configuration(self) -> dict:
        return {
            "sample_rate": self.sample_rate,
            "sources": [source.to_dict() for source in self.sources],
            "effects": [effect.to_dict() for effect in self.effects],
        }

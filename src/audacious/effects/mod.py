"""Element-wise buffer arithmetic: cross-fade mixing and volume."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.base import AudioEffect
from ..core.registry import registry
from ..core.wave import Samples
from ..utils.audio import clamp


def mix(first: Samples, second: Samples, bias: float) -> np.ndarray:
    """Mix two buffers, cross-fading their volumes by ``bias``.

    ``bias`` runs from 0 (only ``first``) through 0.5 (both at full volume)
    to 1 (only ``second``). The shorter buffer is treated as if padded with
    silence. The sum is clamped to the float32 range.
    """
    if not 0.0 <= bias <= 1.0:
        raise ValueError(f"bias must be between 0 and 1, got {bias}")
    a = np.asarray(first if isinstance(first, np.ndarray) else list(first), dtype=np.float64)
    b = np.asarray(second if isinstance(second, np.ndarray) else list(second), dtype=np.float64)
    length = max(len(a), len(b))
    a = np.pad(a, (0, length - len(a)))
    b = np.pad(b, (0, length - len(b)))

    if bias <= 0.5:
        b = b * (bias * 2)
    else:
        a = a * (1 - (bias - 0.5) * 2)
    return clamp(a + b)


def volume(samples: Samples, factor: float) -> np.ndarray:
    """Multiply every sample by ``factor``.

    Unlike a bare multiplication, products beyond the float32 range are clamped
    to +/- ``FLOAT32_MAX`` rather than overflowing to infinity.
    """
    values = samples if isinstance(samples, np.ndarray) else list(samples)
    return clamp(np.asarray(values, dtype=np.float64) * factor)


@dataclass
@registry.register_effect
class VolumeEffect(AudioEffect):
    """Scale the whole buffer by a constant factor."""

    name: str = "volume"
    factor: float = 1.0

    def apply(self, buffer: np.ndarray, sample_rate: int) -> np.ndarray:
        return volume(buffer, self.factor)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data.update({"factor": self.factor})
        return data

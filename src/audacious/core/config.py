"""Render configuration: output settings plus source and effect descriptors.

A configuration file is JSON shaped like::

    {
        "settings": {"channels": 2, "bit_depth": 16, "sample_rate": 44100,
                     "duration_ms": 1000},
        "sources": [{"name": "tone", "waveform": "sine", "frequency": 440}],
        "effects": [{"name": "volume", "factor": 0.5}]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .errors import ConfigValidationError

logger = logging.getLogger(__name__)

SUPPORTED_CHANNELS = (1, 2)
SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)


@dataclass
class RenderSettings:
    """Output parameters for encoding a rendered Wave."""

    channels: int = 2
    bit_depth: int = 16
    sample_rate: int = 44100
    duration_ms: float = 1000.0

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.channels, int) or self.channels not in SUPPORTED_CHANNELS:
            raise ConfigValidationError(
                f"channels must be 1 or 2, got {self.channels}"
            )
        if not isinstance(self.bit_depth, int) or self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ConfigValidationError(
                f"bit_depth must be one of 8, 16, 24 or 32, got {self.bit_depth}"
            )
        if not isinstance(self.sample_rate, int) or self.sample_rate < 1:
            raise ConfigValidationError(
                f"sample_rate must be a positive integer, got {self.sample_rate!r}"
            )
        if self.duration_ms < 0:
            raise ConfigValidationError(
                f"duration_ms must be non-negative, got {self.duration_ms}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderSettings":
        if not isinstance(data, dict):
            raise ConfigValidationError("'settings' must be an object")
        unknown = set(data) - {"channels", "bit_depth", "sample_rate", "duration_ms"}
        if unknown:
            raise ConfigValidationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**data)


@dataclass
class RenderConfig:
    """Settings plus the sources and effects to render."""

    settings: RenderSettings = field(default_factory=RenderSettings)
    sources: List[Dict[str, Any]] = field(default_factory=list)
    effects: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": self.settings.to_dict(),
            "sources": [dict(source) for source in self.sources],
            "effects": [dict(effect) for effect in self.effects],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderConfig":
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        for key in ("sources", "effects"):
            entries = data.get(key, [])
            if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
                raise ConfigValidationError(f"'{key}' must be a list of objects")
        return cls(
            settings=RenderSettings.from_dict(data.get("settings", {})),
            sources=[dict(entry) for entry in data.get("sources", [])],
            effects=[dict(entry) for entry in data.get("effects", [])],
        )


def load_config(path: Path | str) -> RenderConfig:
    """Read a JSON render configuration.

    Raises:
        ConfigValidationError: If the file is not valid JSON or holds invalid values.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in configuration file {path}: {e}") from e
    try:
        config = RenderConfig.from_dict(data)
    except TypeError as e:
        raise ConfigValidationError(f"Invalid configuration format in {path}: {e}") from e
    logger.info("Configuration loaded from %s", path)
    return config


def save_config(config: RenderConfig, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2))
    logger.info("Configuration saved to %s", path)
    return path

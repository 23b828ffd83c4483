"""Command-line interface for rendering and inspecting WAVE files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .codec.wav import decode_with_format
from .core.config import RenderConfig, RenderSettings, load_config
from .core.engine import AudioEngine
from .core.errors import ConfigValidationError
from .core.registry import registry
from .sources.basic import ToneSource
from .utils.audio import time_by_samples, write_wav

logger = logging.getLogger(__name__)


def setup_logging(verbosity: int) -> None:
    """Setup logging based on verbosity level."""
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    level = levels[min(verbosity, len(levels) - 1)]
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="audacious", description=__doc__)
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log output (-vv for debug)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser("render", help="Render sources and effects to a WAV file")
    render.add_argument("output", type=Path, help="Path to the output WAV file")
    render.add_argument("--config", type=Path, help="JSON config describing sources/effects")
    render.add_argument("--duration-ms", type=float, help="Duration in milliseconds")
    render.add_argument("--channels", type=int, help="1 (mono) or 2 (stereo)")
    render.add_argument("--bit-depth", type=int, help="8, 16, 24 or 32")
    render.add_argument("--sample-rate", type=int, help="Samples per second")

    info = commands.add_parser("info", help="Print the format of a WAV file")
    info.add_argument("input", type=Path, help="Path to a WAV file")
    return parser


def _create_from_config(kind: str, config: dict) -> object:
    payload = dict(config)
    name = payload.pop("name", payload.pop("type", None))
    if not name:
        raise ConfigValidationError(f"Missing identifier for {kind}")
    try:
        if kind == "source":
            return registry.create_source(name, **payload)
        if kind == "effect":
            return registry.create_effect(name, **payload)
    except TypeError as e:
        raise ConfigValidationError(f"Invalid options for {kind} '{name}': {e}") from e
    raise ValueError(f"Unsupported kind '{kind}'")


def default_config() -> RenderConfig:
    return RenderConfig(sources=[ToneSource(frequency=440.0, amplitude=8192.0).to_dict()])


def build_engine(config: RenderConfig, settings: RenderSettings) -> AudioEngine:
    engine = AudioEngine(sample_rate=settings.sample_rate)
    for source_conf in config.sources:
        engine.add_source(_create_from_config("source", source_conf))
    for effect_conf in config.effects:
        engine.add_effect(_create_from_config("effect", effect_conf))
    return engine


def run_render(args: argparse.Namespace) -> None:
    config = load_config(args.config) if args.config else default_config()
    overrides = {
        "duration_ms": args.duration_ms,
        "channels": args.channels,
        "bit_depth": args.bit_depth,
        "sample_rate": args.sample_rate,
    }
    settings = RenderSettings.from_dict(
        {**config.settings.to_dict(), **{k: v for k, v in overrides.items() if v is not None}}
    )

    engine = build_engine(config, settings)
    wave = engine.render(settings.duration_ms)
    path = write_wav(args.output, wave, settings.channels, settings.bit_depth, settings.sample_rate)
    print(f"Rendered {wave.length()} samples to {path}")


def run_info(args: argparse.Namespace) -> None:
    data = args.input.read_bytes()
    wave, fmt = decode_with_format(data)
    duration = time_by_samples(wave.length() * fmt.channels, fmt.sample_rate, fmt.channels)
    print(f"File:            {args.input}")
    print(f"Channels:        {fmt.channels}")
    print(f"Sample rate:     {fmt.sample_rate} Hz")
    print(f"Bits per sample: {fmt.bits_per_sample}")
    print(f"Byte rate:       {fmt.byte_rate}")
    print(f"Block align:     {fmt.block_align}")
    print(f"Samples:         {wave.length()}")
    print(f"Duration:        {duration:.1f} ms")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "render":
            run_render(args)
        else:
            run_info(args)
    except (ValueError, KeyError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

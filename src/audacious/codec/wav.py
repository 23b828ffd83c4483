"""Encode a :class:`~audacious.core.wave.Wave` as RIFF/WAVE bytes and decode it back."""

from __future__ import annotations

import logging
import numbers

import numpy as np

from ..core.errors import (
    InvalidSampleRateError,
    UnsupportedChannelCountError,
    UnsupportedCompressionError,
    WavError,
)
from ..core.wave import Wave
from .pcm import check_bit_depth, narrow, widen
from .riff import (
    PCM_FORMAT,
    Chunk,
    WavFormat,
    check_preamble,
    find_chunk,
    pack_header,
    read_body,
    read_fmt,
    scan_chunks,
)

logger = logging.getLogger(__name__)

_U32_MAX = 0xFFFFFFFF


def check_channels(channels: int) -> int:
    if not isinstance(channels, numbers.Integral) or channels not in (1, 2):
        raise UnsupportedChannelCountError(
            f"Only mono and stereo channels are supported, got {channels}"
        )
    return int(channels)


def check_sample_rate(sample_rate: int) -> int:
    if not isinstance(sample_rate, numbers.Integral) or not 1 <= sample_rate <= _U32_MAX:
        raise InvalidSampleRateError(
            f"The sample rate must be a positive integer, got {sample_rate!r}"
        )
    return int(sample_rate)


def encode(wave: Wave, channels: int, bit_depth: int, sample_rate: int) -> bytes:
    """Serialize ``wave`` as a canonical 44-byte-header PCM WAVE stream.

    Args:
        wave: Samples to write. The shorter channel is read as if padded with
            silence up to ``wave.length()``; the store itself is not modified.
        channels: 1 writes only the left channel, 2 interleaves left and right.
        bit_depth: 8, 16, 24 or 32.
        sample_rate: Samples per second.

    Returns:
        The complete file contents.
    """
    channels = check_channels(channels)
    width = check_bit_depth(bit_depth)
    sample_rate = check_sample_rate(sample_rate)

    count = wave.length()
    data_size = count * channels * width
    if 36 + data_size > _U32_MAX or sample_rate * channels * width > _U32_MAX:
        raise WavError(f"{count} samples at {bit_depth}-bit do not fit a RIFF container")

    left, right = wave.padded(count)
    if channels == 1:
        frames = left
    else:
        frames = np.column_stack((left, right)).reshape(-1)
    body = narrow(frames, bit_depth)

    logger.debug(
        "Encoded %d samples as %d-channel %d-bit PCM at %d Hz (%d data bytes)",
        count,
        channels,
        bit_depth,
        sample_rate,
        data_size,
    )
    return pack_header(channels, bit_depth, sample_rate, data_size) + body


def _parse(data: bytes) -> tuple[WavFormat, list[Chunk]]:
    check_preamble(data)
    chunks = scan_chunks(data)
    fmt = read_fmt(data, find_chunk(chunks, "fmt "))
    if fmt.audio_format != PCM_FORMAT:
        raise UnsupportedCompressionError(
            f"The wav file must be uncompressed PCM, got format code {fmt.audio_format}"
        )
    check_channels(fmt.channels)
    if fmt.sample_rate < 1:
        raise InvalidSampleRateError(
            f"Sample rate must be greater than zero, got {fmt.sample_rate}"
        )
    check_bit_depth(fmt.bits_per_sample)
    return fmt, chunks


def read_format(data: bytes) -> WavFormat:
    """Validate the container and return its ``fmt `` fields without decoding samples."""
    fmt, _ = _parse(bytes(data))
    return fmt


def decode_with_format(data: bytes) -> tuple[Wave, WavFormat]:
    """Decode a WAVE stream, returning the samples and the ``fmt `` fields."""
    data = bytes(data)
    fmt, chunks = _parse(data)
    body = read_body(data, find_chunk(chunks, "data"))
    samples = widen(body, fmt.bits_per_sample)

    if fmt.channels == 1:
        wave = Wave.adopt(samples, samples)
    else:
        wave = Wave.adopt(samples[0::2].copy(), samples[1::2].copy())

    logger.debug(
        "Decoded %d bytes of %d-channel %d-bit PCM into %d samples",
        len(body),
        fmt.channels,
        fmt.bits_per_sample,
        wave.length(),
    )
    return wave, fmt


def decode(data: bytes) -> Wave:
    """Decode a RIFF/WAVE byte stream into a new :class:`Wave`."""
    wave, _ = decode_with_format(data)
    return wave

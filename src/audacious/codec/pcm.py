"""Conversion between float32 samples and little-endian PCM frames.

Narrowing is a plain numeric cast with no rescaling: the float is truncated
toward zero and wrapped into the target width the way a two's complement
integer overflows. 8-bit output keeps the low byte of that value, which is the
same bit pattern whether the byte is read as signed or unsigned; decoding
reads it back unsigned (0-255) as WAVE defines 8-bit PCM. 24-bit keeps the
three low bytes of the 32-bit integer. 32-bit stores the IEEE float itself.
Non-finite samples have no integer value and narrow to 0.
"""

from __future__ import annotations

import numbers

import numpy as np

from ..core.errors import UnsupportedBitDepthError

SUPPORTED_BIT_DEPTHS = (8, 16, 24, 32)


def check_bit_depth(bit_depth: int) -> int:
    if not isinstance(bit_depth, numbers.Integral) or bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise UnsupportedBitDepthError(
            f"Only 8, 16, 24, and 32-bit audio is supported, got {bit_depth}"
        )
    return int(bit_depth) // 8


def _wrap(samples: np.ndarray, bits: int) -> np.ndarray:
    values = np.asarray(samples, dtype=np.float64)
    values = np.where(np.isfinite(values), values, 0.0)
    modulus = float(1 << bits)
    # fmod is exact, so even float32.max reduces without overflow.
    wrapped = np.fmod(np.trunc(values), modulus)
    wrapped = np.where(wrapped < 0, wrapped + modulus, wrapped)
    return wrapped.astype(np.uint32)


def narrow(samples: np.ndarray, bit_depth: int) -> bytes:
    """Encode ``samples`` (already interleaved) as PCM bytes."""
    check_bit_depth(bit_depth)
    if bit_depth == 32:
        return np.asarray(samples, dtype="<f4").tobytes()
    wrapped = _wrap(samples, bit_depth)
    if bit_depth == 8:
        return wrapped.astype(np.uint8).tobytes()
    if bit_depth == 16:
        return wrapped.astype("<u2").tobytes()
    # 24-bit: drop the high byte of each little-endian 32-bit word.
    words = np.frombuffer(wrapped.astype("<u4").tobytes(), dtype=np.uint8)
    return words.reshape(-1, 4)[:, :3].tobytes()


def widen(raw: bytes, bit_depth: int) -> np.ndarray:
    """Decode PCM bytes into float32 samples (still interleaved).

    Trailing bytes that do not fill a whole sample are zero-padded first.
    """
    width = check_bit_depth(bit_depth)
    remainder = len(raw) % width
    if remainder:
        raw = bytes(raw) + b"\x00" * (width - remainder)

    if bit_depth == 8:
        return np.frombuffer(raw, dtype=np.uint8).astype(np.float32)
    if bit_depth == 16:
        return np.frombuffer(raw, dtype="<i2").astype(np.float32)
    if bit_depth == 24:
        triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        values = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
        values = np.where(values >= 0x800000, values - 0x1000000, values)
        return values.astype(np.float32)
    return np.frombuffer(raw, dtype="<f4").astype(np.float32)

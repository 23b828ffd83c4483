"""RIFF container primitives: the canonical header, chunk scanning and ``fmt `` parsing."""

from __future__ import annotations

import logging
import struct
from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from ..core.errors import BadHeaderError, MissingChunkError, TruncatedChunkError

logger = logging.getLogger(__name__)

PCM_FORMAT = 1
FMT_CHUNK_SIZE = 16
HEADER_SIZE = 44

# RIFF, riff size, WAVE, "fmt ", 16, format tag, channels, sample rate,
# byte rate, block align, bits per sample, "data", data size
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_PREAMBLE = struct.Struct("<4sI4s")
_CHUNK_HEADER = struct.Struct("<4sI")
_FMT_BODY = struct.Struct("<HHIIHH")


@dataclass(frozen=True)
class Chunk:
    """A chunk found while scanning; ``offset`` points just past its size field."""

    chunk_id: str
    size: int
    offset: int

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class WavFormat:
    """Fields of a ``fmt `` chunk."""

    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def pack_header(channels: int, bit_depth: int, sample_rate: int, data_size: int) -> bytes:
    """Return the 44-byte RIFF/WAVE header for a PCM ``data`` chunk of ``data_size`` bytes."""
    block_align = channels * (bit_depth // 8)
    return _HEADER.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        PCM_FORMAT,
        channels,
        sample_rate,
        sample_rate * block_align,
        block_align,
        bit_depth,
        b"data",
        data_size,
    )


def _tag(raw: bytes) -> str:
    return raw.decode("ascii", errors="replace")


def check_preamble(data: bytes) -> None:
    """Validate the ``RIFF <size> WAVE`` preamble against the stream length."""
    if data[:4] != b"RIFF":
        raise BadHeaderError(f"expected RIFF, got {data[:4]!r}")
    if len(data) < 8:
        raise BadHeaderError("size mismatch: stream ends inside the RIFF header")
    (riff_size,) = struct.unpack_from("<I", data, 4)
    if riff_size != len(data) - 8:
        raise BadHeaderError(
            f"size mismatch: RIFF declares {riff_size} bytes, stream holds {len(data) - 8}"
        )
    if data[8:12] != b"WAVE":
        raise BadHeaderError(f"expected WAVE, got {data[8:12]!r}")


def scan_chunks(data: bytes, start: int = _PREAMBLE.size) -> list[Chunk]:
    """Walk the chunk headers after the preamble, skipping each body by its declared size."""
    chunks: list[Chunk] = []
    cursor = start
    while len(data) - cursor > 4:
        if len(data) - cursor < _CHUNK_HEADER.size:
            raise TruncatedChunkError(
                f"chunk header at byte {cursor} is cut short ({len(data) - cursor} bytes left)"
            )
        raw_id, size = _CHUNK_HEADER.unpack_from(data, cursor)
        cursor += _CHUNK_HEADER.size
        chunk_id = _tag(raw_id)
        if cursor + size > len(data):
            raise TruncatedChunkError(
                f"'{chunk_id}' chunk declares {size} bytes but only {len(data) - cursor} remain"
            )
        chunks.append(Chunk(chunk_id, size, cursor))
        if chunk_id not in ("fmt ", "data"):
            logger.debug("Skipping '%s' chunk (%d bytes at %d)", chunk_id, size, cursor)
        cursor += size
    return chunks


def find_chunk(chunks: Iterable[Chunk], chunk_id: str) -> Chunk:
    """Return the first chunk named ``chunk_id``."""
    chunks = list(chunks)
    match: Optional[Chunk] = next((c for c in chunks if c.chunk_id == chunk_id), None)
    if match is None:
        raise MissingChunkError(chunk_id, [c.chunk_id for c in chunks])
    return match


def read_fmt(data: bytes, chunk: Chunk) -> WavFormat:
    if chunk.size < _FMT_BODY.size:
        raise TruncatedChunkError(
            f"'fmt ' chunk holds {chunk.size} bytes, expected at least {_FMT_BODY.size}"
        )
    return WavFormat(*_FMT_BODY.unpack_from(data, chunk.offset))


def read_body(data: bytes, chunk: Chunk) -> bytes:
    if chunk.end > len(data):
        raise TruncatedChunkError(
            f"'{chunk.chunk_id}' chunk declares {chunk.size} bytes past the end of the stream"
        )
    return bytes(data[chunk.offset:chunk.end])

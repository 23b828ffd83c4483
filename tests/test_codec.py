import struct

import numpy as np
import pytest

from audacious import (
    BadHeaderError,
    InvalidSampleRateError,
    MissingChunkError,
    TruncatedChunkError,
    UnsupportedBitDepthError,
    UnsupportedChannelCountError,
    UnsupportedCompressionError,
    WavError,
    Wave,
    decode,
    decode_with_format,
    encode,
    read_format,
)


def fmt_chunk(channels=1, bits=16, rate=8000, audio_format=1):
    block_align = channels * bits // 8
    return struct.pack(
        "<4sIHHIIHH", b"fmt ", 16, audio_format, channels, rate, rate * block_align, block_align, bits
    )


def data_chunk(body, declared=None):
    size = len(body) if declared is None else declared
    return struct.pack("<4sI", b"data", size) + body


def riff(*chunks, form=b"WAVE"):
    payload = form + b"".join(chunks)
    return b"RIFF" + struct.pack("<I", len(payload)) + payload


def test_mono_8bit_header_fields():
    wave = Wave(np.arange(100, dtype=np.float32))

    data = encode(wave, channels=1, bit_depth=8, sample_rate=8000)

    assert len(data) == 44 + 100
    assert struct.unpack_from("<4sI4s", data, 0) == (b"RIFF", 136, b"WAVE")
    assert struct.unpack_from("<4sIHHIIHH", data, 12) == (b"fmt ", 16, 1, 1, 8000, 8000, 1, 8)
    assert struct.unpack_from("<4sI", data, 36) == (b"data", 100)
    assert data[44:] == bytes(range(100))


def test_stereo_24bit_header_fields():
    data = encode(Wave([1.0, 2.0], [3.0, 4.0]), channels=2, bit_depth=24, sample_rate=44100)

    _, _, _, channels, rate, byte_rate, block_align, bits = struct.unpack_from("<4sIHHIIHH", data, 12)
    assert (channels, rate, byte_rate, block_align, bits) == (2, 44100, 44100 * 6, 6, 24)
    assert struct.unpack_from("<I", data, 40)[0] == 2 * 2 * 3
    assert len(data) == 44 + 12


def test_mono_encode_writes_only_left_channel():
    data = encode(Wave([1.0, 2.0], [7.0, 8.0]), channels=1, bit_depth=16, sample_rate=8000)

    assert data[44:] == struct.pack("<2h", 1, 2)


def test_stereo_encode_interleaves():
    data = encode(Wave([1.0, 2.0], [-1.0, -2.0]), channels=2, bit_depth=16, sample_rate=8000)

    assert data[44:] == struct.pack("<4h", 1, -1, 2, -2)


def test_stereo_16bit_round_trip_narrows_to_int16():
    left = np.array([0.0, 1.9, -1.9, 32767.0, -32768.0, 123.5], dtype=np.float32)
    right = np.array([5.0, -5.0, 100.25, 0.5, -0.5, 7.0], dtype=np.float32)

    decoded = decode(encode(Wave(left, right), channels=2, bit_depth=16, sample_rate=44100))

    np.testing.assert_array_equal(decoded.left, np.trunc(left))
    np.testing.assert_array_equal(decoded.right, np.trunc(right))


def test_integer_samples_round_trip_exactly():
    wave = Wave([0.0, 1.0, -1.0, 1000.0], [-1000.0, 5.0, 6.0, 7.0])

    assert decode(encode(wave, 2, 16, 44100)) == wave


def test_encoding_pads_without_mutating():
    wave = Wave([1.0, 2.0, 3.0], [4.0])

    first = encode(wave, 2, 16, 44100)
    second = encode(wave, 2, 16, 44100)

    assert first == second
    assert len(wave.right) == 1
    decoded = decode(first)
    np.testing.assert_array_equal(decoded.right, [4, 0, 0])


def test_16bit_narrowing_wraps_like_a_cast():
    decoded = decode(encode(Wave([40000.0, -40000.0, 65536.0]), 1, 16, 8000))

    np.testing.assert_array_equal(decoded.left, [40000 - 65536, 65536 - 40000, 0])


def test_8bit_narrowing_wraps_and_decodes_unsigned():
    data = encode(Wave([300.0, -1.0, 255.0]), 1, 8, 8000)

    assert data[44:] == bytes([44, 255, 255])
    np.testing.assert_array_equal(decode(data).left, [44, 255, 255])


def test_24bit_round_trip():
    samples = [0.0, 8388607.0, -8388608.0, -1.0, 1.9, 8388608.0]

    data = encode(Wave(samples), 1, 24, 8000)

    assert data[44 + 9:44 + 12] == b"\xff\xff\xff"
    np.testing.assert_array_equal(
        decode(data).left, [0, 8388607, -8388608, -1, 1, -8388608]
    )


def test_32bit_stores_floats():
    samples = np.array([0.1, -3.0e38, 3.0e38, 12345.678], dtype=np.float32)

    data = encode(Wave(samples), 1, 32, 8000)

    assert data[44:] == samples.astype("<f4").tobytes()
    np.testing.assert_array_equal(decode(data).left, samples)


def test_non_finite_samples_narrow_to_zero():
    data = encode(Wave([np.inf, -np.inf, np.nan]), 1, 16, 8000)

    assert data[44:] == b"\x00" * 6


def test_empty_wave_encodes_header_only():
    data = encode(Wave(), 2, 16, 44100)

    assert len(data) == 44
    assert decode(data).length() == 0


@pytest.mark.parametrize(
    "channels, bit_depth, sample_rate, error",
    [
        (3, 16, 44100, UnsupportedChannelCountError),
        (0, 16, 44100, UnsupportedChannelCountError),
        (2, 12, 44100, UnsupportedBitDepthError),
        (2, 16, 0, InvalidSampleRateError),
        (2, 16, -44100, InvalidSampleRateError),
        (1, 16.0, 8000, UnsupportedBitDepthError),
        (2.0, 16, 8000, UnsupportedChannelCountError),
        (2, 16, 8000.0, InvalidSampleRateError),
    ],
)
def test_encode_rejects_invalid_parameters(channels, bit_depth, sample_rate, error):
    with pytest.raises(error):
        encode(Wave([1.0]), channels, bit_depth, sample_rate)


def test_codec_errors_are_value_errors():
    with pytest.raises(ValueError):
        encode(Wave([1.0]), 3, 16, 44100)
    assert issubclass(BadHeaderError, WavError)


def test_decode_mono_copies_samples_to_both_channels():
    wave = decode(riff(fmt_chunk(channels=1), data_chunk(b"\x00\x00\xff\x7f")))

    np.testing.assert_array_equal(wave.left, [0, 32767])
    np.testing.assert_array_equal(wave.right, [0, 32767])


def test_decode_stereo_deinterleaves_in_order():
    body = struct.pack("<4h", 1, -2, 3, -4)

    wave = decode(riff(fmt_chunk(channels=2), data_chunk(body)))

    np.testing.assert_array_equal(wave.left, [1, 3])
    np.testing.assert_array_equal(wave.right, [-2, -4])


def test_decode_skips_unknown_chunks_and_any_order():
    extra = b"LIST" + struct.pack("<I", 4) + b"abcd"
    body = struct.pack("<2h", 10, 20)

    wave = decode(riff(extra, data_chunk(body), fmt_chunk()))

    np.testing.assert_array_equal(wave.left, [10, 20])


def test_decode_pads_partial_sample():
    wave = decode(riff(fmt_chunk(bits=16), data_chunk(b"\x01\x00\x02")))

    np.testing.assert_array_equal(wave.left, [1, 2])


def test_decode_ignores_four_trailing_bytes():
    wave = decode(riff(fmt_chunk(), data_chunk(b"\x05\x00"), b"\x00" * 4))

    np.testing.assert_array_equal(wave.left, [5])


def test_decode_with_format_reports_fields():
    data = encode(Wave([1.0, 2.0], [3.0, 4.0]), 2, 24, 22050)

    wave, fmt = decode_with_format(data)

    assert wave.length() == 2
    assert fmt.channels == 2
    assert fmt.sample_rate == 22050
    assert fmt.bits_per_sample == 24
    assert fmt.block_align == 6
    assert fmt.byte_rate == 22050 * 6
    assert read_format(data) == fmt


def test_decode_rejects_non_riff():
    data = bytearray(encode(Wave([1.0]), 1, 16, 8000))
    data[:4] = b"RIFX"

    with pytest.raises(BadHeaderError, match="expected RIFF"):
        decode(bytes(data))


def test_decode_rejects_size_mismatch():
    data = encode(Wave([1.0]), 1, 16, 8000) + b"\x00"

    with pytest.raises(BadHeaderError, match="size mismatch"):
        decode(data)


def test_decode_rejects_non_wave_form():
    with pytest.raises(BadHeaderError, match="expected WAVE"):
        decode(riff(fmt_chunk(), data_chunk(b""), form=b"AVI "))


def test_decode_rejects_truncated_data_chunk():
    data = riff(fmt_chunk(), data_chunk(b"\x00" * 10, declared=100))

    with pytest.raises(TruncatedChunkError):
        decode(data)


def test_decode_rejects_cut_short_chunk_header():
    data = riff(fmt_chunk(), data_chunk(b"\x00\x00"), b"ab\x00\x00\x00")

    with pytest.raises(TruncatedChunkError):
        decode(data)


def test_decode_rejects_short_fmt_chunk():
    short_fmt = b"fmt " + struct.pack("<I", 14) + b"\x01\x00" * 7

    with pytest.raises(TruncatedChunkError):
        decode(riff(short_fmt, data_chunk(b"")))


def test_decode_requires_fmt_chunk():
    with pytest.raises(MissingChunkError) as excinfo:
        decode(riff(data_chunk(b"\x00\x00")))

    assert excinfo.value.chunk_id == "fmt "
    assert excinfo.value.found == ["data"]


def test_decode_requires_data_chunk():
    with pytest.raises(MissingChunkError) as excinfo:
        decode(riff(fmt_chunk()))

    assert excinfo.value.chunk_id == "data"


@pytest.mark.parametrize(
    "fmt, error",
    [
        (fmt_chunk(audio_format=3), UnsupportedCompressionError),
        (fmt_chunk(channels=6), UnsupportedChannelCountError),
        (fmt_chunk(bits=12), UnsupportedBitDepthError),
        (fmt_chunk(rate=0), InvalidSampleRateError),
    ],
)
def test_decode_validates_fmt_fields(fmt, error):
    with pytest.raises(error):
        decode(riff(fmt, data_chunk(b"\x00\x00")))


def test_decoded_wave_can_be_appended_to_existing_store():
    store = Wave([9.0])
    store.append(decode(encode(Wave([1.0, 2.0]), 1, 16, 8000)))

    np.testing.assert_array_equal(store.left, [9, 1, 2])
    np.testing.assert_array_equal(store.right, [9, 1, 2])

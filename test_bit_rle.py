import random

import pytest

from glyph_rle.bit_rle import BitRunCompressor
from glyph_rle.pixel_unpack import threshold_pixels, unpack_pixels


def test_counts_start_with_empty_zero_run():
    pixels = unpack_pixels([0xFF, 0x00], 1)
    assert BitRunCompressor.counts(pixels, 255) == [0, 8, 8]
    assert BitRunCompressor.compress(pixels) == bytes([0, 8, 8])


def test_counts_of_two_byte_pixels_at_8bpp():
    # Two pixels, not sixteen: 0xFF is one set pixel, 0x00 one clear pixel.
    assert BitRunCompressor.counts(unpack_pixels([0xFF, 0x00], 8), 255) == [0, 1, 1]


def test_saturated_runs_do_not_toggle():
    assert BitRunCompressor.counts([0] * 510, 255) == [255, 255]


def test_run_after_saturation_at_colour_change_is_empty():
    assert BitRunCompressor.counts([0] * 510 + [1, 1], 255) == [255, 255, 0, 2]


def test_long_run_in_middle():
    assert BitRunCompressor.counts([1] * 300 + [0] * 5, 255) == [0, 255, 45, 5]


def test_packed_capacity_is_fifteen():
    pixels = [0] * 30 + [1] * 3
    assert BitRunCompressor.counts(pixels, 15) == [15, 15, 0, 3]
    assert BitRunCompressor.compress(pixels, packed=True) == bytes([0xFF, 0x03])


def test_packed_odd_count_is_padded():
    pixels = unpack_pixels([0xF0], 1)
    assert BitRunCompressor.counts(pixels, 15) == [0, 4, 4]
    assert BitRunCompressor.compress(pixels, packed=True) == bytes([0x04, 0x40])


def test_empty_input():
    assert BitRunCompressor.compress([]) == b""
    assert BitRunCompressor.compress([], packed=True) == b""


def test_saturation_round_trip():
    pixels = [0] * 510 + [1, 1]
    encoded = BitRunCompressor.compress(pixels)
    assert encoded == bytes([255, 255, 0, 2])
    decoded = BitRunCompressor.decompress(encoded, 64)
    assert decoded == bytes(63) + bytes([0x03])


def test_decode_zero_count_only_toggles():
    assert BitRunCompressor.decompress(bytes([0, 8, 8]), 2) == bytes([0xFF, 0x00])


def test_decode_stops_mid_run_at_capacity():
    assert BitRunCompressor.decompress(bytes([0, 200]), 1) == bytes([0xFF])


def test_decode_short_source_flushes_partial_byte():
    # 3 zero bits, then 2 one bits, then the source ends.
    assert BitRunCompressor.decompress(bytes([3, 2]), 2) == bytes([0b00011000, 0x00])


def test_decode_packed_padding_nibble():
    assert BitRunCompressor.decompress(bytes([0x04, 0x40]), 1, packed=True) == bytes([0xF0])


@pytest.mark.parametrize("packed", [False, True])
def test_round_trip_1bpp(packed):
    rng = random.Random(1234)
    # Mix of noise and long solid stretches to hit saturation in both widths.
    chunk = [rng.randrange(256) for _ in range(40)] + [0x00] * 40 + [0xFF] * 40
    pixels = unpack_pixels(chunk, 1)
    encoded = BitRunCompressor.compress(pixels, packed=packed)
    assert BitRunCompressor.decompress(encoded, len(chunk), packed=packed) == bytes(chunk)


@pytest.mark.parametrize("packed", [False, True])
@pytest.mark.parametrize("bpp", [2, 4, 8])
def test_round_trip_thresholds_wider_sources(packed, bpp):
    chunk = [0x00, 0x10, 0x01, 0xFF, 0x00, 0x00, 0x80, 0x08] * 8
    pixels = unpack_pixels(chunk, bpp)
    encoded = BitRunCompressor.compress(pixels, packed=packed)
    decoded = BitRunCompressor.decompress(encoded, (len(pixels) + 7) // 8, packed=packed)
    assert unpack_pixels(decoded, 1)[:len(pixels)] == threshold_pixels(pixels)

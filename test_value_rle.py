import pytest

from glyph_rle.bit_utils.bit_reader import BitReader
from glyph_rle.bit_utils.bit_writer import BitWriter
from glyph_rle.pixel_unpack import quantize_pixels, unpack_pixels
from glyph_rle.RLE import ValueRunCompressor


def test_runs_split_on_value_change():
    assert ValueRunCompressor.runs([1, 1, 2, 3, 3, 3], 255) == [(2, 1), (1, 2), (3, 3)]


def test_runs_split_on_capacity():
    assert ValueRunCompressor.runs([7] * 600, 255) == [(255, 7), (255, 7), (90, 7)]


def test_runs_empty():
    assert ValueRunCompressor.runs([], 16) == []


def test_wide_scenario_from_glyph():
    chunk = [0x00, 0x18, 0x3C, 0x66, 0x66, 0x7E, 0x66, 0x66, 0x00, 0x00]
    encoded = ValueRunCompressor.compress(unpack_pixels(chunk, 8))
    assert encoded == bytes([
        1, 0x00, 1, 0x18, 1, 0x3C, 2, 0x66, 1, 0x7E, 2, 0x66, 2, 0x00,
    ])
    assert len(encoded) == 14


def test_wide_value_is_not_masked():
    assert ValueRunCompressor.compress([0xAB, 0xAB]) == bytes([2, 0xAB])


def test_packed_sixteen_fits_one_byte():
    assert ValueRunCompressor.compress([5] * 16, packed=True) == bytes([0xF5])


def test_packed_seventeen_splits():
    assert ValueRunCompressor.compress([5] * 17, packed=True) == bytes([0xF5, 0x05])


def test_packed_single_pixel_stores_zero_length():
    assert ValueRunCompressor.compress([0x9], packed=True) == bytes([0x09])


def test_packed_masks_value():
    assert ValueRunCompressor.compress([0x3A, 0x3A], packed=True) == bytes([0x1A])


@pytest.mark.parametrize("packed", [False, True])
@pytest.mark.parametrize("bpp", [1, 2, 4, 8])
def test_round_trip(packed, bpp):
    chunk = [0x00, 0x00, 0xFF, 0xFF, 0xFF, 0x18, 0x3C, 0x7E, 0x00, 0x81] * 20
    pixels = unpack_pixels(chunk, bpp)
    if packed:
        pixels = quantize_pixels(pixels, bpp)
    encoded = ValueRunCompressor.compress(pixels, packed=packed)
    decoded = ValueRunCompressor.decompress(encoded, len(pixels), packed=packed)
    assert list(decoded) == pixels


def test_decode_stops_at_capacity_mid_run():
    encoded = bytes([10, 0x42, 3, 0x07])
    assert ValueRunCompressor.decompress(encoded, 4) == bytes([0x42] * 4)


def test_decode_short_source_leaves_zeros():
    encoded = bytes([2, 0x11])
    assert ValueRunCompressor.decompress(encoded, 5) == bytes([0x11, 0x11, 0, 0, 0])


def test_decode_ignores_dangling_half_pair():
    encoded = bytes([2, 0x11, 9])
    assert ValueRunCompressor.decompress(encoded, 3) == bytes([0x11, 0x11, 0])


def test_decode_packed_under_capacity_truncates():
    assert ValueRunCompressor.decompress(bytes([0xF5, 0x05]), 3, packed=True) == bytes([5, 5, 5])


def test_decode_zero_capacity():
    assert ValueRunCompressor.decompress(bytes([1, 2]), 0) == b""


def test_bit_writer_reader_nibbles():
    writer = BitWriter()
    writer.write_bits_msb(0xA, 4)
    writer.write_bits_msb(0x3, 4)
    writer.write_bits_msb(0x1, 4)
    assert writer.to_bytes() == bytes([0xA3, 0x10])

    reader = BitReader(bytes([0xA3]))
    assert reader.read_bits_msb(4) == 0xA
    assert reader.read_bits_msb(4) == 0x3
    with pytest.raises(EOFError):
        reader.read_bits_msb(4)


def test_bit_writer_rejects_negative_length():
    with pytest.raises(ValueError):
        BitWriter().write_bits_msb(1, -1)
    with pytest.raises(ValueError):
        BitWriter().write_run(1, -2)

"""
Value-run RLE: every run is stored as a (count, value) pair.

Wide layout:   [count (8 bit)] [value (8 bit)], count 1..255
Packed layout: [count - 1 (4 bit) | value (4 bit)], count 1..16
"""

from typing import List, Sequence, Tuple

from glyph_rle.bit_utils.bit_reader import BitReader
from glyph_rle.bit_utils.bit_writer import BitWriter
from glyph_rle.modes import VALUE_RUN_PACKED_MAX, VALUE_RUN_WIDE_MAX


class ValueRunCompressor:
    """A class for value-run compression and decompression of pixel streams."""

    @staticmethod
    def runs(pixels: Sequence[int], max_run: int) -> List[Tuple[int, int]]:
        """
        Split pixels into runs of equal values.

        A run ends when the value changes or when it reaches max_run,
        whichever comes first.

        Args:
            pixels: Pixel values
            max_run: Longest run a single pair can hold

        Returns:
            List of (count, value) tuples
        """
        result = []
        i = 0
        n = len(pixels)

        while i < n:
            value = pixels[i]
            count = 1
            while i + count < n and pixels[i + count] == value and count < max_run:
                count += 1
            result.append((count, value))
            i += count

        return result

    @staticmethod
    def compress(pixels: Sequence[int], packed: bool = False) -> bytes:
        """
        Compress pixels into (count, value) pairs.

        The packed layout masks values to their low nibble without checking
        them, so callers quantize first.

        Args:
            pixels: Pixel values
            packed: Use the one-byte 4:4 layout instead of the 8:8 one

        Returns:
            Encoded bytes
        """
        if packed:
            writer = BitWriter()
            for count, value in ValueRunCompressor.runs(pixels, VALUE_RUN_PACKED_MAX):
                writer.write_bits_msb(count - 1, 4)
                writer.write_bits_msb(value & 0x0F, 4)
            return writer.to_bytes()

        result = bytearray()
        for count, value in ValueRunCompressor.runs(pixels, VALUE_RUN_WIDE_MAX):
            result.append(count)
            result.append(value)
        return bytes(result)

    @staticmethod
    def decompress(data: bytes, capacity: int, packed: bool = False) -> bytes:
        """
        Expand (count, value) pairs into a destination of `capacity` pixels.

        Decoding is driven by the destination: it stops as soon as capacity
        pixels are written, even in the middle of a run, and never checks
        that the source was consumed exactly. If the source ends first the
        rest of the destination stays zero.

        Args:
            data: Encoded bytes
            capacity: Number of pixels in the destination
            packed: Whether data uses the 4:4 layout

        Returns:
            The destination buffer, one byte per pixel
        """
        dst = bytearray(capacity)
        dst_idx = 0

        if packed:
            reader = BitReader(data)
            while dst_idx < capacity:
                try:
                    count = reader.read_bits_msb(4) + 1
                    value = reader.read_bits_msb(4)
                except EOFError:
                    break
                n = min(count, capacity - dst_idx)
                dst[dst_idx:dst_idx + n] = bytes([value]) * n
                dst_idx += n
            return bytes(dst)

        src_idx = 0
        while dst_idx < capacity:
            # A trailing odd byte is not a full pair.
            if src_idx + 2 > len(data):
                break
            count = data[src_idx]
            value = data[src_idx + 1]
            src_idx += 2

            n = min(count, capacity - dst_idx)
            dst[dst_idx:dst_idx + n] = bytes([value]) * n
            dst_idx += n

        return bytes(dst)

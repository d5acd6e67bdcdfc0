"""
Alternating bit-run RLE for monochrome bitmaps.

Pixels are thresholded to 0/1 and only run lengths are stored. The stream
starts on a run of 0 bits and the colour flips after every run shorter than
the maximum. A run of exactly the maximum keeps the colour, so long runs are
written as several maximum-length counts.

Wide layout:   one count (0..255) per byte
Packed layout: two counts (0..15) per byte, high nibble first
"""

from typing import List, Sequence

from glyph_rle.bit_utils.bit_reader import BitReader
from glyph_rle.bit_utils.bit_writer import BitWriter
from glyph_rle.modes import BIT_RUN_PACKED_MAX, BIT_RUN_WIDE_MAX
from glyph_rle.pixel_unpack import threshold_pixels


class BitRunCompressor:
    """A class for alternating bit-run compression and decompression."""

    @staticmethod
    def counts(pixels: Sequence[int], max_run: int) -> List[int]:
        """
        Turn pixels into the list of alternating run lengths.

        Args:
            pixels: Pixel values, any non-zero value counts as a set bit
            max_run: Largest count one field can hold

        Returns:
            Run lengths, starting with the run of 0 bits (possibly empty)
        """
        bits = threshold_pixels(pixels)
        result = []
        target_bit = 0
        i = 0
        n = len(bits)

        while i < n:
            run_length = 0
            while i < n and bits[i] == target_bit:
                if run_length == max_run:
                    break
                run_length += 1
                i += 1

            result.append(run_length)

            # A saturated run continues with the same bit.
            if run_length < max_run:
                target_bit = 1 - target_bit

        return result

    @staticmethod
    def compress(pixels: Sequence[int], packed: bool = False) -> bytes:
        """
        Compress pixels into alternating run lengths.

        Args:
            pixels: Pixel values
            packed: Store two 4-bit counts per byte instead of one 8-bit count

        Returns:
            Encoded bytes. In the packed layout an odd number of counts is
            padded with a zero low nibble.
        """
        if not packed:
            return bytes(BitRunCompressor.counts(pixels, BIT_RUN_WIDE_MAX))

        counts = BitRunCompressor.counts(pixels, BIT_RUN_PACKED_MAX)
        if len(counts) % 2:
            counts.append(0)

        writer = BitWriter()
        for count in counts:
            writer.write_bits_msb(count, 4)
        return writer.to_bytes()

    @staticmethod
    def decompress(data: bytes, capacity: int, packed: bool = False) -> bytes:
        """
        Rebuild a packed 1 bpp bitmap (MSB first) of `capacity` bytes.

        The colour state machine mirrors the encoder: start on 0, flip after
        every count below the maximum. Decoding stops once capacity bytes are
        filled. If the source runs out first, the bits written so far are
        flushed (a partial last byte is zero padded) and the remaining bytes
        stay zero.

        Args:
            data: Encoded bytes
            capacity: Size of the destination bitmap in bytes
            packed: Whether data uses 4-bit counts

        Returns:
            The destination bitmap
        """
        field_bits = 4 if packed else 8
        max_run = BIT_RUN_PACKED_MAX if packed else BIT_RUN_WIDE_MAX
        budget = capacity * 8

        reader = BitReader(data)
        writer = BitWriter()
        current_val = 0

        while len(writer) < budget:
            try:
                count = reader.read_bits_msb(field_bits)
            except EOFError:
                break

            writer.write_run(current_val, min(count, budget - len(writer)))

            if count < max_run:
                current_val = 1 - current_val

        out = writer.to_bytes()
        return out + bytes(capacity - len(out))

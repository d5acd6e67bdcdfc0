"""
Example script comparing the four encoding modes on a small glyph set.
"""

import sys
from pathlib import Path

# Add the parent directory to Python path
sys.path.append(str(Path(__file__).parent.parent))

from glyph_rle.c_array_parser import parse_c_array
from glyph_rle.chunk_compressor import chunk_capacity, compress_chunks, decompress_chunk
from glyph_rle.modes import BitWidth, EncodingMode

FONT = """
const unsigned char font[3][10] = {
    { 0x00, 0x18, 0x3C, 0x66, 0x66, 0x7E, 0x66, 0x66, 0x00, 0x00 }, // A
    { 0x00, 0x00, 0x18, 0x24, 0x42, 0x42, 0x24, 0x18, 0x00, 0x00 }, // O
    { 0x00, 0x00, 0x00, 0x18, 0x18, 0x18, 0x18, 0x18, 0x00, 0x00 }  // I
};
"""


def main():
    chunks = parse_c_array(FONT)
    print(f"Parsed {len(chunks)} glyphs")

    for mode in EncodingMode:
        print(f"\nUsing mode: {mode.value}")
        result = compress_chunks(chunks, mode, BitWidth.BPP_1)
        print(result.summary())
        print(f"Offsets: {result.offsets}")

        # Decode the last glyph back out of the shared blob
        last = len(chunks) - 1
        decoded = decompress_chunk(result, last, chunk_capacity(chunks[last], mode, BitWidth.BPP_1))
        print(f"Decoded {len(decoded)} {mode.unit_name} for glyph {last}")

    result = compress_chunks(chunks, EncodingMode.BIT_STREAM_8, BitWidth.BPP_1)
    print()
    print(result.c_array_output)
    print(result.offset_table_output)


if __name__ == "__main__":
    main()

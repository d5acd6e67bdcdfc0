"""
Chunk compressor: runs every glyph chunk through unpack -> quantize -> encode,
concatenates the results into one blob and records where each chunk starts.
"""

from dataclasses import dataclass, field
from datetime import date
from numbers import Integral
from typing import List, Optional, Sequence

from glyph_rle.bit_rle import BitRunCompressor
from glyph_rle.decoder_template import generate_decoder
from glyph_rle.modes import BitWidth, EncodingMode
from glyph_rle.pixel_unpack import quantize_pixels, unpack_pixels
from glyph_rle.RLE import ValueRunCompressor

BYTES_PER_LINE = 12
DATA_ARRAY_NAME = "compressed_data"
OFFSET_ARRAY_NAME = "data_offsets"


_ENCODERS = {
    EncodingMode.RLE_8_8: lambda pixels: ValueRunCompressor.compress(pixels),
    EncodingMode.RLE_4_4: lambda pixels: ValueRunCompressor.compress(pixels, packed=True),
    EncodingMode.BIT_STREAM_8: lambda pixels: BitRunCompressor.compress(pixels),
    EncodingMode.BIT_STREAM_4: lambda pixels: BitRunCompressor.compress(pixels, packed=True),
}

_DECODERS = {
    EncodingMode.RLE_8_8: lambda data, cap: ValueRunCompressor.decompress(data, cap),
    EncodingMode.RLE_4_4: lambda data, cap: ValueRunCompressor.decompress(data, cap, packed=True),
    EncodingMode.BIT_STREAM_8: lambda data, cap: BitRunCompressor.decompress(data, cap),
    EncodingMode.BIT_STREAM_4: lambda data, cap: BitRunCompressor.decompress(data, cap, packed=True),
}


def encode(pixels: Sequence[int], mode) -> bytes:
    """Encode one pixel stream with the codec selected by mode."""
    return _ENCODERS[EncodingMode(mode)](pixels)


def decode(data: bytes, capacity: int, mode) -> bytes:
    """
    Decode one stream with the codec selected by mode.

    capacity counts pixels for the value-run modes and bytes of packed
    1 bpp bitmap for the bit-stream modes.
    """
    return _DECODERS[EncodingMode(mode)](data, capacity)


def prepare_pixels(chunk: Sequence[int], mode, bpp) -> List[int]:
    """Unpack a chunk and apply the per-mode pixel transform."""
    pixels = unpack_pixels(chunk, bpp)
    if EncodingMode(mode) == EncodingMode.RLE_4_4:
        pixels = quantize_pixels(pixels, bpp)
    return pixels


def format_hex_bytes(data: Sequence[int]) -> str:
    return ", ".join(f"0x{b:02X}" for b in data)


def _format_c_entries(tokens: List[str]) -> str:
    body = ""
    for k, token in enumerate(tokens):
        body += token
        if k < len(tokens) - 1:
            body += ", "
        if (k + 1) % BYTES_PER_LINE == 0:
            body += "\n    "
    return body


def format_c_array(data: bytes, mode, bpp) -> str:
    """Render the blob as a C array literal, 12 bytes per line."""
    mode = EncodingMode(mode)
    text = f"// Encoding: {mode.value}, source: {int(bpp)} BPP\n"
    text += f"const unsigned char {DATA_ARRAY_NAME}[{len(data)}] = {{\n    "
    text += _format_c_entries([f"0x{b:02X}" for b in data])
    text += "\n};"
    return text


def format_offset_table(offsets: Sequence[int]) -> str:
    """Render the offset table, or a placeholder comment for 0 or 1 chunks."""
    if not offsets:
        return "// No chunks, offset table not generated."
    if len(offsets) == 1:
        return "// Single chunk, offset table not generated."

    text = f"// Offset table for {len(offsets)} glyphs (index -> start position)\n"
    text += f"const unsigned int {OFFSET_ARRAY_NAME}[{len(offsets)}] = {{\n    "
    text += _format_c_entries([str(offset) for offset in offsets])
    text += "\n};"
    return text


@dataclass
class CompressResult:
    """Everything one compression run produces."""

    mode: EncodingMode
    bpp: BitWidth
    original_size: int
    compressed_size: int
    ratio: float
    compressed_data: bytes
    offsets: List[int]
    chunk_sizes: List[int] = field(default_factory=list)
    hex_output: str = ""
    c_array_output: str = ""
    offset_table_output: str = ""
    decoder_code: str = ""

    @property
    def chunk_count(self) -> int:
        return len(self.offsets)

    @property
    def has_offset_table(self) -> bool:
        return self.chunk_count > 1

    def chunk_data(self, index: int) -> bytes:
        """The encoded bytes of one chunk."""
        start = self.offsets[index]
        return self.compressed_data[start:start + self.chunk_sizes[index]]

    def summary(self) -> str:
        return (
            f"Chunks: {self.chunk_count}\n"
            f"Original size: {self.original_size} bytes\n"
            f"Compressed size: {self.compressed_size} bytes\n"
            f"Compression ratio: {self.ratio:.2f}%"
        )


def compression_ratio(original_size: int, compressed_size: int) -> float:
    """Space saved in percent. Negative when the output grew."""
    if original_size == 0:
        return 0.0
    return (1 - compressed_size / original_size) * 100


def validate_chunks(chunks: Sequence[Sequence[int]]) -> List[bytes]:
    """
    Reject chunks containing anything but byte values.

    Any integer type is accepted, including NumPy scalars.

    Returns:
        The chunks as bytes

    Raises:
        ValueError: On the first value outside 0..255
    """
    for i, chunk in enumerate(chunks):
        for pos, value in enumerate(chunk):
            if not isinstance(value, Integral) or not 0 <= value <= 0xFF:
                raise ValueError(
                    f"Chunk {i}, position {pos}: {value!r} is not a byte value (0-255)"
                )
    return [bytes(int(value) for value in chunk) for chunk in chunks]


def compress_chunks(
    chunks: Sequence[Sequence[int]],
    mode=EncodingMode.RLE_8_8,
    bpp=BitWidth.BPP_8,
    generated_on: Optional[date] = None,
    verbose: bool = False,
) -> CompressResult:
    """
    Compress every chunk independently and assemble blob and offset table.

    Args:
        chunks: Raw packed bitmaps, one per glyph
        mode: Encoding mode (EncodingMode or its tag string)
        bpp: Source bits per pixel, shared by all chunks
        generated_on: Date printed in the decoder header, omitted if None
        verbose: Print per-chunk statistics

    Returns:
        CompressResult with sizes, blob, offsets and rendered text

    Raises:
        ValueError: For an unknown mode or width, or a non-byte value in any
            chunk. Nothing is encoded in that case.
    """
    mode = EncodingMode(mode)
    bpp = BitWidth(bpp)
    chunks = validate_chunks(chunks)

    blob = bytearray()
    offsets = []
    chunk_sizes = []
    original_size = 0

    for i, chunk in enumerate(chunks):
        original_size += len(chunk)
        offsets.append(len(blob))

        pixels = prepare_pixels(chunk, mode, bpp)
        encoded = encode(pixels, mode)
        blob.extend(encoded)
        chunk_sizes.append(len(encoded))

        if verbose:
            print(
                f"Chunk {i}: {len(chunk)} bytes -> {len(encoded)} bytes "
                f"at offset {offsets[-1]}"
            )

    compressed_data = bytes(blob)
    result = CompressResult(
        mode=mode,
        bpp=bpp,
        original_size=original_size,
        compressed_size=len(compressed_data),
        ratio=compression_ratio(original_size, len(compressed_data)),
        compressed_data=compressed_data,
        offsets=offsets,
        chunk_sizes=chunk_sizes,
    )
    result.hex_output = format_hex_bytes(compressed_data)
    result.c_array_output = format_c_array(compressed_data, mode, bpp)
    result.offset_table_output = format_offset_table(offsets)
    result.decoder_code = generate_decoder(
        mode, result.has_offset_table, generated_on=generated_on
    )

    if verbose:
        print(result.summary())

    return result


def decompress_chunk(result: CompressResult, index: int, capacity: int) -> bytes:
    """
    Decode chunk `index` straight out of the concatenated blob.

    Like the generated C, this starts at the chunk's offset and reads until
    the destination is full, so capacity must match the chunk.
    """
    start = result.offsets[index]
    return decode(result.compressed_data[start:], capacity, result.mode)


def chunk_capacity(chunk: Sequence[int], mode, bpp) -> int:
    """
    Destination size that exactly holds one decoded chunk.

    Value-run modes decode to one byte per pixel. Bit-stream modes decode
    to packed 1 bpp, (pixels + 7) // 8 bytes.
    """
    pixel_count = len(chunk) * BitWidth(bpp).pixels_per_byte
    if EncodingMode(mode).is_bit_stream:
        return (pixel_count + 7) // 8
    return pixel_count

"""
C reference decoder emitter.

The generated code depends only on the encoding mode and on whether an
offset table exists, never on the compressed data itself. Every decode loop
here has the same stopping behaviour as the Python decoders: the destination
capacity is checked between pixel writes, not before reading a new count.
"""

from datetime import date
from typing import List, Optional

from glyph_rle.modes import EncodingMode

TOOL_NAME = "glyph-rle"


def _section(title: str) -> List[str]:
    return [
        "/* =============================",
        f" * {title}",
        " * ============================= */",
    ]


def header_block(generated_on: Optional[date] = None) -> str:
    lines = [
        "/*",
        " * RLE decoding helpers",
    ]
    if generated_on is not None:
        lines.append(f" * Generated: {generated_on.isoformat()}")
    lines += [
        f" * Generated by: {TOOL_NAME}",
        " *",
        " * Porting notes:",
        " * 1. Prefer <stdint.h> types (uint8_t, uint32_t) for consistent sizes across targets.",
        " * 2. compressed_data and data_offsets usually live in flash/rodata.",
        " * 3. Always pass the real destination size as max_dst_len / max_dst_bytes;",
        " *    decoding stops when the destination is full.",
        " */",
        "",
        "// Type definitions (if <stdint.h> is not available)",
        "// typedef unsigned char  uint8_t;",
        "// typedef unsigned short uint16_t;",
        "// typedef unsigned int   uint32_t;",
        "",
    ]
    return "\n".join(lines)


def binary_search_block() -> str:
    return "\n".join(_section("Glyph index lookup (binary search)") + [
        "/**",
        " * @brief Find a glyph index by binary search",
        " *",
        " * @param code    Character code to look up (Unicode/ASCII value)",
        " * @param charset Sorted array of character codes",
        " * @param len     Number of entries in charset",
        " * @return int    Index of code in charset, or -1 if it is missing",
        " */",
        "int get_glyph_index(unsigned short code, const unsigned short* charset, int len) {",
        "    int left = 0;",
        "    int right = len - 1;",
        "    while (left <= right) {",
        "        int mid = left + (right - left) / 2;",
        "        if (charset[mid] == code) return mid;",
        "        if (charset[mid] < code) left = mid + 1; else right = mid - 1;",
        "    }",
        "    return -1;",
        "}",
        "",
    ])


def offsets_block() -> str:
    return "\n".join(_section("Offset access (multi-glyph data)") + [
        "// External declarations (adjust to your project layout)",
        "extern const unsigned char compressed_data[];",
        "extern const unsigned int data_offsets[];",
        "/**",
        " * @brief Start of one glyph's compressed stream",
        " * @param index Glyph index (usually from get_glyph_index)",
        " * @return const unsigned char* Pointer into compressed_data, 0 for a bad index",
        " */",
        "const unsigned char* get_glyph_data(int index) {",
        "    if (index < 0) return 0;",
        "    // Change the addressing here if the data is split across sections",
        "    return &compressed_data[data_offsets[index]];",
        "}",
        "",
    ])


def rle88_block() -> str:
    return "\n".join(_section("RLE 8:8 decoder") + [
        "/**",
        " * @brief RLE 8:8 decoder",
        " * Format: [Count (8bit)] [Value (8bit)]",
        " * @param src         Compressed input",
        " * @param dst         Output pixel buffer, one byte per pixel",
        " * @param max_dst_len Output buffer capacity in pixels",
        " */",
        "void decode_rle_88(const unsigned char* src, unsigned char* dst, int max_dst_len) {",
        "    int src_idx = 0;",
        "    int dst_idx = 0;",
        "    while (dst_idx < max_dst_len) {",
        "        unsigned char count = src[src_idx++];",
        "        unsigned char val   = src[src_idx++];",
        "        for (int i = 0; i < count; i++) {",
        "            if (dst_idx >= max_dst_len) break;",
        "            dst[dst_idx++] = val;",
        "            // To draw directly instead of filling a buffer, plot here:",
        "            // PLOT_PIXEL(x++, y, val);",
        "        }",
        "    }",
        "}",
        "",
    ])


def rle44_block() -> str:
    return "\n".join(_section("RLE 4:4 decoder") + [
        "/**",
        " * @brief RLE 4:4 decoder (packed)",
        " * Format: [Count - 1 (4bit) | Value (4bit)] in one byte",
        " * The count field stores length - 1, so 0x0N is one pixel and 0xFN is 16.",
        " * Output is one byte per pixel, values 0-15.",
        " */",
        "void decode_rle_44(const unsigned char* src, unsigned char* dst, int max_dst_len) {",
        "    int src_idx = 0;",
        "    int dst_idx = 0;",
        "    while (dst_idx < max_dst_len) {",
        "        unsigned char byte  = src[src_idx++];",
        "        unsigned char count = ((byte >> 4) & 0x0F) + 1;",
        "        unsigned char val   = byte & 0x0F;",
        "        for (int i = 0; i < count; i++) {",
        "            if (dst_idx >= max_dst_len) break;",
        "            dst[dst_idx++] = val;",
        "            // PLOT_PIXEL(x++, y, val);",
        "        }",
        "    }",
        "}",
        "",
    ])


def bit8_block() -> str:
    return "\n".join(_section("Bit stream 8 decoder (1bpp)") + [
        "/**",
        " * @brief Bit stream 8 decoder (alternating runs)",
        " * Counts are 0..255. The stream starts with 0 bits and flips colour",
        " * after every count below 255; a count of 255 keeps the colour.",
        " * Output is packed 1bpp, 8 pixels per byte, MSB first.",
        " */",
        "void decode_bit_stream_8(const unsigned char* src, unsigned char* dst, int max_dst_bytes) {",
        "    int src_idx = 0;",
        "    int dst_byte_idx = 0;",
        "    int dst_bit_pos  = 7;",
        "    unsigned char current_byte = 0;",
        "    unsigned char current_val  = 0;",
        "    while (dst_byte_idx < max_dst_bytes) {",
        "        unsigned char count = src[src_idx++];",
        "        for (int i = 0; i < count; i++) {",
        "            if (current_val) current_byte |= (1 << dst_bit_pos);",
        "            // Per-pixel output: PLOT_PIXEL(x++, y, current_val);",
        "            dst_bit_pos--;",
        "            if (dst_bit_pos < 0) {",
        "                dst[dst_byte_idx++] = current_byte;",
        "                current_byte = 0;",
        "                dst_bit_pos  = 7;",
        "                if (dst_byte_idx >= max_dst_bytes) return;",
        "            }",
        "        }",
        "        if (count < 255) current_val = !current_val;",
        "    }",
        "}",
        "",
    ])


def bit4_block() -> str:
    return "\n".join(_section("Bit stream 4 decoder (1bpp)") + [
        "/**",
        " * @brief Bit stream 4 decoder (packed alternating runs)",
        " * Two 4-bit counts per byte, high nibble first. Colour flips after",
        " * every count below 15.",
        " */",
        "void decode_bit_stream_4(const unsigned char* src, unsigned char* dst, int max_dst_bytes) {",
        "    int src_idx = 0;",
        "    int dst_byte_idx = 0;",
        "    int dst_bit_pos  = 7;",
        "    unsigned char current_byte = 0;",
        "    unsigned char current_val  = 0;",
        "    while (dst_byte_idx < max_dst_bytes) {",
        "        unsigned char byte = src[src_idx++];",
        "        unsigned char counts[2];",
        "        counts[0] = (byte >> 4) & 0x0F;",
        "        counts[1] = byte & 0x0F;",
        "        for (int k = 0; k < 2; k++) {",
        "            unsigned char count = counts[k];",
        "            for (int i = 0; i < count; i++) {",
        "                if (current_val) current_byte |= (1 << dst_bit_pos);",
        "                // PLOT_PIXEL(x++, y, current_val);",
        "                dst_bit_pos--;",
        "                if (dst_bit_pos < 0) {",
        "                    dst[dst_byte_idx++] = current_byte;",
        "                    current_byte = 0;",
        "                    dst_bit_pos  = 7;",
        "                    if (dst_byte_idx >= max_dst_bytes) return;",
        "                }",
        "            }",
        "            if (count < 15) current_val = !current_val;",
        "        }",
        "    }",
        "}",
        "",
    ])


DECODE_BLOCKS = {
    EncodingMode.RLE_8_8: rle88_block,
    EncodingMode.RLE_4_4: rle44_block,
    EncodingMode.BIT_STREAM_8: bit8_block,
    EncodingMode.BIT_STREAM_4: bit4_block,
}

USAGE_CALLS = {
    EncodingMode.RLE_8_8: "    // decode_rle_88(src, dst, width * height);",
    EncodingMode.RLE_4_4: "    // decode_rle_44(src, dst, width * height);",
    EncodingMode.BIT_STREAM_8: "    // decode_bit_stream_8(src, dst, (width * height + 7) / 8);",
    EncodingMode.BIT_STREAM_4: "    // decode_bit_stream_4(src, dst, (width * height + 7) / 8);",
}


def usage_block(has_offsets: bool, mode: EncodingMode) -> str:
    if has_offsets:
        src_line = "    const unsigned char* src = get_glyph_data(idx);"
    else:
        src_line = "    const unsigned char* src = compressed_data; // no offset table"
    return "\n".join(_section("Usage example (hook up your plot function)") + [
        "/*",
        "void YOUR_PLOT_FUNC(int x, int y, int val); // your pixel plotting callback",
        "void example_render_glyph(unsigned short code, int x0, int y0, int width, int height) {",
        "    // Look up the glyph index",
        "    // const unsigned short* charset = ...; const int charset_len = ...;",
        "    // int idx = get_glyph_index(code, charset, charset_len);",
        src_line,
        "    // Decode into a scratch buffer, or plot pixel by pixel",
        "    // unsigned char* dst = frameBuffer + y0 * STRIDE + x0;",
        USAGE_CALLS[mode],
        "    // or call YOUR_PLOT_FUNC(x, y, val) inside the decode loop",
        "}",
        "*/",
        "",
    ])


def generate_decoder(mode, has_offsets: bool, generated_on: Optional[date] = None) -> str:
    """
    Render the C decoder for one encoding mode.

    Args:
        mode: EncodingMode or its tag string
        has_offsets: Include the get_glyph_data() offset accessor
        generated_on: Date for the header comment, left out when None

    Returns:
        The decoder source text
    """
    mode = EncodingMode(mode)
    blocks = [header_block(generated_on), binary_search_block()]
    if has_offsets:
        blocks.append(offsets_block())
    blocks.append(DECODE_BLOCKS[mode]())
    blocks.append(usage_block(has_offsets, mode))
    return "\n".join(blocks)

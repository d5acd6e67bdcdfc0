#!/usr/bin/env python3
"""Compress glyph/icon bitmaps into RLE byte arrays for firmware.

Input is C source with hex byte arrays: every innermost {...} group is one
glyph, otherwise all hex literals form a single glyph. With --image, each
input file is an image that becomes one glyph.

Output is a C array of the compressed data, an offset table when there is
more than one glyph, and optionally the matching C decoder.
"""

import argparse
import os
import sys
from datetime import date

from glyph_rle.c_array_parser import parse_c_array
from glyph_rle.chunk_compressor import (
    chunk_capacity,
    compress_chunks,
    decompress_chunk,
)
from glyph_rle.image_utils.glyph_image import image_to_chunk, save_preview
from glyph_rle.modes import BitWidth, EncodingMode
from glyph_rle.pixel_unpack import unpack_pixels


def load_chunks(args):
    if args.image:
        return [image_to_chunk(path, args.bpp, invert=args.invert)
                for path in args.input]

    chunks = []
    for path in args.input:
        with open(path, "r", encoding="utf-8") as f:
            chunks.extend(parse_c_array(f.read()))
    return chunks


def preview_glyphs(result, chunks):
    """Decode every chunk back out of the blob as plain pixel streams."""
    glyphs = []
    for i, chunk in enumerate(chunks):
        pixel_count = len(chunk) * result.bpp.pixels_per_byte
        decoded = decompress_chunk(
            result, i, chunk_capacity(chunk, result.mode, result.bpp))
        if result.mode.is_bit_stream:
            glyphs.append(unpack_pixels(decoded, BitWidth.BPP_1)[:pixel_count])
        else:
            glyphs.append(list(decoded))
    return glyphs


def preview_bpp(mode, bpp):
    if mode.is_bit_stream:
        return BitWidth.BPP_1
    if mode == EncodingMode.RLE_4_4 and bpp == BitWidth.BPP_8:
        return BitWidth.BPP_4
    return bpp


def write_text(path, text):
    output_folder = os.path.dirname(path)
    if output_folder:
        os.makedirs(output_folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def main(argv=None):
    prog = os.path.basename(sys.argv[0])
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog=prog,
        description=__doc__)

    parser.add_argument("-i", "--input",
        required=True,
        nargs="+",
        help="Input C source file(s), or image files with --image.")
    parser.add_argument("-o", "--output",
        help="Write the C arrays here instead of printing them.")
    parser.add_argument("-m", "--mode",
        type=EncodingMode,
        choices=list(EncodingMode),
        default=EncodingMode.RLE_8_8,
        metavar="{" + ",".join(m.value for m in EncodingMode) + "}",
        help="Encoding mode. RLE_8_8 and RLE_4_4 store (count, value) pairs,"
             " BIT_STREAM_8 and BIT_STREAM_4 store alternating 1bpp runs.")
    parser.add_argument("-b", "--bpp",
        type=int,
        choices=[int(w) for w in BitWidth],
        default=8,
        help="Source bits per pixel.")
    parser.add_argument("--decoder",
        help="Also write the matching C decoder to this file.")
    parser.add_argument("--image",
        action="store_true",
        help="Inputs are images; each one becomes a glyph.")
    parser.add_argument("--invert",
        action="store_true",
        help="With --image, treat dark pixels as set.")
    parser.add_argument("--preview",
        help="Decode all glyphs again and save them as one image.")
    parser.add_argument("--glyph-width",
        type=int,
        help="Row width in pixels of one glyph, needed for --preview.")
    parser.add_argument("-v", "--verbose",
        action="store_true",
        help="Print per-glyph statistics.")

    args = parser.parse_args(argv)

    if args.preview and not args.glyph_width:
        print("--preview requires --glyph-width!", file=sys.stderr)
        return 1

    try:
        chunks = load_chunks(args)
    except OSError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not chunks:
        print("No hex data (such as 0x00, 0xFF) found in the input.",
              file=sys.stderr)
        return 1

    try:
        result = compress_chunks(
            chunks, args.mode, args.bpp,
            generated_on=date.today(), verbose=args.verbose)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    arrays = result.c_array_output + "\n\n" + result.offset_table_output + "\n"
    if args.output:
        write_text(args.output, arrays)
        print("Compressed data written to {}".format(args.output))
    else:
        print(arrays)

    if args.decoder:
        write_text(args.decoder, result.decoder_code)
        print("Decoder written to {}".format(args.decoder))

    if args.preview:
        try:
            save_preview(preview_glyphs(result, chunks), args.glyph_width,
                         preview_bpp(result.mode, result.bpp), args.preview)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
        print("Preview written to {}".format(args.preview))

    print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())

import numpy as np
from PIL import Image

from glyph_rle.cli import main

FONT_SOURCE = """
const unsigned char font[2][9] = {
    { 0x00, 0x00, 0x18, 0x24, 0x42, 0x42, 0x24, 0x18, 0x00 },
    { 0x00, 0x00, 0x00, 0x18, 0x18, 0x18, 0x18, 0x18, 0x00 }
};
"""


def write_source(tmp_path, text=FONT_SOURCE):
    path = tmp_path / "font.c"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_prints_arrays_and_summary(tmp_path, capsys):
    assert main(["-i", write_source(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "const unsigned char compressed_data[" in out
    assert "const unsigned int data_offsets[2] = {" in out
    assert "Original size: 18 bytes" in out


def test_writes_output_and_decoder(tmp_path):
    output = tmp_path / "out" / "font_rle.h"
    decoder = tmp_path / "out" / "decoder.c"
    code = main([
        "-i", write_source(tmp_path),
        "-o", str(output),
        "-m", "BIT_STREAM_4",
        "-b", "1",
        "--decoder", str(decoder),
    ])
    assert code == 0
    assert "// Encoding: BIT_STREAM_4, source: 1 BPP" in output.read_text(encoding="utf-8")
    decoder_text = decoder.read_text(encoding="utf-8")
    assert "void decode_bit_stream_4(" in decoder_text
    assert "get_glyph_data" in decoder_text
    assert " * Generated: " in decoder_text


def test_no_hex_data(tmp_path, capsys):
    assert main(["-i", write_source(tmp_path, "int x = 1;")]) == 1
    assert "No hex data" in capsys.readouterr().err


def test_rejects_non_byte_literal(tmp_path, capsys):
    assert main(["-i", write_source(tmp_path, "{ 0x100 }")]) == 1
    assert "not a byte value" in capsys.readouterr().err


def test_preview_requires_width(tmp_path):
    source = write_source(tmp_path)
    assert main(["-i", source, "--preview", str(tmp_path / "p.png")]) == 1


def test_preview_round_trip(tmp_path):
    preview = tmp_path / "preview.png"
    code = main([
        "-i", write_source(tmp_path),
        "-m", "BIT_STREAM_8",
        "-b", "1",
        "--preview", str(preview),
        "--glyph-width", "8",
    ])
    assert code == 0
    with Image.open(preview) as img:
        rows = np.asarray(img)
    assert rows.shape == (18, 8)
    # Third row of the circle glyph is 0x18: 00011000.
    assert (rows[2] > 0).astype(int).tolist() == [0, 0, 0, 1, 1, 0, 0, 0]


def test_image_input(tmp_path, capsys):
    glyph = tmp_path / "glyph.png"
    Image.fromarray(np.zeros((8, 8), dtype=np.uint8)).save(glyph)
    assert main(["-i", str(glyph), "--image", "-b", "1", "-m", "BIT_STREAM_8"]) == 0
    out = capsys.readouterr().out
    # 64 clear bits encode as a single count of 64.
    assert "0x40" in out
    assert "Single chunk" in out


def test_missing_input_file(tmp_path, capsys):
    assert main(["-i", str(tmp_path / "missing.c")]) == 1
    assert "missing.c" in capsys.readouterr().err


def test_unreadable_image(tmp_path, capsys):
    bogus = tmp_path / "glyph.png"
    bogus.write_text("not an image", encoding="utf-8")
    assert main(["-i", str(bogus), "--image"]) == 1
    assert capsys.readouterr().err

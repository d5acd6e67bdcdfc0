"""
Extracts glyph chunks from C array source text.
"""

import re
from typing import List

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_INNER_BLOCK = re.compile(r"\{([^{}]*)\}")
_HEX_LITERAL = re.compile(r"0x[0-9a-f]+", re.IGNORECASE)


def strip_comments(code: str) -> str:
    code = _LINE_COMMENT.sub("", code)
    return _BLOCK_COMMENT.sub("", code)


def parse_c_array(code: str) -> List[List[int]]:
    """
    Parse hex byte literals out of a C array definition.

    Every innermost brace group holding hex literals becomes one chunk, so a
    2D array gives one chunk per glyph. Without such groups all hex literals
    form a single chunk. Decimal numbers and other tokens are ignored.

    Args:
        code: C source text

    Returns:
        List of chunks, empty if no hex literal was found
    """
    code = strip_comments(code)
    chunks = []

    for block in _INNER_BLOCK.findall(code):
        hexes = _HEX_LITERAL.findall(block)
        if hexes:
            chunks.append([int(h, 16) for h in hexes])

    if not chunks:
        hexes = _HEX_LITERAL.findall(code)
        if hexes:
            chunks.append([int(h, 16) for h in hexes])

    return chunks

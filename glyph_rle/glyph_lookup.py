"""
Python counterparts of the lookup helpers in the generated C code.
"""

from typing import Optional, Sequence


def find_glyph_index(code: int, charset: Sequence[int]) -> int:
    """
    Binary search for code in a sorted charset.

    Returns:
        The index of code, or -1 if it is not present
    """
    left = 0
    right = len(charset) - 1

    while left <= right:
        mid = left + (right - left) // 2
        if charset[mid] == code:
            return mid
        if charset[mid] < code:
            left = mid + 1
        else:
            right = mid - 1

    return -1


def glyph_data(blob: bytes, offsets: Sequence[int], index: int) -> Optional[memoryview]:
    """The compressed stream of glyph `index`, running to the end of blob."""
    if index < 0:
        return None
    return memoryview(blob)[offsets[index]:]

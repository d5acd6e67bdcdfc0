"""
Encoding modes and source pixel widths shared by the codecs.
"""

from enum import Enum, IntEnum


class BitWidth(IntEnum):
    """Number of bits per source pixel, fixed for a whole compression run."""

    BPP_1 = 1
    BPP_2 = 2
    BPP_4 = 4
    BPP_8 = 8

    @property
    def pixels_per_byte(self) -> int:
        return 8 // self.value

    @property
    def max_value(self) -> int:
        return (1 << self.value) - 1


class EncodingMode(Enum):
    """The four codecs. Values are the tags printed into generated C code."""

    RLE_8_8 = "RLE_8_8"            # 8-bit count, 8-bit value
    RLE_4_4 = "RLE_4_4"            # 4-bit (count - 1), 4-bit value, one byte
    BIT_STREAM_8 = "BIT_STREAM_8"  # alternating bit runs, 8-bit counts
    BIT_STREAM_4 = "BIT_STREAM_4"  # alternating bit runs, two 4-bit counts per byte

    @property
    def is_bit_stream(self) -> bool:
        return self in (EncodingMode.BIT_STREAM_8, EncodingMode.BIT_STREAM_4)

    @property
    def is_packed(self) -> bool:
        return self in (EncodingMode.RLE_4_4, EncodingMode.BIT_STREAM_4)

    @property
    def max_run(self) -> int:
        return MAX_RUN[self]

    @property
    def unit_name(self) -> str:
        """What the destination capacity of this mode's decoder counts."""
        return "bytes (1 bpp)" if self.is_bit_stream else "pixels"


VALUE_RUN_WIDE_MAX = 255
VALUE_RUN_PACKED_MAX = 16
BIT_RUN_WIDE_MAX = 255
BIT_RUN_PACKED_MAX = 15

MAX_RUN = {
    EncodingMode.RLE_8_8: VALUE_RUN_WIDE_MAX,
    EncodingMode.RLE_4_4: VALUE_RUN_PACKED_MAX,
    EncodingMode.BIT_STREAM_8: BIT_RUN_WIDE_MAX,
    EncodingMode.BIT_STREAM_4: BIT_RUN_PACKED_MAX,
}

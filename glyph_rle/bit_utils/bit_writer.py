from bitarray import bitarray


class BitWriter:
    """
    A class for writing bits to a bitarray stream with byte alignment support.
    Bits are stored MSB first, which is the order both packed count fields
    and 1 bpp destination bitmaps use.
    """

    def __init__(self) -> None:
        """Initialize a new BitWriter instance with an empty bitarray."""
        self.bits = bitarray(endian="big")

    def __len__(self) -> int:
        return len(self.bits)

    def write_bits_msb(self, value: int, length: int) -> None:
        """
        Write the low `length` bits of value, most significant bit first.
        Used for the 4-bit count and value fields of the packed modes.

        Args:
            value: Integer value to write
            length: Number of bits to write

        Raises:
            ValueError: If length is negative
        """
        if length < 0:
            raise ValueError("Length cannot be negative")
        if length == 0:
            return
        for i in range(length - 1, -1, -1):
            self.bits.append((value >> i) & 1)

    def write_run(self, bit: int, count: int) -> None:
        """
        Append the same bit `count` times.

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError("Run length cannot be negative")
        self.bits.extend(bitarray([1 if bit else 0]) * count)

    def byte_align(self) -> None:
        """Add zero bits until the stream ends on a byte boundary."""
        while len(self.bits) % 8 != 0:
            self.bits.append(0)

    def to_bytes(self) -> bytes:
        """
        Byte-align and return the written bits.

        Returns:
            The packed bytes
        """
        self.byte_align()
        return self.bits.tobytes()

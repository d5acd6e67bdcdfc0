from bitarray import bitarray


class BitReader:
    """
    Reads bits MSB first from an in-memory byte string.
    """

    def __init__(self, data: bytes) -> None:
        """
        Args:
            data: The byte stream to read from
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        self.pos = 0

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Raises:
            EOFError: If the bit stream is exhausted
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits_msb(self, n: int) -> int:
        """
        Read n bits in MSB-first order and return as an integer.

        Args:
            n: Number of bits to read

        Returns:
            The value as an integer

        Raises:
            ValueError: If n is negative
            EOFError: If there are not enough bits to read
        """
        if n < 0:
            raise ValueError("Length cannot be negative")
        if self.pos + n > len(self.bits):
            raise EOFError("Not enough bits to read (MSB)")
        val = 0
        for _ in range(n):
            val = (val << 1) | self.read_bit()
        return val

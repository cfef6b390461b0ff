"""Fixed-size bit storage for Bloom filters."""

import numpy as np

from turbobloom.errors import InvalidSize, OutOfBounds


class BitVector:
    """
    A non-resizable vector of ``size`` bits, all initially unset.

    Bits are packed eight to a byte in a ``bytearray``. The number of set
    bits is tracked as bits flip from unset to set, so reading it is O(1);
    ``count_ones`` recounts from storage.
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidSize(
                f"bit vector size must be a positive integer, got {size!r}"
            )
        self._size = size
        self._bits = bytearray((size + 7) // 8)
        self._set_bits = 0

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise OutOfBounds(
                f"bit index {index} out of range for {self._size} bits"
            )

    def set_bit(self, index: int) -> bool:
        """Set bit ``index``. Returns True if the bit was previously unset."""
        self._check_index(index)
        mask = 1 << (index & 7)
        byte = self._bits[index >> 3]
        if byte & mask:
            return False
        self._bits[index >> 3] = byte | mask
        self._set_bits += 1
        return True

    def test_bit(self, index: int) -> bool:
        self._check_index(index)
        return bool(self._bits[index >> 3] & 1 << (index & 7))

    def count_ones(self) -> int:
        # Padding bits past size are never set.
        packed = np.frombuffer(bytes(self._bits), dtype=np.uint8)
        return int(np.unpackbits(packed).sum())

    @property
    def set_bits(self) -> int:
        return self._set_bits

    @property
    def fill_ratio(self) -> float:
        return self._set_bits / self._size

    @property
    def nbytes(self) -> int:
        return len(self._bits)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"BitVector(size={self._size}, set_bits={self._set_bits})"


class BitVectorView:
    """Read-only window onto a BitVector owned by someone else."""

    def __init__(self, vector: BitVector) -> None:
        self._vector = vector

    def test_bit(self, index: int) -> bool:
        return self._vector.test_bit(index)

    def count_ones(self) -> int:
        return self._vector.count_ones()

    @property
    def set_bits(self) -> int:
        return self._vector.set_bits

    @property
    def fill_ratio(self) -> float:
        return self._vector.fill_ratio

    @property
    def nbytes(self) -> int:
        return self._vector.nbytes

    def __len__(self) -> int:
        return len(self._vector)

    def __repr__(self) -> str:
        return f"BitVectorView({self._vector!r})"

"""
Bloom filter using enhanced double hashing.

Bit positions are derived from two base hashes, Murmur3 x64 128-bit (H1)
and xxHash64 (H2):

    g_i(x) = (H1(x) + i * H2(x) + f(i)) mod m,  f(i) = i**3

Kirsch and Mitzenmacher show in "Less Hashing, Same Performance: Building
a Better Bloom Filter" that this costs two hash computations per element
with no loss in the asymptotic false positive probability. The cubic term
breaks up the clustering plain double hashing shows when m and H2(x) share
small factors.
"""

import math
from typing import Any, ClassVar, Iterable, Iterator, Optional

from turbobloom.bitvec.bit_vector import BitVector, BitVectorView
from turbobloom.config.config import (
    DEFAULT_FALSE_POS,
    BloomConfig,
    check_positive_int,
    validate_sizing,
)
from turbobloom.console import console
from turbobloom.errors import InvalidParameter
from turbobloom.hashing.hashers import DoubleHasher

LN_2 = math.log(2)
LN_SQR = LN_2 * LN_2


def optimal_num_bits(approx_items: int, fp_prob: float) -> int:
    """m = ceil(-(n * ln(p)) / ln(2)^2)"""
    validate_sizing(approx_items, fp_prob)
    return math.ceil(-(approx_items * math.log(fp_prob)) / LN_SQR)


def optimal_num_hashes(num_bits: int, approx_items: int) -> int:
    """k = round((m / n) * ln(2)), at least 1"""
    check_positive_int("num_bits", num_bits)
    check_positive_int("approx_items", approx_items)
    return max(1, round(num_bits / approx_items * LN_2))


class BloomFilter:
    """
    Probabilistic set membership: ``has`` may return a false positive, but
    never a false negative for an element passed to ``set`` on the same
    instance.

    Elements are anything ``turbobloom.hashing.to_bytes`` can encode.

    Not thread-safe. Concurrent ``set`` calls, or ``set`` racing ``has``,
    need an external lock; concurrent ``has`` calls once all ``set`` calls
    have finished are safe.
    """

    DEBUG: ClassVar[bool] = False

    def __init__(
        self,
        approx_items: int,
        fp_prob: float = DEFAULT_FALSE_POS,
        *,
        config: Optional[BloomConfig] = None,
    ) -> None:
        if config is None:
            config = BloomConfig(approx_items=approx_items, fp_prob=fp_prob)
        elif (config.approx_items, config.fp_prob) != (approx_items, fp_prob):
            raise InvalidParameter(
                f"config sizes for n={config.approx_items}, "
                f"p={config.fp_prob} but the filter was given "
                f"n={approx_items}, p={fp_prob}; use BloomFilter.from_config"
            )
        config.validate()
        self.approx_items = approx_items
        self.fp_prob = fp_prob
        self.num_bits = optimal_num_bits(approx_items, fp_prob)
        self.num_hashes = optimal_num_hashes(self.num_bits, approx_items)
        self.num_sets = 0
        self.hasher = DoubleHasher(config.murmur_seed, config.xx_seed)
        self._bits = BitVector(self.num_bits)
        self._view = BitVectorView(self._bits)
        if self.DEBUG:
            console.print(
                f"  \\[DEBUG] BloomFilter n={approx_items} p={fp_prob}: "
                f"m={self.num_bits} bits ({self._bits.nbytes} bytes), "
                f"k={self.num_hashes}",
                style="dim",
            )

    @classmethod
    def set_debug(cls, enabled: bool = True) -> None:
        cls.DEBUG = enabled

    @classmethod
    def new(cls, approx_items: int) -> "BloomFilter":
        return cls(approx_items, DEFAULT_FALSE_POS)

    @classmethod
    def new_with_probability(
        cls, approx_items: int, fp_prob: float
    ) -> "BloomFilter":
        return cls(approx_items, fp_prob)

    @classmethod
    def from_config(cls, config: BloomConfig) -> "BloomFilter":
        return cls(config.approx_items, config.fp_prob, config=config)

    @property
    def m(self) -> int:
        return self.num_bits

    @property
    def k(self) -> int:
        return self.num_hashes

    @property
    def n(self) -> int:
        return self.num_sets

    @property
    def bits(self) -> BitVectorView:
        return self._view

    def _positions(self, element: Any) -> Iterator[int]:
        return self.hasher.positions(element, self.num_hashes, self.num_bits)

    def set(self, element: Any) -> None:
        # Positions are reduced mod m, so set_bit cannot go out of bounds.
        for pos in self._positions(element):
            self._bits.set_bit(pos)
        self.num_sets += 1

    add = set

    def update(self, elements: Iterable[Any]) -> None:
        for element in elements:
            self.set(element)

    def has(self, element: Any) -> bool:
        return all(self._bits.test_bit(pos) for pos in self._positions(element))

    def __contains__(self, element: Any) -> bool:
        return self.has(element)

    def num_items_approx(self) -> float:
        """
        Estimate the number of distinct elements set, from the fraction of
        bits still unset:

            n* = -(m / k) * ln(1 - X / m)

        X is the number of set bits. Duplicate insertions do not move the
        estimate. A saturated filter (X == m) returns ``math.inf``.
        """
        m = float(self.num_bits)
        k = float(self.num_hashes)
        x = float(self._bits.set_bits)
        if x == 0.0:
            return 0.0
        if x >= m:
            return math.inf
        return -(m / k) * math.log(1.0 - x / m)

    def expected_fp_rate(self) -> float:
        """(1 - e^(-k * n / m))^k for the current number of set calls."""
        exponent = -self.num_hashes * self.num_sets / self.num_bits
        return (1.0 - math.exp(exponent)) ** self.num_hashes

    def __repr__(self) -> str:
        return (
            f"BloomFilter(m={self.num_bits}, k={self.num_hashes}, "
            f"n={self.num_sets}, p={self.fp_prob})"
        )

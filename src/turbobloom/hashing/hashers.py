"""Base hash functions and the enhanced double hashing scheme."""

from typing import Any, Iterator, Tuple

import mmh3
import xxhash

from turbobloom.hashing.encoder import to_bytes


def murmur3_128(data: bytes, seed: int = 0) -> int:
    """Murmur3 x64 128-bit hash of ``data`` as an unsigned integer."""
    return mmh3.hash128(data, seed=seed, signed=False)


def xxh64(data: bytes, seed: int = 0) -> int:
    return xxhash.xxh64_intdigest(data, seed=seed)


def enhanced_double_hash(h1: int, h2: int, i: int, num_bits: int) -> int:
    """g_i(x) = (H1(x) + i * H2(x) + i**3) mod m"""
    return (h1 + i * h2 + i**3) % num_bits


class DoubleHasher:
    """Derives any number of bit positions from two base hashes."""

    def __init__(self, murmur_seed: int = 0, xx_seed: int = 0) -> None:
        self.murmur_seed = murmur_seed
        self.xx_seed = xx_seed

    def base_hashes(self, element: Any) -> Tuple[int, int]:
        data = to_bytes(element)
        return murmur3_128(data, self.murmur_seed), xxh64(data, self.xx_seed)

    def positions(
        self, element: Any, num_hashes: int, num_bits: int
    ) -> Iterator[int]:
        h1, h2 = self.base_hashes(element)
        for i in range(num_hashes):
            yield enhanced_double_hash(h1, h2, i, num_bits)

    def __repr__(self) -> str:
        return (
            f"DoubleHasher(murmur_seed={self.murmur_seed}, "
            f"xx_seed={self.xx_seed})"
        )

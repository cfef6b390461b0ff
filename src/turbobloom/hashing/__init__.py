from turbobloom.hashing.encoder import BloomHashable, register, to_bytes
from turbobloom.hashing.hashers import (
    DoubleHasher,
    enhanced_double_hash,
    murmur3_128,
    xxh64,
)

__all__ = [
    "BloomHashable",
    "DoubleHasher",
    "enhanced_double_hash",
    "murmur3_128",
    "register",
    "to_bytes",
    "xxh64",
]

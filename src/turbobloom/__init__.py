from turbobloom.bitvec import BitVector, BitVectorView
from turbobloom.config import (
    DEFAULT_FALSE_POS,
    BloomConfig,
    load_config,
)
from turbobloom.console import console
from turbobloom.core import BloomFilter, optimal_num_bits, optimal_num_hashes
from turbobloom.errors import (
    BloomError,
    InvalidParameter,
    InvalidSize,
    OutOfBounds,
    UnhashableElement,
)
from turbobloom.hashing import BloomHashable, DoubleHasher, to_bytes

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FALSE_POS",
    "BitVector",
    "BitVectorView",
    "BloomConfig",
    "BloomError",
    "BloomFilter",
    "BloomHashable",
    "DoubleHasher",
    "InvalidParameter",
    "InvalidSize",
    "OutOfBounds",
    "UnhashableElement",
    "console",
    "load_config",
    "optimal_num_bits",
    "optimal_num_hashes",
    "to_bytes",
]

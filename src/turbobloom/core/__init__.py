from turbobloom.core.bloom_filter import (
    BloomFilter,
    optimal_num_bits,
    optimal_num_hashes,
)

__all__ = ["BloomFilter", "optimal_num_bits", "optimal_num_hashes"]

import mmh3
import xxhash

from turbobloom.hashing.encoder import to_bytes
from turbobloom.hashing.hashers import (
    DoubleHasher,
    enhanced_double_hash,
    murmur3_128,
    xxh64,
)


class TestBaseHashes:
    def test_murmur3_is_unsigned_128(self) -> None:
        value = murmur3_128(b"foo")
        assert value == mmh3.hash128(b"foo", seed=0, x64arch=True, signed=False)
        assert 0 <= value < 2**128

    def test_xxh64_is_unsigned_64(self) -> None:
        value = xxh64(b"foo")
        assert value == xxhash.xxh64(b"foo").intdigest()
        assert 0 <= value < 2**64

    def test_seeds_change_output(self) -> None:
        assert murmur3_128(b"foo", 1) != murmur3_128(b"foo", 2)
        assert xxh64(b"foo", 1) != xxh64(b"foo", 2)


class TestEnhancedDoubleHash:
    def test_formula(self) -> None:
        h1, h2, m = 2**100 + 17, 2**63 + 5, 959
        for i in range(10):
            assert enhanced_double_hash(h1, h2, i, m) == (h1 + i * h2 + i**3) % m

    def test_first_position_is_h1(self) -> None:
        assert enhanced_double_hash(1234, 99, 0, 1000) == 234

    def test_cubic_term_breaks_zero_step(self) -> None:
        """With H2 = 0 mod m plain double hashing repeats one position."""
        positions = {enhanced_double_hash(5, 100, i, 100) for i in range(5)}
        assert len(positions) > 1


class TestDoubleHasher:
    def test_base_hashes_use_encoding(self) -> None:
        hasher = DoubleHasher(murmur_seed=3, xx_seed=4)
        data = to_bytes("foo")
        assert hasher.base_hashes("foo") == (
            murmur3_128(data, 3),
            xxh64(data, 4),
        )

    def test_positions(self) -> None:
        hasher = DoubleHasher()
        positions = list(hasher.positions("foo", 7, 959))
        assert len(positions) == 7
        assert all(0 <= pos < 959 for pos in positions)
        h1, h2 = hasher.base_hashes("foo")
        assert positions == [enhanced_double_hash(h1, h2, i, 959) for i in range(7)]

    def test_deterministic_across_instances(self) -> None:
        assert list(DoubleHasher().positions(("a", 1), 5, 1000)) == list(
            DoubleHasher().positions(("a", 1), 5, 1000)
        )

    def test_repr(self) -> None:
        assert repr(DoubleHasher(1, 2)) == "DoubleHasher(murmur_seed=1, xx_seed=2)"

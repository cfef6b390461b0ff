import os
from dataclasses import dataclass
from typing import Mapping, Optional

from turbobloom.errors import InvalidParameter

DEFAULT_FALSE_POS = 0.01
DEFAULT_APPROX_ITEMS = 1000
MURMUR_SEED_LIMIT = 2**32
XX_SEED_LIMIT = 2**64

ENV_PREFIX = "TURBOBLOOM_"


def check_positive_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameter(
            f"{name} must be a positive integer, got {value!r}"
        )


def validate_sizing(approx_items: int, fp_prob: float) -> None:
    check_positive_int("approx_items", approx_items)
    if (
        isinstance(fp_prob, bool)
        or not isinstance(fp_prob, (int, float))
        or not 0.0 < fp_prob < 1.0
    ):
        raise InvalidParameter(
            f"fp_prob must be in the open interval (0, 1), got {fp_prob!r}"
        )


def _check_seed(name: str, seed: int, limit: int) -> None:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidParameter(f"{name} must be an integer, got {seed!r}")
    if not 0 <= seed < limit:
        raise InvalidParameter(f"{name} must be in [0, {limit}), got {seed}")


@dataclass
class BloomConfig:
    approx_items: int = DEFAULT_APPROX_ITEMS
    fp_prob: float = DEFAULT_FALSE_POS
    # H1 is seeded as 32-bit Murmur3, H2 as 64-bit xxHash.
    murmur_seed: int = 0
    xx_seed: int = 0

    def validate(self) -> "BloomConfig":
        validate_sizing(self.approx_items, self.fp_prob)
        _check_seed("murmur_seed", self.murmur_seed, MURMUR_SEED_LIMIT)
        _check_seed("xx_seed", self.xx_seed, XX_SEED_LIMIT)
        return self


def _read(env: Mapping[str, str], key: str, convert, default):
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError as exc:
        raise InvalidParameter(
            f"{ENV_PREFIX}{key}={raw!r} is not a valid {convert.__name__}"
        ) from exc


def load_config(env: Optional[Mapping[str, str]] = None) -> BloomConfig:
    """
    Build a BloomConfig from TURBOBLOOM_* environment variables.

    Recognised keys: TURBOBLOOM_APPROX_ITEMS, TURBOBLOOM_FP_PROB,
    TURBOBLOOM_MURMUR_SEED, TURBOBLOOM_XX_SEED. Unset keys keep their
    defaults.
    """
    if env is None:
        env = os.environ
    config = BloomConfig(
        approx_items=_read(env, "APPROX_ITEMS", int, DEFAULT_APPROX_ITEMS),
        fp_prob=_read(env, "FP_PROB", float, DEFAULT_FALSE_POS),
        murmur_seed=_read(env, "MURMUR_SEED", int, 0),
        xx_seed=_read(env, "XX_SEED", int, 0),
    )
    return config.validate()

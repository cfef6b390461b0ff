from turbobloom.config.config import (
    DEFAULT_FALSE_POS,
    BloomConfig,
    check_positive_int,
    load_config,
    validate_sizing,
)

__all__ = [
    "DEFAULT_FALSE_POS",
    "BloomConfig",
    "check_positive_int",
    "load_config",
    "validate_sizing",
]

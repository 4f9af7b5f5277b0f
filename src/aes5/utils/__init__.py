from .config import (
    RealtimeConfig,
    ToleranceConfig,
    ValidatorConfig,
    load_validator_config,
)

__all__ = [
    "RealtimeConfig",
    "ToleranceConfig",
    "ValidatorConfig",
    "load_validator_config",
]

"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .utils.config import ToleranceConfig, ValidatorConfig, load_validator_config

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Process-wide settings resolved once from the environment."""

    config_path: Path | None
    default_tolerance_ppm: float | None
    events_enabled: bool


@lru_cache(maxsize=1)
def load_runtime_settings() -> RuntimeSettings:
    config_path = os.getenv("AES5_CONFIG_PATH")
    tolerance = os.getenv("AES5_DEFAULT_TOLERANCE_PPM")
    return RuntimeSettings(
        config_path=Path(config_path) if config_path else None,
        default_tolerance_ppm=float(tolerance) if tolerance else None,
        events_enabled=os.getenv("AES5_EVENTS_ENABLED", "true").lower() in _TRUTHY,
    )


@lru_cache(maxsize=1)
def load_active_config() -> ValidatorConfig:
    """Validator config from ``AES5_CONFIG_PATH`` with env overrides applied."""

    settings = load_runtime_settings()
    if settings.config_path is not None:
        config = load_validator_config(settings.config_path)
        logger.info("Loaded validator config.", extra={"config_path": str(settings.config_path)})
    else:
        config = ValidatorConfig()

    if settings.default_tolerance_ppm is not None:
        default_ppm = settings.default_tolerance_ppm
        tight_ppm = config.tolerance.tight_ppm
        if 0 < default_ppm < tight_ppm:
            logger.warning(
                "Tight tolerance lowered to match AES5_DEFAULT_TOLERANCE_PPM.",
                extra={"default_ppm": default_ppm, "tight_ppm": tight_ppm},
            )
            tight_ppm = default_ppm
        tolerance = ToleranceConfig.model_validate({"default_ppm": default_ppm, "tight_ppm": tight_ppm})
        config = config.model_copy(update={"tolerance": tolerance})
    return config

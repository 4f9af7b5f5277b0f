from __future__ import annotations

from pathlib import Path

import json

from pydantic import BaseModel, Field, model_validator

from aes5.frequency_contract import (
    CLASSIFIER_REALTIME_BUDGET_NS,
    CORE_REALTIME_BUDGET_NS,
    DEFAULT_TOLERANCE_PPM,
    MAX_BATCH_SIZE,
    TIGHT_TOLERANCE_PPM,
    VALIDATOR_REALTIME_BUDGET_NS,
)


class ToleranceConfig(BaseModel):
    default_ppm: float = Field(DEFAULT_TOLERANCE_PPM, gt=0.0)
    tight_ppm: float = Field(TIGHT_TOLERANCE_PPM, gt=0.0)

    @model_validator(mode="after")
    def _tight_not_looser_than_default(self) -> "ToleranceConfig":
        if self.tight_ppm > self.default_ppm:
            raise ValueError("tight_ppm must be <= default_ppm.")
        return self


class RealtimeConfig(BaseModel):
    core_budget_ns: int = Field(CORE_REALTIME_BUDGET_NS, gt=0)
    validator_budget_ns: int = Field(VALIDATOR_REALTIME_BUDGET_NS, gt=0)
    classifier_budget_ns: int = Field(CLASSIFIER_REALTIME_BUDGET_NS, gt=0)


class ValidatorConfig(BaseModel):
    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    realtime: RealtimeConfig = Field(default_factory=RealtimeConfig)
    max_batch_size: int = Field(MAX_BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE)


def load_validator_config(path: Path) -> ValidatorConfig:
    data = _load_config_data(path)
    return ValidatorConfig.model_validate(data)


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)

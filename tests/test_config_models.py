import json

import pytest
from pydantic import ValidationError

from aes5.utils.config import RealtimeConfig, ToleranceConfig, ValidatorConfig, load_validator_config


def test_validator_config_defaults() -> None:
    config = ValidatorConfig()

    assert config.tolerance.default_ppm == 100
    assert config.tolerance.tight_ppm == 50
    assert config.realtime == RealtimeConfig(core_budget_ns=100_000, validator_budget_ns=50_000, classifier_budget_ns=10_000)
    assert config.max_batch_size == 16


def test_tolerance_config_rejects_tight_looser_than_default() -> None:
    with pytest.raises(ValueError):
        ToleranceConfig(default_ppm=10, tight_ppm=20)


@pytest.mark.parametrize("payload", [{"default_ppm": 0}, {"tight_ppm": -1}])
def test_tolerance_config_requires_positive_ppm(payload) -> None:
    with pytest.raises(ValidationError):
        ToleranceConfig.model_validate(payload)


@pytest.mark.parametrize("size", [0, 17])
def test_validator_config_bounds_batch_size(size) -> None:
    with pytest.raises(ValidationError):
        ValidatorConfig(max_batch_size=size)


def test_load_validator_config_from_json(tmp_path) -> None:
    path = tmp_path / "validator.json"
    path.write_text(json.dumps({"tolerance": {"default_ppm": 250}, "max_batch_size": 8}), encoding="utf-8")

    config = load_validator_config(path)

    assert config.tolerance.default_ppm == 250
    assert config.tolerance.tight_ppm == 50
    assert config.max_batch_size == 8


def test_load_validator_config_from_yaml(tmp_path) -> None:
    pytest.importorskip("yaml")
    path = tmp_path / "validator.yaml"
    path.write_text("realtime:\n  classifier_budget_ns: 20000\n", encoding="utf-8")

    config = load_validator_config(path)

    assert config.realtime.classifier_budget_ns == 20_000


def test_empty_yaml_yields_defaults(tmp_path) -> None:
    pytest.importorskip("yaml")
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    assert load_validator_config(path) == ValidatorConfig()

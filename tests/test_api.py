from fastapi.testclient import TestClient

from aes5 import audio_probe
from aes5.api import app

client = TestClient(app)


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_frequency_validation_returns_result_body() -> None:
    response = client.get("/frequencies/48050/validation")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "out_of_tolerance"
    assert body["closest_standard_frequency"] == 48_000
    assert body["applicable_clause"] == "5.1"
    assert response.headers["x-correlation-id"]


def test_frequency_validation_forwards_tolerance_and_correlation_id() -> None:
    response = client.get(
        "/frequencies/48050/validation?tolerance_ppm=2000",
        headers={"X-Correlation-Id": "corr-api"},
    )

    assert response.json()["status"] == "valid"
    assert response.headers["x-correlation-id"] == "corr-api"


def test_non_positive_frequency_is_reported_not_rejected() -> None:
    response = client.get("/frequencies/-5/validation")

    assert response.status_code == 200
    assert response.json()["status"] == "invalid_input"


def test_frequency_category() -> None:
    response = client.get("/frequencies/192000/category")

    assert response.status_code == 200
    assert response.json()["category"] == "quadruple"
    assert response.json()["multiplier"] == 4.0


def test_clause_lookup_is_case_insensitive() -> None:
    response = client.get("/clauses/annex-a?frequency=47952")

    assert response.status_code == 200
    assert response.json() == {
        "clause": "A",
        "frequencies": [47_952, 48_048],
        "frequency_hz": 47_952,
        "compliant": True,
    }


def test_unknown_clause_is_bad_request() -> None:
    response = client.get("/clauses/5.3")

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["parameter"] == "clause"
    assert detail["allowed_values"] == ["5.1", "5.2", "5.4", "A"]


def test_conversions() -> None:
    response = client.get("/conversions", params={"from_rate": 48_000, "to_rate": 24_000})

    assert response.status_code == 200
    body = response.json()
    assert body["method"] == "downsampling"
    assert body["ratio"] == 0.5
    assert body["ratio_exact"] == "1/2"


def test_conversions_require_both_rates() -> None:
    assert client.get("/conversions", params={"from_rate": 48_000}).status_code == 422


def test_probe_audits_upload(flac_bytes) -> None:
    response = client.post("/probe", files={"audio": ("take.flac", flac_bytes(sample_rate=48_000), "audio/flac")})

    assert response.status_code == 200
    body = response.json()
    assert body["stream"]["container"] == "flac"
    assert body["validation"]["status"] == "valid"
    assert body["compliant"] is True


def test_probe_rejects_unsupported_container_with_415(wav_bytes) -> None:
    response = client.post("/probe", files={"audio": ("take.ogg", wav_bytes(), "audio/ogg")})

    assert response.status_code == 415
    assert response.json()["detail"]["code"] == "unsupported_container"


def test_probe_rejects_unsupported_codec_with_415(mp3_bytes) -> None:
    response = client.post("/probe", files={"audio": ("take.mp3", mp3_bytes(layer_bits=0x2), "audio/mpeg")})

    assert response.status_code == 415
    assert response.json()["detail"]["code"] == "unsupported_codec"


def test_probe_rejects_corrupt_upload_with_400() -> None:
    response = client.post("/probe", files={"audio": ("take.wav", b"RIFF\x00\x00\x00\x00WAVE", "audio/wav")})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "corrupted_file"


def test_upload_over_size_limit_is_bad_request(monkeypatch, wav_bytes) -> None:
    monkeypatch.setattr(audio_probe, "MAX_PROBE_FILE_SIZE_BYTES", 128)

    response = client.post("/probe", files={"audio": ("take.wav", wav_bytes(), "audio/wav")})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "file_too_large"


def test_metrics_reports_both_components() -> None:
    client.get("/frequencies/44100/validation")

    body = client.get("/metrics").json()

    assert set(body) == {"frequency_validation", "rate_classification"}
    assert body["frequency_validation"]["total_validations"] >= 1
    assert "success_rate" in body["rate_classification"]

"""FastAPI interface for AES5 sampling-frequency audits."""

import logging
from uuid import uuid4

from fastapi import FastAPI, File, Header, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from . import audio_probe
from .families import get_conversion_info
from .frequency_contract import ClauseId
from .interfaces.api_handlers import (
    ProbeError,
    audit_uploaded_bytes,
    classify_frequency,
    clause_compliance,
    clause_frequencies,
    metrics_snapshot,
    validate_frequency,
)
from .options import enum_values, parse_clause

logger = logging.getLogger(__name__)

app = FastAPI(title="AES5 Frequency Audit API", version="0.1.0")

_CLAUSE_VALUES = [value for value in enum_values(ClauseId) if value != ClauseId.UNKNOWN.value]


def _json_with_correlation(payload: dict[str, object], correlation_id: str) -> JSONResponse:
    response = JSONResponse(content=payload)
    response.headers["X-Correlation-Id"] = correlation_id
    return response


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.get("/frequencies/{frequency}/validation")
def frequency_validation(
    frequency: int,
    tolerance_ppm: float | None = Query(
        None,
        description="Allowed deviation in ppm. Defaults to the configured tolerance.",
    ),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Validate ``frequency`` against the nearest AES5 reference frequency.

    The outcome is always reported in the body; a non-valid status is not an
    HTTP error.
    """

    correlation_id = x_correlation_id or str(uuid4())
    result = validate_frequency(frequency, tolerance_ppm, correlation_id)
    return _json_with_correlation(result.as_dict(), correlation_id)


@app.get("/frequencies/{frequency}/category")
def frequency_category(
    frequency: int,
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Classify ``frequency`` into its section 5.3 rate category."""

    correlation_id = x_correlation_id or str(uuid4())
    result = classify_frequency(frequency, correlation_id)
    return _json_with_correlation(result.as_dict(), correlation_id)


@app.get("/clauses/{clause}")
def clause_lookup(clause: str, frequency: int | None = Query(None, description="Frequency to check.")) -> dict[str, object]:
    """Frequencies attributed to ``clause`` and, optionally, compliance of one frequency."""

    try:
        resolved = parse_clause(clause)
    except ValueError as error:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "invalid_path_parameter",
                "message": str(error),
                "parameter": "clause",
                "allowed_values": _CLAUSE_VALUES,
            },
        ) from error

    frequencies = clause_frequencies(resolved)
    payload: dict[str, object] = {"clause": resolved.value, "frequencies": frequencies}
    if frequency is not None:
        payload["frequency_hz"] = frequency
        payload["compliant"] = clause_compliance(frequency, resolved)
    return payload


@app.get("/conversions")
def conversions(
    from_rate: int = Query(..., description="Source preferred rate in Hz."),
    to_rate: int = Query(..., description="Destination preferred rate in Hz."),
) -> dict[str, object]:
    """Conversion metadata between two preferred rates. No resampling happens."""

    return {"from_rate": from_rate, "to_rate": to_rate, **get_conversion_info(from_rate, to_rate).as_dict()}


@app.post("/probe")
async def probe(
    audio: UploadFile = File(..., description="WAV, FLAC or MP3 file"),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Read an uploaded file's header and audit its sample rate."""

    correlation_id = x_correlation_id or str(uuid4())
    # one byte past the limit is enough for the probe to report file_too_large
    payload = await audio.read(audio_probe.MAX_PROBE_FILE_SIZE_BYTES + 1)
    try:
        audit = audit_uploaded_bytes(payload, audio.filename, correlation_id)
    except ProbeError as error:
        status = 415 if error.code in {"unsupported_container", "unsupported_codec"} else 400
        logger.info(
            "Rejected uploaded audio.",
            extra={"correlation_id": correlation_id, "error_code": error.code},
        )
        raise HTTPException(status_code=status, detail=error.as_dict()) from error

    return _json_with_correlation(audit.as_dict(), correlation_id)


@app.get("/metrics")
def metrics() -> dict[str, dict[str, float | int]]:
    """Validation telemetry for the shared audit service."""

    return metrics_snapshot()

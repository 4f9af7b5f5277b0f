"""CLI interface for AES5 sampling-frequency audits."""

import json
import logging
from pathlib import Path

import typer

from .audio_probe import ProbeError
from .families import ApplicationContext, SamplingRateFamily
from .interfaces.cli_handlers import (
    audit_path,
    classify_frequency,
    clause_report,
    context_report,
    conversion_report,
    nearest_report,
    validate_batch,
    validate_frequency,
)
from .options import enum_values

app = typer.Typer(help="AES5-2018 sampling-frequency audit command line interface")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _emit(payload: dict[str, object], as_json: bool, summary: str) -> None:
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        typer.echo(summary)


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help=f"Root logger level: {', '.join(_LOG_LEVELS)}.",
    ),
) -> None:
    """Audit sampling frequencies against AES5-2018."""

    level = log_level.upper()
    if level not in _LOG_LEVELS:
        raise typer.BadParameter(
            f"Invalid log level '{log_level}'. Allowed values: {', '.join(_LOG_LEVELS)}.",
            param_hint="--log-level",
        )
    logging.basicConfig(level=getattr(logging, level), format="%(asctime)s %(levelname)s %(name)s %(message)s")


@app.command("validate")
def validate_command(
    frequency: int = typer.Argument(..., help="Sampling frequency in Hz."),
    tolerance: float | None = typer.Option(
        None,
        "--tolerance",
        "-t",
        help="Allowed deviation in ppm. Defaults to the configured tolerance.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Validate a frequency against the nearest AES5 reference frequency."""

    payload = validate_frequency(frequency, tolerance)
    _emit(
        payload,
        as_json,
        f"{frequency} Hz: {payload['status']} "
        f"(closest {payload['closest_standard_frequency']} Hz, "
        f"{payload['tolerance_ppm']:.2f} ppm, clause {payload['applicable_clause']})",
    )
    if payload["status"] != "valid":
        raise typer.Exit(code=1)


@app.command("classify")
def classify_command(
    frequency: int = typer.Argument(..., help="Sampling frequency in Hz."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Classify a frequency into its section 5.3 rate category."""

    payload = classify_frequency(frequency)
    _emit(
        payload,
        as_json,
        f"{frequency} Hz: {payload['category_name']} (x{payload['multiplier']:.4g}, section {payload['section']})",
    )
    if not payload["valid"]:
        raise typer.Exit(code=1)


@app.command("batch")
def batch_command(
    frequencies: list[int] = typer.Argument(..., help="Sampling frequencies in Hz (at most 16 are checked)."),
    tolerance: float | None = typer.Option(
        None,
        "--tolerance",
        "-t",
        help="Allowed deviation in ppm. Defaults to the configured tolerance.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Validate several frequencies in one timing window; stops at the first failure."""

    payload = validate_batch(frequencies, tolerance)
    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        for item in payload["results"]:
            marker = "OK" if item["status"] == "valid" else "FAILED"
            typer.echo(
                f"[{marker}] {item['detected_frequency']} Hz -> {item['closest_standard_frequency']} Hz "
                f"({item['tolerance_ppm']:.2f} ppm)"
            )
        typer.echo(f"Summary: status={payload['status']} count={payload['count']}")
    if payload["status"] != "valid":
        raise typer.Exit(code=1)


@app.command("clause")
def clause_command(
    clause: str = typer.Argument(..., help="Clause identifier: 5.1, 5.2, 5.4 or A."),
    frequency: int | None = typer.Argument(None, help="Optional frequency to check against the clause."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """List a clause's frequencies, or check one frequency against it."""

    try:
        payload = clause_report(clause, frequency)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="CLAUSE") from error

    frequencies = ", ".join(str(value) for value in payload["frequencies"])
    summary = f"Clause {payload['clause']}: {frequencies}"
    if frequency is not None:
        verdict = "compliant" if payload["compliant"] else "not compliant"
        summary = f"{frequency} Hz is {verdict} with clause {payload['clause']}"
    _emit(payload, as_json, summary)
    if frequency is not None and not payload["compliant"]:
        raise typer.Exit(code=1)


@app.command("convert")
def convert_command(
    from_rate: int = typer.Argument(..., help="Source preferred rate in Hz."),
    to_rate: int = typer.Argument(..., help="Destination preferred rate in Hz."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Describe converting between two preferred sampling rates."""

    payload = conversion_report(from_rate, to_rate)
    summary = f"{from_rate} Hz -> {to_rate} Hz: {payload['reason']}"
    if payload["ratio_exact"] is not None:
        summary += f" (ratio {payload['ratio_exact']})"
    _emit(payload, as_json, summary)
    if not payload["possible"]:
        raise typer.Exit(code=1)


@app.command("context")
def context_command(
    rate: int = typer.Argument(..., help="Sampling rate in Hz."),
    context: str = typer.Argument(
        ...,
        help=f"Application context: {', '.join(enum_values(ApplicationContext))}.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Check whether a rate suits an application context."""

    payload = context_report(rate, context)
    summary = f"{rate} Hz for {payload['context']}: {payload['reason']}"
    if payload["suggested_rates"]:
        summary += f" (try {', '.join(str(value) for value in payload['suggested_rates'])})"
    _emit(payload, as_json, summary)
    if not payload["valid"]:
        raise typer.Exit(code=1)


@app.command("nearest")
def nearest_command(
    rate: int = typer.Argument(..., help="Sampling rate in Hz."),
    family: str | None = typer.Option(
        None,
        "--family",
        help=f"Restrict the search to one family: {', '.join(enum_values(SamplingRateFamily))}.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Find the nearest preferred sampling rate."""

    try:
        payload = nearest_report(rate, family)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--family") from error
    _emit(
        payload,
        as_json,
        f"{rate} Hz: nearest preferred rate {payload['nearest_rate']} Hz "
        f"({payload['family']} family, {payload['distance_hz']} Hz away)",
    )


@app.command("probe")
def probe_command(
    path: Path = typer.Argument(..., help="Path to a WAV, FLAC or MP3 file."),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Read an audio file's header and audit its sample rate."""

    try:
        payload = audit_path(path)
    except ProbeError as error:
        if as_json:
            typer.echo(json.dumps(error.as_dict(), indent=2))
        else:
            typer.echo(f"[{error.code}] {error.message}", err=True)
        raise typer.Exit(code=1) from error

    stream = payload["stream"]
    validation = payload["validation"]
    category = payload["category"]
    _emit(
        payload,
        as_json,
        f"{path.name}: {stream['container']}/{stream['codec']} {stream['sample_rate_hz']} Hz "
        f"x{stream['channel_count']} -> {validation['status']}, {category['category_name']}\n"
        f"Correlation ID: {payload['correlation_id']}",
    )
    if not payload["compliant"]:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer

from payload_hydrator.config import get_settings
from payload_hydrator.errors import HydrationError
from payload_hydrator.hydrator import hydrate
from payload_hydrator.loader import load_field_table, load_payload
from payload_hydrator.reporter import print_result
from payload_hydrator.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Hydrate records from loosely-typed JSON payloads.")
log = get_logger(__name__)

EXIT_ISSUES = 1
EXIT_BAD_INPUT = 2


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | log_level={settings.log_level} json_logs={settings.log_json} | "
        f"strict={settings.strict} show_record={settings.show_record}"
    )


@app.command("hydrate")
def hydrate_command(
    spec_path: Path = typer.Argument(..., help="JSON file with a list of field specs."),
    payload_path: Path = typer.Argument(..., help="JSON file with the payload object."),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 when any field is missing, unknown or mismatched.",
    ),
    lenient: bool = typer.Option(
        False,
        "--lenient",
        help="Always exit with status 0 when the inputs load. Without either flag, "
        "HYDRATOR_STRICT decides.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """
    Hydrate PAYLOAD against SPEC and report unresolved fields.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    if strict and lenient:
        raise typer.BadParameter("--strict and --lenient are mutually exclusive")
    effective_strict = strict or (settings.strict and not lenient)

    try:
        table = load_field_table(spec_path)
        payload = load_payload(payload_path)
    except HydrationError as exc:
        log.error("Cannot load input", extra={"spec": str(spec_path), "payload": str(payload_path)})
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=EXIT_BAD_INPUT)

    result = hydrate(table, payload)
    log.info(
        "Hydration finished",
        extra={
            "fields": len(table),
            "missing": len(result.missing),
            "unknown": len(result.unknown),
            "mismatched": len(result.mismatched),
            "strict": effective_strict,
        },
    )

    if as_json:
        typer.echo(json.dumps(result.as_dict(), indent=2, default=str))
    else:
        print_result(result, show_values=settings.show_record)

    if effective_strict and not result.ok:
        raise typer.Exit(code=EXIT_ISSUES)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

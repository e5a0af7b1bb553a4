"""
Sample generation script for the payload hydrator.

Writes a field-spec file plus a batch of deterministic pseudo-random payloads
that drift from the field spec the way real API responses do: keys go missing, new
keys appear, and the occasional value arrives with the wrong type. Useful for
trying the CLI and for eyeballing reports.
"""

from __future__ import annotations

import json
import random
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import typer

from payload_hydrator.hydrator import hydrate
from payload_hydrator.loader import load_field_table

app = typer.Typer(help="Generate a sample field spec and drifting JSON payloads.")

SAMPLE_SPEC: List[Dict[str, Any]] = [
    {"name": "id", "required": True, "type": "int"},
    {"name": "name", "required": True, "type": "str"},
    {"name": "age", "required": False, "default": 0, "type": "int"},
    {"name": "email", "required": False, "type": "str"},
    {"name": "tags", "required": False, "default": [], "type": "list"},
    {"name": "active", "required": False, "default": True, "type": "bool"},
]

_EXTRA_KEYS = ["bio", "avatar_url", "followers", "created_at", "locale"]
_NAMES = ["Sophie", "Amir", "Lena", "Kofi", "Mei", "Jonas"]


def _sample_payload(rng: random.Random, index: int, drift: float) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": index + 1,
        "name": rng.choice(_NAMES),
        "age": rng.randint(18, 90),
        "email": f"user{index + 1}@example.com",
        "tags": rng.sample(["admin", "beta", "staff", "trial"], k=rng.randint(0, 2)),
        "active": rng.choice([True, False]),
    }
    for key in list(payload):
        if rng.random() < drift / 2:
            del payload[key]
    if rng.random() < drift:
        payload[rng.choice(_EXTRA_KEYS)] = rng.randint(0, 1000)
    if "age" in payload and rng.random() < drift / 2:
        payload["age"] = str(payload["age"])
    return payload


def _write_samples(output_dir: Path, count: int, seed: int, drift: float) -> List[Path]:
    rng = random.Random(seed)
    output_dir.mkdir(parents=True, exist_ok=True)

    spec_path = output_dir / "spec.json"
    with spec_path.open("w", encoding="utf-8") as f:
        json.dump(SAMPLE_SPEC, f, indent=2)

    payload_paths: List[Path] = []
    for i in range(count):
        path = output_dir / f"payload-{i:04d}.json"
        with path.open("w", encoding="utf-8") as f:
            json.dump(_sample_payload(rng, i, drift), f, indent=2, sort_keys=True)
        payload_paths.append(path)
    return payload_paths


@app.command()
def main(
    count: int = typer.Option(
        10,
        "--count",
        "-n",
        help="Number of payload files to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    drift: float = typer.Option(
        0.3,
        "--drift",
        min=0.0,
        max=1.0,
        help="Probability knob for dropped, extra and mistyped keys.",
    ),
    output: Path = typer.Option(
        Path("samples"),
        "--output",
        "-o",
        help="Directory for spec.json and payload-*.json.",
    ),
    summarize: bool = typer.Option(
        True,
        "--summarize/--no-summarize",
        help="Hydrate every generated payload and print issue totals.",
    ),
) -> None:
    """
    Generate a sample spec and payloads, optionally summarizing hydration issues.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {count} payloads -> {output} (seed={seed}, drift={drift})")
    payload_paths = _write_samples(output, count=count, seed=seed, drift=drift)
    typer.echo(f"Generation completed in {time.perf_counter() - start:.2f}s")

    if not summarize:
        return

    table = load_field_table(output / "spec.json")
    clean = missing = unknown = mismatched = 0
    for path in payload_paths:
        with path.open("r", encoding="utf-8") as f:
            result = hydrate(table, json.load(f))
        clean += int(result.ok)
        missing += len(result.missing)
        unknown += len(result.unknown)
        mismatched += len(result.mismatched)
    typer.echo(
        f"clean={clean}/{count} missing={missing} unknown={unknown} mismatched={mismatched}"
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)

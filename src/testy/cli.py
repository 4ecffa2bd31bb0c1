from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="testy", help="Inspect and configure testy assertion reports")

_EXAMPLE_CONFIG = """\
# Settings for the testy pytest plugin.
# Point pytest at this file with:  testy_config = testy.yaml
full_paths: false
indent: 4
log_file: ${TESTY_LOG_DIR:-.testy}/debug.log
verbose: false
junit_file: .testy/junit.xml
"""


@app.command()
def summary(
    junit: str = typer.Argument(help="Path to a JUnit XML report"),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print the summary line of each case"
    ),
):
    """Print a summary for every case in a JUnit report."""
    from testy.reporting.junit import read_junit

    junit_path = Path(junit)
    if not junit_path.exists():
        typer.echo(f"Error: report not found: {junit}", err=True)
        raise typer.Exit(1)

    results = read_junit(junit_path)

    any_failed = False
    for cases in results.values():
        for case in cases:
            typer.echo(case.summary())
            if not quiet:
                for line in case.output:
                    typer.echo(f"    {line}")
            any_failed = any_failed or not case.passed

    total = sum(len(cases) for cases in results.values())
    failed = sum(1 for cases in results.values() for case in cases if not case.passed)
    typer.echo(f"{total} case(s), {failed} failed")

    if any_failed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write testy.yaml into"),
):
    """Write an example testy.yaml config."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    target = project_dir / "testy.yaml"
    if target.exists():
        typer.echo(f"testy.yaml already exists in {dir}, skipping.")
        return

    target.write_text(_EXAMPLE_CONFIG)
    typer.echo(f"Wrote {target}")
    typer.echo("Enable it in pytest with:  -p testy.plugin  and  testy_config = testy.yaml")


@app.command()
def schema(
    out: str = typer.Option(
        "schemas/testy.schema.json", help="Output path for the config JSON Schema"
    ),
):
    """Generate JSON Schema for testy.yaml."""
    from testy.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")


@app.command()
def check(
    config: str = typer.Argument(help="Path to a testy YAML config"),
):
    """Validate a testy YAML config."""
    from pydantic import ValidationError

    from testy.config import load_config

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        loaded = load_config(config_path)
    except (ValueError, ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for key, value in loaded.model_dump().items():
        typer.echo(f"{key}: {value}")

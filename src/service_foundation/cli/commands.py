"""
Service Foundation CLI Commands.

Runs a service from a configuration file, validates configuration files and
exports the configuration JSON schema.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from service_foundation.errors import ProtocolConfigurationError
from service_foundation.runtime.config_loader import (
    SUPPORTED_CONFIG_FORMATS,
    read_config_document,
)
from service_foundation.runtime.config_validator import ConfigurationValidator
from service_foundation.services import registry_candidates

console = Console()

DEFAULT_SCHEMA_FILENAME = "service-config.schema.json"

_format_option = click.option(
    "--format",
    "config_format",
    type=click.Choice(sorted(SUPPORTED_CONFIG_FORMATS)),
    default=None,
    help="Configuration format (default: inferred from the file extension)",
)


def _infer_format(path: Path, config_format: str | None) -> str:
    if config_format is not None:
        return config_format
    return "yaml" if path.suffix.lower() in {".yaml", ".yml"} else "json"


@click.group()
def cli() -> None:
    """Service Foundation CLI."""


@cli.command("run")
@click.argument("config_path", type=click.Path(path_type=Path))
@_format_option
@click.option("--log-level", default=None, help="Log level (default: SERVICE_LOG_LEVEL)")
def run_cmd(config_path: Path, config_format: str | None, log_level: str | None) -> None:
    """Run a service until SIGINT/SIGTERM."""
    from service_foundation.runtime.kernel import configure_logging, run

    configure_logging(log_level)
    raise SystemExit(run(config_path, _infer_format(config_path, config_format)))


@cli.command("validate-config")
@click.argument("config_path", type=click.Path(path_type=Path))
@_format_option
def validate_config_cmd(config_path: Path, config_format: str | None) -> None:
    """Validate a configuration file and show the selected registry."""
    fmt = _infer_format(config_path, config_format)
    try:
        document = read_config_document(config_path, fmt)
    except ProtocolConfigurationError as e:
        console.print(f"[bold red]✗ {e.message}[/bold red]")
        raise SystemExit(1) from e

    validator = ConfigurationValidator()
    config = validator.parse(document)
    if config is None:
        console.print(
            f"[bold red]✗ Configuration is invalid: {config_path} (see warnings above)[/bold red]"
        )
        raise SystemExit(1)

    console.print(f"[bold green]✓ Configuration is valid: {config_path}[/bold green]")
    candidates = registry_candidates(getattr(config, "services", []))
    if not candidates:
        console.print("[yellow]No registry services configured[/yellow]")
        raise SystemExit(0)

    table = Table(title="Registry candidates")
    table.add_column("Rank", justify="right")
    table.add_column("Endpoint")
    table.add_column("Priority", justify="right")
    for rank, candidate in enumerate(candidates, start=1):
        table.add_row(str(rank), str(candidate.endpoint), str(candidate.priority))
    console.print(table)
    raise SystemExit(0)


@cli.command("export-schema")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Write the schema to a file (e.g. {DEFAULT_SCHEMA_FILENAME}) instead of stdout",
)
def export_schema_cmd(output: Path | None) -> None:
    """Export the service configuration JSON schema."""
    document = json.dumps(ConfigurationValidator().json_schema(), indent=2)
    if output is None:
        click.echo(document)
        return
    output.write_text(document + "\n", encoding="utf-8")
    console.print(f"[bold green]✓ Schema written to {output}[/bold green]")


if __name__ == "__main__":
    cli()

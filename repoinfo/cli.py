"""repoinfo CLI.

Provides commands to generate, print and sync build provenance metadata
as one step of a larger build.
"""

import json
import logging
import sys
from pathlib import Path

import click

from .config.loader import create_default_config
from .config.loader import get_config_path
from .config.loader import load_config
from .config.settings import GeneratorSettings
from .errors import ConfigurationError
from .generator import generate
from .generator import generate_record
from .sync import sync_file

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

source_root_argument = click.argument(
    "source_root",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: repoinfo.yaml in the source root)",
)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def load_settings(ctx: click.Context, source_root: Path, config_path: Path | None) -> GeneratorSettings:
    """Load settings and apply the --log-level group option."""
    settings = load_config(config_path, source_root)
    configure_logging(ctx.obj.get("log_level") or settings.log_level)
    return settings


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: from config, else info)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """repoinfo - Build provenance metadata generator."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    configure_logging(log_level or "warning")


@cli.command(name="generate")
@source_root_argument
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generated file; format follows the suffix unless --format is given",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["cpp", "c", "python", "json"]),
    default=None,
    help="Output format",
)
@config_option
@click.pass_context
def generate_command(ctx: click.Context, source_root: Path, output_path: Path, fmt: str | None, config_path):
    """Collect metadata for SOURCE_ROOT and write it to --output."""
    try:
        settings = load_settings(ctx, source_root, config_path)
        record = generate(source_root, output_path, settings, fmt)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: cannot write {output_path}: {e}", err=True)
        sys.exit(1)

    click.echo(f"Wrote {output_path} (repoHash {record.repo_hash})")


@cli.command()
@source_root_argument
@click.option("--json", "as_json", is_flag=True, help="Print as a JSON object")
@config_option
@click.pass_context
def show(ctx: click.Context, source_root: Path, as_json: bool, config_path):
    """Print the metadata for SOURCE_ROOT without writing anything."""
    try:
        settings = load_settings(ctx, source_root, config_path)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    record = generate_record(source_root, settings)
    constants = record.constants()

    if as_json:
        click.echo(json.dumps(constants, indent=2, ensure_ascii=False))
        return

    width = max(len(name) for name in constants)
    for name, value in constants.items():
        click.echo(f"{name:<{width}}  {value}")


@cli.command()
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
@source_root_argument
@config_option
@click.pass_context
def sync(ctx: click.Context, target: Path, source_root: Path, config_path):
    """Update metadata declarations in an existing TARGET file in place."""
    try:
        settings = load_settings(ctx, source_root, config_path)
        record = generate_record(source_root, settings, ignore=frozenset({target.resolve()}))
        found = sync_file(target, record, settings.sync_declarations, settings.semantic_version)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: cannot update {target}: {e}", err=True)
        sys.exit(1)

    if not found:
        click.echo(f"No metadata declarations found in {target}", err=True)
        sys.exit(1)
    click.echo(f"Synced {', '.join(found)} in {target}")


@cli.command(name="init-config")
@source_root_argument
@config_option
def init_config(source_root: Path, config_path):
    """Write a commented default repoinfo.yaml."""
    config_path = config_path or get_config_path(source_root)
    if create_default_config(config_path):
        click.echo(f"Created {config_path}")
    else:
        click.echo(f"Config already exists at {config_path}")


def main():
    """Entry point for repoinfo CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()

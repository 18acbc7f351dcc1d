"""
Command-line interface for schemadiff.
"""

import json
import sys
from functools import wraps
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import SchemadiffConfig
from .exceptions import ConfigurationError, SchemadiffError
from .logging_setup import setup_logging
from .schema import ChangeSet, TableSchema, compare_schemas, load_schema


console = Console()

FAIL_ON_CHOICES = ("added", "removed", "modified", "destructive")

KIND_STYLES = {
    "added": "green",
    "removed": "red",
    "modified": "yellow",
}


def handle_errors(func):
    """Decorator to handle errors gracefully in CLI commands."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SchemadiffError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            sys.exit(0)
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {e}")
            if "--debug" in sys.argv:
                import traceback
                traceback.print_exc()
            sys.exit(1)
    return wrapper


def _load_config(config: Optional[str]) -> SchemadiffConfig:
    if config:
        return SchemadiffConfig.from_yaml(config)
    return SchemadiffConfig()


@click.group()
@click.version_option(__version__)
@click.option(
    "--debug", is_flag=True, help="Enable debug mode"
)
@click.pass_context
def main(ctx, debug):
    """schemadiff: compare two versions of a table schema."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@main.command()
@click.argument("initial", type=click.Path(exists=True, dir_okay=False))
@click.argument("final", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default=None,
    help="Output format (defaults to comparison.output_format)",
)
@click.option(
    "--fail-on",
    type=click.Choice(FAIL_ON_CHOICES),
    multiple=True,
    help="Exit with status 2 when changes of this kind exist (repeatable)",
)
@click.pass_context
@handle_errors
def compare(
    ctx,
    initial: str,
    final: str,
    config: Optional[str],
    output_format: Optional[str],
    fail_on: Tuple[str, ...],
):
    """Compare INITIAL and FINAL schema files column by column."""
    schemadiff_config = _load_config(config)
    setup_logging(
        schemadiff_config.logging,
        debug=ctx.obj.get("debug", False) or schemadiff_config.debug,
    )

    initial_schema = load_schema(initial)
    final_schema = load_schema(final)
    changes = compare_schemas(initial_schema.columns, final_schema.columns)

    output_format = output_format or schemadiff_config.comparison.output_format
    if output_format == "json":
        click.echo(json.dumps(
            {"changes": changes.to_dict(), "summary": changes.summary()},
            indent=2,
            default=str,
        ))
    else:
        _display_changes(initial_schema, final_schema, changes)

    categories = fail_on or tuple(schemadiff_config.comparison.fail_on)
    failed = _failed_categories(changes, categories)
    if failed:
        if output_format != "json":
            console.print(f"[red]✗[/red] Failing on: {', '.join(failed)}")
        sys.exit(2)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@handle_errors
def show(schema_file: str):
    """Show the columns of a schema file."""
    table_schema = load_schema(schema_file)

    table = Table(title=table_schema.display_name)
    table.add_column("#", style="dim")
    table.add_column("Column", style="cyan")
    table.add_column("Definition", style="green")

    for position, (name, definition) in enumerate(table_schema.columns, start=1):
        table.add_row(str(position), name, str(definition))

    console.print(table)
    console.print(f"{len(table_schema)} columns")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Configuration file path",
)
@handle_errors
def validate_config(config: str):
    """Validate configuration file."""
    console.print(f"Validating configuration: {config}")

    try:
        schemadiff_config = SchemadiffConfig.from_yaml(config)
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        sys.exit(1)

    console.print("[green]✓[/green] Configuration is valid")
    _display_config_summary(schemadiff_config)


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="schemadiff.yaml",
    help="Output configuration file path",
)
@handle_errors
def init(output: str):
    """Write a default schemadiff configuration file."""
    if Path(output).exists():
        if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
            return

    SchemadiffConfig().to_yaml(output)
    console.print(f"[green]✓[/green] Configuration file created: {output}")


def _failed_categories(changes: ChangeSet, categories: Tuple[str, ...]) -> Tuple[str, ...]:
    checks = {
        "added": changes.has_added,
        "removed": changes.has_removed,
        "modified": changes.has_modified,
        "destructive": changes.has_destructive,
    }
    return tuple(category for category in dict.fromkeys(categories) if checks[category])


def _display_changes(initial: TableSchema, final: TableSchema, changes: ChangeSet):
    """Display a comparison result."""
    if not changes:
        console.print(
            f"[green]✓[/green] No column changes between "
            f"{initial.display_name} and {final.display_name}"
        )
        return

    table = Table(title=f"{initial.display_name} → {final.display_name}")
    table.add_column("Column", style="cyan")
    table.add_column("Change")
    table.add_column("Old definition", style="magenta")
    table.add_column("New definition", style="green")

    for change in changes:
        kind = change.kind.value
        table.add_row(
            str(change.name),
            f"[{KIND_STYLES[kind]}]{kind}[/{KIND_STYLES[kind]}]",
            "" if change.old is None else str(change.old),
            "" if change.new is None else str(change.new),
        )

    console.print(table)

    summary = changes.summary()
    console.print(
        f"{summary['total']} changes: {summary['added']} added, "
        f"{summary['removed']} removed, {summary['modified']} modified"
    )
    if changes.has_destructive:
        console.print("[yellow]Destructive changes present[/yellow]")


def _display_config_summary(config: SchemadiffConfig):
    """Display a summary of the configuration."""
    table = Table(title="Configuration Summary")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("debug", str(config.debug))
    table.add_row("output_format", config.comparison.output_format)
    table.add_row("fail_on", ", ".join(config.comparison.fail_on) or "-")
    table.add_row("log level", config.logging.level)
    table.add_row("log file", config.logging.file or "-")

    console.print(table)


if __name__ == "__main__":
    main()

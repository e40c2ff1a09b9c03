"""
CLI entry point for config-builder.
"""

import json
import logging
from functools import wraps
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from config_builder.exceptions import (
    ConfigBuilderError,
    DescriptorNotFoundError,
    format_error_for_cli,
)
from config_builder.loader import descriptor_paths_from_env, load_root
from config_builder.model import VM, Root, SyncedFolder, networks, providers, provisioners
from config_builder.recorder import RecordingConfig

app = typer.Typer(
    name="config-builder",
    help="Build virtual machine configuration from YAML descriptors",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("yaml", "json")


def handle_errors(func):
    """Decorator to handle exceptions in CLI commands with nice formatting."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigBuilderError as e:
            console.print(format_error_for_cli(e))
            raise typer.Exit(1)
        except typer.Exit:
            raise
        except Exception as e:
            logger.exception("Unexpected error")
            console.print(f"[red]Unexpected error:[/red] {str(e)}")
            raise typer.Exit(1)

    return wrapper


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Build virtual machine configuration from YAML descriptors."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_paths(files: Optional[list[Path]]) -> list[Path]:
    paths = list(files or []) or descriptor_paths_from_env()
    if not paths:
        raise DescriptorNotFoundError()
    return paths


def _action_tree(tree: Tree, described: Any) -> None:
    if isinstance(described, dict):
        for name, children in described.items():
            branch = tree.add(f"[bold]{name}[/bold]")
            for child in children:
                _action_tree(branch, child)
    else:
        tree.add(str(described))


@app.command()
@handle_errors
def validate(
    files: Optional[list[Path]] = typer.Argument(
        None, help="Descriptor files, lowest precedence first"
    ),
    show_actions: bool = typer.Option(
        False, "--actions", help="Show the actions each VM would apply"
    ),
):
    """Load descriptors and report the VMs they define."""
    paths = _resolve_paths(files)
    root = load_root(paths)

    table = Table(title="Virtual machines")
    table.add_column("Name", style="cyan")
    table.add_column("Box")
    table.add_column("Providers")
    table.add_column("Provisioners")
    for vm in root.vms:
        table.add_row(
            vm.name or "-",
            vm.box or "-",
            ", ".join(p.type_name or type(p).__name__ for p in vm.providers) or "-",
            ", ".join(p.type_name or type(p).__name__ for p in vm.provisioners) or "-",
        )
    console.print(table)

    if show_actions:
        tree = Tree("[bold blue]actions[/bold blue]")
        _action_tree(tree, root.to_action().describe())
        console.print(tree)

    console.print(f"[green]✓ {len(root.vms)} VM(s) valid[/green]")


@app.command()
@handle_errors
def plan(
    files: Optional[list[Path]] = typer.Argument(
        None, help="Descriptor files, lowest precedence first"
    ),
    output_format: str = typer.Option("yaml", "--format", "-f", help="Output format (yaml|json)"),
):
    """Apply descriptors to a recording config and print the resulting calls."""
    if output_format not in OUTPUT_FORMATS:
        raise ConfigBuilderError(
            f"Invalid output format: {output_format}",
            f"Use one of: {', '.join(OUTPUT_FORMATS)}",
        )

    root = load_root(_resolve_paths(files))
    config = RecordingConfig()
    root.apply(config)
    mutations = config.to_list()

    if output_format == "json":
        typer.echo(json.dumps(mutations, indent=2))
    else:
        typer.echo(yaml.safe_dump(mutations, default_flow_style=False, sort_keys=False))


@app.command()
def models():
    """List model types and the attributes they accept."""
    table = Table(title="Models")
    table.add_column("Key", style="cyan")
    table.add_column("Model")
    table.add_column("Attributes")

    for model in (Root, VM, SyncedFolder):
        table.add_row("-", model.__name__, ", ".join(model.attribute_names()))
    for collection in (providers, provisioners, networks):
        for name, model in collection.items():
            table.add_row(
                f"{collection.category}: {name}",
                model.__name__,
                ", ".join(model.attribute_names()),
            )
    console.print(table)


if __name__ == "__main__":
    app()

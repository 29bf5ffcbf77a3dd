"""
CLI interface for bootframe
Inspect the environment and the assembled configuration of an application
"""
import sys

import click
from rich import box
from rich.console import Console
from rich.table import Table

from ..core.configuration import assemble_configuration
from ..core.environment import FrameworkEnvironment

console = Console()


@click.group()
def cli():
    """bootframe - application bootstrap tooling"""
    pass


@cli.command()
def environment():
    """Print the environment label (Development or Production)"""
    click.echo(FrameworkEnvironment().label)


@cli.command()
@click.option('--key', default=None, help='Print a single value, e.g. Logging:LogFileLocation')
@click.option('--prefix', default=None, help='Only show keys of this section, e.g. Logging')
@click.option('--path', 'base_path', type=click.Path(file_okay=False), default=None,
              help='Directory holding the settings files (default: working directory)')
def config(key, prefix, base_path):
    """Show the configuration assembled for this environment"""
    env = FrameworkEnvironment()
    snapshot = assemble_configuration(env, base_path=base_path)
    
    if key:
        value = snapshot.get(key)
        if value is None:
            click.echo(f"Key not found: {key}", err=True)
            sys.exit(1)
        click.echo(value)
        return
    
    values = snapshot
    title = f"Configuration ({env.label})"
    if prefix:
        values = snapshot.get_section(prefix)
        title = f"{title} - {prefix}"
    
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for name in sorted(values, key=str.casefold):
        table.add_row(name, values[name])
    console.print(table)


if __name__ == "__main__":
    cli()

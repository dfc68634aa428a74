"""CLI entry point for keyscript.

Invoked as::

    keyscript [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m keyscript.cli.main

Commands
--------
check       Parse a script and report the first syntax error
fmt         Format a script to canonical style
parse       Dump the parsed AST to JSON or YAML
keys        List key names known to the registry
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from keyscript.ast.nodes import Block

console = Console()
err_console = Console(stderr=True)


def _read_source(path: str) -> str:
    """Read a script file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _parse_or_exit(source: str, path: str, merge_policy: str, verbose: bool = False) -> "Block":
    """Parse a script, printing the diagnostic and exiting on failure."""
    from keyscript.parser import MERGE_POLICIES, ScriptSyntaxError, parse, render_failure

    try:
        return parse(source, merge_policy=MERGE_POLICIES[merge_policy]())
    except ScriptSyntaxError as exc:
        err_console.print(f"[red]Syntax error[/red] in {path}:")
        diagnostic = render_failure(source, exc.failure, verbose=verbose) if verbose else str(exc)
        err_console.print(Text(diagnostic.rstrip("\n")))
        sys.exit(1)


_merge_policy_option = click.option(
    "--merge-policy",
    type=click.Choice(["last", "furthest"], case_sensitive=False),
    default="last",
    show_default=True,
    help="How failed alternatives are combined into one diagnostic",
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="keyscript")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """keyscript toolkit: parse, check and format key-remapping scripts."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from keyscript import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]keyscript[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("file", type=click.Path(exists=False))
@_merge_policy_option
@click.option("--all-expected", is_flag=True, default=False, help="List every expected alternative")
def check_command(file: str, merge_policy: str, all_expected: bool) -> None:
    """Parse a script and report whether it is valid.

    FILE is the path to the script to check.
    """
    source = _read_source(file)
    block = _parse_or_exit(source, file, merge_policy, verbose=all_expected)
    console.print(f"[green]OK[/green] {file}: {len(block.statements)} top-level statement(s)")


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
def fmt_command(file: str, check: bool, in_place: bool) -> None:
    """Format a script to canonical style.

    FILE is the path to the script to format.

    Without --check or --in-place, prints the formatted output to stdout.
    """
    from keyscript.formatter import format_script

    source = _read_source(file)
    block = _parse_or_exit(source, file, "last")
    formatted = format_script(block)

    if check:
        if formatted == source:
            console.print(f"[green]OK[/green] {file}: already formatted")
            sys.exit(0)
        else:
            console.print(f"[yellow]NEEDS FORMATTING[/yellow] {file}")
            sys.exit(1)
    elif in_place:
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {file}")
    else:
        click.echo(formatted, nl=False)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="AST output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@_merge_policy_option
def parse_command(file: str, output_format: str, output: str | None, merge_policy: str) -> None:
    """Parse a script and dump the AST.

    FILE is the path to the script to parse.
    """
    from keyscript.ast import AstSerializer

    source = _read_source(file)
    block = _parse_or_exit(source, file, merge_policy)

    serializer = AstSerializer()

    if output_format == "json":
        text = serializer.to_json(block, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(block)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]AST written to[/green] {output}")
    else:
        console.print(Syntax(text, lang, line_numbers=True))


# ---------------------------------------------------------------------------
# keys command
# ---------------------------------------------------------------------------


@cli.command(name="keys")
@click.option("--aliases", is_flag=True, default=False, help="List aliases instead of key names")
def keys_command(aliases: bool) -> None:
    """List the key names scripts may use."""
    from keyscript.keys import default_registry

    registry = default_registry()
    table = Table(title="Key aliases" if aliases else "Keys")
    table.add_column("Name", style="bold")
    table.add_column("Code", justify="right")
    table.add_column("Canonical")

    entries = registry.aliases if aliases else registry.names
    for name, key in entries.items():
        table.add_row(repr(name) if aliases else name.lower(), str(key.code), registry.name_of(key))
    console.print(table)


if __name__ == "__main__":
    cli()

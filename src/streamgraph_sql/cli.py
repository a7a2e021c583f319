"""streamgraph-sql CLI"""

from __future__ import annotations
import os
import logging
import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table as RichTable

from .client import GatewayConfig, SqlGatewayClient
from .compiler import CompileResult, SqlCompiler
from .models import GroupInfo

# Set up logging and console
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    help="streamgraph-sql CLI - Compile stream graphs into streaming SQL."
)


def env_default(name: str, default: str | None = None) -> str | None:
    """Get environment variable with SG_ prefix."""
    return os.environ.get(f"SG_{name}", default)


def _set_verbose(verbose: bool):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def _compile_file(graph_file: Path) -> CompileResult:
    group = GroupInfo.from_file(graph_file)
    return SqlCompiler(group).compile()


def _report_error(e: Exception, verbose: bool):
    console.print(f"❌ Error: {e}", style="red", markup=False, soft_wrap=True)
    if verbose:
        console.print(traceback.format_exc())


@app.command()
def compile(
    graph_file: Path = typer.Argument(..., exists=True, dir_okay=False,
                                      help="JSON stream graph or group definition"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the SQL script to this file"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Compile a stream graph into SQL statements."""
    _set_verbose(verbose)

    try:
        result = _compile_file(graph_file)
    except Exception as e:
        _report_error(e, verbose)
        raise typer.Exit(1)

    script = result.to_script()
    if output is not None:
        output.write_text(script, encoding="utf-8")
        console.print(f"✅ Wrote {len(result.statements())} statements to {output}")
    else:
        console.print(script, markup=False, highlight=False, soft_wrap=True)


@app.command()
def validate(
    graph_file: Path = typer.Argument(..., exists=True, dir_okay=False,
                                      help="JSON stream graph or group definition"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Check that a stream graph compiles and summarize its statements."""
    _set_verbose(verbose)

    try:
        result = _compile_file(graph_file)
    except Exception as e:
        _report_error(e, verbose)
        raise typer.Exit(1)

    rich_table = RichTable(title=f"Statements in {graph_file.name}")
    rich_table.add_column("Kind", style="cyan")
    rich_table.add_column("Node ids", style="green")
    rich_table.add_column("Count", justify="right", style="yellow")
    rich_table.add_row("extract", ", ".join(sorted(result.extract_sqls)), str(len(result.extract_sqls)))
    rich_table.add_row("transform", ", ".join(sorted(result.transform_sqls)), str(len(result.transform_sqls)))
    rich_table.add_row("load", ", ".join(sorted(result.load_sqls)), str(len(result.load_sqls)))
    rich_table.add_row("insert", "", str(len(result.insert_sqls)))
    console.print(rich_table)
    console.print("✓ Graph is valid")


@app.command()
def submit(
    graph_file: Path = typer.Argument(..., exists=True, dir_okay=False,
                                      help="JSON stream graph or group definition"),
    host: str = typer.Option(
        env_default("HOST", "localhost"), help="Gateway host; env SG_HOST"
    ),
    port: int = typer.Option(
        int(env_default("PORT", "5432")), help="Gateway port; env SG_PORT"
    ),
    user: str = typer.Option(
        env_default("USER", "root"), help="Gateway user; env SG_USER"
    ),
    password: Optional[str] = typer.Option(
        env_default("PASSWORD"), help="Gateway password; env SG_PASSWORD"
    ),
    database: str = typer.Option(
        env_default("DATABASE", "default"), help="Gateway database; env SG_DATABASE"
    ),
    ssl_mode: Optional[str] = typer.Option(
        None, help="SSL mode (disable, require, etc.)"),
    dry_run: bool = typer.Option(False, help="Show SQL without executing"),
    verbose: bool = typer.Option(False, help="Enable verbose logging"),
):
    """Compile a stream graph and submit it to the SQL gateway."""
    _set_verbose(verbose)

    try:
        result = _compile_file(graph_file)
        config = GatewayConfig(
            host=host,
            port=port,
            user=user,
            password=password,
            database=database,
            ssl_mode=ssl_mode,
        )
        client = SqlGatewayClient(config)

        console.print(f"🚀 Submitting {len(result.statements())} statements to {host}:{port}...")
        statements = client.submit(result, dry_run=dry_run)
    except Exception as e:
        _report_error(e, verbose)
        raise typer.Exit(1)

    if dry_run:
        console.print("\n📝 Generated SQL:")
        console.print("=" * 60)
        for i, sql in enumerate(statements, 1):
            console.print(f"\n-- Statement {i}")
            console.print(sql, markup=False, highlight=False, soft_wrap=True)
        console.print("=" * 60)
    else:
        console.print("\n✅ Graph submitted successfully!")
        console.print(f"  - Tables and views: {len(result.create_table_sqls)}")
        console.print(f"  - Inserts: {len(result.insert_sqls)}")


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"streamgraph-sql v{__version__}")


if __name__ == "__main__":
    app()

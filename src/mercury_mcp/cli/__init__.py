"""CLI package for the Mercury MCP server."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from dataclasses import asdict
from importlib import metadata
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from mercury_mcp import __version__
from mercury_mcp.core.config import API_KEY_ENV, ConfigurationError, load_settings
from mercury_mcp.core.tool_registry import build_tool_manifest, default_definitions

app = typer.Typer(help="Mercury banking tools over the Model Context Protocol", no_args_is_help=False)

# stdout carries the MCP protocol while serving; human-facing output goes to stderr.
ERR_CONSOLE = Console(stderr=True)
OUT_CONSOLE = Console()

COMMANDS = {"serve", "tools", "version"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"", "0", "false", "no"}


def _configure_logging(verbose: bool) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                stream=sys.stderr,
            )
        root_logger.setLevel(logging.DEBUG)
        # httpx logs full request lines at INFO; keep those out of debug noise.
        logging.getLogger("httpx").setLevel(logging.WARNING)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s", stream=sys.stderr)


@app.command()
def serve(
    api_key: Optional[str] = typer.Argument(
        None,
        help=f"Mercury API key. Falls back to the {API_KEY_ENV} environment variable.",
        show_default=False,
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the Mercury API base URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
) -> None:
    """Run the MCP server on stdio."""
    from mercury_mcp.server import serve as run_server

    _configure_logging(verbose or _env_flag("MERCURY_MCP_DEBUG"))
    try:
        settings = load_settings(api_key, base_url=base_url, timeout=timeout)
    except ConfigurationError as exc:
        ERR_CONSOLE.print(f"❌ {exc}")
        raise typer.Exit(code=1) from exc

    ERR_CONSOLE.print(f"MERCURY MCP SERVER RUNNING ON STDIO ({settings.base_url})")
    try:
        asyncio.run(run_server(settings))
    except KeyboardInterrupt:
        ERR_CONSOLE.print("Shutting down.")


@app.command()
def tools(
    as_json: bool = typer.Option(False, "--json", help="Print the tool manifest as JSON."),
) -> None:
    """List the available tools and their required arguments."""
    manifest = build_tool_manifest(default_definitions())
    if as_json:
        typer.echo(json.dumps([asdict(entry) for entry in manifest], indent=2))
        return

    table = Table(title="Mercury tools")
    table.add_column("Name", style="bold")
    table.add_column("Required")
    table.add_column("Description", overflow="fold")
    for entry in manifest:
        table.add_row(entry.name, ", ".join(entry.required) or "-", entry.description)
    OUT_CONSOLE.print(table)


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        pkg_version = metadata.version("mercury-mcp")
    except metadata.PackageNotFoundError:
        pkg_version = __version__
    typer.echo(f"Mercury MCP version {pkg_version}")


def main() -> None:
    """Console script entrypoint.

    ``mercury-mcp <API_KEY>`` and a bare ``mercury-mcp`` both start the
    server, matching how MCP clients usually launch stdio servers.
    """
    args = sys.argv[1:]
    if not args or (args[0] not in COMMANDS and args[0] not in {"--help", "-h"}):
        app(args=["serve", *args])
        return
    app(args=args)


__all__ = ["app", "main"]

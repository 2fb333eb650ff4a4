"""Sum MCP command line entrypoint."""

import asyncio
import json
from typing import Optional

import click
import uvicorn
from rich.console import Console
from rich.table import Table

from sum_mcp import __version__
from sum_mcp.core.config import get_settings
from sum_mcp.observability.logging import configure_logging
from sum_mcp.tools.registry import build_default_registry

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="sum-mcp")
def main() -> None:
    """Sum MCP - tool server over stdio and HTTP."""


@main.command("serve-http")
@click.option("--host", default=None, help="Bind address (default: SUM_MCP_HOST).")
@click.option("--port", type=int, default=None, help="Port (default: SUM_MCP_PORT).")
def serve_http(host: Optional[str], port: Optional[int]) -> None:
    """Serve JSON-RPC on POST /mcp and the REST tool API."""
    from sum_mcp.main import create_app

    settings = get_settings()
    configure_logging(level=settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@main.command("serve-stdio")
def serve_stdio() -> None:
    """Serve newline-delimited JSON-RPC on stdin/stdout."""
    from sum_mcp.transports.stdio import run_stdio_server

    settings = get_settings()
    configure_logging(level=settings.log_level)
    asyncio.run(run_stdio_server(settings))


@main.command("tools")
@click.option("--json", "as_json", is_flag=True, help="Output the catalog as JSON.")
def list_tools(as_json: bool) -> None:
    """List the built-in tool catalog."""
    catalog = build_default_registry().catalog()

    if as_json:
        click.echo(json.dumps([entry.model_dump(by_alias=True) for entry in catalog], indent=2))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Parameters")
    table.add_column("Description")
    for entry in catalog:
        required = set(entry.input_schema["required"])
        params = ", ".join(
            name if name in required else f"{name}?"
            for name in entry.input_schema["properties"]
        )
        table.add_row(entry.name, params or "-", entry.description)
    console.print(table)


if __name__ == "__main__":
    main()

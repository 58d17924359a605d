"""
IoTeX Explorer - Command Line Interface
=========================================
CLI per avviare il server e interrogare il gateway.

Commands:
- serve: avvia explorer server
- address: query per indirizzo (info, transfers, executions, voters,
  settle-deposits, create-deposits)
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from iotex_explorer.config import ExplorerSettings, get_settings
from iotex_explorer.constants import DEFAULT_OFFSET, DEFAULT_COUNT
from iotex_explorer.gateway.client import GatewayProtocol, create_gateway
from iotex_explorer.logging_setup import setup_logging
from iotex_explorer.services.address_service import AddressService


# ============================================================================
# CLI APP
# ============================================================================

app = typer.Typer(
    name="iotex-explorer",
    help="IoTeX Explorer - address API server and gateway queries",
    add_completion=False
)

console = Console()


# ============================================================================
# GLOBAL STATE
# ============================================================================

class CLIState:
    """Global CLI state"""
    config: Optional[ExplorerSettings] = None
    gateway_factory: Callable[[ExplorerSettings], GatewayProtocol] = staticmethod(create_gateway)


state = CLIState()


def _settings() -> ExplorerSettings:
    if state.config is None:
        state.config = get_settings()
    return state.config


# ============================================================================
# SERVE
# ============================================================================

@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Server host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Server port"),
    gateway_url: Optional[str] = typer.Option(None, "--gateway-url", "-g", help="iotexCore JSON-RPC URL"),
):
    """Run the explorer server"""
    from iotex_explorer.explorer.server import run_explorer

    config = _settings()
    if gateway_url:
        try:
            config = config.with_gateway_url(gateway_url)
        except ValidationError as e:
            console.print(f"[red]Invalid --gateway-url:[/red] {e.errors()[0]['msg']}")
            raise typer.Exit(1)

    console.print(Panel.fit(
        f"URL: [cyan]http://{host or config.api_host}:{port or config.api_port}{config.route_prefix}[/cyan]\n"
        f"Gateway: [cyan]{config.gateway_url}[/cyan]",
        title="IoTeX Explorer",
        border_style="green"
    ))

    try:
        run_explorer(config, host=host, port=port)
    except KeyboardInterrupt:
        console.print("\n[dim]Explorer stopped[/dim]")


# ============================================================================
# ADDRESS QUERIES
# ============================================================================

address_app = typer.Typer(help="Address queries against the gateway")
app.add_typer(address_app, name="address")


def _run_query(query: Callable[[AddressService], Awaitable[Dict[str, Any]]]) -> Dict[str, Any]:
    config = _settings()

    async def run() -> Dict[str, Any]:
        gateway = state.gateway_factory(config)
        try:
            return await query(AddressService(gateway, timeout=config.gateway_timeout))
        finally:
            await gateway.aclose()

    return asyncio.run(run())


def _fail(result: Dict[str, Any]) -> None:
    error = result["error"]
    console.print(f"[red]{error['code']}[/red] ({error['message']}) {error['data']}")
    raise typer.Exit(1)


def _print_items(title: str, result: Dict[str, Any], key: str) -> None:
    items = result[key] or []

    table = Table(title=f"{title} (offset {result['offset']}, count {result['count']})")
    if not all(isinstance(item, dict) for item in items):
        # Record non strutturati: una sola colonna
        table.add_column(key, overflow="fold")
        for item in items:
            table.add_row(_cell(item))
        console.print(table)
        return

    columns = []
    for item in items:
        for column in item:
            if column not in columns:
                columns.append(column)

    for column in columns:
        table.add_column(column, overflow="fold")

    for item in items:
        table.add_row(*[_cell(item.get(column)) for column in columns])

    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


@address_app.command("info")
def address_info(
    id: str = typer.Argument(..., help="Address")
):
    """Show address details"""
    result = _run_query(lambda service: service.get_address(id))
    if not result["ok"]:
        _fail(result)

    details = result["address"] or {}
    table = Table(title=f"Address {id}", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    for key, value in details.items():
        table.add_row(str(key), _cell(value))

    console.print(table)


def _relation_command(name: str, title: str, key: str, method: str):
    def command(
        id: str = typer.Argument(..., help="Address"),
        offset: int = typer.Option(DEFAULT_OFFSET, "--offset", "-o", min=0, help="Pagination offset"),
        count: int = typer.Option(DEFAULT_COUNT, "--count", "-c", min=0, help="Page size"),
    ):
        result = _run_query(lambda service: getattr(service, method)(id, offset, count))
        if not result["ok"]:
            _fail(result)
        _print_items(title, result, key)

    command.__doc__ = f"List {title.lower()} of an address"
    return address_app.command(name)(command)


address_transfers = _relation_command("transfers", "Transfers", "transfers", "get_transfers")
address_executions = _relation_command("executions", "Executions", "executions", "get_executions")
address_voters = _relation_command("voters", "Voters", "voters", "get_voters")
address_settle_deposits = _relation_command(
    "settle-deposits", "Settle deposits", "settleDeposits", "get_settle_deposits"
)
address_create_deposits = _relation_command(
    "create-deposits", "Create deposits", "createDeposits", "get_create_deposits"
)


# ============================================================================
# CALLBACK
# ============================================================================

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output"
    )
):
    """
    IoTeX Explorer CLI

    Avvia il server explorer o interroga il gateway iotexCore.
    """
    if verbose:
        setup_logging(log_level="DEBUG", log_to_file=False, log_format="text")
        console.print("[dim]Verbose mode enabled[/dim]")


if __name__ == "__main__":
    app()


__all__ = [
    "app",
]

"""CLI commands for lightgate.

Top-level commands: onboard, status, serve, call, methods.
"""

import json

import typer
from rich.console import Console

from lightgate import __logo__, __version__
from lightgate.cli.command_groups.status_command import status_command
from lightgate.cli.shared.logging_utils import ensure_rotating_log_file
from lightgate.cli.shared.network_utils import is_port_in_use

app = typer.Typer(
    name="lightgate",
    help=f"{__logo__} lightgate - JSON-RPC gateway for an Ethereum light client",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} lightgate v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
):
    """lightgate - JSON-RPC gateway for an Ethereum light client."""
    pass


@app.command()
def onboard():
    """Write the default configuration to ~/.lightgate/config.json."""
    from lightgate.config.access import get_config as get_cached_config
    from lightgate.config.loader import get_config_path, save_config
    from lightgate.config.schema import Config
    from lightgate.utils.helpers import ensure_dir

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        console.print("  [bold]y[/bold] = overwrite with defaults (existing values will be lost)")
        console.print("  [bold]N[/bold] = refresh config, keeping existing values and adding new fields")
        if typer.confirm("Overwrite?"):
            save_config(Config())
            console.print(f"[green]✓[/green] Config reset to defaults at {config_path}")
        else:
            save_config(get_cached_config(force_reload=True))
            console.print(f"[green]✓[/green] Config refreshed at {config_path} (existing values preserved)")
    else:
        save_config(Config())
        console.print(f"[green]✓[/green] Created config at {config_path}")

    config = get_cached_config(force_reload=True)
    data_path = config.light_client.data_path
    if not data_path.exists():
        ensure_dir(data_path)
        console.print(f"[green]✓[/green] Created data dir at {data_path}")

    console.print(f"\n{__logo__} lightgate is ready!")
    console.print("\nNext steps:")
    console.print("  1. Set your execution RPC in [cyan]~/.lightgate/config.json[/cyan] (lightClient.executionRpc)")
    console.print("  2. Start the gateway: [cyan]lightgate serve --auto-start[/cyan]")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", "-h", help="Bind host (defaults to gateway.host)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (defaults to gateway.port)"),
    auto_start: bool = typer.Option(None, "--auto-start/--no-auto-start", help="Initialize the light client on startup"),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output"),
):
    """Start the HTTP gateway (JSON-RPC on /rpc)."""
    import uvicorn

    from lightgate.api.server import create_app
    from lightgate.config.access import gateway_config_snapshot

    config = gateway_config_snapshot(host=host, port=port, auto_start=auto_start)

    bind_host, bind_port = config.gateway.host, config.gateway.port
    if is_port_in_use(bind_host, bind_port):
        console.print(
            f"[red]Port {bind_port} is already in use.[/red] "
            f"Close the process using it, or pass [cyan]--port[/cyan] (current: {bind_host}:{bind_port})."
        )
        raise typer.Exit(1)

    level = "DEBUG" if verbose else config.logging.level
    if config.logging.file_enabled:
        log_path = ensure_rotating_log_file("gateway", level=level)
        console.print(f"[dim]Logs: {log_path}[/dim]")

    console.print(f"{__logo__} Starting lightgate on {bind_host}:{bind_port} (network: {config.light_client.network})...")
    uvicorn.run(create_app(config), host=bind_host, port=bind_port, log_level="debug" if verbose else "info")


@app.command()
def call(
    method: str = typer.Argument(..., help="JSON-RPC method, e.g. eth_blockNumber"),
    params: str = typer.Argument(None, help="Positional params as a JSON array"),
    url: str = typer.Option(None, "--url", help="Gateway base URL (defaults to local config)"),
    request_id: int = typer.Option(1, "--id", help="Request id"),
):
    """Send one JSON-RPC request to a running gateway and print the response."""
    from lightgate.cli.shared.http_utils import get_gateway_base_url, parse_params, post_json

    try:
        positional = parse_params(params)
    except ValueError as exc:
        console.print(f"[red]Invalid params: {exc}[/red]")
        raise typer.Exit(2)

    base_url = (url or get_gateway_base_url()).rstrip("/")
    payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": positional}
    try:
        response = post_json(f"{base_url}/rpc", payload)
    except RuntimeError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    console.print_json(json.dumps(response))
    if "error" in response:
        raise typer.Exit(1)


@app.command()
def methods():
    """List supported JSON-RPC methods."""
    from lightgate.rpc.methods import METHOD_SPECS

    for spec in METHOD_SPECS:
        kinds = ", ".join(p.kind for p in spec.params) or "-"
        console.print(f"[cyan]{spec.name}[/cyan] [dim]({kinds})[/dim]")


@app.command()
def status():
    """Show lightgate status."""
    status_command(console)


if __name__ == "__main__":
    app()

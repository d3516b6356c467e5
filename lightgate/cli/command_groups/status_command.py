"""Status command: configuration and supported networks."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from lightgate import __logo__


def status_command(console: Console) -> None:
    """Show lightgate status."""
    from lightgate.client.networks import SupportedNetworks
    from lightgate.config.loader import get_config_path, load_config
    from lightgate.rpc.methods import supported_methods
    from lightgate.utils.exceptions import sanitize_error_message

    config_path = get_config_path()
    config = load_config()
    lc = config.light_client
    network = SupportedNetworks.get(lc.network)

    console.print(f"{__logo__} lightgate Status\n")
    console.print(f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[red]✗[/red]'}")
    console.print(f"Data dir: {lc.data_path} {'[green]✓[/green]' if lc.data_path.exists() else '[dim]not created[/dim]'}")
    console.print(f"Network: {lc.network}" + (f" [dim](chain {network.chain_id})[/dim]" if network else ""))
    console.print(f"Consensus RPC: {lc.consensus_rpc or (network.consensus_rpc if network else '') or '[dim]not set[/dim]'}")
    console.print(f"Execution RPC: {sanitize_error_message(lc.execution_rpc) or '[dim]not set[/dim]'}")
    console.print(f"Gateway: {config.gateway.host}:{config.gateway.port} [dim](auto start: {config.gateway.auto_start})[/dim]")

    table = Table(title="Supported networks")
    table.add_column("Name", style="cyan")
    table.add_column("Chain ID")
    table.add_column("Testnet")
    table.add_column("Default consensus RPC")
    table.add_column("Explorer")
    for name in SupportedNetworks.names():
        item = SupportedNetworks.NETWORKS[name]
        table.add_row(
            item.name,
            str(item.chain_id),
            "yes" if item.is_testnet else "no",
            item.consensus_rpc,
            item.block_explorer or "-",
        )
    console.print(table)
    console.print(f"[dim]{len(supported_methods())} JSON-RPC methods supported[/dim]")

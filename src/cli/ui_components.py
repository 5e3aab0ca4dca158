"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.fallback_simulator import DEMO_OTP
from core.domain.models import SessionView, TransferResult, Wallet


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("Okto Demo", style="bold cyan")
    subtitle = Text("Email OTP • Wallets • Token transfer (intent flow)", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_demo_mode_panel() -> Panel:
    body = Text()
    body.append("Real API unavailable from this environment.\n")
    body.append(f"Use OTP: {DEMO_OTP}", style="bold")
    return Panel(body, title=Text("Demo Mode Active", style="bold yellow"), border_style="yellow")


def build_wallets_table(wallets: tuple[Wallet, ...] | list[Wallet]) -> Table:
    table = Table(title="Your Wallets")
    table.add_column("Network", style="cyan", no_wrap=True)
    table.add_column("Address", style="magenta")
    for wallet in wallets:
        table.add_row(wallet.network_name, wallet.address)
    return table


def build_session_panel(view: SessionView) -> Panel:
    body = Text()
    body.append(f"{view.email or '-'}\n", style="bold")
    body.append(f"State: {view.state.value}\n")
    body.append(f"Mode: {view.mode.value}", style="yellow" if view.demo_mode else "green")
    return Panel(body, title="Session", border_style="cyan")


def build_transfer_panel(result: TransferResult, *, demo_mode: bool) -> Panel:
    """Panel para presentar el `TransferResult` del intent."""

    prefix = "Demo: " if demo_mode else ""
    body = Text()
    body.append(f"{prefix}Transfer initiated!\n", style="bold green")
    body.append(f"Order ID: {result.order_id}\n")
    if result.transaction_hash:
        body.append(f"Tx hash: {result.transaction_hash}", style="dim")
    return Panel(body, title="Intent submitted", border_style="green")

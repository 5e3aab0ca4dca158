"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_backend(settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer means the backend is reachable (live mode will be used)."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.TransportError as exc:
        return False, f"{type(exc).__name__}: {exc}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Okto Demo Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row(
        "Demo fallback",
        "ON" if settings.demo_fallback_enabled else "OFF",
        f"simulated latency {settings.simulator_delay_seconds:.1f}s",
    )

    ok_http, detail_http = asyncio.run(_check_backend(settings))
    table.add_row("Backend connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http and settings.demo_fallback_enabled:
        _console.print(
            "\n[yellow]Note:[/yellow] the backend is unreachable; `login` will switch to demo mode (OTP 123456)."
        )


@app.command(name="set-base-url")
def set_base_url(
    base_url: str = typer.Argument(..., help="Backend base URL, e.g. https://sandbox-api.okto.tech"),
) -> None:
    """Store the backend base URL in the user config .env."""

    base_url = base_url.strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base_url must start with http:// or https://")

    env_path = write_user_env_vars({"OKTO_DEMO_BASE_URL": base_url})
    _console.print(f"[green]Saved base URL to:[/green] {env_path}")

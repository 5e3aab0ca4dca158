"""CLI principal (Typer).

La CLI es solo la capa de presentación: pide datos, invoca las operaciones de
`SessionStateMachine` y pinta el estado/resultados/errores que devuelve el Core.
"""

from __future__ import annotations

import asyncio
import logging

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.ui_components import (
    build_demo_mode_panel,
    build_session_panel,
    build_transfer_panel,
    build_wallets_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import DispatchError, ValidationError
from core.domain.models import NetworkName, SessionState
from core.services.session_machine import SessionStateMachine
from core.services.transfer_orchestrator import build_transfer_request
from core.services.wallet_session import build_session_machine

app = typer.Typer(no_args_is_help=True, help="Okto wallet demo: email OTP login, wallets and token transfers.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    try:
        settings = AppSettings()
    except PydanticValidationError as exc:
        _print_error(f"Invalid configuration: {exc}")
        raise typer.Exit(code=2) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)


def _print_error(message: str) -> None:
    _console.print(f"[red]Error:[/red] {message}")


async def _authenticate(machine: SessionStateMachine, email: str | None) -> None:
    while machine.state is not SessionState.AUTHENTICATED:
        if machine.state is SessionState.UNAUTHENTICATED:
            email = email or typer.prompt("Email")
            try:
                with _console.status("Sending OTP..."):
                    await machine.request_otp(email)
            except (DispatchError, ValidationError) as exc:
                _print_error(f"Failed to send OTP: {exc}")
                email = None
                continue
            if machine.view().demo_mode:
                _console.print(build_demo_mode_panel())
            _console.print("[green]OTP sent to your email![/green]")
            continue

        code = typer.prompt("OTP (empty to go back)", default="", show_default=False)
        if not code.strip():
            machine.cancel_otp()
            email = None
            continue
        try:
            with _console.status("Verifying..."):
                await machine.verify_otp(code)
        except (DispatchError, ValidationError) as exc:
            # AuthError included: the session stays pending and the user retries.
            _print_error(str(exc))

    prefix = "Demo " if machine.view().demo_mode else ""
    _console.print(f"[green]{prefix}Login successful![/green]")


async def _transfer_loop(machine: SessionStateMachine) -> None:
    networks = ", ".join(n.value for n in NetworkName)
    while typer.confirm("Send tokens?", default=False):
        network = typer.prompt(f"Network ({networks})", default=NetworkName.POLYGON_TESTNET.value)
        recipient = typer.prompt("Recipient address", default="", show_default=False)
        amount = typer.prompt("Amount", default="", show_default=False)
        try:
            request = build_transfer_request(recipient, amount, network)
        except ValidationError as exc:
            _print_error(str(exc))
            continue
        try:
            with _console.status("Processing transfer..."):
                result = await machine.transfer(request)
        except DispatchError as exc:
            _print_error(str(exc))
            continue
        _console.print(build_transfer_panel(result, demo_mode=machine.view().demo_mode))


async def _run_session(machine: SessionStateMachine, email: str | None) -> None:
    try:
        await _authenticate(machine, email)

        view = machine.view()
        _console.print(build_session_panel(view))
        if view.wallets:
            _console.print(build_wallets_table(view.wallets))
        else:
            _console.print("[dim]No wallets found[/dim]")

        await _transfer_loop(machine)
    finally:
        machine.logout()
        _console.print("[dim]Logged out.[/dim]")


@app.command()
def login(
    email: str | None = typer.Option(None, "--email", "-e", help="Email to send the OTP to."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Interactive session: email OTP login, wallet listing and token transfers."""

    if not no_banner:
        print_banner(_console)
    machine = build_session_machine(AppSettings())
    asyncio.run(_run_session(machine, email))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""Composición de la sesión de wallet.

Arma dispatcher, simulador, controlador de modo, registro y orquestador para
que cualquier entry-point (CLI, tests, scripts) obtenga la misma pila.
"""

from __future__ import annotations

import httpx

from adapters.fallback_simulator import FallbackSimulator
from adapters.request_dispatcher import RequestDispatcher
from core.config import AppSettings
from core.services.mode_controller import ModeController
from core.services.session_machine import SessionStateMachine
from core.services.transfer_orchestrator import TransferOrchestrator
from core.services.wallet_registry import WalletRegistry


def build_session_machine(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SessionStateMachine:
    settings = settings or AppSettings()
    controller = ModeController(
        RequestDispatcher(settings, transport=transport),
        FallbackSimulator(settings),
        fallback_enabled=settings.demo_fallback_enabled,
    )
    return SessionStateMachine(
        controller,
        WalletRegistry(controller),
        TransferOrchestrator(controller),
    )

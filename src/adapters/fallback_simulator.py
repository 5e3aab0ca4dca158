"""Backend simulado para modo demo.

Devuelve los mismos envelopes que el backend real, tras una latencia fija,
para que la capa de presentación no distinga entre modos.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Mapping

from core.config import AppSettings
from core.domain.errors import AuthError
from core.domain.models import NetworkName
from core.domain.operations import Operation
from core.interfaces.backend import WalletBackend

logger = logging.getLogger(__name__)

DEMO_OTP = "123456"
DEMO_AUTH_TOKEN = "demo_token_12345"
DEMO_ORDER_PREFIX = "demo_order_"
DEMO_TRANSACTION_HASH = "0xdemo123..."
DEMO_WALLETS: tuple[dict[str, str], ...] = (
    {
        "network_name": NetworkName.POLYGON_TESTNET.value,
        "address": "0x742d35Cc6634C0532925a3b8D0C5E0c02210a8B5",
    },
    {
        "network_name": NetworkName.BASE_TESTNET.value,
        "address": "0x123abc456def789ghi012jkl345mno678pqr901st",
    },
)

_last_order_ms = 0


def next_order_id() -> str:
    """Order id basado en tiempo, estrictamente creciente dentro del proceso."""

    global _last_order_ms
    now_ms = time.time_ns() // 1_000_000
    _last_order_ms = max(now_ms, _last_order_ms + 1)
    return f"{DEMO_ORDER_PREFIX}{_last_order_ms}"


class FallbackSimulator(WalletBackend):
    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    async def simulate(self, operation: Operation, payload: Mapping[str, Any]) -> dict[str, Any]:
        await asyncio.sleep(self._settings.simulator_delay_seconds)
        logger.debug("simulated %s", operation.value)

        if operation is Operation.SEND_OTP:
            return {"status": "success", "message": "OTP sent successfully"}

        if operation is Operation.VERIFY_OTP:
            if payload.get("otp") != DEMO_OTP:
                raise AuthError(f"Invalid OTP. Use {DEMO_OTP} for demo.")
            return {
                "status": "success",
                "data": {
                    "auth_token": DEMO_AUTH_TOKEN,
                    "user": {"email": payload.get("email")},
                },
            }

        if operation is Operation.LIST_WALLETS:
            return {
                "status": "success",
                "data": {"wallets": [dict(wallet) for wallet in DEMO_WALLETS]},
            }

        if operation is Operation.EXECUTE_TRANSFER:
            return {
                "status": "success",
                "data": {
                    "order_id": next_order_id(),
                    "transaction_hash": DEMO_TRANSACTION_HASH,
                },
            }

        return {"status": "success"}

    async def perform(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        return await self.simulate(operation, payload)

"""Registro de wallets del usuario autenticado."""

from __future__ import annotations

import logging

from core.domain.errors import DispatchError
from core.domain.models import Wallet
from core.domain.operations import Operation
from core.domain.payloads import ListWalletsResponse, decode_response
from core.services.mode_controller import ModeController

logger = logging.getLogger(__name__)


class WalletRegistry:
    """Secuencia ordenada de wallets, reemplazada completa en cada `refresh`."""

    def __init__(self, controller: ModeController) -> None:
        self._controller = controller
        self._wallets: tuple[Wallet, ...] = ()
        self.last_error: DispatchError | None = None

    @property
    def wallets(self) -> tuple[Wallet, ...]:
        return self._wallets

    def clear(self) -> None:
        self._wallets = ()
        self.last_error = None

    async def refresh(self, auth_token: str) -> list[Wallet]:
        """Descarga las wallets; ante error conserva el valor previo y re-lanza."""

        try:
            raw = await self._controller.dispatch(Operation.LIST_WALLETS, {}, auth_token)
            response = decode_response(ListWalletsResponse, raw)
        except DispatchError as exc:
            self.last_error = exc
            logger.error("wallet refresh failed, keeping %d cached wallet(s): %s", len(self._wallets), exc)
            raise

        self._wallets = tuple(response.data.wallets)
        self.last_error = None
        logger.info("wallet registry refreshed with %d wallet(s)", len(self._wallets))
        return list(self._wallets)

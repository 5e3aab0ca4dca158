"""Controlador live/demo (circuit breaker de un solo sentido).

Único punto que lee o escribe el `ModeState`. Todas las operaciones de la
sesión pasan por `dispatch`; ningún otro componente sabe qué backend respondió.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from core.domain.errors import NetworkError
from core.domain.models import Mode, ModeState
from core.domain.operations import Operation
from core.interfaces.backend import WalletBackend

logger = logging.getLogger(__name__)


class ModeController:
    def __init__(
        self,
        live: WalletBackend,
        demo: WalletBackend,
        *,
        fallback_enabled: bool = True,
    ) -> None:
        self._live = live
        self._demo = demo
        self._fallback_enabled = fallback_enabled
        self._state = ModeState()

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def state(self) -> ModeState:
        return self._state.model_copy()

    def reset(self) -> None:
        """Nuevo `ModeState` en LIVE. Solo lo invoca el logout."""

        self._state = ModeState()

    def _trip(self, exc: NetworkError) -> None:
        if self._state.mode is Mode.DEMO:
            return
        self._state = ModeState(
            mode=Mode.DEMO,
            tripped_at=datetime.now(timezone.utc),
            trip_reason=str(exc)[:500],
        )
        logger.warning("live backend unreachable, switching session to demo mode: %s", exc)

    async def dispatch(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        if self._state.mode is Mode.DEMO:
            return await self._demo.perform(operation, payload, auth_token)

        try:
            return await self._live.perform(operation, payload, auth_token)
        except NetworkError as exc:
            # HttpError/DecodeError mean the server answered: they propagate.
            if not self._fallback_enabled:
                raise
            self._trip(exc)

        return await self._demo.perform(operation, payload, auth_token)

"""Máquina de estados de la sesión (email -> OTP -> autenticado).

Transiciones:
- UNAUTHENTICATED --request_otp--> OTP_PENDING
- OTP_PENDING --verify_otp--> AUTHENTICATED (y refresca wallets)
- OTP_PENDING --cancel_otp--> UNAUTHENTICATED
- cualquiera --logout--> UNAUTHENTICATED (sesión y modo nuevos)

Una operación inválida para el estado actual lanza `ProtocolError`: es un bug
del llamador, no una condición recuperable. Las llamadas concurrentes sobre la
misma sesión no se serializan; el llamador debe invocarlas en secuencia.
"""

from __future__ import annotations

import logging

from core.domain.errors import AuthError, DispatchError, HttpError, ProtocolError, ValidationError
from core.domain.models import OtpChallenge, Session, SessionState, SessionView, TransferRequest, TransferResult, Wallet
from core.domain.operations import Operation
from core.domain.payloads import (
    SendOtpBody,
    SendOtpResponse,
    VerifyOtpBody,
    VerifyOtpResponse,
    decode_response,
)
from core.services.mode_controller import ModeController
from core.services.transfer_orchestrator import TransferOrchestrator
from core.services.wallet_registry import WalletRegistry

logger = logging.getLogger(__name__)

# Live backend rejections of the code itself.
_OTP_REJECTION_STATUSES = frozenset({400, 401, 403})


class SessionStateMachine:
    def __init__(
        self,
        controller: ModeController,
        registry: WalletRegistry,
        orchestrator: TransferOrchestrator,
    ) -> None:
        self._controller = controller
        self._registry = registry
        self._orchestrator = orchestrator
        self._session = Session()

    @property
    def session(self) -> Session:
        return self._session.model_copy()

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def wallets(self) -> tuple[Wallet, ...]:
        return self._registry.wallets

    def view(self) -> SessionView:
        return SessionView(
            state=self._session.state,
            email=self._session.email,
            mode=self._controller.mode,
            wallets=self._registry.wallets,
        )

    def _require(self, expected: SessionState, action: str) -> None:
        if self._session.state is not expected:
            raise ProtocolError(
                f"Cannot {action} while {self._session.state.value}; expected {expected.value}."
            )

    async def request_otp(self, email: str) -> SendOtpResponse:
        self._require(SessionState.UNAUTHENTICATED, "request an OTP")
        email = (email or "").strip()
        if not email:
            raise ValidationError("Email is required.")

        body = SendOtpBody(email=email)
        raw = await self._controller.dispatch(Operation.SEND_OTP, body.model_dump())
        response = decode_response(SendOtpResponse, raw)

        self._session = Session(
            email=email,
            state=SessionState.OTP_PENDING,
            otp_challenge=OtpChallenge(email=email),
        )
        logger.info("OTP requested (mode=%s)", self._controller.mode.value)
        return response

    def cancel_otp(self) -> None:
        """Vuelve al formulario de email sin llamar al backend."""

        self._require(SessionState.OTP_PENDING, "cancel the OTP")
        self._session = Session(email=self._session.email)

    async def verify_otp(self, code: str) -> Session:
        self._require(SessionState.OTP_PENDING, "verify an OTP")
        code = (code or "").strip()
        if not code:
            raise ValidationError("OTP code is required.")

        email = self._session.email or ""
        body = VerifyOtpBody(email=email, otp=code)
        try:
            raw = await self._controller.dispatch(Operation.VERIFY_OTP, body.model_dump())
        except HttpError as exc:
            if exc.status in _OTP_REJECTION_STATUSES:
                raise AuthError(exc.message) from exc
            raise
        except AuthError:
            logger.info("OTP rejected; session stays pending")
            raise
        response = decode_response(VerifyOtpResponse, raw)

        self._session = Session(
            email=email,
            auth_token=response.data.auth_token,
            state=SessionState.AUTHENTICATED,
        )
        logger.info("session authenticated (mode=%s)", self._controller.mode.value)

        try:
            await self._registry.refresh(response.data.auth_token)
        except DispatchError:
            # A wallet fetch failure must not undo the login.
            pass
        return self.session

    async def refresh_wallets(self) -> list[Wallet]:
        self._require(SessionState.AUTHENTICATED, "refresh wallets")
        return await self._registry.refresh(self._session.auth_token or "")

    async def transfer(self, request: TransferRequest) -> TransferResult:
        return await self._orchestrator.execute(request, self._session)

    def logout(self) -> None:
        self._session = Session()
        self._controller.reset()
        self._registry.clear()
        logger.info("session cleared")

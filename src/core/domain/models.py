"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los mismos modelos sirven para la proyección de solo lectura que consume la CLI.

Nota:
- Estos modelos describen *qué* es la sesión, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    OTP_PENDING = "otp_pending"
    AUTHENTICATED = "authenticated"


class Mode(str, Enum):
    """Backend que atiende las operaciones de la sesión."""

    LIVE = "live"
    DEMO = "demo"


class NetworkName(str, Enum):
    """Redes de prueba soportadas para transferencias."""

    POLYGON_TESTNET = "POLYGON_TESTNET"
    BASE_TESTNET = "BASE_TESTNET"
    SOLANA_TESTNET = "SOLANA_TESTNET"


class OtpChallenge(BaseModel):
    """Desafío OTP emitido; solo existe mientras la sesión está en OTP pendiente."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1)
    issued_at: datetime = Field(default_factory=_utcnow)


class Session(BaseModel):
    """Identidad de la sesión actual.

    Invariante: `auth_token` está presente si y solo si `state` es AUTHENTICATED.
    La mutación es exclusiva de `SessionStateMachine`.
    """

    email: str | None = Field(
        default=None,
        description="Email para el que se pidió el OTP.",
    )
    auth_token: str | None = Field(
        default=None,
        repr=False,
        description="Bearer token devuelto al verificar el OTP.",
    )
    state: SessionState = Field(default=SessionState.UNAUTHENTICATED)
    otp_challenge: OtpChallenge | None = Field(default=None)

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED


class ModeState(BaseModel):
    """Bit live/demo de la sesión. Monótono: LIVE -> DEMO, nunca al revés."""

    mode: Mode = Field(default=Mode.LIVE)
    tripped_at: datetime | None = Field(
        default=None,
        description="Momento en que se detectó el fallo de red que activó el modo demo.",
    )
    trip_reason: str | None = Field(default=None, max_length=500)


class Wallet(BaseModel):
    model_config = ConfigDict(frozen=True)

    network_name: str = Field(..., min_length=1, max_length=64)
    address: str = Field(..., min_length=1)


class TransferRequest(BaseModel):
    """Intent de transferencia tal como lo entrega la capa de presentación."""

    model_config = ConfigDict(frozen=True)

    recipient_address: str = Field(..., description="Dirección destino (no se valida el formato).")
    token_amount: str = Field(..., description="Cantidad en unidades de token, como texto.")
    network_name: NetworkName = Field(default=NetworkName.POLYGON_TESTNET)


class TransferResult(BaseModel):
    """Resultado del intent: la liquidación ocurre de forma asíncrona en el backend."""

    model_config = ConfigDict(frozen=True)

    order_id: str = Field(..., min_length=1)
    transaction_hash: str | None = Field(default=None)


class SessionView(BaseModel):
    """Proyección de solo lectura para la capa de presentación."""

    model_config = ConfigDict(frozen=True)

    state: SessionState
    email: str | None = None
    mode: Mode = Mode.LIVE
    wallets: tuple[Wallet, ...] = ()

    @property
    def authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    @property
    def demo_mode(self) -> bool:
        return self.mode is Mode.DEMO

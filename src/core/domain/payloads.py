"""Esquemas de request/response del backend (wire format).

Por qué separado de `models`:
- El wire format usa snake_case del proveedor y envelopes `{status, data}`;
  el dominio solo ve las entidades ya decodificadas.
- Un payload que no cumple el esquema se convierte en `DecodeError`, igual si
  viene del backend real o del simulador.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

from core.domain.errors import DecodeError
from core.domain.models import NetworkName, TransferRequest, Wallet


class SendOtpBody(BaseModel):
    email: str = Field(..., min_length=1)


class VerifyOtpBody(BaseModel):
    email: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=1)


class TransferIntentBody(BaseModel):
    network_name: NetworkName
    token_address: str = Field(
        default="",
        description="Vacío para transferir el token nativo de la red.",
    )
    recipient_address: str
    quantity: str

    @classmethod
    def from_request(cls, request: TransferRequest) -> "TransferIntentBody":
        return cls(
            network_name=request.network_name,
            recipient_address=request.recipient_address,
            quantity=request.token_amount,
        )


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = Field(default="success")


class SendOtpResponse(_Envelope):
    message: str | None = None


class VerifiedUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None


class VerifyOtpData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    auth_token: str = Field(..., min_length=1)
    user: VerifiedUser = Field(default_factory=VerifiedUser)


class VerifyOtpResponse(_Envelope):
    data: VerifyOtpData


class WalletsData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    wallets: list[Wallet] = Field(default_factory=list)


class ListWalletsResponse(_Envelope):
    data: WalletsData = Field(default_factory=WalletsData)


class TransferData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    order_id: str = Field(..., min_length=1)
    transaction_hash: str | None = None


class ExecuteTransferResponse(_Envelope):
    data: TransferData


_ResponseT = TypeVar("_ResponseT", bound=BaseModel)


def decode_response(model: type[_ResponseT], raw: Any) -> _ResponseT:
    """Valida `raw` contra `model`; cualquier desajuste es un `DecodeError`."""

    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        raise DecodeError(f"Unexpected {model.__name__} payload: {exc.error_count()} schema error(s)") from exc

"""Operaciones lógicas del backend y su endpoint HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str


class Operation(str, Enum):
    """Operación lógica; el simulador y el dispatcher HTTP reciben la misma."""

    SEND_OTP = "send_otp"
    VERIFY_OTP = "verify_otp"
    LIST_WALLETS = "list_wallets"
    EXECUTE_TRANSFER = "execute_transfer"

    @property
    def endpoint(self) -> Endpoint:
        return _ENDPOINTS[self]


_ENDPOINTS: dict[Operation, Endpoint] = {
    Operation.SEND_OTP: Endpoint("POST", "/api/v1/authenticate/email/send-otp"),
    Operation.VERIFY_OTP: Endpoint("POST", "/api/v1/authenticate/email/verify-otp"),
    Operation.LIST_WALLETS: Endpoint("GET", "/api/v1/wallet"),
    Operation.EXECUTE_TRANSFER: Endpoint("POST", "/api/v1/transfer/tokens/execute"),
}

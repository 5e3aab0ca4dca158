"""Taxonomía de errores del Core.

Cada tipo corresponde a una decisión distinta del llamador:
- `NetworkError`: el backend no es alcanzable (dispara el modo demo).
- `HttpError` / `DecodeError`: el backend respondió pero no sirve la respuesta.
- `AuthError`: código OTP incorrecto (la sesión sigue en OTP pendiente).
- `ProtocolError`: operación inválida para el estado actual (bug del llamador).
- `ValidationError`: faltan campos obligatorios en la capa del llamador.
"""

from __future__ import annotations


class OktoDemoError(Exception):
    """Raíz de todos los errores propios del proyecto."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DispatchError(OktoDemoError):
    """Resultado fallido de una operación contra un backend (real o simulado)."""


class NetworkError(DispatchError):
    """El transporte no pudo llegar al servidor (DNS, conexión, TLS, timeout)."""


class HttpError(DispatchError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status

    def __str__(self) -> str:
        return self.message


class DecodeError(DispatchError):
    """Respuesta 2xx que no es JSON o no cumple el esquema esperado."""


class AuthError(DispatchError):
    """OTP rechazado."""


class ProtocolError(OktoDemoError):
    """Transición inválida para el estado actual de la sesión."""


class ValidationError(OktoDemoError):
    """Campo obligatorio vacío o con valor fuera del conjunto permitido."""

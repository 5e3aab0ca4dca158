"""Contratos del Core que implementan los adaptadores (HTTP y simulador)."""

from core.interfaces.backend import WalletBackend

__all__ = ["WalletBackend"]

"""Contrato de backends (real o simulado).

Por qué Protocol:
- El `ModeController` trata igual al dispatcher HTTP y al simulador: ambos
  reciben la misma operación lógica y devuelven el mismo envelope JSON.
- Permite sustituir cualquiera de los dos por un stub en tests.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.operations import Operation


@runtime_checkable
class WalletBackend(Protocol):
    """Contrato mínimo para atender una operación lógica.

    Reglas de diseño:
    - `perform` es asíncrono porque típicamente hará I/O (HTTP) o esperará
      la latencia artificial del simulador.
    - Devuelve el envelope decodificado (`dict`), sin convertirlo a entidades.
    - Los fallos se señalan con subclases de `DispatchError`.
    """

    async def perform(
        self,
        operation: Operation,
        payload: Mapping[str, Any],
        auth_token: str | None = None,
    ) -> dict[str, Any]:
        ...

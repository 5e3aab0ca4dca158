"""Ejecución de intents de transferencia.

El backend recibe un intent declarativo y devuelve un `order_id`; la firma y
la liquidación on-chain ocurren del lado del servicio.
"""

from __future__ import annotations

import logging

from core.domain.errors import ProtocolError, ValidationError
from core.domain.models import NetworkName, Session, TransferRequest, TransferResult
from core.domain.operations import Operation
from core.domain.payloads import ExecuteTransferResponse, TransferIntentBody, decode_response
from core.services.mode_controller import ModeController

logger = logging.getLogger(__name__)


def build_transfer_request(
    recipient_address: str,
    token_amount: str,
    network_name: str | NetworkName = NetworkName.POLYGON_TESTNET,
) -> TransferRequest:
    """Chequeo de campos obligatorios de la capa del llamador.

    Solo verifica presencia y red soportada; formato de dirección y rango de
    cantidad los valida el backend.
    """

    recipient = (recipient_address or "").strip()
    amount = (token_amount or "").strip()
    if not recipient:
        raise ValidationError("Recipient address is required.")
    if not amount:
        raise ValidationError("Token amount is required.")
    try:
        network = NetworkName(network_name)
    except ValueError:
        allowed = ", ".join(n.value for n in NetworkName)
        raise ValidationError(f"Unsupported network '{network_name}'. Use one of: {allowed}.") from None
    return TransferRequest(recipient_address=recipient, token_amount=amount, network_name=network)


class TransferOrchestrator:
    def __init__(self, controller: ModeController) -> None:
        self._controller = controller

    async def execute(self, request: TransferRequest, session: Session) -> TransferResult:
        if not session.is_authenticated or not session.auth_token:
            raise ProtocolError(f"Cannot execute a transfer while {session.state.value}.")

        body = TransferIntentBody.from_request(request)
        raw = await self._controller.dispatch(
            Operation.EXECUTE_TRANSFER,
            body.model_dump(mode="json"),
            session.auth_token,
        )
        response = decode_response(ExecuteTransferResponse, raw)
        logger.info(
            "transfer intent accepted on %s: order %s",
            request.network_name.value,
            response.data.order_id,
        )
        return TransferResult(
            order_id=response.data.order_id,
            transaction_hash=response.data.transaction_hash,
        )

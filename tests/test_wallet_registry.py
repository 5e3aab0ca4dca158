import asyncio

import pytest

from core.domain.errors import DecodeError, HttpError
from core.domain.models import Wallet
from core.domain.operations import Operation
from core.services.mode_controller import ModeController
from core.services.wallet_registry import WalletRegistry

from conftest import RecordingBackend

WALLETS = {
    "status": "success",
    "data": {"wallets": [{"network_name": "POLYGON_TESTNET", "address": "0x1"}]},
}


def test_refresh_replaces_wallets_and_sends_token():
    live = RecordingBackend(WALLETS)
    registry = WalletRegistry(ModeController(live, RecordingBackend()))

    wallets = asyncio.run(registry.refresh("tok"))

    assert wallets == [Wallet(network_name="POLYGON_TESTNET", address="0x1")]
    assert live.calls == [(Operation.LIST_WALLETS, {}, "tok")]

    live.response = {"status": "success", "data": {"wallets": [{"network_name": "BASE_TESTNET", "address": "0x2"}]}}
    asyncio.run(registry.refresh("tok"))

    assert [w.address for w in registry.wallets] == ["0x2"]


def test_failed_refresh_keeps_previous_wallets():
    live = RecordingBackend(WALLETS)
    registry = WalletRegistry(ModeController(live, RecordingBackend()))
    asyncio.run(registry.refresh("tok"))

    live.error = HttpError(500, "down")
    with pytest.raises(HttpError):
        asyncio.run(registry.refresh("tok"))

    assert [w.address for w in registry.wallets] == ["0x1"]
    assert isinstance(registry.last_error, HttpError)


def test_malformed_wallet_payload_is_decode_error():
    live = RecordingBackend({"status": "success", "data": {"wallets": [{"address": "0x1"}]}})
    registry = WalletRegistry(ModeController(live, RecordingBackend()))

    with pytest.raises(DecodeError):
        asyncio.run(registry.refresh("tok"))

    assert registry.wallets == ()


def test_clear_empties_registry():
    registry = WalletRegistry(ModeController(RecordingBackend(WALLETS), RecordingBackend()))
    asyncio.run(registry.refresh("tok"))

    registry.clear()

    assert registry.wallets == ()
    assert registry.last_error is None

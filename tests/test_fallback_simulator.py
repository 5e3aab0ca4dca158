import asyncio

import pytest

from adapters.fallback_simulator import DEMO_AUTH_TOKEN, FallbackSimulator
from core.domain.errors import AuthError
from core.domain.operations import Operation


def test_send_otp_always_succeeds(settings):
    result = asyncio.run(FallbackSimulator(settings).simulate(Operation.SEND_OTP, {"email": "whatever"}))
    assert result["status"] == "success"


def test_verify_otp_accepts_demo_code(settings):
    result = asyncio.run(
        FallbackSimulator(settings).simulate(Operation.VERIFY_OTP, {"email": "a@b.com", "otp": "123456"})
    )
    assert result["data"]["auth_token"] == DEMO_AUTH_TOKEN == "demo_token_12345"
    assert result["data"]["user"]["email"] == "a@b.com"


def test_verify_otp_rejects_other_codes(settings):
    with pytest.raises(AuthError, match="Invalid OTP. Use 123456 for demo."):
        asyncio.run(FallbackSimulator(settings).simulate(Operation.VERIFY_OTP, {"email": "a@b.com", "otp": "000000"}))


def test_list_wallets_returns_polygon_and_base(settings):
    result = asyncio.run(FallbackSimulator(settings).simulate(Operation.LIST_WALLETS, {}))
    networks = [w["network_name"] for w in result["data"]["wallets"]]
    assert networks == ["POLYGON_TESTNET", "BASE_TESTNET"]


def test_order_ids_increase_within_process(settings):
    simulator = FallbackSimulator(settings)

    async def three():
        return [await simulator.simulate(Operation.EXECUTE_TRANSFER, {}) for _ in range(3)]

    results = asyncio.run(three())
    ids = [r["data"]["order_id"] for r in results]
    assert all(i.startswith("demo_order_") for i in ids)
    numbers = [int(i.removeprefix("demo_order_")) for i in ids]
    assert numbers == sorted(numbers)
    assert len(set(numbers)) == 3
    assert results[0]["data"]["transaction_hash"] == "0xdemo123..."

"""Tests for the dapp backend client and its payload models."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.parsers.dapp.client import DappClient
from src.parsers.dapp.models import (
    MarketData,
    MarketingWalletData,
    SecondTokenAuditData,
    TransactionData,
)
from src.parsers.exceptions import ProviderError


class TestMarketData:
    def test_parses_numbers(self) -> None:
        market = MarketData.model_validate(
            {
                "circSupply": "1000000",
                "price_usd": 0.5,
                "holder_count": 321,
                "liquidity_usd": "25000.5",
                "volume_24h_usd": None,
            }
        )
        assert market.circSupply == Decimal("1000000")
        assert market.price_usd == Decimal("0.5")
        assert market.volume_24h_usd is None
        assert market.market_cap == Decimal("500000.0")
        assert market.error is False

    def test_junk_numbers_become_none(self) -> None:
        market = MarketData.model_validate({"price_usd": "NaN", "circSupply": "lots"})
        assert market.price_usd is None
        assert market.circSupply is None
        assert market.market_cap is None

    def test_error_flag(self) -> None:
        assert MarketData.model_validate({"error": True}).error is True
        assert MarketData.model_validate({"error": "Token not found"}).error is True
        assert MarketData.model_validate({}).error is False


class TestSmallModels:
    def test_blank_links_are_none(self) -> None:
        audit = SecondTokenAuditData.model_validate({"lpLockLink": "  ", "burnLink": "https://b"})
        assert audit.lpLockLink is None
        assert audit.burnLink == "https://b"

    def test_marketing_wallet(self) -> None:
        assert MarketingWalletData.model_validate({}).marketingAddress is None
        assert MarketingWalletData.model_validate({"marketingAddress": "0x9"}).marketingAddress == "0x9"

    def test_latest_trade(self) -> None:
        txs = TransactionData.model_validate(
            {
                "data": {
                    "txHistory": {
                        "dexTrades": [
                            {
                                "side": "BUY",
                                "buyCurrency": {"symbol": "FOO", "address": "0xfoo"},
                                "sellCurrency": {"symbol": "WETH", "address": "0xweth"},
                            },
                            {"side": "SELL"},
                        ]
                    }
                }
            }
        )
        assert txs.latest_trade is not None
        assert txs.latest_trade.side == "BUY"

    def test_no_trades(self) -> None:
        assert TransactionData.model_validate({}).latest_trade is None
        assert TransactionData.model_validate({"data": {"txHistory": {}}}).latest_trade is None


class TestDappClient:
    @pytest.mark.asyncio
    async def test_market_data_request(self) -> None:
        client = DappClient()
        client._http.get_json = AsyncMock(return_value={"price_usd": "1.5"})

        market = await client.get_market_data("0xabc")

        assert market.price_usd == Decimal("1.5")
        client._http.get_json.assert_awaited_once_with(
            "/token-market-data", params={"contract": "0xabc"}
        )

    @pytest.mark.asyncio
    async def test_endpoints(self) -> None:
        client = DappClient()
        client._http.get_json = AsyncMock(return_value={})

        await client.get_token_audit("0xabc")
        await client.get_marketing_wallet("0xabc")
        await client.get_transaction_data("0xabc")

        paths = [c.args[0] for c in client._http.get_json.await_args_list]
        assert paths == ["/token-audit", "/marketing-wallet", "/transaction-data"]

    @pytest.mark.asyncio
    async def test_non_object_payload(self) -> None:
        client = DappClient()
        client._http.get_json = AsyncMock(return_value=["unexpected"])

        with pytest.raises(ProviderError):
            await client.get_market_data("0xabc")

    @pytest.mark.asyncio
    async def test_malformed_nested_payload(self) -> None:
        client = DappClient()
        client._http.get_json = AsyncMock(return_value={"data": {"txHistory": {"dexTrades": "x"}}})

        with pytest.raises(ProviderError, match="Malformed"):
            await client.get_transaction_data("0xabc")

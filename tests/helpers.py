"""Builders and client doubles shared by the test modules."""

from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock

from src.parsers.dapp.models import (
    MarketData,
    MarketingWalletData,
    SecondTokenAuditData,
    TransactionData,
)
from src.parsers.goplus.models import TokenAuditData
from src.parsers.security_rules import (
    CONTRACT_SECURITY_RULES,
    TRADING_SECURITY_RULES,
    evaluate_rules,
)
from src.parsers.token_stats import TokenStatistics

CONTRACT = "0xabc0000000000000000000000000000000000001"
PAIR = "0xpair000000000000000000000000000000000002"


def clean_security(**overrides: Any) -> dict[str, Any]:
    """GoPlus record for a token that passes every check."""
    data = {
        "token_name": "FOO",
        "token_symbol": "FOO",
        "total_supply": "1000000000",
        "owner_address": "",
        "is_open_source": "1",
        "is_proxy": "0",
        "is_mintable": "0",
        "can_take_back_ownership": "0",
        "owner_change_balance": "0",
        "hidden_owner": "0",
        "selfdestruct": "0",
        "external_call": "0",
        "buy_tax": "0",
        "sell_tax": "0",
        "cannot_buy": "0",
        "cannot_sell_all": "0",
        "slippage_modifiable": "0",
        "is_honeypot": "0",
        "transfer_pausable": "0",
        "is_blacklisted": "0",
        "is_whitelisted": "0",
        "is_in_dex": "1",
        "is_anti_whale": "0",
        "anti_whale_modifiable": "0",
        "trading_cooldown": "0",
        "personal_slippage_modifiable": "0",
        "lp_holders": [],
    }
    data.update(overrides)
    return data


def make_stats(raw: dict[str, Any] | None = None, **overrides: Any) -> TokenStatistics:
    """TokenStatistics built straight from a raw record, no network."""
    raw = raw if raw is not None else clean_security()
    fields: dict[str, Any] = {
        "contract_address": CONTRACT,
        "token_audit": TokenAuditData.model_validate(raw),
        "second_token_audit": None,
        "market": MarketData(
            circSupply=Decimal("900000000"),
            price_usd=Decimal("0.0001234"),
            holder_count=Decimal("1520"),
            liquidity_usd=Decimal("250000"),
            volume_24h_usd=Decimal("1234567"),
        ),
        "marketing_wallet": None,
        "transactions": None,
        "pair_address": PAIR,
        "locked_percentage": Decimal(0),
        "burnt_percentage": Decimal(0),
        "is_locked": False,
        "is_burnt": False,
        "is_renounced": True,
        "contract_security": evaluate_rules(CONTRACT_SECURITY_RULES, raw),
        "trading_security": evaluate_rules(TRADING_SECURITY_RULES, raw),
        "is_partially_validated": True,
        "is_validated": False,
    }
    fields.update(overrides)
    return TokenStatistics(**fields)


def fake_goplus(payload: Any = None, side_effect: Any = None) -> MagicMock:
    client = MagicMock()
    client.get_token_security = AsyncMock(return_value=payload, side_effect=side_effect)
    client.close = AsyncMock()
    return client


def fake_dapp(
    *,
    market: Any = None,
    second_audit: Any = None,
    marketing_wallet: Any = None,
    transactions: Any = None,
) -> MagicMock:
    """Dapp client double. Pass an exception (class or instance) to make a source fail."""

    def _method(value: Any, default: Any) -> AsyncMock:
        if isinstance(value, BaseException) or (
            isinstance(value, type) and issubclass(value, BaseException)
        ):
            return AsyncMock(side_effect=value)
        if callable(value) and not isinstance(value, MagicMock):
            return AsyncMock(side_effect=value)
        return AsyncMock(return_value=value if value is not None else default)

    dapp = MagicMock()
    dapp.get_market_data = _method(market, MarketData())
    dapp.get_token_audit = _method(second_audit, SecondTokenAuditData())
    dapp.get_marketing_wallet = _method(marketing_wallet, MarketingWalletData())
    dapp.get_transaction_data = _method(transactions, TransactionData())
    dapp.close = AsyncMock()
    return dapp

"""Token resolver: fetch every source for a contract and build TokenStatistics.

The GoPlus security record is mandatory. The four dapp sources (LP proof
links, market data, marketing wallet, trades) are fetched concurrently with
it, each under its own timeout, and degrade to None on failure.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from decimal import Decimal
from typing import Any, TypeVar

from loguru import logger
from pydantic import ValidationError

from config.settings import Settings, settings as default_settings
from src.parsers.dapp.client import DappClient
from src.parsers.dapp.models import DexTrade, TransactionData
from src.parsers.exceptions import (
    InvalidContractError,
    InvalidMarketDataError,
    ProviderError,
    SourceUnavailable,
)
from src.parsers.goplus.client import GoPlusClient
from src.parsers.goplus.models import LiquidityHolder, TokenAuditData
from src.parsers.security_rules import (
    CONTRACT_SECURITY_RULES,
    TRADING_SECURITY_RULES,
    evaluate_rules,
)
from src.parsers.token_stats import TokenStatistics
from src.parsers.validation import PartialPredicate, get_partial_predicate, is_fully_validated

DEAD_PREFIX = "0x0000"
DEAD_SUFFIX = "dead"

T = TypeVar("T")


def is_dead_address(address: str | None) -> bool:
    """Burn/null address: starts with 0x0000 or ends with 'dead' (any case)."""
    if not address:
        return False
    addr = address.strip().lower()
    return addr.startswith(DEAD_PREFIX) or addr.endswith(DEAD_SUFFIX)


def split_liquidity(holders: Iterable[LiquidityHolder]) -> tuple[Decimal, Decimal]:
    """Return (locked, burnt) LP share.

    Dead holders count as burnt only; locked means not dead and flagged
    is_locked == 1 by the provider. No holder is counted twice.
    """
    locked = Decimal(0)
    burnt = Decimal(0)
    for holder in holders:
        if is_dead_address(holder.address):
            burnt += holder.percent
        elif holder.is_locked == 1:
            locked += holder.percent
    return locked, burnt


def is_renounced(owner_address: str | None) -> bool:
    """No owner, or ownership handed to a dead address.

    The owner field is a hex string and is never integer-parsed.
    """
    return not owner_address or is_dead_address(owner_address)


def secondary_currency_address(trade: DexTrade) -> str | None:
    """Counter-currency of a dex trade; its address is the pair to show.

    ``side`` names the primary currency ('buy' -> buyCurrency), so the pair
    side is the opposite one.
    """
    side = trade.side.strip().lower()
    if side == "buy":
        currency = trade.sellCurrency
    elif side == "sell":
        currency = trade.buyCurrency
    else:
        return None
    if currency is None or not currency.address:
        return None
    return currency.address


def resolve_pair_address(
    transactions: TransactionData | None, forced_pair_address: str | None
) -> str | None:
    """Latest trade wins; a forced pair address only fills the gap."""
    trade = transactions.latest_trade if transactions else None
    if trade is not None:
        pair = secondary_currency_address(trade)
        if pair:
            return pair
    return forced_pair_address or None


class TokenResolver:
    """Builds TokenStatistics for one contract per resolve() call. Holds no per-call state."""

    def __init__(
        self,
        goplus: GoPlusClient | None = None,
        dapp: DappClient | None = None,
        *,
        config: Settings | None = None,
        partial_predicate: PartialPredicate | None = None,
    ) -> None:
        self._cfg = config or default_settings
        self._goplus = goplus or GoPlusClient(self._cfg)
        self._dapp = dapp or DappClient(self._cfg)
        self._partial_predicate = partial_predicate or get_partial_predicate(
            self._cfg.validation_predicate
        )

    async def close(self) -> None:
        await self._goplus.close()
        await self._dapp.close()

    async def resolve(
        self, contract_address: str, forced_pair_address: str | None = None
    ) -> TokenStatistics:
        """Fetch all sources and derive the report record.

        Raises InvalidContractError when the security record is missing,
        nameless or unreachable, and InvalidMarketDataError when the market
        provider flags the contract.
        """
        optional = [
            asyncio.create_task(
                self._optional("second_audit", self._dapp.get_token_audit, contract_address)
            ),
            asyncio.create_task(
                self._optional("market", self._dapp.get_market_data, contract_address)
            ),
            asyncio.create_task(
                self._optional("marketing_wallet", self._dapp.get_marketing_wallet, contract_address)
            ),
            asyncio.create_task(
                self._optional("transactions", self._dapp.get_transaction_data, contract_address)
            ),
        ]

        try:
            raw_audit, token_audit = await self._fetch_primary(contract_address)
        except BaseException:
            for task in optional:
                task.cancel()
            await asyncio.gather(*optional, return_exceptions=True)
            raise

        second_audit, market, marketing_wallet, transactions = await asyncio.gather(*optional)

        if market is not None and market.error:
            raise InvalidMarketDataError(f"Market provider rejected {contract_address}")

        pair_address = resolve_pair_address(transactions, forced_pair_address)

        locked_pct, burnt_pct = split_liquidity(token_audit.lp_holders)
        threshold = Decimal(str(self._cfg.lock_threshold))
        lock_link = second_audit.lpLockLink if second_audit else None
        burn_link = second_audit.burnLink if second_audit else None
        need_link = self._cfg.require_reference_link
        locked = locked_pct > threshold and (bool(lock_link) or not need_link)
        burnt = burnt_pct > threshold and (bool(burn_link) or not need_link)

        contract_security = evaluate_rules(CONTRACT_SECURITY_RULES, raw_audit)
        trading_security = evaluate_rules(TRADING_SECURITY_RULES, raw_audit)

        partially_validated = self._partial_predicate(contract_security, trading_security)
        validated = is_fully_validated(
            partially_validated=partially_validated,
            is_locked=locked,
            is_burnt=burnt,
            market=market,
        )

        logger.info(
            f"[RESOLVE] {token_audit.token_name} ({contract_address[:12]}) "
            f"locked={locked_pct:.2%} burnt={burnt_pct:.2%} "
            f"partial={partially_validated} validated={validated}"
        )

        return TokenStatistics(
            contract_address=contract_address,
            token_audit=token_audit,
            second_token_audit=second_audit,
            market=market,
            marketing_wallet=marketing_wallet,
            transactions=transactions,
            pair_address=pair_address,
            locked_percentage=locked_pct,
            burnt_percentage=burnt_pct,
            is_locked=locked,
            is_burnt=burnt,
            is_renounced=is_renounced(token_audit.owner_address),
            contract_security=contract_security,
            trading_security=trading_security,
            is_partially_validated=partially_validated,
            is_validated=validated,
        )

    async def _fetch_primary(self, contract_address: str) -> tuple[dict[str, Any], TokenAuditData]:
        try:
            raw = await asyncio.wait_for(
                self._goplus.get_token_security(contract_address),
                timeout=self._cfg.fetch_timeout_sec,
            )
        except asyncio.TimeoutError as e:
            raise InvalidContractError(f"Security data timed out for {contract_address}") from e
        except ProviderError as e:
            raise InvalidContractError(f"Security data unavailable for {contract_address}") from e

        if not raw:
            raise InvalidContractError(f"No security data for {contract_address}")
        try:
            token_audit = TokenAuditData.model_validate(raw)
        except ValidationError as e:
            raise InvalidContractError(f"Malformed security data for {contract_address}") from e
        if not token_audit.token_name:
            raise InvalidContractError(f"Invalid contract address {contract_address}")
        return raw, token_audit

    async def _optional(
        self, source: str, fetch: Callable[[str], Awaitable[T]], contract_address: str
    ) -> T | None:
        try:
            return await asyncio.wait_for(fetch(contract_address), timeout=self._cfg.fetch_timeout_sec)
        except Exception as e:
            # Transport faults, timeouts and anything else: the source is optional
            logger.warning(f"[RESOLVE] {SourceUnavailable(source, e)}")
            return None

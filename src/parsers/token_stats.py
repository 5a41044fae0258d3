"""Aggregated per-token record handed from the resolver to the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.parsers.dapp.models import (
    MarketData,
    MarketingWalletData,
    SecondTokenAuditData,
    TransactionData,
)
from src.parsers.goplus.models import TokenAuditData
from src.parsers.security_rules import EvaluatedProperty


@dataclass(frozen=True)
class TokenStatistics:
    """Immutable snapshot built once per resolve() call.

    Optional provider payloads are None when their source was unavailable.
    """

    contract_address: str

    token_audit: TokenAuditData
    second_token_audit: SecondTokenAuditData | None
    market: MarketData | None
    marketing_wallet: MarketingWalletData | None
    transactions: TransactionData | None

    pair_address: str | None

    locked_percentage: Decimal
    burnt_percentage: Decimal
    is_locked: bool
    is_burnt: bool
    is_renounced: bool

    contract_security: tuple[EvaluatedProperty, ...]
    trading_security: tuple[EvaluatedProperty, ...]

    is_partially_validated: bool
    is_validated: bool

    @property
    def token_name(self) -> str:
        return self.token_audit.token_name

    @property
    def lp_lock_link(self) -> str | None:
        return self.second_token_audit.lpLockLink if self.second_token_audit else None

    @property
    def burn_link(self) -> str | None:
        return self.second_token_audit.burnLink if self.second_token_audit else None

from decimal import Decimal

from pydantic import BaseModel, field_validator

from src.parsers.coerce import to_decimal


class MarketData(BaseModel):
    circSupply: Decimal | None = None
    price_usd: Decimal | None = None
    holder_count: Decimal | None = None
    liquidity_usd: Decimal | None = None
    volume_24h_usd: Decimal | None = None
    error: bool = False

    model_config = {"extra": "ignore"}

    @field_validator(
        "circSupply", "price_usd", "holder_count", "liquidity_usd", "volume_24h_usd",
        mode="before",
    )
    @classmethod
    def _number(cls, v: object) -> Decimal | None:
        return to_decimal(v)

    @field_validator("error", mode="before")
    @classmethod
    def _error(cls, v: object) -> bool:
        # Provider sends true, an error string or an error object
        return bool(v)

    @property
    def market_cap(self) -> Decimal | None:
        if self.circSupply is None or self.price_usd is None:
            return None
        return self.circSupply * self.price_usd


class SecondTokenAuditData(BaseModel):
    """Lock/burn proof links from the secondary audit endpoint."""

    lpLockLink: str | None = None
    burnLink: str | None = None

    model_config = {"extra": "ignore"}

    @field_validator("lpLockLink", "burnLink", mode="before")
    @classmethod
    def _link(cls, v: object) -> str | None:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None


class MarketingWalletData(BaseModel):
    marketingAddress: str | None = None

    model_config = {"extra": "ignore"}

    @field_validator("marketingAddress", mode="before")
    @classmethod
    def _address(cls, v: object) -> str | None:
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None


class TradeCurrency(BaseModel):
    symbol: str = ""
    address: str = ""

    model_config = {"extra": "ignore"}


class DexTrade(BaseModel):
    side: str = ""
    buyCurrency: TradeCurrency | None = None
    sellCurrency: TradeCurrency | None = None

    model_config = {"extra": "ignore"}


class TxHistory(BaseModel):
    dexTrades: list[DexTrade] = []

    model_config = {"extra": "ignore"}


class TransactionPayload(BaseModel):
    txHistory: TxHistory | None = None

    model_config = {"extra": "ignore"}


class TransactionData(BaseModel):
    data: TransactionPayload | None = None

    model_config = {"extra": "ignore"}

    @property
    def latest_trade(self) -> DexTrade | None:
        if self.data is None or self.data.txHistory is None:
            return None
        trades = self.data.txHistory.dexTrades
        return trades[0] if trades else None

"""Data models for GoPlus token security responses."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.parsers.coerce import to_decimal


class LiquidityHolder(BaseModel):
    """LP token holder as reported in ``lp_holders``."""

    address: str = ""
    percent: Decimal = Decimal(0)  # share of the pool, 0.0-1.0
    is_locked: int = 0

    model_config = {"extra": "ignore"}

    @field_validator("address", mode="before")
    @classmethod
    def _address(cls, v: object) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("percent", mode="before")
    @classmethod
    def _percent(cls, v: object) -> Decimal:
        return to_decimal(v) or Decimal(0)

    @field_validator("is_locked", mode="before")
    @classmethod
    def _locked(cls, v: object) -> int:
        return 1 if to_decimal(v) == 1 else 0


class TokenAuditData(BaseModel):
    """Typed view of the primary security payload.

    The flag fields used by the security checklists stay in the raw dict;
    only what the resolver and renderer read directly is modelled here.
    """

    token_name: str = ""
    token_symbol: str = ""
    owner_address: str = ""
    total_supply: Decimal | None = None
    holder_score: str | None = Field(default=None, alias="holderScore")
    lp_holders: list[LiquidityHolder] = []

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("token_name", "token_symbol", "owner_address", mode="before")
    @classmethod
    def _text(cls, v: object) -> str:
        return v.strip() if isinstance(v, str) else ""

    @field_validator("total_supply", mode="before")
    @classmethod
    def _supply(cls, v: object) -> Decimal | None:
        return to_decimal(v)

    @field_validator("holder_score", mode="before")
    @classmethod
    def _score(cls, v: object) -> str | None:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("lp_holders", mode="before")
    @classmethod
    def _holders(cls, v: object) -> list:
        if not isinstance(v, list):
            return []
        return [h for h in v if isinstance(h, dict)]

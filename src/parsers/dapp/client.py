"""Client for the dapp backend: market data, LP proof links, marketing wallet, trades."""

from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from config.settings import Settings, settings as default_settings
from src.parsers.dapp.models import (
    MarketData,
    MarketingWalletData,
    SecondTokenAuditData,
    TransactionData,
)
from src.parsers.exceptions import ProviderError
from src.parsers.http_client import JsonHttpClient

MARKET_DATA = "/token-market-data"
TOKEN_AUDIT = "/token-audit"
MARKETING_WALLET = "/marketing-wallet"
TRANSACTION_DATA = "/transaction-data"

ModelT = TypeVar("ModelT", bound=BaseModel)


class DappClient:
    """Async client for the four per-contract dapp endpoints.

    Every method raises ProviderError on transport faults or payloads that
    do not fit the model; callers decide whether that is fatal.
    """

    def __init__(self, config: Settings | None = None) -> None:
        cfg = config or default_settings
        self._http = JsonHttpClient(
            cfg.providers.market_base_url,
            tag="DAPP",
            timeout=cfg.http_timeout_sec,
            max_retries=cfg.http_max_retries,
        )

    async def close(self) -> None:
        await self._http.close()

    async def get_market_data(self, contract_address: str) -> MarketData:
        return await self._fetch(MARKET_DATA, contract_address, MarketData)

    async def get_token_audit(self, contract_address: str) -> SecondTokenAuditData:
        return await self._fetch(TOKEN_AUDIT, contract_address, SecondTokenAuditData)

    async def get_marketing_wallet(self, contract_address: str) -> MarketingWalletData:
        return await self._fetch(MARKETING_WALLET, contract_address, MarketingWalletData)

    async def get_transaction_data(self, contract_address: str) -> TransactionData:
        return await self._fetch(TRANSACTION_DATA, contract_address, TransactionData)

    async def _fetch(self, path: str, contract_address: str, model: type[ModelT]) -> ModelT:
        data: Any = await self._http.get_json(path, params={"contract": contract_address})
        if not isinstance(data, dict):
            raise ProviderError(f"[DAPP] Unexpected {type(data).__name__} from {path}")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.debug(f"[DAPP] {path} payload rejected for {contract_address[:12]}: {e}")
            raise ProviderError(f"[DAPP] Malformed payload from {path}") from e

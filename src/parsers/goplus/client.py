"""GoPlus Security API client: ERC-20 token security properties."""

from typing import Any

from loguru import logger

from config.settings import Settings, settings as default_settings
from src.parsers.http_client import JsonHttpClient


class GoPlusClient:
    """Async client for the GoPlus ``token_security/{chain_id}`` endpoint (free, no key)."""

    def __init__(self, config: Settings | None = None) -> None:
        cfg = config or default_settings
        self._chain_id = cfg.chain_id
        self._http = JsonHttpClient(
            cfg.providers.token_security_base_url,
            tag="GOPLUS",
            timeout=cfg.http_timeout_sec,
            max_retries=cfg.http_max_retries,
        )

    async def close(self) -> None:
        await self._http.close()

    async def get_token_security(self, contract_address: str) -> dict[str, Any] | None:
        """Fetch the raw security record for a contract.

        Returns None when GoPlus has no entry for the address.
        Transport faults propagate as ProviderError.
        """
        data = await self._http.get_json(
            f"/{self._chain_id}",
            params={"contract_addresses": contract_address},
        )
        return _extract_token(data, contract_address)


def _extract_token(data: Any, contract_address: str) -> dict[str, Any] | None:
    """Pick ``result[address]`` out of the GoPlus envelope."""
    if not isinstance(data, dict):
        return None
    result = data.get("result")
    if not isinstance(result, dict) or not result:
        return None

    # GoPlus keys results by lowercased address
    token_data = result.get(contract_address) or result.get(contract_address.lower())
    if not isinstance(token_data, dict):
        logger.debug(f"[GOPLUS] No entry for {contract_address[:12]}")
        return None
    return token_data

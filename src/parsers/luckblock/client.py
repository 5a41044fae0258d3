"""LuckBlock AI audit API client: trigger, poll and download contract audits."""

from typing import Any

from pydantic import ValidationError

from config.settings import Settings, settings as default_settings
from src.parsers.exceptions import ProviderError
from src.parsers.http_client import JsonHttpClient
from src.parsers.luckblock.models import AuditReport, AuditStatusResponse

AUDIT = "/audit/{token}"
AUDIT_STATUS = "/audit/{token}/status"
AUDIT_JSON = "/audit/{token}/json"
AUDIT_PDF = "/audit/{token}/direct-pdf"


class LuckblockClient:
    """Async client for the audit job lifecycle."""

    def __init__(self, config: Settings | None = None) -> None:
        cfg = config or default_settings
        self._base_url = cfg.providers.audit_base_url.rstrip("/")
        self._http = JsonHttpClient(
            self._base_url,
            tag="LUCKBLOCK",
            timeout=cfg.http_timeout_sec,
            max_retries=cfg.http_max_retries,
        )

    async def close(self) -> None:
        await self._http.close()

    async def trigger_audit(self, token: str) -> Any:
        """Start (or restart) an audit job for the contract."""
        return await self._http.post_json(AUDIT.format(token=token))

    async def get_audit_status(self, token: str) -> AuditStatusResponse:
        data = await self._http.get_json(AUDIT_STATUS.format(token=token))
        if not isinstance(data, dict):
            raise ProviderError(f"[LUCKBLOCK] Unexpected status payload for {token}")
        try:
            return AuditStatusResponse.model_validate(data)
        except ValidationError as e:
            raise ProviderError(f"[LUCKBLOCK] Malformed status for {token}") from e

    async def get_audit_result(self, token: str) -> AuditReport:
        """Download a finished audit. The ``data`` field holds the report as a JSON string."""
        data = await self._http.get_json(AUDIT_JSON.format(token=token))
        payload = data.get("data") if isinstance(data, dict) else None
        try:
            if isinstance(payload, str):
                return AuditReport.model_validate_json(payload)
            if isinstance(payload, dict):
                return AuditReport.model_validate(payload)
        except ValidationError as e:
            raise ProviderError(f"[LUCKBLOCK] Malformed audit report for {token}") from e
        raise ProviderError(f"[LUCKBLOCK] Audit report missing for {token}")

    def pdf_url(self, token: str) -> str:
        return self._base_url + AUDIT_PDF.format(token=token)

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderEndpoints(BaseModel):
    """Base URLs of every external service the report touches."""

    # AI audit jobs (trigger/status/result)
    audit_base_url: str = "https://api.luckblock.io"
    # Market data, secondary audit, marketing wallet, transaction history
    market_base_url: str = "https://dapp.herokuapp.com"
    # GoPlus token security (chain id is appended by the client)
    token_security_base_url: str = "https://api.gopluslabs.io/api/v1/token_security"

    # Links embedded in the rendered report
    explorer_base_url: str = "https://etherscan.io"
    swap_base_url: str = "https://app.uniswap.org/#/swap"
    chart_base_url: str = "https://www.dextools.io/app/en/ether/pair-explorer"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    providers: ProviderEndpoints = ProviderEndpoints()
    chain_id: int = 1  # Ethereum mainnet

    # HTTP
    http_timeout_sec: float = 10.0
    http_max_retries: int = 2
    fetch_timeout_sec: float = 15.0  # per-source budget inside a resolution

    # Liquidity lock/burn
    lock_threshold: float = 0.9
    require_reference_link: bool = False  # when on, lock/burn also needs a lpLockLink/burnLink

    # "core" = not mintable + not honeypot, "strict" = core + proxy/blacklist/tax checks
    validation_predicate: str = "core"

    # legacy | strict | telegram
    markdown_dialect: str = "strict"

    # Audit job polling
    audit_poll_interval_sec: float = 1.0

    attribution: str = "Powered by LuckBlock.io"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"


settings = Settings()

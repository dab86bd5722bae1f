"""Application configuration using pydantic-settings.

Credentials for the OKX DEX aggregator may be left empty: the trading
provider then degrades to mock data so the workflow stays demoable.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8080, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # OKX DEX Aggregator
    # ======================
    trading_provider: str = Field(default="okx", description="Trading provider name")
    okx_api_key: str = Field(default="", description="OKX API key")
    okx_secret_key: str = Field(default="", description="OKX API secret used for HMAC signing")
    okx_api_passphrase: str = Field(default="", description="OKX API passphrase")
    okx_project_id: str = Field(default="", description="OKX developer project ID")
    okx_base_url: str = Field(default="https://www.okx.com", description="OKX REST base URL")
    okx_chain_id: str = Field(default="501", description="Aggregator chain ID (501 = Solana)")

    # ======================
    # Solana
    # ======================
    sol_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        validation_alias=AliasChoices("SOLANA_RPC_URL", "SOL_RPC_URL"),
        description="Solana RPC URL",
    )

    # ======================
    # Timeouts and fees
    # ======================
    http_timeout_seconds: float = Field(
        default=30.0, description="Timeout for outbound aggregator and RPC calls"
    )
    confirm_timeout_seconds: float = Field(
        default=60.0, description="Upper bound on waiting for transaction confirmation"
    )
    confirm_poll_interval_seconds: float = Field(
        default=0.5, description="Delay between signature status polls"
    )
    priority_fee_floor: int = Field(default=1000, description="Minimum priority fee (lamports)")
    default_priority_fee: int = Field(
        default=5000, description="Priority fee used when estimation fails (lamports)"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def missing_okx_credentials(self) -> list[str]:
        """Names of OKX credential settings that are empty."""
        fields = {
            "OKX_API_KEY": self.okx_api_key,
            "OKX_SECRET_KEY": self.okx_secret_key,
            "OKX_API_PASSPHRASE": self.okx_api_passphrase,
            "OKX_PROJECT_ID": self.okx_project_id,
        }
        return [name for name, value in fields.items() if not value]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "trading_provider": self.trading_provider,
            "okx": {
                "base_url": self.okx_base_url,
                "chain_id": self.okx_chain_id,
                "api_key": "***" if self.okx_api_key else "(not set)",
                "secret_key": "***" if self.okx_secret_key else "(not set)",
                "api_passphrase": "***" if self.okx_api_passphrase else "(not set)",
                "project_id": "***" if self.okx_project_id else "(not set)",
            },
            "solana": {
                "rpc": self.sol_rpc_url,
                "confirm_timeout_seconds": self.confirm_timeout_seconds,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

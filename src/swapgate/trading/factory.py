"""Trading provider registry.

Providers are selected by name at startup. Unknown names fail fast with
ProviderConfigError instead of silently defaulting.
"""

import logging
from typing import Callable, Optional

from swapgate.config import get_settings
from swapgate.trading.base import ProviderConfig, TradingProvider
from swapgate.trading.errors import ProviderConfigError

logger = logging.getLogger(__name__)

ProviderBuilder = Callable[[ProviderConfig], TradingProvider]


def _build_okx(config: ProviderConfig) -> TradingProvider:
    from swapgate.trading.okx import OkxProvider
    return OkxProvider(config)


_REGISTRY: dict[str, ProviderBuilder] = {
    "okx": _build_okx,
}

# Singleton instance
_provider_instance: Optional[TradingProvider] = None


def register_provider(name: str, builder: ProviderBuilder) -> None:
    """Register a provider builder under ``name`` (case-insensitive)."""
    _REGISTRY[name.lower()] = builder


def available_providers() -> list[str]:
    return sorted(_REGISTRY)


def get_trading_provider(
    provider_name: str = "okx",
    config: Optional[ProviderConfig] = None,
) -> TradingProvider:
    """Create a trading provider by name.

    Args:
        provider_name: Registered provider name, e.g. "okx"
        config: Credentials and connection settings for the provider

    Raises:
        ProviderConfigError: unknown provider or missing config
    """
    builder = _REGISTRY.get(provider_name.lower())
    if builder is None:
        raise ProviderConfigError(
            f"Unsupported trading provider: {provider_name} "
            f"(available: {', '.join(available_providers())})"
        )
    if config is None:
        raise ProviderConfigError(f"{provider_name} provider config is required.")

    provider = builder(config)
    logger.info(f"Created trading provider: {provider.name}")
    return provider


def get_provider() -> TradingProvider:
    """Get the process-wide trading provider configured by settings.

    Provider is selected by the TRADING_PROVIDER environment variable.
    """
    global _provider_instance

    if _provider_instance is not None:
        return _provider_instance

    settings = get_settings()
    missing = settings.missing_okx_credentials
    if missing:
        logger.warning(
            f"OKX credentials not set ({', '.join(missing)}); "
            "aggregator calls will fall back to mock data"
        )

    _provider_instance = get_trading_provider(
        settings.trading_provider,
        ProviderConfig.from_settings(settings),
    )
    return _provider_instance


def set_provider(provider: Optional[TradingProvider]) -> None:
    """Install a provider instance (used by tests and custom startup code)."""
    global _provider_instance
    _provider_instance = provider


def reset_provider() -> None:
    """Reset provider instance (useful for testing)."""
    global _provider_instance
    _provider_instance = None

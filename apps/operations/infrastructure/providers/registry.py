"""
Provider Registry - Maps provider names to adapter classes.
The order in OPERATIONS_RATE_PROVIDERS is the fallback order.
"""

import logging

from core.settings import OPERATIONS_RATE_PROVIDERS
from apps.operations.domain.interfaces import BaseExchangeRatesProvider
from apps.operations.infrastructure.providers.remote_settings import RemoteSettingsProvider
from apps.operations.infrastructure.providers.settings_store import SettingsStoreProvider

logger = logging.getLogger(__name__)


class ProviderName:
    SETTINGS_STORE = "settings_store"
    REMOTE_SETTINGS = "remote_settings"


# Registry: Maps provider name to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseExchangeRatesProvider]] = {
    ProviderName.SETTINGS_STORE: SettingsStoreProvider,
    ProviderName.REMOTE_SETTINGS: RemoteSettingsProvider,
}


def get_provider_instance(provider_name: str) -> BaseExchangeRatesProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: A key of PROVIDER_REGISTRY

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.warning("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class()


def get_active_providers_ordered(provider_names: list[str] | None = None) -> list[BaseExchangeRatesProvider]:
    """
    Instantiate the configured providers in fallback order.

    Args:
        provider_names: Overrides OPERATIONS_RATE_PROVIDERS when given

    Returns:
        List of provider instances; unknown names are skipped
    """
    if provider_names is None:
        provider_names = OPERATIONS_RATE_PROVIDERS

    provider_instances = []
    for name in provider_names:
        instance = get_provider_instance(name)
        if instance is not None:
            provider_instances.append(instance)

    return provider_instances

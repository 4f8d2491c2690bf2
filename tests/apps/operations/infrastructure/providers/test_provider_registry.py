from unittest.mock import patch

from apps.operations.infrastructure.providers.registry import (
    PROVIDER_REGISTRY,
    ProviderName,
    get_active_providers_ordered,
    get_provider_instance,
)
from apps.operations.infrastructure.providers.remote_settings import RemoteSettingsProvider
from apps.operations.infrastructure.providers.settings_store import SettingsStoreProvider

MODULE = "apps.operations.infrastructure.providers.registry"


class TestProviderRegistry:
    """Tests for provider registry functions."""

    def test_registry_contains_providers(self):
        assert ProviderName.SETTINGS_STORE in PROVIDER_REGISTRY
        assert ProviderName.REMOTE_SETTINGS in PROVIDER_REGISTRY

    def test_get_provider_instance(self):
        assert isinstance(get_provider_instance(ProviderName.SETTINGS_STORE), SettingsStoreProvider)
        assert isinstance(get_provider_instance(ProviderName.REMOTE_SETTINGS), RemoteSettingsProvider)

    def test_get_provider_instance_invalid(self):
        assert get_provider_instance("invalid_provider") is None

    @patch(f"{MODULE}.OPERATIONS_RATE_PROVIDERS", ["remote_settings", "settings_store"])
    def test_configured_order_is_kept(self):
        providers = get_active_providers_ordered()

        assert isinstance(providers[0], RemoteSettingsProvider)
        assert isinstance(providers[1], SettingsStoreProvider)

    @patch(f"{MODULE}.OPERATIONS_RATE_PROVIDERS", ["settings_store"])
    def test_explicit_names_override_configuration(self):
        providers = get_active_providers_ordered(["remote_settings"])

        assert len(providers) == 1
        assert isinstance(providers[0], RemoteSettingsProvider)

    def test_unknown_names_are_skipped(self):
        providers = get_active_providers_ordered(["nope", "settings_store"])

        assert len(providers) == 1
        assert isinstance(providers[0], SettingsStoreProvider)

    def test_empty_configuration(self):
        assert get_active_providers_ordered([]) == []

import pytest
from decimal import Decimal

from apps.operations.infrastructure.persistence.models import OrganizationSettings
from apps.operations.infrastructure.providers.settings_store import SettingsStoreProvider


@pytest.mark.django_db
class TestSettingsStoreProvider:

    def test_no_settings_row(self):
        assert SettingsStoreProvider().get_exchange_rates() is None

    def test_reads_default_row(self):
        OrganizationSettings.objects.create(jpy_per_usd=Decimal("151"), vnd_per_usd=Decimal("25300"))

        rates = SettingsStoreProvider().get_exchange_rates()

        assert rates.jpy_per_usd == Decimal("151")
        assert rates.vnd_per_usd == Decimal("25300")

    def test_custom_settings_key(self):
        OrganizationSettings.objects.create(jpy_per_usd=Decimal("151"), vnd_per_usd=Decimal("25300"))
        OrganizationSettings.objects.create(
            settings_key="HANOI", jpy_per_usd=Decimal("149"), vnd_per_usd=Decimal("25100")
        )

        rates = SettingsStoreProvider(settings_key="HANOI").get_exchange_rates()

        assert rates.jpy_per_usd == Decimal("149")

    def test_unset_rates_are_returned_unvalidated(self):
        OrganizationSettings.objects.create()

        rates = SettingsStoreProvider().get_exchange_rates()

        assert rates.jpy_per_usd is None
        assert rates.vnd_per_usd is None

from apps.operations.domain.interfaces import BaseExchangeRatesProvider
from apps.operations.domain.models import ExchangeRates
from apps.operations.infrastructure.persistence.repositories import SettingsRepository


class SettingsStoreProvider(BaseExchangeRatesProvider):
    """
    Reads the rates saved through the settings API.
    Returns None while no settings row exists, so the chain can move on.
    """

    def __init__(self, settings_key: str | None = None):
        self.settings_key = settings_key

    def get_exchange_rates(self) -> ExchangeRates | None:
        if self.settings_key is None:
            return SettingsRepository.get_exchange_rates()
        return SettingsRepository.get_exchange_rates(self.settings_key)

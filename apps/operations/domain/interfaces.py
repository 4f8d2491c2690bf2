from abc import ABC, abstractmethod

from apps.operations.domain.models import ExchangeRates


class BaseExchangeRatesProvider(ABC):
    @abstractmethod
    def get_exchange_rates(self) -> ExchangeRates | None:
        pass

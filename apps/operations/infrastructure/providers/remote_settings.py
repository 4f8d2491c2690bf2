import logging

import requests

from core.settings import OPERATIONS_SETTINGS_API_TOKEN, OPERATIONS_SETTINGS_API_URL
from apps.operations.domain.interfaces import BaseExchangeRatesProvider
from apps.operations.domain.models import ExchangeRates

logger = logging.getLogger(__name__)


class RemoteSettingsProvider(BaseExchangeRatesProvider):
    """
    Settings API of another deployment.
    Uses GET /api/settings, which answers {"jpyPerUsd": ..., "vndPerUsd": ...}.
    """

    def get_exchange_rates(self) -> ExchangeRates | None:
        """
        Fetch the current exchange rates over HTTP.

        Returns:
            ExchangeRates exactly as received (unvalidated), or None if error occurs
        """
        if not OPERATIONS_SETTINGS_API_URL:
            logger.warning("OPERATIONS_SETTINGS_API_URL is not configured. Cannot fetch exchange rates.")
            return None

        url = f"{OPERATIONS_SETTINGS_API_URL.rstrip('/')}/api/settings"
        headers = {"Accept": "application/json"}
        if OPERATIONS_SETTINGS_API_TOKEN:
            headers["Authorization"] = f"Bearer {OPERATIONS_SETTINGS_API_TOKEN}"

        try:
            response = requests.get(url, headers=headers, timeout=10)
            response.raise_for_status()
            data = response.json()

            return ExchangeRates(
                jpy_per_usd=data["jpyPerUsd"],
                vnd_per_usd=data["vndPerUsd"],
                updated_at=data.get("updatedAt"),
            )

        except requests.exceptions.Timeout:
            logger.warning("Timeout calling settings API at %s", url)
            return None
        except requests.exceptions.RequestException as e:
            logger.warning("HTTP error from settings API: %s", e)
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Invalid response from settings API: %s", e)
            return None

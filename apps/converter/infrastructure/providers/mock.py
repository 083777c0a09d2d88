"""
Mock provider for development and tests.
Serves fixed, realistic rates without any network access.
"""

from apps.converter.domain.errors import RateUnavailableError
from apps.converter.domain.interfaces import BaseRateProvider


class MockProvider(BaseRateProvider):
    """
    Mock provider with a fixed rate table.
    Useful for:
    - Testing without external API calls
    - Development offline
    """

    # Base rates relative to EUR (approximate real-world values)
    BASE_RATES = {
        "EUR": 1.0,
        "INR": 90.12,
    }

    def get_rate(self, source_currency: str, target_currency: str) -> float:
        source_rate = self.BASE_RATES.get(source_currency)
        target_rate = self.BASE_RATES.get(target_currency)

        if source_rate is None or target_rate is None:
            raise RateUnavailableError(
                f"MockProvider: Unsupported currency pair {source_currency}/{target_currency}"
            )

        # Cross rate, rounded to 6 decimal places
        return round(target_rate / source_rate, 6)

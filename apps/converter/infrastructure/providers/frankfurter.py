import logging
import math

import requests
from django.conf import settings

from apps.converter.domain.errors import RateFetchError, RateUnavailableError
from apps.converter.domain.interfaces import BaseRateProvider

logger = logging.getLogger(__name__)


# Rates must never come from an HTTP cache
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant {name}")


class FrankfurterProvider(BaseRateProvider):
    """
    Frankfurter API provider.
    Uses /latest endpoint to fetch the current mid-market rate.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.FRANKFURTER_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.RATE_REQUEST_TIMEOUT

    def get_rate(self, source_currency: str, target_currency: str) -> float:
        """
        Fetch the latest exchange rate from Frankfurter.

        Args:
            source_currency: Base currency code (e.g. EUR)
            target_currency: Target currency code (e.g. INR)

        Returns:
            Exchange rate as float

        Raises:
            RateFetchError: network error, timeout, non-success status or invalid JSON
            RateUnavailableError: the body carries no numeric rate for the target
        """
        # Format: https://api.frankfurter.app/latest?from=EUR&to=INR
        url = f"{self.base_url}/latest"

        try:
            response = requests.get(
                url,
                params={"from": source_currency, "to": target_currency},
                headers=NO_CACHE_HEADERS,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json(parse_constant=_reject_constant)

        except requests.exceptions.Timeout as e:
            logger.warning("Timeout calling Frankfurter for %s/%s", source_currency, target_currency)
            raise RateFetchError(f"Timeout calling Frankfurter: {e}") from e
        except requests.exceptions.HTTPError as e:
            logger.warning("HTTP error from Frankfurter: %s", e)
            raise RateFetchError(f"HTTP error from Frankfurter: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request to Frankfurter failed: %s", e)
            raise RateFetchError(f"Request to Frankfurter failed: {e}") from e
        except ValueError as e:
            logger.warning("Invalid JSON from Frankfurter: %s", e)
            raise RateFetchError(f"Invalid response from Frankfurter: {e}") from e

        # Response format: {"amount": 1.0, "base": "EUR", "date": "...", "rates": {"INR": 90.12}}
        rates = data.get("rates") if isinstance(data, dict) else None
        rate = rates.get(target_currency) if isinstance(rates, dict) else None

        if isinstance(rate, float) and not math.isfinite(rate):
            logger.warning("Non-finite rate from Frankfurter: %r", rate)
            raise RateFetchError(f"Invalid rate from Frankfurter: {rate!r}")

        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            raise RateUnavailableError(
                f"No rate for {source_currency}/{target_currency} in Frankfurter response"
            )

        return float(rate)

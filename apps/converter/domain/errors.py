"""
Domain errors raised between the rate providers and the converter pipeline.
"""


class ConverterError(Exception):
    """Base exception for converter errors."""
    pass


class UnsupportedCurrencyError(ConverterError, ValueError):
    """Raised when a currency code is outside the supported set."""
    pass


class RateError(ConverterError):
    """Base exception for rate retrieval failures."""
    pass


class RateUnavailableError(RateError):
    """The rate service answered, but without a usable rate for the pair."""
    pass


class RateFetchError(RateError):
    """Network error, non-success status or an undecodable body."""
    pass

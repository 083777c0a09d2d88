"""
Provider Registry - Maps ProviderName choices to adapter classes.
The active provider is selected with the RATE_PROVIDER setting.
"""

import logging

from django.conf import settings
from django.db import models

from apps.converter.domain.interfaces import BaseRateProvider
from apps.converter.infrastructure.providers.frankfurter import FrankfurterProvider
from apps.converter.infrastructure.providers.mock import MockProvider

logger = logging.getLogger(__name__)


class ProviderName(models.TextChoices):
    """
    Available providers.
    To add a new provider:
    1. Add an entry here
    2. Implement the BaseRateProvider interface
    3. Register it in PROVIDER_REGISTRY
    """

    FRANKFURTER = "frankfurter", "Frankfurter"
    MOCK = "mock", "Mock"


PROVIDER_REGISTRY: dict[str, type[BaseRateProvider]] = {
    ProviderName.FRANKFURTER: FrankfurterProvider,
    ProviderName.MOCK: MockProvider,
}


def get_provider_instance(provider_name: str) -> BaseRateProvider | None:
    """
    Get an instance of a provider by its name.

    Args:
        provider_name: The provider name from ProviderName

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.error("Provider '%s' not found in registry", provider_name)
        return None

    return provider_class()


def get_configured_provider() -> BaseRateProvider | None:
    """Instance of the provider named by settings.RATE_PROVIDER."""
    return get_provider_instance(settings.RATE_PROVIDER)

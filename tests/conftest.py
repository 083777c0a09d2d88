import threading

import pytest

from apps.converter.domain.errors import RateUnavailableError
from apps.converter.domain.interfaces import BaseRateProvider


class StubProvider(BaseRateProvider):
    """Answers from a fixed table; pairs missing from it are unavailable."""

    def __init__(self, rates=None, error=None):
        self.rates = rates or {}
        self.error = error
        self.calls = []

    def get_rate(self, source_currency, target_currency):
        self.calls.append((source_currency, target_currency))
        if self.error is not None:
            raise self.error
        try:
            return self.rates[(source_currency, target_currency)]
        except KeyError:
            raise RateUnavailableError(f"no rate for {source_currency}/{target_currency}")


class GatedProvider(StubProvider):
    """Blocks each pair until the test releases it."""

    def __init__(self, rates=None, error=None):
        super().__init__(rates, error)
        self.gates = {}

    def gate(self, source_currency, target_currency):
        return self.gates.setdefault((source_currency, target_currency), threading.Event())

    def release(self, source_currency, target_currency):
        self.gate(source_currency, target_currency).set()

    def get_rate(self, source_currency, target_currency):
        self.gate(source_currency, target_currency).wait(timeout=5)
        return super().get_rate(source_currency, target_currency)


@pytest.fixture
def stub_provider():
    """Factory for providers answering from a fixed rate table."""
    return StubProvider


@pytest.fixture
def gated_provider():
    """Factory for providers that hold each request until released."""
    return GatedProvider


@pytest.fixture
def eur_inr_provider():
    return StubProvider({
        ("EUR", "INR"): 90.0,
        ("INR", "EUR"): 0.011111,
    })

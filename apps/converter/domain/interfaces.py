from abc import ABC, abstractmethod
from typing import Optional


class BaseRateProvider(ABC):
    @abstractmethod
    def get_rate(self, source_currency: str, target_currency: str) -> float:
        """Return the latest rate or raise a RateError subclass."""
        pass


class BaseThemeStorage(ABC):
    KEY = "theme"

    @abstractmethod
    def load(self) -> Optional[str]:
        pass

    @abstractmethod
    def save(self, value: str) -> None:
        pass

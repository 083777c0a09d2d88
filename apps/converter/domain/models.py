"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from apps.converter.domain.errors import UnsupportedCurrencyError


RATE_UNAVAILABLE = "Rate unavailable right now. Try again later."
FETCH_FAILED = "Failed to fetch rates. Please try again."
INVALID_AMOUNT = "Enter a valid number"


class CurrencyCode(str, Enum):
    """The closed set of currencies the widget can convert between."""

    EUR = "EUR"
    INR = "INR"

    @classmethod
    def parse(cls, value: str) -> "CurrencyCode":
        try:
            return cls(value.strip().upper())
        except (ValueError, AttributeError):
            raise UnsupportedCurrencyError(f"Unsupported currency code: {value!r}")

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def icon(self) -> str:
        return f"/{self.value.lower()}.svg"

    @property
    def label(self) -> str:
        return self.value


_GLYPHS = {
    CurrencyCode.EUR: "€",
    CurrencyCode.INR: "₹",
}


class Theme(str, Enum):

    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK

    @property
    def css_class(self) -> str:
        """Class set on the document root; light mode has none."""
        return "dark" if self is Theme.DARK else ""


@dataclass(frozen=True)
class ConversionPair:

    source: CurrencyCode
    target: CurrencyCode

    @property
    def key(self) -> str:
        return f"{self.source.value}_{self.target.value}"

    def swapped(self) -> "ConversionPair":
        return ConversionPair(source=self.target, target=self.source)


@dataclass
class ConverterState:
    """Transient state of one widget for the lifetime of a page view."""

    source: CurrencyCode = CurrencyCode.EUR
    target: CurrencyCode = CurrencyCode.INR
    amount: str = "1"
    result: str = ""
    rate: Optional[float] = None
    loading: bool = False
    error: Optional[str] = None

    @property
    def pair(self) -> ConversionPair:
        return ConversionPair(source=self.source, target=self.target)

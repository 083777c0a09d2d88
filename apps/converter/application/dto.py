"""
Data Transfer Objects for the application layer.
DTOs decouple the widget state from external API contracts.
"""

from dataclasses import dataclass
from typing import Optional

from apps.converter.domain.models import CurrencyCode, Theme


@dataclass
class CurrencyDTO:
    """Currency data transfer object."""
    code: str
    glyph: str
    icon: str
    label: str

    @classmethod
    def from_code(cls, code: CurrencyCode) -> "CurrencyDTO":
        return cls(code=code.value, glyph=code.glyph, icon=code.icon, label=code.label)


@dataclass
class RateResultDTO:
    """Outcome of one rate fetch."""
    source_currency: str
    target_currency: str
    rate: Optional[float]
    rate_display: Optional[str]
    error: Optional[str] = None


@dataclass
class ConversionResultDTO:
    """Outcome of a conversion through the widget pipeline."""
    source_currency: str
    target_currency: str
    amount: str
    rate: Optional[float]
    rate_display: Optional[str]
    converted_amount: str
    error: Optional[str] = None


@dataclass
class ThemeDTO:
    theme: str
    css_class: str

    @classmethod
    def from_theme(cls, theme: Theme) -> "ThemeDTO":
        return cls(theme=theme.value, css_class=theme.css_class)


@dataclass
class WidgetSnapshotDTO:
    """Everything a renderer needs to draw the widget."""
    source_currency: str
    target_currency: str
    amount: str
    result: str
    result_placeholder: str
    rate: Optional[float]
    rate_display: Optional[str]
    loading: bool
    can_convert: bool
    error: Optional[str] = None

    @classmethod
    def from_widget(cls, widget) -> "WidgetSnapshotDTO":
        state = widget.state
        return cls(
            source_currency=state.source.value,
            target_currency=state.target.value,
            amount=state.amount,
            result=state.result,
            result_placeholder=widget.result_placeholder,
            rate=state.rate,
            rate_display=widget.rate_display,
            loading=state.loading,
            can_convert=widget.can_convert,
            error=state.error,
        )

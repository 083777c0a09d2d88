"""
Synchronous entry points into the converter pipeline.
Used by the API views and the management commands.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from apps.converter.application.dto import (
    ConversionResultDTO,
    CurrencyDTO,
    RateResultDTO,
    ThemeDTO,
    WidgetSnapshotDTO,
)
from apps.converter.domain.errors import ConverterError
from apps.converter.domain.interfaces import BaseRateProvider, BaseThemeStorage
from apps.converter.domain.models import ConverterState, CurrencyCode, Theme
from apps.converter.domain.services import ConverterWidget, ThemeController
from apps.converter.infrastructure.providers.registry import get_configured_provider

logger = logging.getLogger(__name__)


def list_currencies() -> List[CurrencyDTO]:
    return [CurrencyDTO.from_code(code) for code in CurrencyCode]


def _resolve_provider(provider: Optional[BaseRateProvider]) -> BaseRateProvider:
    if provider is not None:
        return provider
    provider = get_configured_provider()
    if provider is None:
        raise ConverterError("No rate provider configured. Check the RATE_PROVIDER setting.")
    return provider


async def mount_widget(widget: ConverterWidget) -> WidgetSnapshotDTO:
    """
    Mount the widget and wait for its first rate fetch to settle.
    """
    task = widget.mount()
    if task is not None:
        await task
    return WidgetSnapshotDTO.from_widget(widget)


def run_widget(
    source_currency: str,
    target_currency: str,
    amount: str = "1",
    provider: Optional[BaseRateProvider] = None,
) -> ConverterWidget:
    """
    Build a widget for the pair, run its first fetch to completion and
    return it unmounted.

    Raises:
        UnsupportedCurrencyError: unknown currency code
        ConverterError: no provider configured
    """
    state = ConverterState(
        source=CurrencyCode.parse(source_currency),
        target=CurrencyCode.parse(target_currency),
        amount=amount,
    )
    widget = ConverterWidget(_resolve_provider(provider), state)

    try:
        asyncio.run(mount_widget(widget))
    finally:
        widget.unmount()

    return widget


def fetch_rate(
    source_currency: str,
    target_currency: str,
    provider: Optional[BaseRateProvider] = None,
) -> RateResultDTO:
    widget = run_widget(source_currency, target_currency, provider=provider)
    state = widget.state

    return RateResultDTO(
        source_currency=state.source.value,
        target_currency=state.target.value,
        rate=state.rate,
        rate_display=widget.rate_display,
        error=state.error,
    )


def convert_amount(
    source_currency: str,
    target_currency: str,
    amount: str,
    provider: Optional[BaseRateProvider] = None,
) -> ConversionResultDTO:
    """
    Fetch the rate for the pair, convert ``amount`` and press Convert.

    Returns:
        ConversionResultDTO; ``error`` carries the fetch failure or the
        invalid-amount message, ``converted_amount`` is empty in both cases
    """
    widget = run_widget(source_currency, target_currency, amount=amount, provider=provider)
    widget.convert()
    state = widget.state

    if state.error:
        logger.info(
            "Conversion %s -> %s of %r failed: %s",
            state.source.value, state.target.value, amount, state.error,
        )

    return ConversionResultDTO(
        source_currency=state.source.value,
        target_currency=state.target.value,
        amount=state.amount,
        rate=state.rate,
        rate_display=widget.rate_display,
        converted_amount=state.result if not state.error else "",
        error=state.error,
    )


def load_theme(
    storage: BaseThemeStorage,
    prefers_dark: Optional[bool] = None,
    apply: Optional[Callable[[Theme], None]] = None,
) -> ThemeDTO:
    controller = ThemeController(storage, apply=apply)
    return ThemeDTO.from_theme(controller.initialize(prefers_dark))


def toggle_theme(
    storage: BaseThemeStorage,
    prefers_dark: Optional[bool] = None,
    apply: Optional[Callable[[Theme], None]] = None,
) -> ThemeDTO:
    """Initialize from the stored preference, flip it and persist the result."""
    controller = ThemeController(storage, apply=apply)
    controller.initialize(prefers_dark)
    return ThemeDTO.from_theme(controller.toggle())

"""
Domain services - Core converter logic.
Implements the rate-fetch/convert pipeline behind one converter widget.

Data flow:
1. A change of the (source, target) pair triggers a rate fetch
2. The last completed fetch for the current pair owns the stored rate
3. A change of the amount or the rate recomputes the converted result
"""

import asyncio
import logging
import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Callable, Optional

from django.utils import formats

from apps.converter.domain.errors import RateUnavailableError
from apps.converter.domain.interfaces import BaseRateProvider, BaseThemeStorage
from apps.converter.domain.models import (
    FETCH_FAILED,
    INVALID_AMOUNT,
    RATE_UNAVAILABLE,
    ConversionPair,
    ConverterState,
    CurrencyCode,
    Theme,
)

logger = logging.getLogger(__name__)


RESULT_FRACTION_DIGITS = 4
RATE_FRACTION_DIGITS = 6

# Leading decimal literal, the way a browser's parseFloat reads it
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)

# Wide enough for any finite float plus the fractional digits
_FORMAT_CONTEXT = Context(prec=400)


def parse_amount(text: str) -> Optional[float]:
    """
    Parse the leading number of ``text``.

    Leading whitespace is skipped and trailing characters are ignored,
    so "12abc" reads as 12. Returns None when no number starts the text.

    Example:
        >>> parse_amount(" 2.5 EUR")
        2.5
        >>> parse_amount("abc") is None
        True
    """
    match = _FLOAT_PREFIX.match(text.lstrip())
    if match is None:
        return None
    return float(match.group(0).replace("Infinity", "inf"))


def format_number(value: float, max_fraction_digits: int) -> str:
    """
    Format with the active locale's separators, grouping forced on,
    at most ``max_fraction_digits`` fractional digits and no trailing zeros.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-∞" if value < 0 else "∞"

    quantum = Decimal(1).scaleb(-max_fraction_digits)
    rounded = Decimal(repr(value)).quantize(
        quantum, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT
    )
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    # Plain text, a Decimal this wide would come back in scientific notation
    return formats.number_format(text, force_grouping=True)


def convert(amount_text: str, rate: Optional[float]) -> str:
    """
    Live conversion of the raw amount text.

    Returns an empty string when no rate is known or the amount is not a
    number. An empty amount counts as zero.
    """
    if not rate or not math.isfinite(rate) or rate <= 0:
        return ""

    amount = parse_amount(amount_text or "0")
    if amount is None:
        return ""

    return format_number(amount * rate, RESULT_FRACTION_DIGITS)


def validate_amount(amount_text: str) -> bool:
    """Check used by the explicit Convert action; empty text is invalid."""
    return parse_amount(amount_text or "") is not None


def format_rate_display(pair: ConversionPair, rate: Optional[float]) -> Optional[str]:
    """
    Build the mid-market rate statement, e.g. "€1 EUR = 90.12 INR".
    """
    if not rate or not math.isfinite(rate):
        return None
    return (
        f"{pair.source.glyph}1 {pair.source.value} = "
        f"{format_number(rate, RATE_FRACTION_DIGITS)} {pair.target.value}"
    )


class ThemeController:
    """
    Owns the light/dark preference of one view.

    Precedence at startup: stored preference, then the environment's
    prefers-dark signal, then light. ``apply`` receives the mode every time
    it is set and is responsible for the presentation side effect.
    """

    def __init__(
        self,
        storage: BaseThemeStorage,
        apply: Optional[Callable[[Theme], None]] = None,
    ):
        self.storage = storage
        self._apply = apply
        self.theme = Theme.LIGHT

    def initialize(self, prefers_dark: Optional[bool] = None) -> Theme:
        stored = self.storage.load()
        try:
            theme = Theme(stored) if stored else None
        except ValueError:
            logger.warning("Ignoring unknown stored theme %r", stored)
            theme = None

        if theme is None:
            theme = Theme.DARK if prefers_dark else Theme.LIGHT

        self._set(theme)
        return theme

    def toggle(self) -> Theme:
        theme = self.theme.toggled()
        self._set(theme)
        self.storage.save(theme.value)
        return theme

    def _set(self, theme: Theme) -> None:
        self.theme = theme
        if self._apply is not None:
            self._apply(theme)


class FetchToken:
    """Per-trigger flag checked before every state write of a fetch."""

    __slots__ = ("pair", "ignore")

    def __init__(self, pair: ConversionPair):
        self.pair = pair
        self.ignore = False


class RateFetcher:
    """
    Retrieves the rate for a pair and writes it into the widget state.

    Only the most recent trigger may write rate, error or the loading flag.
    Superseded fetches still run to completion on the wire, their results
    are dropped.
    """

    def __init__(
        self,
        provider: BaseRateProvider,
        state: ConverterState,
        on_settled: Optional[Callable[[], None]] = None,
    ):
        self.provider = provider
        self.state = state
        self._on_settled = on_settled
        self._token: Optional[FetchToken] = None

    def trigger(self, pair: ConversionPair) -> "asyncio.Task[None]":
        """
        Start a fetch for ``pair``. Must be called with a running event loop.
        """
        self.cancel()
        token = FetchToken(pair)
        self._token = token

        self.state.error = None
        self.state.loading = True

        logger.debug("Fetching rate for %s", pair.key)
        return asyncio.get_running_loop().create_task(self._fetch(token))

    def cancel(self) -> None:
        if self._token is not None:
            self._token.ignore = True

    async def _fetch(self, token: FetchToken) -> None:
        pair = token.pair
        try:
            rate = await asyncio.to_thread(
                self.provider.get_rate,
                pair.source.value,
                pair.target.value,
            )
        except RateUnavailableError as e:
            logger.info("No rate for %s: %s", pair.key, e)
            self._write(token, None, RATE_UNAVAILABLE)
        except Exception as e:
            logger.warning("Rate fetch failed for %s: %s", pair.key, e)
            self._write(token, None, FETCH_FAILED)
        else:
            self._write(token, rate, None)
        finally:
            if token.ignore:
                logger.debug("Discarded stale fetch for %s", pair.key)
            else:
                self.state.loading = False

    def _write(self, token: FetchToken, rate: Optional[float], error: Optional[str]) -> None:
        if token.ignore:
            return
        self.state.rate = rate
        if error is not None:
            self.state.error = error
        if self._on_settled is not None:
            self._on_settled()


class ConverterWidget:
    """
    One converter view: two currency selectors, an amount and the result.

    Selection changes and ``mount`` schedule fetches on the running event
    loop and return the scheduled task (or None when nothing was fetched),
    so callers can await the outcome.

    Example:
        >>> async def main():
        ...     widget = ConverterWidget(provider)
        ...     await widget.mount()
        ...     widget.set_amount("2")
        ...     return widget.state.result
    """

    def __init__(self, provider: BaseRateProvider, state: Optional[ConverterState] = None):
        self.state = state or ConverterState()
        self.fetcher = RateFetcher(provider, self.state, on_settled=self._recompute)
        self._mounted = False
        self._active_pair: Optional[ConversionPair] = None

    @property
    def pair(self) -> ConversionPair:
        return self.state.pair

    @property
    def rate_display(self) -> Optional[str]:
        return format_rate_display(self.pair, self.state.rate)

    @property
    def can_convert(self) -> bool:
        return not self.state.loading and bool(self.state.rate)

    @property
    def result_placeholder(self) -> str:
        return "Fetching rate..." if self.state.loading else "0.00"

    def mount(self) -> Optional["asyncio.Task[None]"]:
        self._mounted = True
        self._recompute()
        return self._sync_pair()

    def unmount(self) -> None:
        self._mounted = False
        self._active_pair = None
        self.fetcher.cancel()

    def select_source(self, code) -> Optional["asyncio.Task[None]"]:
        self.state.source = CurrencyCode.parse(code)
        return self._sync_pair()

    def select_target(self, code) -> Optional["asyncio.Task[None]"]:
        self.state.target = CurrencyCode.parse(code)
        return self._sync_pair()

    def set_amount(self, text: str) -> str:
        self.state.amount = text
        self._recompute()
        return self.state.result

    def swap(self) -> Optional["asyncio.Task[None]"]:
        swapped = self.pair.swapped()
        self.state.source, self.state.target = swapped.source, swapped.target
        self.state.result = ""
        return self._sync_pair()

    def convert(self) -> bool:
        """
        The explicit Convert action. Conversion is already live, so this only
        validates the amount. Returns False when disabled or invalid.
        """
        if not self.can_convert:
            return False
        if not validate_amount(self.state.amount):
            self.state.error = INVALID_AMOUNT
            return False
        return True

    def _sync_pair(self) -> Optional["asyncio.Task[None]"]:
        if not self._mounted:
            return None
        pair = self.pair
        if pair == self._active_pair:
            return None
        self._active_pair = pair
        return self.fetcher.trigger(pair)

    def _recompute(self) -> None:
        self.state.result = convert(self.state.amount, self.state.rate)

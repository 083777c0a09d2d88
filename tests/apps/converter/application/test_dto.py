import asyncio

from apps.converter.application.dto import (
    CurrencyDTO,
    ThemeDTO,
    WidgetSnapshotDTO,
)
from apps.converter.application.tasks import mount_widget
from apps.converter.domain.models import ConverterState, CurrencyCode, Theme
from apps.converter.domain.services import ConverterWidget


def test_currency_dto_from_code():
    dto = CurrencyDTO.from_code(CurrencyCode.EUR)

    assert dto == CurrencyDTO(code="EUR", glyph="€", icon="/eur.svg", label="EUR")


def test_theme_dto_from_theme():
    assert ThemeDTO.from_theme(Theme.DARK) == ThemeDTO(theme="dark", css_class="dark")


def test_snapshot_before_mount(eur_inr_provider):
    snapshot = WidgetSnapshotDTO.from_widget(ConverterWidget(eur_inr_provider))

    assert snapshot.source_currency == "EUR"
    assert snapshot.target_currency == "INR"
    assert snapshot.rate is None
    assert snapshot.rate_display is None
    assert snapshot.can_convert is False
    assert snapshot.result_placeholder == "0.00"


def test_snapshot_after_mount(eur_inr_provider):
    widget = ConverterWidget(eur_inr_provider, ConverterState(amount="2"))

    snapshot = asyncio.run(mount_widget(widget))

    assert snapshot.result == "180"
    assert snapshot.rate == 90.0
    assert snapshot.rate_display == "€1 EUR = 90 INR"
    assert snapshot.loading is False
    assert snapshot.can_convert is True
    assert snapshot.error is None

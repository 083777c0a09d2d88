from django.core.management.base import BaseCommand, CommandError

from apps.converter.application.tasks import convert_amount
from apps.converter.domain.errors import ConverterError
from apps.converter.domain.models import CurrencyCode
from apps.converter.infrastructure.providers.registry import (
    ProviderName,
    get_provider_instance,
)


class Command(BaseCommand):
    help = 'Convert an amount between EUR and INR at the current mid-market rate'

    def add_arguments(self, parser):
        codes = [code.value for code in CurrencyCode]
        parser.add_argument(
            '--from',
            dest='source_currency',
            type=str.upper,
            choices=codes,
            default=CurrencyCode.EUR.value,
            help='Source currency code'
        )
        parser.add_argument(
            '--to',
            dest='target_currency',
            type=str.upper,
            choices=codes,
            default=CurrencyCode.INR.value,
            help='Target currency code'
        )
        parser.add_argument(
            '--amount',
            type=str,
            default='1',
            help='Amount to convert'
        )
        parser.add_argument(
            '--provider',
            choices=ProviderName.values,
            default=None,
            help='Rate provider to use instead of the RATE_PROVIDER setting'
        )

    def handle(self, **options):
        provider = None
        if options['provider']:
            provider = get_provider_instance(options['provider'])

        try:
            result = convert_amount(
                options['source_currency'],
                options['target_currency'],
                options['amount'],
                provider=provider,
            )
        except ConverterError as e:
            raise CommandError(str(e))

        if result.error:
            raise CommandError(result.error)

        self.stdout.write(f"Mid-market exchange rate: {result.rate_display}")
        self.stdout.write(
            self.style.SUCCESS(
                f"{result.amount} {result.source_currency} = "
                f"{result.converted_amount} {result.target_currency}"
            )
        )

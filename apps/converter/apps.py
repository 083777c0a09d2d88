from django.apps import AppConfig


class ConverterConfig(AppConfig):
    name = "apps.converter"
    verbose_name = "Currency Converter"

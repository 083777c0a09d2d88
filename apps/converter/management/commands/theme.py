from django.conf import settings
from django.core.management.base import BaseCommand

from apps.converter.application.tasks import load_theme, toggle_theme
from apps.converter.infrastructure.persistence.storage import FileThemeStorage


class Command(BaseCommand):
    help = 'Show or toggle the persisted light/dark preference'

    def add_arguments(self, parser):
        parser.add_argument(
            '--toggle',
            action='store_true',
            help='Flip the current mode and persist it'
        )
        parser.add_argument(
            '--prefers-dark',
            dest='prefers_dark',
            action='store_true',
            default=None,
            help='Treat the environment as preferring a dark color scheme'
        )
        parser.add_argument(
            '--file',
            dest='theme_file',
            default=None,
            help='Preference file (defaults to the THEME_FILE setting)'
        )

    def handle(self, **options):
        storage = FileThemeStorage(options['theme_file'] or settings.THEME_FILE)

        def apply(theme):
            self.stdout.write(f"Applied {theme.value} mode")

        if options['toggle']:
            result = toggle_theme(storage, options['prefers_dark'], apply=apply)
            self.stdout.write(self.style.SUCCESS(f"Saved preference: {result.theme}"))
        else:
            load_theme(storage, options['prefers_dark'], apply=apply)

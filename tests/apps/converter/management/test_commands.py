import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


class TestConvertCommand:

    def test_convert_with_mock_provider(self):
        out = StringIO()

        call_command(
            "convert", "--from", "eur", "--to", "INR", "--amount", "2", "--provider", "mock",
            stdout=out,
        )

        output = out.getvalue()
        assert "€1 EUR = 90.12 INR" in output
        assert "2 EUR = 180.24 INR" in output

    def test_uses_configured_provider_by_default(self, settings):
        settings.RATE_PROVIDER = "mock"
        out = StringIO()

        call_command("convert", "--from", "INR", "--to", "EUR", "--amount", "1000", stdout=out)

        assert "1000 INR = 11.096 EUR" in out.getvalue()

    def test_invalid_amount(self):
        with pytest.raises(CommandError, match="Enter a valid number"):
            call_command("convert", "--amount", "abc", "--provider", "mock", stdout=StringIO())

    def test_fetch_failure(self, settings, mocker):
        settings.RATE_PROVIDER = "frankfurter"
        mocker.patch("requests.get", side_effect=ConnectionError("offline"))

        with pytest.raises(CommandError, match="Failed to fetch rates"):
            call_command("convert", stdout=StringIO())

    def test_no_provider_configured(self, settings):
        settings.RATE_PROVIDER = "nope"

        with pytest.raises(CommandError, match="RATE_PROVIDER"):
            call_command("convert", stdout=StringIO())


class TestThemeCommand:

    def test_show_default(self, tmp_path):
        out = StringIO()

        call_command("theme", "--file", str(tmp_path / "theme.json"), stdout=out)

        assert "Applied light mode" in out.getvalue()
        assert not (tmp_path / "theme.json").exists()

    def test_show_prefers_dark(self, tmp_path):
        out = StringIO()

        call_command("theme", "--prefers-dark", "--file", str(tmp_path / "theme.json"), stdout=out)

        assert "Applied dark mode" in out.getvalue()

    def test_toggle_persists(self, tmp_path):
        path = tmp_path / "theme.json"
        out = StringIO()

        call_command("theme", "--toggle", "--file", str(path), stdout=out)

        assert "Saved preference: dark" in out.getvalue()
        assert json.loads(path.read_text()) == {"theme": "dark"}

    def test_uses_theme_file_setting(self, settings, tmp_path):
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"theme": "dark"}))
        settings.THEME_FILE = str(path)
        out = StringIO()

        call_command("theme", "--toggle", stdout=out)

        assert json.loads(path.read_text()) == {"theme": "light"}

import json

import pytest
import requests
from unittest.mock import Mock

from apps.converter.domain.errors import RateFetchError, RateUnavailableError
from apps.converter.infrastructure.providers.frankfurter import FrankfurterProvider


@pytest.fixture
def provider():
    return FrankfurterProvider(base_url="https://api.frankfurter.app/", timeout=5)


@pytest.fixture
def mock_requests_get(mocker):
    return mocker.patch("requests.get")


def make_response(body):
    response = Mock()
    response.json.return_value = body
    response.raise_for_status.return_value = None
    return response


def test_get_rate_success(provider, mock_requests_get):
    """
    Test that get_rate returns the target rate from the /latest endpoint.
    """
    mock_requests_get.return_value = make_response({
        "amount": 1.0,
        "base": "EUR",
        "date": "2024-05-21",
        "rates": {"INR": 90.12}
    })

    rate = provider.get_rate("EUR", "INR")

    assert rate == 90.12
    mock_requests_get.assert_called_once()

    call_args = mock_requests_get.call_args
    assert call_args[0][0] == "https://api.frankfurter.app/latest"
    assert call_args[1]["params"] == {"from": "EUR", "to": "INR"}
    assert call_args[1]["timeout"] == 5


def test_get_rate_bypasses_http_cache(provider, mock_requests_get):
    mock_requests_get.return_value = make_response({"rates": {"INR": 90}})

    provider.get_rate("EUR", "INR")

    headers = mock_requests_get.call_args[1]["headers"]
    assert "no-cache" in headers["Cache-Control"]
    assert headers["Pragma"] == "no-cache"


def test_integer_rate_is_returned_as_float(provider, mock_requests_get):
    mock_requests_get.return_value = make_response({"rates": {"INR": 90}})

    rate = provider.get_rate("EUR", "INR")

    assert rate == 90.0
    assert isinstance(rate, float)


@pytest.mark.parametrize("body", [
    {"rates": {}},
    {"rates": {"INR": "90.12"}},
    {"rates": {"INR": None}},
    {"rates": {"INR": True}},
    {"rates": {"INR": 0}},
    {"rates": []},
    {"message": "not found"},
    [],
])
def test_missing_rate_is_unavailable(provider, mock_requests_get, body):
    """
    Test that a well-formed body without a numeric rate raises RateUnavailableError.
    """
    mock_requests_get.return_value = make_response(body)

    with pytest.raises(RateUnavailableError):
        provider.get_rate("EUR", "INR")


def test_http_error(provider, mock_requests_get):
    response = make_response({})
    response.raise_for_status.side_effect = requests.exceptions.HTTPError("422 Client Error")
    mock_requests_get.return_value = response

    with pytest.raises(RateFetchError):
        provider.get_rate("EUR", "INR")


@pytest.mark.parametrize("error", [
    requests.exceptions.Timeout("timed out"),
    requests.exceptions.ConnectionError("connection refused"),
])
def test_network_error(provider, mock_requests_get, error):
    mock_requests_get.side_effect = error

    with pytest.raises(RateFetchError):
        provider.get_rate("EUR", "INR")


def test_invalid_json(provider, mock_requests_get):
    response = make_response(None)
    response.json.side_effect = ValueError("Expecting value")
    mock_requests_get.return_value = response

    with pytest.raises(RateFetchError):
        provider.get_rate("EUR", "INR")


@pytest.mark.parametrize("raw", [
    '{"rates": {"INR": NaN}}',
    '{"rates": {"INR": Infinity}}',
    '{"rates": {"INR": -Infinity}}',
])
def test_non_finite_rate_is_a_fetch_failure(provider, mock_requests_get, raw):
    """
    Test that NaN and Infinity rates are treated as a malformed body, not as a rate.
    """
    mock_requests_get.return_value = make_response(json.loads(raw))

    with pytest.raises(RateFetchError):
        provider.get_rate("EUR", "INR")


def test_non_standard_json_constants_are_rejected(provider, mock_requests_get):
    response = requests.models.Response()
    response.status_code = 200
    response.encoding = "utf-8"
    response._content = b'{"amount": NaN, "rates": {"INR": 90.12}}'
    mock_requests_get.return_value = response

    with pytest.raises(RateFetchError):
        provider.get_rate("EUR", "INR")


def test_defaults_come_from_settings(settings):
    settings.FRANKFURTER_URL = "https://rates.example.test"
    settings.RATE_REQUEST_TIMEOUT = 3

    provider = FrankfurterProvider()

    assert provider.base_url == "https://rates.example.test"
    assert provider.timeout == 3

"""
ViewSets for the converter API v1.
Each request runs one pass of the widget pipeline: mount, fetch, convert.
"""

from dataclasses import asdict

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.converter.api.v1.serializers import (
    ConversionSerializer,
    ConvertQuerySerializer,
    CurrencySerializer,
    PairQuerySerializer,
    RateSerializer,
    ThemeQuerySerializer,
    ThemeSerializer,
)
from apps.converter.application.tasks import (
    convert_amount,
    fetch_rate,
    list_currencies,
    load_theme,
    toggle_theme,
)
from apps.converter.domain.errors import ConverterError
from apps.converter.domain.models import INVALID_AMOUNT
from apps.converter.infrastructure.persistence.storage import SessionThemeStorage


PAIR_PARAMETERS = [
    OpenApiParameter("source_currency", OpenApiTypes.STR, required=True, description="Source currency code (EUR or INR)"),
    OpenApiParameter("target_currency", OpenApiTypes.STR, required=True, description="Target currency code (EUR or INR)"),
]

PREFERS_DARK_PARAMETER = OpenApiParameter(
    "prefers_dark",
    OpenApiTypes.BOOL,
    description="Whether the client environment prefers a dark color scheme",
)


def _first_error(errors) -> str:
    field, messages = next(iter(errors.items()))
    return f"{field}: {messages[0]}"


@extend_schema(tags=['Currencies'])
class CurrencyViewSet(viewsets.ViewSet):

    @extend_schema(responses=CurrencySerializer(many=True))
    def list(self, request):
        serializer = CurrencySerializer([asdict(c) for c in list_currencies()], many=True)
        return Response(serializer.data)


@extend_schema(tags=['Rates'])
class RateViewSet(viewsets.ViewSet):

    @extend_schema(
        parameters=PAIR_PARAMETERS,
        responses=RateSerializer,
        description="Get the current mid-market rate for a currency pair"
    )
    @action(detail=False, methods=['get'], url_path='latest')
    def latest(self, request):
        query = PairQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": _first_error(query.errors)},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            result = fetch_rate(
                query.validated_data["source_currency"],
                query.validated_data["target_currency"],
            )
        except ConverterError as e:
            return Response({"error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        if result.error:
            return Response({"error": result.error}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(RateSerializer(asdict(result)).data)

    @extend_schema(
        parameters=PAIR_PARAMETERS + [
            OpenApiParameter("amount", OpenApiTypes.STR, required=True, description="Amount to convert"),
        ],
        responses=ConversionSerializer,
        description="Convert an amount using the current mid-market rate"
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        query = ConvertQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": _first_error(query.errors)},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            result = convert_amount(
                query.validated_data["source_currency"],
                query.validated_data["target_currency"],
                query.validated_data["amount"],
            )
        except ConverterError as e:
            return Response({"error": str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        if result.error == INVALID_AMOUNT:
            return Response({"error": result.error}, status=status.HTTP_400_BAD_REQUEST)
        if result.error:
            return Response({"error": result.error}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(ConversionSerializer(asdict(result)).data)


@extend_schema(tags=['Theme'])
class ThemeViewSet(viewsets.ViewSet):
    """Light/dark preference of the current visitor, kept in the session."""

    @extend_schema(parameters=[PREFERS_DARK_PARAMETER], responses=ThemeSerializer)
    def list(self, request):
        query = ThemeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": _first_error(query.errors)},
                status=status.HTTP_400_BAD_REQUEST
            )

        theme = load_theme(
            SessionThemeStorage(request.session),
            query.validated_data.get("prefers_dark"),
        )
        return Response(ThemeSerializer(asdict(theme)).data)

    @extend_schema(parameters=[PREFERS_DARK_PARAMETER], request=None, responses=ThemeSerializer)
    @action(detail=False, methods=['post'], url_path='toggle')
    def toggle(self, request):
        query = ThemeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": _first_error(query.errors)},
                status=status.HTTP_400_BAD_REQUEST
            )

        theme = toggle_theme(
            SessionThemeStorage(request.session),
            query.validated_data.get("prefers_dark"),
        )
        return Response(ThemeSerializer(asdict(theme)).data)

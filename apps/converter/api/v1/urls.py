from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.converter.api.v1.views import (
    CurrencyViewSet,
    RateViewSet,
    ThemeViewSet,
)

router = DefaultRouter()
router.register(r'currencies', CurrencyViewSet, basename='currency')
router.register(r'rates', RateViewSet, basename='rate')
router.register(r'theme', ThemeViewSet, basename='theme')

urlpatterns = [
    path('', include(router.urls)),
]

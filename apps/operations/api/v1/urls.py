from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.operations.api.v1.views import (
    ExchangeRateSettingsView,
    PaymentViewSet,
    PurchaseOrderViewSet,
    SalesOrderViewSet,
)

router = DefaultRouter()
router.register(r'purchase-orders', PurchaseOrderViewSet, basename='purchase-order')
router.register(r'sales-orders', SalesOrderViewSet, basename='sales-order')
router.register(r'payments', PaymentViewSet, basename='payment')

urlpatterns = [
    path('settings/exchange-rates/', ExchangeRateSettingsView.as_view(), name='exchange-rate-settings'),
    path('', include(router.urls)),
]

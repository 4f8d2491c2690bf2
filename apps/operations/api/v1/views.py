"""
Views for the operations API v1.
CRUD ViewSets for the transactional records, each with an aggregation action,
plus the exchange-rate settings endpoint.
"""

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.operations.api.v1.serializers import (
    ExchangeRatesSerializer,
    PaymentSerializer,
    PurchaseOrderSerializer,
    SalesOrderSerializer,
)
from apps.operations.application.dto import AggregationRequestDTO
from apps.operations.application.reports import (
    AggregationReportService,
    Feature,
    get_default_normalizer,
)
from apps.operations.domain.models import CurrencyCode, GroupUnit
from apps.operations.domain.services import (
    current_month_range,
    format_date_input,
    parse_date_input,
)
from apps.operations.infrastructure.persistence.models import (
    Payment,
    PurchaseOrder,
    SalesOrder,
)
from apps.operations.infrastructure.persistence.repositories import SettingsRepository

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}
TRUE_VALUES = {"1", "true", "yes", "on"}


@extend_schema(tags=['Settings'])
class ExchangeRateSettingsView(APIView):
    """Current exchange rates, always answered with usable (normalized) values."""

    @extend_schema(responses=ExchangeRatesSerializer)
    def get(self, request):
        stored = SettingsRepository.get_exchange_rates()
        rates = get_default_normalizer().normalize(stored)
        return Response(ExchangeRatesSerializer(rates).data, headers=NO_STORE)

    @extend_schema(request=ExchangeRatesSerializer, responses=ExchangeRatesSerializer)
    def put(self, request):
        serializer = ExchangeRatesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        SettingsRepository.update_exchange_rates(
            serializer.validated_data["jpy_per_usd"],
            serializer.validated_data["vnd_per_usd"],
        )
        logger.info(
            "Exchange rates updated: 1 USD = %s JPY / %s VND",
            serializer.validated_data["jpy_per_usd"],
            serializer.validated_data["vnd_per_usd"],
        )
        stored = SettingsRepository.get_exchange_rates()
        return Response(ExchangeRatesSerializer(stored).data, headers=NO_STORE)


class AggregationActionMixin:
    """Adds GET <resource>/aggregation/ for the feature named by aggregation_feature."""

    aggregation_feature: str = ""

    @extend_schema(
        parameters=[
            OpenApiParameter("start_date", OpenApiTypes.DATE, description="Start date (YYYY-MM-DD), defaults to the first of this month"),
            OpenApiParameter("end_date", OpenApiTypes.DATE, description="End date (YYYY-MM-DD), defaults to today"),
            OpenApiParameter("unit", OpenApiTypes.STR, enum=[u.value for u in GroupUnit], description="Bucket size (default: month)"),
            OpenApiParameter("display_currency", OpenApiTypes.STR, enum=[c.value for c in CurrencyCode], description="Currency of the totals (default: USD)"),
            OpenApiParameter("partners", OpenApiTypes.STR, many=True, description="Only include these partners"),
            OpenApiParameter("confirmed_only", OpenApiTypes.BOOL, description="Drop unconfirmed rows"),
        ],
        responses=OpenApiTypes.OBJECT,
        description="Aggregate records by period and partner in a common currency"
    )
    @action(detail=False, methods=['get'], url_path='aggregation')
    def aggregation(self, request):
        """
        Aggregate this resource's records.

        Query params:
        - start_date / end_date: inclusive range; both missing means this month
        - unit: day, week or month
        - display_currency: USD, JPY or VND
        - partners: repeatable partner filter
        - confirmed_only: true to ignore unconfirmed records
        """
        start_date = request.query_params.get('start_date', '')
        end_date = request.query_params.get('end_date', '')
        unit = request.query_params.get('unit', GroupUnit.MONTH.value)
        display_currency = request.query_params.get('display_currency', CurrencyCode.USD.value).upper()
        partners = [p for p in request.query_params.getlist('partners') if p]
        confirmed_only = request.query_params.get('confirmed_only', '').lower() in TRUE_VALUES

        # Validation
        if not start_date and not end_date:
            start_date, end_date = current_month_range()

        start = parse_date_input(start_date) if start_date else None
        end = parse_date_input(end_date) if end_date else None
        if (start_date and start is None) or (end_date and end is None):
            return Response(
                {"error": "Invalid date format. Use YYYY-MM-DD"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if start and end and start > end:
            return Response(
                {"error": "start_date must be before end_date"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if unit not in {u.value for u in GroupUnit}:
            return Response(
                {"error": "Invalid unit. Use day, week or month"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if display_currency not in {c.value for c in CurrencyCode}:
            return Response(
                {"error": "Invalid display_currency. Use USD, JPY or VND"},
                status=status.HTTP_400_BAD_REQUEST
            )

        report = AggregationReportService().build(
            AggregationRequestDTO(
                feature=self.aggregation_feature,
                start_date=format_date_input(start) if start else "",
                end_date=format_date_input(end) if end else "",
                unit=unit,
                display_currency=display_currency,
                partners=partners,
                confirmed_only=confirmed_only,
            )
        )
        return Response(report.to_dict(), headers=NO_STORE)


@extend_schema(tags=['Purchase orders'])
class PurchaseOrderViewSet(AggregationActionMixin, viewsets.ModelViewSet):

    queryset = PurchaseOrder.objects.all()
    serializer_class = PurchaseOrderSerializer
    aggregation_feature = Feature.PURCHASE_ORDERS


@extend_schema(tags=['Sales orders'])
class SalesOrderViewSet(AggregationActionMixin, viewsets.ModelViewSet):

    queryset = SalesOrder.objects.prefetch_related("items").all()
    serializer_class = SalesOrderSerializer
    aggregation_feature = Feature.SALES_ORDERS


@extend_schema(tags=['Payments'])
class PaymentViewSet(AggregationActionMixin, viewsets.ModelViewSet):

    queryset = Payment.objects.all()
    serializer_class = PaymentSerializer
    aggregation_feature = Feature.PAYMENTS

    def get_queryset(self):
        queryset = super().get_queryset()
        year_month = self.request.query_params.get('year_month')
        if year_month:
            queryset = queryset.filter(year_month=year_month)
        return queryset

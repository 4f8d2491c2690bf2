"""
Application service that turns stored records into an aggregation report.
Loads rows, resolves exchange rates through the provider chain, runs the
aggregation engine and expresses the totals in the requested currency.
"""

import logging
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from core.settings import OPERATIONS_DEFAULT_EXCHANGE_RATES
from apps.operations.application.dto import (
    AggregationReportDTO,
    AggregationRequestDTO,
    BucketReportDTO,
    ChartSliceDTO,
    ExchangeRatesDTO,
    PartnerReportDTO,
)
from apps.operations.application.projections import (
    UNASSIGNED_PARTNER,
    project_payment,
    project_purchase_order,
    project_sales_order,
)
from apps.operations.domain.formatting import format_currency_value, format_number_value
from apps.operations.domain.models import (
    AggregationResult,
    AggregationRow,
    CurrencyCode,
    ExchangeRates,
    GroupUnit,
)
from apps.operations.domain.services import (
    AggregationEngine,
    CurrencyConverter,
    ExchangeRateNormalizer,
    month_keys_between,
)
from apps.operations.infrastructure.persistence.repositories import (
    PaymentRepository,
    PurchaseOrderRepository,
    SalesOrderRepository,
)
from apps.operations.infrastructure.providers.registry import get_active_providers_ordered

logger = logging.getLogger(__name__)

MAX_CHART_SLICES = 6
OTHER_SLICE_LABEL = "Other"


class Feature:
    PURCHASE_ORDERS = "purchase_orders"
    SALES_ORDERS = "sales_orders"
    PAYMENTS = "payments"

    CHOICES = (PURCHASE_ORDERS, SALES_ORDERS, PAYMENTS)


def _load_purchase_orders(start_date: str, end_date: str) -> List[AggregationRow]:
    return [project_purchase_order(o) for o in PurchaseOrderRepository.list_in_range(start_date, end_date)]


def _load_sales_orders(start_date: str, end_date: str) -> List[AggregationRow]:
    return [project_sales_order(o) for o in SalesOrderRepository.list_in_range(start_date, end_date)]


def _load_payments(start_date: str, end_date: str) -> List[AggregationRow]:
    # Payments are stored per month; fetch every month the range touches
    months = month_keys_between(start_date, end_date) if start_date and end_date else None
    return [project_payment(p) for p in PaymentRepository.list_for_months(months)]


ROW_LOADERS: Dict[str, Callable[[str, str], List[AggregationRow]]] = {
    Feature.PURCHASE_ORDERS: _load_purchase_orders,
    Feature.SALES_ORDERS: _load_sales_orders,
    Feature.PAYMENTS: _load_payments,
}


def get_default_normalizer() -> ExchangeRateNormalizer:
    """Normalizer whose fallbacks come from OPERATIONS_DEFAULT_EXCHANGE_RATES."""
    defaults = ExchangeRateNormalizer().normalize(OPERATIONS_DEFAULT_EXCHANGE_RATES)
    return ExchangeRateNormalizer(defaults=defaults)


def resolve_exchange_rates(normalizer: Optional[ExchangeRateNormalizer] = None) -> ExchangeRates:
    """
    Get current exchange rates with fallback mechanism.

    Providers are queried in configured order; the first answer wins and is
    normalized. When every provider fails the normalized defaults are used,
    so reporting keeps working without configured rates.
    """
    if normalizer is None:
        normalizer = get_default_normalizer()

    for provider in get_active_providers_ordered():
        provider_name = provider.__class__.__name__
        rates = provider.get_exchange_rates()
        if rates is not None:
            logger.debug("%s returned exchange rates", provider_name)
            return normalizer.normalize(rates)
        logger.info("%s returned no exchange rates, trying next", provider_name)

    logger.warning("All exchange rate providers failed, using default rates")
    return normalizer.normalize(None)


def build_rate_note(rates: ExchangeRates) -> str:
    """
    Example:
        >>> build_rate_note(ExchangeRates(Decimal("150"), Decimal("25000")))
        '1 USD = 150 JPY / 25,000 VND'
    """
    return (
        f"1 USD = {format_number_value(rates.jpy_per_usd)} JPY / "
        f"{format_number_value(rates.vnd_per_usd)} VND"
    )


def _average(total: Decimal, count: int) -> Decimal:
    return total / count if count else Decimal("0")


def build_chart_slices(partners: Iterable[PartnerReportDTO]) -> List[ChartSliceDTO]:
    """
    Top partners by total plus one slice for everyone else.

    Returns an empty list when there is nothing to chart.
    """
    ordered = sorted(partners, key=lambda p: (-p.total, p.partner))
    grand_total = sum((p.total for p in ordered), Decimal("0"))
    if not grand_total:
        return []

    slices = [
        ChartSliceDTO(
            label=p.partner or UNASSIGNED_PARTNER,
            value=p.total,
            percent=p.total / grand_total * 100,
        )
        for p in ordered[:MAX_CHART_SLICES]
    ]
    other_total = sum((p.total for p in ordered[MAX_CHART_SLICES:]), Decimal("0"))
    if other_total > 0:
        slices.append(
            ChartSliceDTO(
                label=OTHER_SLICE_LABEL,
                value=other_total,
                percent=other_total / grand_total * 100,
            )
        )
    return slices


class AggregationReportService:
    """Builds aggregation reports for purchase orders, sales orders and payments."""

    def __init__(
        self,
        engine: Optional[AggregationEngine] = None,
        converter: Optional[CurrencyConverter] = None,
        rates_resolver: Callable[[], ExchangeRates] = resolve_exchange_rates,
    ):
        self.engine = engine or AggregationEngine()
        self.converter = converter or CurrencyConverter()
        self.rates_resolver = rates_resolver

    def load_rows(self, feature: str, start_date: str, end_date: str) -> List[AggregationRow]:
        loader = ROW_LOADERS.get(feature)
        if loader is None:
            raise ValueError(f"Unknown feature '{feature}', expected one of {', '.join(Feature.CHOICES)}")
        return loader(start_date, end_date)

    def build(self, request: AggregationRequestDTO) -> AggregationReportDTO:
        """
        Build the report described by request.

        Raises:
            ValueError: unknown feature, unit or display currency
        """
        unit = GroupUnit(request.unit)
        display_currency = CurrencyCode(request.display_currency.upper()).value

        rows = self.load_rows(request.feature, request.start_date, request.end_date)
        rates = self.rates_resolver()
        result = self.engine.aggregate(
            rows,
            rates,
            unit,
            request.start_date,
            request.end_date,
            partners=request.partners or None,
            confirmed_only=request.confirmed_only,
        )
        logger.info(
            "Aggregated %d %s rows into %d buckets (%s to %s)",
            result.count,
            request.feature,
            len(result.buckets),
            request.start_date or "-",
            request.end_date or "-",
        )
        return self._to_report(request, result, display_currency)

    def _display(self, amount_usd: Decimal, currency: str, rates: ExchangeRates) -> Decimal:
        return self.converter.from_usd(amount_usd, currency, rates)

    def _to_report(self, request: AggregationRequestDTO, result: AggregationResult, currency: str) -> AggregationReportDTO:
        rates = result.rates

        buckets = []
        for bucket in result.buckets:
            total = self._display(bucket.total_usd, currency, rates)
            buckets.append(
                BucketReportDTO(
                    key=bucket.key,
                    label=bucket.label,
                    sort_key=bucket.sort_key,
                    count=bucket.count,
                    partner_count=bucket.partner_count,
                    confirmed_count=bucket.confirmed_count,
                    unconfirmed_count=bucket.unconfirmed_count,
                    total_usd=bucket.total_usd,
                    total=total,
                    average=_average(total, bucket.count),
                    currency_totals=dict(bucket.currency_totals),
                )
            )

        partners = []
        for partner in result.partners:
            total = self._display(partner.total_usd, currency, rates)
            partners.append(
                PartnerReportDTO(
                    partner=partner.partner,
                    count=partner.count,
                    confirmed_count=partner.confirmed_count,
                    unconfirmed_count=partner.unconfirmed_count,
                    total_usd=partner.total_usd,
                    total=total,
                    average=_average(total, partner.count),
                    currency_totals=dict(partner.currency_totals),
                )
            )

        total = self._display(result.total_usd, currency, rates)
        return AggregationReportDTO(
            feature=request.feature,
            start_date=request.start_date,
            end_date=request.end_date,
            unit=result.unit.value,
            display_currency=currency,
            rates=ExchangeRatesDTO(
                jpy_per_usd=rates.jpy_per_usd,
                vnd_per_usd=rates.vnd_per_usd,
                updated_at=rates.updated_at,
            ),
            rate_note=build_rate_note(rates),
            count=result.count,
            partner_count=result.partner_count,
            confirmed_count=result.confirmed_count,
            unconfirmed_count=result.unconfirmed_count,
            total_usd=result.total_usd,
            total=total,
            average=_average(total, result.count),
            formatted_total=format_currency_value(currency, total),
            currency_totals=dict(result.currency_totals),
            buckets=buckets,
            partners=partners,
            chart_slices=build_chart_slices(partners),
        )
